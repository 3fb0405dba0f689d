"""
Statistics service - quarterly and yearly aggregates.

Statistics are derived on every call, never stored. A PWD counts toward
total_assessed for the period it was registered in when it has at least
one assessed assistance request; pending = registered - assessed.
"""
from sqlalchemy import case, exists, func
from sqlalchemy.orm import Session
from datetime import date
from typing import Any, Dict, List, Optional

from pwd_registry.models.assistance_request import AssistanceRequest
from pwd_registry.models.pwd_record import PwdRecord
from pwd_registry.schemas.statistics import (
    PeriodStatistics,
    CurrentYearStatistics,
    ComparativeStatistics,
    ReportMetric,
)
from pwd_registry.utils.aggregators import (
    period_frame,
    aggregate_by_year,
    fill_quarters,
    align_years,
    to_records,
)
from pwd_registry.utils.constants import Quarter, RequestStatus
from pwd_registry.utils.date_utils import year_bounds


class StatisticsService:

    def __init__(self, db: Session):
        self.db = db

    def _period_rows(self, quarter: Optional[Quarter] = None, year: Optional[int] = None):
        has_assessed_request = exists().where(
            AssistanceRequest.beneficiary_id == PwdRecord.id,
            AssistanceRequest.status == RequestStatus.ASSESSED,
        )
        query = self.db.query(
            PwdRecord.year,
            PwdRecord.quarter,
            func.count(PwdRecord.id).label("total_registered_pwd"),
            func.sum(case((has_assessed_request, 1), else_=0)).label("total_assessed"),
        )
        if quarter is not None:
            query = query.filter(PwdRecord.quarter == quarter)
        if year is not None:
            query = query.filter(PwdRecord.year == year)
        return query.group_by(PwdRecord.year, PwdRecord.quarter).all()

    def get_for_period(self, quarter: Quarter, year: int) -> Dict[str, Any]:
        df = period_frame(self._period_rows(quarter, year))
        filled = fill_quarters(df, year)
        row = filled[filled["quarter"] == Quarter(quarter).value]
        return PeriodStatistics(**to_records(row)[0]).model_dump()

    def get_all(self) -> List[Dict[str, Any]]:
        """Every period that has registrations, newest year first."""
        df = period_frame(self._period_rows())
        if df.empty:
            return []
        df = df.sort_values(["year", "quarter"], ascending=[False, True])
        return [PeriodStatistics(**r).model_dump() for r in to_records(df)]

    def get_yearly(self) -> List[Dict[str, Any]]:
        yearly = aggregate_by_year(period_frame(self._period_rows()))
        return [PeriodStatistics(**r).model_dump() for r in to_records(yearly)]

    def get_current_year(self, today: Optional[date] = None) -> Dict[str, Any]:
        year = (today or date.today()).year
        df = period_frame(self._period_rows(year=year))

        quarters = [PeriodStatistics(**r) for r in to_records(fill_quarters(df, year))]
        total = PeriodStatistics(
            year=year,
            total_registered_pwd=sum(q.total_registered_pwd for q in quarters),
            total_assessed=sum(q.total_assessed for q in quarters),
            pending=sum(q.pending for q in quarters),
        )
        return CurrentYearStatistics(year=year, quarters=quarters, total=total).model_dump()

    def compare(self, years: List[int]) -> Dict[str, Any]:
        """Parallel arrays in the caller's year order, zero-filled."""
        yearly = aggregate_by_year(period_frame(self._period_rows()))
        aligned = to_records(align_years(yearly, years))
        return ComparativeStatistics(
            years=list(years),
            total_registered_pwd=[r["total_registered_pwd"] for r in aligned],
            total_assessed=[r["total_assessed"] for r in aligned],
            pending=[r["pending"] for r in aligned],
        ).model_dump()

    def annual_report(self, today: Optional[date] = None) -> List[Dict[str, Any]]:
        """Registrations, assisted beneficiaries and pending requests for the current year."""
        year = (today or date.today()).year
        start, end = year_bounds(year)

        registrations = self.db.query(func.count(PwdRecord.id)).filter(
            PwdRecord.year == year
        ).scalar() or 0
        assisted = self.db.query(func.count(func.distinct(AssistanceRequest.beneficiary_id))).filter(
            AssistanceRequest.status == RequestStatus.ASSESSED,
            AssistanceRequest.created_at >= start,
            AssistanceRequest.created_at < end,
        ).scalar() or 0
        pending = self.db.query(func.count(AssistanceRequest.id)).filter(
            AssistanceRequest.status == RequestStatus.PENDING,
            AssistanceRequest.created_at >= start,
            AssistanceRequest.created_at < end,
        ).scalar() or 0

        metrics = [
            ReportMetric(metric="Total Registrations (Current Year)", value=int(registrations)),
            ReportMetric(metric="Total Assisted (Current Year)", value=int(assisted)),
            ReportMetric(metric="Pending Assistance Requests", value=int(pending)),
        ]
        return [m.model_dump() for m in metrics]
