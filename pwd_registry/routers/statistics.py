"""
Statistics API endpoints.

Every figure is computed from the current PWD records and assistance
requests; nothing is cached or stored.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from pwd_registry.database import get_db
from pwd_registry.dependencies import get_current_user
from pwd_registry.exceptions import ValidationFailedError
from pwd_registry.models.user import User
from pwd_registry.schemas.common import success
from pwd_registry.services.statistics_service import StatisticsService
from pwd_registry.utils.constants import Quarter
from pwd_registry.utils.date_utils import parse_years_param

router = APIRouter()


@router.get("")
def get_all_statistics(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Per-period statistics, newest year first."""
    return success(StatisticsService(db).get_all())


@router.get("/yearly")
def get_yearly_statistics(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return success(StatisticsService(db).get_yearly())


@router.get("/current-year")
def get_current_year_statistics(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Q1..Q4 of the current year (zero-filled) plus the year total."""
    return success(StatisticsService(db).get_current_year())


@router.get("/compare")
def compare_years(
    years: str = Query(..., description="Comma-separated years, e.g. 2023,2024,2025"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Year-over-year comparison.

    Arrays are parallel to `years` in the order given; years without data
    are reported as zeros.
    """
    try:
        year_list = parse_years_param(years)
    except ValueError as e:
        raise ValidationFailedError(f"Invalid years parameter: {e}")
    return success(StatisticsService(db).compare(year_list))


@router.get("/annual-report")
def get_annual_report(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return success(StatisticsService(db).annual_report())


@router.get("/{quarter}/{year}")
def get_period_statistics(
    quarter: Quarter,
    year: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return success(StatisticsService(db).get_for_period(quarter, year))
