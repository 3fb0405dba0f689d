"""
PWD record service - the core beneficiary registry.
"""
from sqlalchemy import func, or_, case
from sqlalchemy.orm import Session, joinedload
from typing import List, Optional, Dict, Any
import logging

from pwd_registry.exceptions import NotFoundError, ValidationFailedError
from pwd_registry.models.pwd_record import PwdRecord
from pwd_registry.models.reference import Gender, Community, DisabilityCategory, DisabilityType, AssistanceType
from pwd_registry.models.satellites import PwdGuardian, PwdEducation, PwdSupportNeed
from pwd_registry.models.assistance_request import AssistanceRequest
from pwd_registry.models.user import User
from pwd_registry.schemas.common import PaginationMeta
from pwd_registry.services.usage_guard import Dependent, guarded_delete
from pwd_registry.utils.constants import PwdStatus, RequestStatus, Quarter
from pwd_registry.utils.date_utils import age_from_dob, current_period

logger = logging.getLogger(__name__)

# Columns a client may set directly
EDITABLE_FIELDS = [
    "quarter", "year", "gender_id", "full_name", "occupation", "contact", "dob", "age",
    "gh_card_number", "nhis_number", "profile_image", "disability_category_id",
    "disability_type_id", "community_id", "assistance_type_needed_id", "support_needs",
    "supporting_documents",
]

# Equality filters accepted by list()
FILTER_COLUMNS = {
    "quarter": PwdRecord.quarter,
    "year": PwdRecord.year,
    "status": PwdRecord.status,
    "community_id": PwdRecord.community_id,
    "disability_category_id": PwdRecord.disability_category_id,
    "disability_type_id": PwdRecord.disability_type_id,
    "gender_id": PwdRecord.gender_id,
}

# Columns that may not be cleared by an update
REQUIRED_FIELDS = [
    "quarter", "year", "gender_id", "full_name",
    "disability_category_id", "disability_type_id", "community_id",
]

SEARCH_COLUMNS = [
    PwdRecord.full_name,
    PwdRecord.contact,
    PwdRecord.gh_card_number,
    PwdRecord.nhis_number,
]


def record_dependents() -> List[Dependent]:
    return [
        Dependent("pwd_guardians", PwdGuardian.pwd_id),
        Dependent("pwd_education", PwdEducation.pwd_id),
        Dependent("pwd_support_needs", PwdSupportNeed.pwd_id),
        Dependent("assistance_requests", AssistanceRequest.beneficiary_id),
    ]


class PwdRecordService:
    """Business logic for PWD records."""

    def __init__(self, db: Session):
        self.db = db

    def _base_query(self):
        return self.db.query(PwdRecord).options(
            joinedload(PwdRecord.registered_by),
            joinedload(PwdRecord.gender),
            joinedload(PwdRecord.community),
            joinedload(PwdRecord.disability_category),
            joinedload(PwdRecord.disability_type),
            joinedload(PwdRecord.assistance_type_needed),
        )

    @staticmethod
    def to_dict(record: PwdRecord) -> Dict[str, Any]:
        """Full record with reference names resolved."""
        data = {"id": record.id, "user_id": record.user_id}
        for field in EDITABLE_FIELDS:
            data[field] = getattr(record, field)
        data.update({
            "status": record.status,
            "created_at": record.created_at,
            "updated_at": record.updated_at,
            "registered_by": record.registered_by.username if record.registered_by else None,
            "gender_name": record.gender.name if record.gender else None,
            "community_name": record.community.name if record.community else None,
            "disability_category": record.disability_category.name if record.disability_category else None,
            "disability_type": record.disability_type.name if record.disability_type else None,
            "assistance_type_name": record.assistance_type_needed.name if record.assistance_type_needed else None,
        })
        return data

    def _apply_filters(self, query, filters: Dict[str, Any]):
        for key, column in FILTER_COLUMNS.items():
            value = filters.get(key)
            if value is not None and value != "":
                query = query.filter(column == value)

        term = (filters.get("search") or "").strip().lower()
        if term:
            query = query.filter(or_(*[
                func.lower(col).contains(term, autoescape=True) for col in SEARCH_COLUMNS
            ]))
        return query

    def list(self, filters: Dict[str, Any], page: int, per_page: int) -> Dict[str, Any]:
        """
        Filtered, paginated records; filters combine with AND.

        Returns {"records": [...], "pagination": PaginationMeta}.
        """
        count_query = self._apply_filters(self.db.query(func.count(PwdRecord.id)), filters)
        total = count_query.scalar() or 0

        records = (
            self._apply_filters(self._base_query(), filters)
            .order_by(PwdRecord.created_at.desc(), PwdRecord.id.desc())
            .offset((page - 1) * per_page)
            .limit(per_page)
            .all()
        )

        return {
            "records": [self.to_dict(r) for r in records],
            "pagination": PaginationMeta.create(total, page, per_page),
        }

    def get_row(self, pwd_id: int) -> PwdRecord:
        record = self._base_query().filter(PwdRecord.id == pwd_id).first()
        if record is None:
            raise NotFoundError("PWD record", pwd_id)
        return record

    def get(self, pwd_id: int) -> Dict[str, Any]:
        return self.to_dict(self.get_row(pwd_id))

    def exists(self, pwd_id: int) -> bool:
        return self.db.get(PwdRecord, pwd_id) is not None

    def validate_references(self, data: Dict[str, Any]) -> Dict[str, str]:
        """
        Check every foreign key in `data` and the category/type pairing.

        Returns field -> error message; empty when everything resolves.
        """
        errors: Dict[str, str] = {}
        lookups = [
            ("user_id", User),
            ("gender_id", Gender),
            ("community_id", Community),
            ("disability_category_id", DisabilityCategory),
            ("disability_type_id", DisabilityType),
            ("assistance_type_needed_id", AssistanceType),
        ]
        for field, model in lookups:
            value = data.get(field)
            if value is not None and self.db.get(model, value) is None:
                errors[field] = f"{field} {value} does not exist"

        category_id = data.get("disability_category_id")
        type_id = data.get("disability_type_id")
        if category_id is not None and type_id is not None and not errors.get("disability_type_id"):
            dtype = self.db.get(DisabilityType, type_id)
            if dtype.category_id != category_id:
                errors["disability_type_id"] = (
                    f"Disability type {type_id} does not belong to category {category_id}"
                )
        return errors

    def _raise_on_errors(self, errors: Dict[str, str]) -> None:
        if errors:
            raise ValidationFailedError(
                "Invalid record data: " + "; ".join(errors.values()),
                details={"errors": errors},
            )

    def create(self, fields: Dict[str, Any], user: User) -> Dict[str, Any]:
        """Register a PWD as pending; returns only id, name, status and timestamp."""
        data = {k: v for k, v in fields.items() if k in EDITABLE_FIELDS}
        data["user_id"] = user.id
        if data.get("dob") is not None and data.get("age") is None:
            data["age"] = age_from_dob(data["dob"])

        self._raise_on_errors(self.validate_references(data))

        record = PwdRecord(**data, status=PwdStatus.PENDING)
        self.db.add(record)
        self.db.commit()

        logger.info("Registered PWD record %s by user %s", record.id, user.id)
        return {
            "id": record.id,
            "full_name": record.full_name,
            "status": record.status,
            "created_at": record.created_at,
        }

    def update(self, pwd_id: int, fields: Dict[str, Any]) -> Dict[str, Any]:
        record = self.get_row(pwd_id)
        data = {k: v for k, v in fields.items() if k in EDITABLE_FIELDS}
        cleared = [k for k in REQUIRED_FIELDS if k in data and data[k] is None]
        if cleared:
            raise ValidationFailedError(
                "Required fields cannot be empty: " + ", ".join(cleared),
                details={"errors": {k: "required" for k in cleared}},
            )

        if data.get("dob") is not None and "age" not in data:
            data["age"] = age_from_dob(data["dob"])

        # Re-check the pairing against the merged values when either side changes
        check = {k: v for k, v in data.items() if k.endswith("_id")}
        if "disability_category_id" in data or "disability_type_id" in data:
            check.setdefault("disability_category_id", record.disability_category_id)
            check.setdefault("disability_type_id", record.disability_type_id)
        self._raise_on_errors(self.validate_references(check))

        for key, value in data.items():
            setattr(record, key, value)
        self.db.commit()

        logger.info("Updated PWD record %s (%s)", pwd_id, ", ".join(sorted(data)) or "no fields")
        return self.get(pwd_id)

    def update_status(self, pwd_id: int, status: str) -> Dict[str, Any]:
        try:
            new_status = PwdStatus(status)
        except ValueError:
            raise ValidationFailedError(
                f"Invalid status value: {status}",
                details={"allowed": [s.value for s in PwdStatus]},
            )

        record = self.get_row(pwd_id)
        old_status = record.status
        record.status = new_status
        self.db.commit()

        logger.info("PWD record %s status %s -> %s", pwd_id, old_status.value, new_status.value)
        return {"id": record.id, "status": record.status, "updated_at": record.updated_at}

    def delete(self, pwd_id: int, cascade: bool = False) -> None:
        """
        Delete a record.

        Without `cascade` the delete is refused while guardian, education,
        support-need or assistance-request rows reference it. With
        `cascade` those rows are removed in the same transaction.
        """
        if cascade:
            for model, column in [
                (AssistanceRequest, AssistanceRequest.beneficiary_id),
                (PwdGuardian, PwdGuardian.pwd_id),
                (PwdEducation, PwdEducation.pwd_id),
                (PwdSupportNeed, PwdSupportNeed.pwd_id),
            ]:
                self.db.query(model).filter(column == pwd_id).delete(synchronize_session=False)

        guarded_delete(self.db, PwdRecord, pwd_id, record_dependents(), "PWD record")
        if cascade:
            logger.info("PWD record %s deleted with its dependent rows", pwd_id)

    def count_totals(self) -> Dict[str, Any]:
        quarter, year = current_period()

        total = self.db.query(func.count(PwdRecord.id)).scalar() or 0
        this_quarter = self.db.query(func.count(PwdRecord.id)).filter(
            PwdRecord.quarter == quarter, PwdRecord.year == year
        ).scalar() or 0
        assessed = self.db.query(
            func.count(func.distinct(AssistanceRequest.beneficiary_id))
        ).filter(AssistanceRequest.status == RequestStatus.ASSESSED).scalar() or 0

        return {
            "total_pwd": int(total),
            "current_quarter": quarter,
            "current_year": year,
            "registered_this_quarter": int(this_quarter),
            "assessed_beneficiaries": int(assessed),
        }

    def period_summary(self, quarter: Quarter, year: int) -> Dict[str, Any]:
        """Status breakdown and coverage for one registration period."""
        row = self.db.query(
            func.count(PwdRecord.id).label("total_records"),
            func.sum(case((PwdRecord.status == PwdStatus.APPROVED, 1), else_=0)).label("approved"),
            func.sum(case((PwdRecord.status == PwdStatus.DECLINED, 1), else_=0)).label("declined"),
            func.sum(case((PwdRecord.status == PwdStatus.PENDING, 1), else_=0)).label("pending"),
            func.count(func.distinct(PwdRecord.community_id)).label("communities"),
            func.count(func.distinct(PwdRecord.disability_category_id)).label("categories"),
        ).filter(PwdRecord.quarter == quarter, PwdRecord.year == year).one()

        return {
            "quarter": Quarter(quarter),
            "year": year,
            "total_records": int(row.total_records or 0),
            "approved": int(row.approved or 0),
            "declined": int(row.declined or 0),
            "pending": int(row.pending or 0),
            "communities": int(row.communities or 0),
            "categories": int(row.categories or 0),
        }
