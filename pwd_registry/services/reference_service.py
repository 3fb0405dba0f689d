"""
Reference data service - CRUD over the lookup tables.
"""
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import List, Dict, Any, Optional
import logging

from pwd_registry.exceptions import NotFoundError, ValidationFailedError, ConflictError
from pwd_registry.models.reference import (
    Gender,
    Community,
    DisabilityCategory,
    DisabilityType,
    AssistanceType,
)
from pwd_registry.models.pwd_record import PwdRecord
from pwd_registry.models.assistance_request import AssistanceRequest
from pwd_registry.schemas.reference import ReferenceRecord
from pwd_registry.services.usage_guard import Dependent, guarded_delete

logger = logging.getLogger(__name__)


class ReferenceService:
    """
    CRUD for a single name-keyed lookup table.

    Subclasses set `model`, `label` and `dependents()`; everything else
    is shared.
    """

    model = None
    label = "Record"

    def __init__(self, db: Session):
        self.db = db

    def dependents(self) -> List[Dependent]:
        return []

    def to_dict(self, row) -> Dict[str, Any]:
        return ReferenceRecord.model_validate(row).model_dump()

    def list(self) -> List[Dict[str, Any]]:
        rows = self.db.query(self.model).order_by(self.model.name.asc()).all()
        return [self.to_dict(r) for r in rows]

    def get_row(self, record_id: int):
        row = self.db.get(self.model, record_id)
        if row is None:
            raise NotFoundError(self.label, record_id)
        return row

    def get(self, record_id: int) -> Dict[str, Any]:
        return self.to_dict(self.get_row(record_id))

    def exists(self, record_id: Optional[int]) -> bool:
        return record_id is not None and self.db.get(self.model, record_id) is not None

    def _clean_name(self, name: Optional[str]) -> str:
        name = (name or "").strip()
        if not name:
            raise ValidationFailedError(f"{self.label} name is required")
        return name

    def _ensure_unique(self, name: str, exclude_id: Optional[int] = None) -> None:
        query = self.db.query(self.model.id).filter(func.lower(self.model.name) == name.lower())
        if exclude_id is not None:
            query = query.filter(self.model.id != exclude_id)
        if query.first() is not None:
            raise ConflictError(f"{self.label} '{name}' already exists")

    def _commit(self, name: str) -> None:
        # Unique index is the final arbiter when two requests race past the pre-check
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(f"{self.label} '{name}' already exists")

    def create(self, fields: Dict[str, Any]) -> int:
        name = self._clean_name(fields.get("name"))
        self._ensure_unique(name)

        row = self.model(name=name)
        self.db.add(row)
        self._commit(name)

        logger.info("Created %s %s (%s)", self.label, row.id, name)
        return row.id

    def update(self, record_id: int, fields: Dict[str, Any]) -> Dict[str, Any]:
        row = self.get_row(record_id)

        if "name" in fields and fields["name"] is not None:
            name = self._clean_name(fields["name"])
            self._ensure_unique(name, exclude_id=record_id)
            row.name = name

        self._commit(row.name)
        logger.info("Updated %s %s", self.label, record_id)
        return self.to_dict(row)

    def delete(self, record_id: int) -> None:
        guarded_delete(self.db, self.model, record_id, self.dependents(), self.label)


class GenderService(ReferenceService):
    model = Gender
    label = "Gender"


class CommunityService(ReferenceService):
    model = Community
    label = "Community"

    def dependents(self) -> List[Dependent]:
        return [Dependent("pwd_records", PwdRecord.community_id)]

    def beneficiary_report(self) -> List[Dict[str, Any]]:
        """PWD record count per community, zero-count communities included."""
        rows = (
            self.db.query(Community.id, Community.name, func.count(PwdRecord.id).label("total"))
            .outerjoin(PwdRecord, PwdRecord.community_id == Community.id)
            .group_by(Community.id, Community.name)
            .order_by(Community.name.asc())
            .all()
        )
        return [
            {"community_id": r.id, "community_name": r.name, "total_beneficiaries": int(r.total)}
            for r in rows
        ]


class DisabilityCategoryService(ReferenceService):
    model = DisabilityCategory
    label = "Disability category"

    def dependents(self) -> List[Dependent]:
        return [
            Dependent("disability_types", DisabilityType.category_id),
            Dependent("pwd_records", PwdRecord.disability_category_id),
        ]


class AssistanceTypeService(ReferenceService):
    model = AssistanceType
    label = "Assistance type"

    def dependents(self) -> List[Dependent]:
        return [
            Dependent("pwd_records", PwdRecord.assistance_type_needed_id),
            Dependent("assistance_requests", AssistanceRequest.assistance_type_id),
        ]


class DisabilityTypeService(ReferenceService):
    """Disability types additionally carry their owning category."""

    model = DisabilityType
    label = "Disability type"

    def dependents(self) -> List[Dependent]:
        return [Dependent("pwd_records", PwdRecord.disability_type_id)]

    def to_dict(self, row) -> Dict[str, Any]:
        return {
            "id": row.id,
            "name": row.name,
            "category_id": row.category_id,
            "category_name": row.category.name if row.category else None,
        }

    def list_by_category(self, category_id: int) -> List[Dict[str, Any]]:
        DisabilityCategoryService(self.db).get_row(category_id)
        rows = (
            self.db.query(DisabilityType)
            .filter(DisabilityType.category_id == category_id)
            .order_by(DisabilityType.name.asc())
            .all()
        )
        return [self.to_dict(r) for r in rows]

    def _require_category(self, category_id: Optional[int]) -> None:
        if category_id is None:
            raise ValidationFailedError("category_id is required")
        if not DisabilityCategoryService(self.db).exists(category_id):
            raise ValidationFailedError(f"Disability category {category_id} does not exist")

    def create(self, fields: Dict[str, Any]) -> int:
        name = self._clean_name(fields.get("name"))
        category_id = fields.get("category_id")
        self._require_category(category_id)
        self._ensure_unique(name)

        row = DisabilityType(name=name, category_id=category_id)
        self.db.add(row)
        self._commit(name)

        logger.info("Created disability type %s (%s) in category %s", row.id, name, category_id)
        return row.id

    def update(self, record_id: int, fields: Dict[str, Any]) -> Dict[str, Any]:
        row = self.get_row(record_id)

        new_category = fields.get("category_id")
        if new_category is not None and new_category != row.category_id:
            self._require_category(new_category)
            # Moving a type would break the category/type pairing on existing records
            in_use = self.db.query(PwdRecord.id).filter(PwdRecord.disability_type_id == record_id).first()
            if in_use is not None:
                raise ConflictError(
                    f"Disability type {record_id} is used by PWD records and cannot change category"
                )
            row.category_id = new_category

        if fields.get("name") is not None:
            name = self._clean_name(fields["name"])
            self._ensure_unique(name, exclude_id=record_id)
            row.name = name

        self._commit(row.name)
        self.db.refresh(row)
        logger.info("Updated disability type %s", record_id)
        return self.to_dict(row)
