"""
Assistance request service - requests raised for registered PWDs.
"""
from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload
from typing import Dict, Any, Optional
import logging

from pwd_registry.exceptions import NotFoundError, ValidationFailedError
from pwd_registry.models.assistance_request import AssistanceRequest
from pwd_registry.models.pwd_record import PwdRecord
from pwd_registry.models.reference import AssistanceType
from pwd_registry.models.user import User
from pwd_registry.schemas.common import PaginationMeta
from pwd_registry.utils.constants import RequestStatus

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = [
    "assistance_type_id", "beneficiary_id", "description",
    "amount_value_cost", "admin_review_notes", "status",
]

FILTER_COLUMNS = {
    "status": AssistanceRequest.status,
    "assistance_type_id": AssistanceRequest.assistance_type_id,
    "beneficiary_id": AssistanceRequest.beneficiary_id,
    "requested_by": AssistanceRequest.requested_by,
}


class AssistanceRequestService:
    """Business logic for assistance requests."""

    def __init__(self, db: Session):
        self.db = db

    def _base_query(self):
        return (
            self.db.query(AssistanceRequest)
            .join(PwdRecord, AssistanceRequest.beneficiary_id == PwdRecord.id)
            .options(
                joinedload(AssistanceRequest.assistance_type),
                joinedload(AssistanceRequest.beneficiary).joinedload(PwdRecord.community),
                joinedload(AssistanceRequest.requester),
            )
        )

    @staticmethod
    def to_dict(request: AssistanceRequest) -> Dict[str, Any]:
        beneficiary = request.beneficiary
        requester = request.requester
        return {
            "id": request.id,
            "assistance_type_id": request.assistance_type_id,
            "assistance_type_name": request.assistance_type.name if request.assistance_type else None,
            "beneficiary_id": request.beneficiary_id,
            "beneficiary_name": beneficiary.full_name if beneficiary else None,
            "beneficiary_contact": beneficiary.contact if beneficiary else None,
            "community_id": beneficiary.community_id if beneficiary else None,
            "community_name": beneficiary.community.name if beneficiary and beneficiary.community else None,
            "requested_by": request.requested_by,
            "requested_by_username": requester.username if requester else None,
            "requested_by_role": requester.role if requester else None,
            "description": request.description,
            "amount_value_cost": request.amount_value_cost,
            "admin_review_notes": request.admin_review_notes,
            "status": request.status,
            "created_at": request.created_at,
            "updated_at": request.updated_at,
        }

    def _apply_filters(self, query, filters: Dict[str, Any]):
        for key, column in FILTER_COLUMNS.items():
            value = filters.get(key)
            if value is not None and value != "":
                query = query.filter(column == value)

        term = (filters.get("search") or "").strip().lower()
        if term:
            query = query.filter(or_(
                func.lower(PwdRecord.full_name).contains(term, autoescape=True),
                func.lower(AssistanceRequest.description).contains(term, autoescape=True),
            ))

        name = (filters.get("beneficiary_name") or "").strip().lower()
        if name:
            query = query.filter(func.lower(PwdRecord.full_name).contains(name, autoescape=True))
        return query

    def list(self, filters: Dict[str, Any], page: int, per_page: int) -> Dict[str, Any]:
        """
        Filtered, paginated requests, newest first.

        Returns {"requests": [...], "pagination": PaginationMeta}.
        """
        count_query = self.db.query(func.count(AssistanceRequest.id)).join(
            PwdRecord, AssistanceRequest.beneficiary_id == PwdRecord.id
        )
        total = self._apply_filters(count_query, filters).scalar() or 0

        rows = (
            self._apply_filters(self._base_query(), filters)
            .order_by(AssistanceRequest.created_at.desc(), AssistanceRequest.id.desc())
            .offset((page - 1) * per_page)
            .limit(per_page)
            .all()
        )
        return {
            "requests": [self.to_dict(r) for r in rows],
            "pagination": PaginationMeta.create(total, page, per_page),
        }

    def get_row(self, request_id: int) -> AssistanceRequest:
        row = self._base_query().filter(AssistanceRequest.id == request_id).first()
        if row is None:
            raise NotFoundError("Assistance request", request_id)
        return row

    def get(self, request_id: int) -> Dict[str, Any]:
        return self.to_dict(self.get_row(request_id))

    def _validate_references(self, data: Dict[str, Any]) -> None:
        errors = {}
        beneficiary_id = data.get("beneficiary_id")
        if "beneficiary_id" in data and (
            beneficiary_id is None or self.db.get(PwdRecord, beneficiary_id) is None
        ):
            errors["beneficiary_id"] = f"Beneficiary {beneficiary_id} is not a registered PWD record"

        type_id = data.get("assistance_type_id")
        if "assistance_type_id" in data and (
            type_id is None or self.db.get(AssistanceType, type_id) is None
        ):
            errors["assistance_type_id"] = f"Assistance type {type_id} does not exist"

        if errors:
            raise ValidationFailedError(
                "Invalid request data: " + "; ".join(errors.values()),
                details={"errors": errors},
            )

    def create(self, fields: Dict[str, Any], user: User) -> Dict[str, Any]:
        data = {
            "assistance_type_id": fields.get("assistance_type_id"),
            "beneficiary_id": fields.get("beneficiary_id"),
            "description": fields.get("description"),
            "amount_value_cost": fields.get("amount_value_cost"),
        }
        self._validate_references(data)

        request = AssistanceRequest(**data, requested_by=user.id, status=RequestStatus.PENDING)
        self.db.add(request)
        self.db.commit()

        logger.info(
            "Assistance request %s created for beneficiary %s by user %s",
            request.id, request.beneficiary_id, user.id,
        )
        return self.get(request.id)

    def update(self, request_id: int, fields: Dict[str, Any]) -> Dict[str, Any]:
        request = self.get_row(request_id)
        data = {k: v for k, v in fields.items() if k in EDITABLE_FIELDS}
        if "status" in data:
            data["status"] = self._parse_status(data["status"])
        self._validate_references({k: v for k, v in data.items() if k in ("beneficiary_id", "assistance_type_id")})

        for key, value in data.items():
            setattr(request, key, value)
        self.db.commit()

        logger.info("Updated assistance request %s (%s)", request_id, ", ".join(sorted(data)) or "no fields")
        return self.get(request_id)

    @staticmethod
    def _parse_status(status) -> RequestStatus:
        try:
            return RequestStatus(status)
        except ValueError:
            raise ValidationFailedError(
                f"Invalid status value: {status}",
                details={"allowed": [s.value for s in RequestStatus]},
            )

    def update_status(self, request_id: int, status: str, admin_notes: Optional[str] = None) -> Dict[str, Any]:
        """Set the workflow status; admin notes, when given, replace the previous notes."""
        new_status = self._parse_status(status)
        request = self.get_row(request_id)
        old_status = request.status
        request.status = new_status
        if admin_notes is not None:
            request.admin_review_notes = admin_notes
        self.db.commit()

        logger.info("Assistance request %s status %s -> %s", request_id, old_status.value, new_status.value)
        return self.get(request_id)

    def delete(self, request_id: int) -> None:
        request = self.db.get(AssistanceRequest, request_id)
        if request is None:
            raise NotFoundError("Assistance request", request_id)
        self.db.delete(request)
        self.db.commit()
        logger.info("Deleted assistance request %s", request_id)
