"""
Assistance request API endpoints.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from pwd_registry.database import get_db
from pwd_registry.dependencies import get_current_user, get_current_admin, get_pagination
from pwd_registry.models.user import User
from pwd_registry.schemas.assistance_request import (
    AssistanceRequestCreate,
    AssistanceRequestUpdate,
    RequestStatusUpdate,
)
from pwd_registry.schemas.common import PaginationParams, success, paginated
from pwd_registry.services.assistance_request_service import AssistanceRequestService
from pwd_registry.utils.constants import RequestStatus

router = APIRouter()


def _page(db: Session, filters: dict, pagination: PaginationParams):
    result = AssistanceRequestService(db).list(filters, pagination.page, pagination.per_page)
    return success(paginated("requests", result["requests"], result["pagination"]))


@router.get("/list")
def list_requests(
    status: Optional[RequestStatus] = Query(None),
    assistance_type_id: Optional[int] = Query(None),
    beneficiary_id: Optional[int] = Query(None),
    requested_by: Optional[int] = Query(None),
    beneficiary_name: Optional[str] = Query(None, description="Substring of the beneficiary's name"),
    search: Optional[str] = Query(None, description="Beneficiary name or description"),
    pagination: PaginationParams = Depends(get_pagination),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Paginated assistance requests, newest first; filters combine with AND."""
    filters = {
        "status": status,
        "assistance_type_id": assistance_type_id,
        "beneficiary_id": beneficiary_id,
        "requested_by": requested_by,
        "beneficiary_name": beneficiary_name,
        "search": search,
    }
    return _page(db, filters, pagination)


@router.get("/my-requests")
def list_my_requests(
    pagination: PaginationParams = Depends(get_pagination),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Requests raised by the authenticated user."""
    return _page(db, {"requested_by": current_user.id}, pagination)


@router.get("/beneficiary/{beneficiary_id}")
def list_by_beneficiary(
    beneficiary_id: int,
    pagination: PaginationParams = Depends(get_pagination),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return _page(db, {"beneficiary_id": beneficiary_id}, pagination)


@router.get("/user/{user_id}")
def list_by_requester(
    user_id: int,
    pagination: PaginationParams = Depends(get_pagination),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return _page(db, {"requested_by": user_id}, pagination)


@router.get("/status/{status}")
def list_by_status(
    status: RequestStatus,
    pagination: PaginationParams = Depends(get_pagination),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return _page(db, {"status": status}, pagination)


@router.get("/{request_id}")
def get_request(
    request_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return success(AssistanceRequestService(db).get(request_id))


@router.post("/", status_code=201)
def create_request(
    body: AssistanceRequestCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Raise a request for a registered PWD; it starts as pending."""
    data = AssistanceRequestService(db).create(body.model_dump(), current_user)
    return success(data, "Assistance request created successfully")


@router.patch("/{request_id}/status")
def update_request_status(
    request_id: int,
    body: RequestStatusUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin)
):
    """Move the request through its workflow; admin_notes replaces earlier notes."""
    data = AssistanceRequestService(db).update_status(request_id, body.status, body.admin_notes)
    return success(data, "Status updated successfully")


@router.patch("/{request_id}")
def update_request(
    request_id: int,
    body: AssistanceRequestUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    data = AssistanceRequestService(db).update(request_id, body.model_dump(exclude_unset=True))
    return success(data, "Assistance request updated successfully")


@router.delete("/{request_id}")
def delete_request(
    request_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin)
):
    AssistanceRequestService(db).delete(request_id)
    return success(message="Assistance request deleted successfully")
