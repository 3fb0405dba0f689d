"""
PWD record API endpoints.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from pwd_registry.database import get_db
from pwd_registry.dependencies import get_current_user, get_current_admin, get_pagination
from pwd_registry.models.user import User
from pwd_registry.schemas.common import PaginationParams, success, paginated
from pwd_registry.schemas.pwd_record import PwdRecordCreate, PwdRecordUpdate, PwdStatusUpdate
from pwd_registry.services.pwd_record_service import PwdRecordService
from pwd_registry.utils.constants import Quarter, PwdStatus

router = APIRouter()


def _page(service: PwdRecordService, filters: dict, pagination: PaginationParams):
    result = service.list(filters, pagination.page, pagination.per_page)
    return success(paginated("records", result["records"], result["pagination"]))


@router.get("/list")
def list_records(
    quarter: Optional[Quarter] = Query(None, description="Registration quarter"),
    year: Optional[int] = Query(None, description="Registration year"),
    status: Optional[PwdStatus] = Query(None, description="Record status"),
    community_id: Optional[int] = Query(None),
    disability_category_id: Optional[int] = Query(None),
    disability_type_id: Optional[int] = Query(None),
    gender_id: Optional[int] = Query(None),
    search: Optional[str] = Query(None, description="Name, contact, Ghana card or NHIS number"),
    pagination: PaginationParams = Depends(get_pagination),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Paginated PWD records, newest first.

    All filters are optional and combine with AND. `search` is a
    case-insensitive substring match.
    """
    filters = {
        "quarter": quarter,
        "year": year,
        "status": status,
        "community_id": community_id,
        "disability_category_id": disability_category_id,
        "disability_type_id": disability_type_id,
        "gender_id": gender_id,
        "search": search,
    }
    return _page(PwdRecordService(db), filters, pagination)


@router.get("/totals")
def get_totals(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Overall, current-quarter and assessed-beneficiary counts."""
    return success(PwdRecordService(db).count_totals())


@router.get("/quarterly/{quarter}/{year}/summary")
def get_period_summary(
    quarter: Quarter,
    year: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return success(PwdRecordService(db).period_summary(quarter, year))


@router.get("/quarterly/{quarter}/{year}")
def list_by_period(
    quarter: Quarter,
    year: int,
    pagination: PaginationParams = Depends(get_pagination),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return _page(PwdRecordService(db), {"quarter": quarter, "year": year}, pagination)


@router.get("/category/{category_id}")
def list_by_category(
    category_id: int,
    pagination: PaginationParams = Depends(get_pagination),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return _page(PwdRecordService(db), {"disability_category_id": category_id}, pagination)


@router.get("/community/{community_id}")
def list_by_community(
    community_id: int,
    pagination: PaginationParams = Depends(get_pagination),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return _page(PwdRecordService(db), {"community_id": community_id}, pagination)


@router.get("/status/{status}")
def list_by_status(
    status: PwdStatus,
    pagination: PaginationParams = Depends(get_pagination),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return _page(PwdRecordService(db), {"status": status}, pagination)


@router.get("/{pwd_id}")
def get_record(
    pwd_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Full record with category, type, community, gender and assistance type names."""
    return success(PwdRecordService(db).get(pwd_id))


@router.post("/", status_code=201)
def create_record(
    body: PwdRecordCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    data = PwdRecordService(db).create(body.model_dump(), current_user)
    return success(data, "PWD record created successfully")


@router.patch("/{pwd_id}/status")
def update_record_status(
    pwd_id: int,
    body: PwdStatusUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin)
):
    data = PwdRecordService(db).update_status(pwd_id, body.status)
    return success(data, "Status updated successfully")


@router.patch("/{pwd_id}")
def update_record(
    pwd_id: int,
    body: PwdRecordUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    data = PwdRecordService(db).update(pwd_id, body.model_dump(exclude_unset=True))
    return success(data, "PWD record updated successfully")


@router.delete("/{pwd_id}")
def delete_record(
    pwd_id: int,
    cascade: bool = Query(False, description="Also delete guardian, education, support-need and request rows"),
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin)
):
    """
    Delete a PWD record.

    Without `cascade` the delete is rejected with 409 while dependent rows exist.
    """
    PwdRecordService(db).delete(pwd_id, cascade=cascade)
    return success(message="PWD record deleted successfully")
