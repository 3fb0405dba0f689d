"""
Activity log API endpoints.

Writes made through the API are recorded automatically; these routes
let admins read and prune the trail.
"""
from fastapi import APIRouter, Depends, Query, Path
from sqlalchemy.orm import Session
from datetime import date

from pwd_registry.database import get_db
from pwd_registry.dependencies import get_current_user, get_current_admin, get_pagination
from pwd_registry.models.user import User
from pwd_registry.schemas.activity_log import ActivityCreate
from pwd_registry.schemas.common import PaginationParams, success, paginated
from pwd_registry.services.activity_log_service import ActivityLogService

router = APIRouter()


def _page(result: dict):
    return success(paginated("logs", result["logs"], result["pagination"]))


@router.post("/", status_code=201)
def create_log(
    body: ActivityCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Record an activity for the authenticated user."""
    service = ActivityLogService(db)
    entry = service.log(current_user.id, body.activity)
    return success(service.get(entry.id), "Activity logged successfully")


@router.get("/")
def list_logs(
    pagination: PaginationParams = Depends(get_pagination),
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin)
):
    """All activity, newest first."""
    return _page(ActivityLogService(db).list(pagination.page, pagination.per_page))


@router.get("/user/{user_id}")
def list_user_logs(
    user_id: int,
    pagination: PaginationParams = Depends(get_pagination),
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin)
):
    return _page(ActivityLogService(db).list_by_user(user_id, pagination.page, pagination.per_page))


@router.get("/date-range")
def list_logs_by_date_range(
    start_date: date = Query(..., description="First day, YYYY-MM-DD"),
    end_date: date = Query(..., description="Last day (inclusive), YYYY-MM-DD"),
    pagination: PaginationParams = Depends(get_pagination),
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin)
):
    return _page(ActivityLogService(db).list_by_date_range(
        start_date, end_date, pagination.page, pagination.per_page
    ))


@router.get("/search")
def search_logs(
    q: str = Query(..., min_length=1, description="Text within the activity description"),
    pagination: PaginationParams = Depends(get_pagination),
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin)
):
    return _page(ActivityLogService(db).search(q, pagination.page, pagination.per_page))


@router.delete("/cleanup/{days}")
def cleanup_logs(
    days: int = Path(..., ge=1),
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin)
):
    """
    Delete entries older than `days` days.

    Entries younger than 30 days are kept for audit; smaller values are rejected.
    """
    deleted = ActivityLogService(db).purge_older_than(days)
    return success(
        {"deleted_count": deleted, "days_threshold": days},
        f"{deleted} activity logs older than {days} days deleted successfully",
    )


@router.get("/{log_id}")
def get_log(
    log_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin)
):
    return success(ActivityLogService(db).get(log_id))
