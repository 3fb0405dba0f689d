"""
Activity log service - the audit trail of writes made through the API.
"""
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload
from datetime import date, datetime, timedelta
from typing import Dict, Any, Optional
import logging

from pwd_registry.exceptions import NotFoundError, ValidationFailedError
from pwd_registry.models.activity_log import ActivityLog
from pwd_registry.models.user import User
from pwd_registry.schemas.common import PaginationMeta

logger = logging.getLogger(__name__)

# Audit entries younger than this are never purged
MIN_RETENTION_DAYS = 30

AREA_BY_PREFIX = {
    "/users": "User management",
    "/pwd-records": "PWD record",
    "/pwd-guardians": "PWD record",
    "/pwd-education": "PWD record",
    "/pwd-support-needs": "PWD record",
    "/assistance-requests": "Assistance request",
}


def describe_request(method: str, path: str, api_prefix: str = "") -> str:
    """Human-readable activity line for a write request."""
    activity = f"{method} request to {path}"
    relative = path[len(api_prefix):] if api_prefix and path.startswith(api_prefix) else path
    for prefix, area in AREA_BY_PREFIX.items():
        if relative.startswith(prefix):
            return f"{area}: {activity}"
    return activity


class ActivityLogService:
    """Records and queries activity log entries."""

    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def to_dict(entry: ActivityLog) -> Dict[str, Any]:
        user = entry.user
        return {
            "id": entry.id,
            "user_id": entry.user_id,
            "username": user.username if user else None,
            "email": user.email if user else None,
            "role": user.role if user else None,
            "activity": entry.activity,
            "timestamp": entry.timestamp,
        }

    def log(self, user_id: int, activity: str) -> ActivityLog:
        activity = (activity or "").strip()
        if not activity:
            raise ValidationFailedError("Activity description is required")

        entry = ActivityLog(user_id=user_id, activity=activity)
        self.db.add(entry)
        self.db.commit()
        return entry

    def _page(self, query, page: int, per_page: int) -> Dict[str, Any]:
        total = query.with_entities(func.count(ActivityLog.id)).scalar() or 0
        rows = (
            query.options(joinedload(ActivityLog.user))
            .order_by(ActivityLog.timestamp.desc(), ActivityLog.id.desc())
            .offset((page - 1) * per_page)
            .limit(per_page)
            .all()
        )
        return {
            "logs": [self.to_dict(r) for r in rows],
            "pagination": PaginationMeta.create(total, page, per_page),
        }

    def list(self, page: int, per_page: int) -> Dict[str, Any]:
        """All entries, newest first."""
        return self._page(self.db.query(ActivityLog), page, per_page)

    def list_by_user(self, user_id: int, page: int, per_page: int) -> Dict[str, Any]:
        if self.db.get(User, user_id) is None:
            raise NotFoundError("User", user_id)
        query = self.db.query(ActivityLog).filter(ActivityLog.user_id == user_id)
        return self._page(query, page, per_page)

    def list_by_date_range(self, start: date, end: date, page: int, per_page: int) -> Dict[str, Any]:
        """Entries whose timestamp falls on any day from `start` to `end` inclusive."""
        if start > end:
            raise ValidationFailedError("start_date must not be after end_date")
        query = self.db.query(ActivityLog).filter(
            ActivityLog.timestamp >= datetime.combine(start, datetime.min.time()),
            ActivityLog.timestamp < datetime.combine(end + timedelta(days=1), datetime.min.time()),
        )
        return self._page(query, page, per_page)

    def search(self, term: str, page: int, per_page: int) -> Dict[str, Any]:
        term = (term or "").strip().lower()
        if not term:
            raise ValidationFailedError("Search term is required")
        query = self.db.query(ActivityLog).filter(
            func.lower(ActivityLog.activity).contains(term, autoescape=True)
        )
        return self._page(query, page, per_page)

    def get(self, log_id: int) -> Dict[str, Any]:
        entry = self.db.get(ActivityLog, log_id)
        if entry is None:
            raise NotFoundError("Activity log", log_id)
        return self.to_dict(entry)

    def purge_older_than(self, days: int) -> int:
        """Delete entries older than `days` days; returns how many went."""
        if days < MIN_RETENTION_DAYS:
            raise ValidationFailedError(
                f"Cannot delete logs less than {MIN_RETENTION_DAYS} days old"
            )
        cutoff = datetime.now() - timedelta(days=days)
        deleted = (
            self.db.query(ActivityLog)
            .filter(ActivityLog.timestamp < cutoff)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        logger.info("Purged %s activity log entries older than %s days", deleted, days)
        return deleted
