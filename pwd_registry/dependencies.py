"""
FastAPI dependencies for authentication and authorization.
"""
from fastapi import Depends, Query, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from typing import Generator, Optional

from pwd_registry.config import settings
from pwd_registry.database import get_db
from pwd_registry.exceptions import UnauthorizedError, ForbiddenError
from pwd_registry.models.user import User
from pwd_registry.schemas.common import PaginationParams
from pwd_registry.security import decode_token
from pwd_registry.services.activity_log_service import ActivityLogService, describe_request
from pwd_registry.services.email_service import EmailService, OtpNotifier

security = HTTPBearer(auto_error=False)


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> User:
    """Get current authenticated user"""
    if credentials is None:
        raise UnauthorizedError("Not authenticated")

    payload = decode_token(credentials.credentials)

    if payload.get("type") != "access":
        raise UnauthorizedError("Invalid token type")

    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise UnauthorizedError("Invalid token payload")

    user = db.get(User, user_id)
    if user is None:
        raise UnauthorizedError("User not found")

    request.state.user_id = user.id
    return user


def get_current_admin(current_user: User = Depends(get_current_user)) -> User:
    """Get current admin user"""
    if not current_user.is_admin:
        raise ForbiddenError("Admin access required")
    return current_user


def get_otp_notifier() -> OtpNotifier:
    """Delivery channel for password-reset codes (overridden in tests)."""
    return EmailService()


def get_pagination(
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    per_page: int = Query(
        settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE, description="Items per page"
    ),
) -> PaginationParams:
    """Validated page/per_page query parameters."""
    return PaginationParams(page=page, per_page=per_page)


WRITE_METHODS = {"POST", "PUT", "PATCH", "DELETE"}
LOGS_ROOT = f"{settings.API_V1_PREFIX}/logs"


def record_activity(request: Request, db: Session = Depends(get_db)) -> Generator[None, None, None]:
    """
    Append an activity log entry once an authenticated write succeeds.

    Failed requests raise through the yield and are not recorded.
    Anonymous calls (login, password reset) are skipped.
    """
    yield

    if request.method not in WRITE_METHODS:
        return
    path = request.url.path
    if path.rstrip("/") == LOGS_ROOT:
        return
    user_id = getattr(request.state, "user_id", None)
    # The actor may have deleted their own account
    if user_id is None or db.get(User, user_id) is None:
        return

    ActivityLogService(db).log(user_id, describe_request(request.method, path, settings.API_V1_PREFIX))
