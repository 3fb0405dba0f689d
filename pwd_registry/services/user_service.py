"""
Identity service - user accounts, login and password changes.
"""
from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import List, Dict, Any, Optional
import logging

from pwd_registry.exceptions import NotFoundError, ConflictError, UnauthorizedError, ForbiddenError
from pwd_registry.models.user import User, PasswordReset
from pwd_registry.models.pwd_record import PwdRecord
from pwd_registry.models.assistance_request import AssistanceRequest
from pwd_registry.models.activity_log import ActivityLog
from pwd_registry.schemas.user import UserPublic
from pwd_registry.security import get_password_hash, verify_password
from pwd_registry.services.usage_guard import Dependent, guarded_delete
from pwd_registry.utils.constants import UserRole

logger = logging.getLogger(__name__)

# Same message for unknown identifier and wrong password
INVALID_CREDENTIALS = "Invalid username/email or password"


class UserService:
    """Business logic for user accounts."""

    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def to_public(user: User) -> Dict[str, Any]:
        return UserPublic.model_validate(user).model_dump()

    def list(self) -> List[Dict[str, Any]]:
        users = self.db.query(User).order_by(User.username.asc()).all()
        return [self.to_public(u) for u in users]

    def get_row(self, user_id: int) -> User:
        user = self.db.get(User, user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    def get(self, user_id: int) -> Dict[str, Any]:
        return self.to_public(self.get_row(user_id))

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(func.lower(User.email) == email.strip().lower()).first()

    def get_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter(User.username == username.strip()).first()

    def _ensure_unique(self, username: Optional[str], email: Optional[str], exclude_id: Optional[int] = None) -> None:
        if username is not None:
            other = self.get_by_username(username)
            if other is not None and other.id != exclude_id:
                raise ConflictError(f"Username '{username}' is already taken")
        if email is not None:
            other = self.get_by_email(email)
            if other is not None and other.id != exclude_id:
                raise ConflictError(f"Email '{email}' is already registered")

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("Username or email is already registered")

    def create(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        username = fields["username"].strip()
        email = fields["email"].strip().lower()
        self._ensure_unique(username, email)

        user = User(
            username=username,
            email=email,
            password_hash=get_password_hash(fields["password"]),
            role=fields.get("role") or UserRole.OFFICER,
            profile_image=fields.get("profile_image"),
        )
        self.db.add(user)
        self._commit()

        logger.info("Created user %s (%s, role=%s)", user.id, username, user.role.value)
        return self.to_public(user)

    def update(self, user_id: int, fields: Dict[str, Any], actor: User) -> Dict[str, Any]:
        """
        Apply a partial update.

        Officers may only edit their own account and never a role.
        """
        if not actor.is_admin:
            if actor.id != user_id:
                raise ForbiddenError("You can only update your own account")
            if "role" in fields:
                raise ForbiddenError("Only admins can change roles")

        user = self.get_row(user_id)

        username = fields["username"].strip() if fields.get("username") else None
        email = fields["email"].strip().lower() if fields.get("email") else None
        self._ensure_unique(username, email, exclude_id=user_id)

        if username is not None:
            user.username = username
        if email is not None:
            user.email = email
        if fields.get("role") is not None:
            user.role = fields["role"]
        if "profile_image" in fields:
            user.profile_image = fields["profile_image"]

        self._commit()
        logger.info("Updated user %s", user_id)
        return self.to_public(user)

    def delete(self, user_id: int) -> None:
        # Reset codes belong to the account and go with it
        self.db.query(PasswordReset).filter(PasswordReset.user_id == user_id).delete(
            synchronize_session=False
        )
        self.db.query(ActivityLog).filter(ActivityLog.user_id == user_id).update(
            {ActivityLog.user_id: None}, synchronize_session=False
        )
        guarded_delete(
            self.db,
            User,
            user_id,
            [
                Dependent("pwd_records", PwdRecord.user_id),
                Dependent("assistance_requests", AssistanceRequest.requested_by),
            ],
            "User",
        )

    def authenticate(self, identifier: str, password: str) -> User:
        """Look up by username or email and verify the password."""
        identifier = identifier.strip()
        user = self.db.query(User).filter(
            or_(User.username == identifier, func.lower(User.email) == identifier.lower())
        ).first()

        if user is None or not verify_password(password, user.password_hash):
            logger.info("Failed login attempt")
            raise UnauthorizedError(INVALID_CREDENTIALS)

        logger.info("User %s logged in", user.id)
        return user

    def update_password(self, user_id: int, current_password: str, new_password: str) -> None:
        user = self.get_row(user_id)
        if not verify_password(current_password, user.password_hash):
            raise UnauthorizedError("Current password is incorrect")

        user.password_hash = get_password_hash(new_password)
        self.db.commit()
        logger.info("Password changed for user %s", user_id)
