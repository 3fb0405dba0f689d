"""
Password reset service - one-time codes.

Flow: request_reset -> verify_otp -> reset_password. A code is bound to
one user, expires after OTP_TTL_MINUTES and is consumed by a successful
reset. Consumption is a conditional UPDATE so two concurrent resets with
the same code cannot both succeed.
"""
from sqlalchemy import update
from sqlalchemy.orm import Session
from datetime import datetime, timedelta
from typing import Optional, Tuple
import logging

from pwd_registry.config import settings
from pwd_registry.exceptions import NotFoundError
from pwd_registry.models.user import User, PasswordReset
from pwd_registry.security import generate_otp, hash_otp, get_password_hash
from pwd_registry.services.user_service import UserService

logger = logging.getLogger(__name__)

INVALID_CODE = "Invalid or expired reset code"


class PasswordResetService:

    def __init__(self, db: Session):
        self.db = db

    def _active(self, otp_hash: str, now: datetime):
        return self.db.query(PasswordReset).filter(
            PasswordReset.otp_hash == otp_hash,
            PasswordReset.used.is_(False),
            PasswordReset.expires_at > now,
        )

    def request_reset(self, email: str, ttl_minutes: Optional[int] = None) -> Optional[Tuple[User, str]]:
        """
        Issue a new code for the account with this email.

        Returns (user, code) for the caller to deliver, or None when no
        account matches. Earlier unused codes of the user are invalidated.
        """
        user = UserService(self.db).get_by_email(email)
        if user is None:
            logger.info("Password reset requested for unknown email")
            return None

        ttl = ttl_minutes or settings.OTP_TTL_MINUTES
        now = datetime.now()

        self.db.execute(
            update(PasswordReset)
            .where(PasswordReset.user_id == user.id, PasswordReset.used.is_(False))
            .values(used=True, used_at=now)
            .execution_options(synchronize_session=False)
        )

        # Codes are looked up by hash, so avoid colliding with another live code
        while True:
            code = generate_otp(settings.OTP_LENGTH)
            if self._active(hash_otp(code), now).first() is None:
                break

        self.db.add(PasswordReset(
            user_id=user.id,
            otp_hash=hash_otp(code),
            expires_at=now + timedelta(minutes=ttl),
        ))
        self.db.commit()

        logger.info("Issued reset code for user %s (ttl %s min)", user.id, ttl)
        return user, code

    def verify_otp(self, code: str) -> None:
        """Mark a live code as verified; it stays usable for one reset."""
        now = datetime.now()
        reset = self._active(hash_otp(code), now).first()
        if reset is None:
            raise NotFoundError("Reset code", message=INVALID_CODE)

        if reset.verified_at is None:
            reset.verified_at = now
            self.db.commit()
        logger.info("Reset code verified for user %s", reset.user_id)

    def reset_password(self, code: str, new_password: str) -> None:
        """Consume a verified, unexpired code and set the new password."""
        now = datetime.now()
        reset = self._active(hash_otp(code), now).filter(
            PasswordReset.verified_at.isnot(None)
        ).first()
        if reset is None:
            raise NotFoundError("Reset code", message=INVALID_CODE)

        consumed = self.db.execute(
            update(PasswordReset)
            .where(
                PasswordReset.id == reset.id,
                PasswordReset.used.is_(False),
                PasswordReset.expires_at > now,
            )
            .values(used=True, used_at=now)
            .execution_options(synchronize_session=False)
        )
        if consumed.rowcount != 1:
            self.db.rollback()
            raise NotFoundError("Reset code", message=INVALID_CODE)

        user = self.db.get(User, reset.user_id)
        user.password_hash = get_password_hash(new_password)
        self.db.commit()
        logger.info("Password reset completed for user %s", user.id)
