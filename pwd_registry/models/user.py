"""
User account and password-reset SQLAlchemy models.
"""
from sqlalchemy import Column, Integer, String, DateTime, Boolean, ForeignKey, Enum, Index, func
from sqlalchemy.orm import relationship
from datetime import datetime
from pwd_registry.database import Base
from pwd_registry.utils.constants import UserRole, enum_values


class User(Base):
    """
    Registry user (admin or field officer).

    The password is only ever stored as a bcrypt hash.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    username = Column(String(100), nullable=False, unique=True)
    email = Column(String(150), nullable=False, unique=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(
        Enum(UserRole, name="user_role", values_callable=enum_values),
        nullable=False,
        default=UserRole.OFFICER,
    )
    profile_image = Column(String(255))
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(DateTime, nullable=False, default=datetime.now, onupdate=datetime.now)

    __table_args__ = (
        Index("uq_users_email_lower", func.lower(email), unique=True),
    )

    password_resets = relationship(
        "PasswordReset", back_populates="user", cascade="all, delete-orphan"
    )

    def __repr__(self):
        return f"<User(id={self.id}, username={self.username}, role={self.role})>"

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class PasswordReset(Base):
    """
    One-time reset code bound to a user.

    Only the SHA-256 of the code is stored. A code must be verified
    before it can reset a password and is consumed by that reset.
    """
    __tablename__ = "password_resets"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    otp_hash = Column(String(64), nullable=False, index=True)
    expires_at = Column(DateTime, nullable=False)
    verified_at = Column(DateTime)
    used = Column(Boolean, nullable=False, default=False)
    used_at = Column(DateTime)
    created_at = Column(DateTime, nullable=False, default=datetime.now)

    user = relationship("User", back_populates="password_resets")

    def __repr__(self):
        return f"<PasswordReset(id={self.id}, user_id={self.user_id}, used={self.used})>"
