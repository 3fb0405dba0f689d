"""
User, login and password-reset schemas.
"""
from pydantic import AliasChoices, BaseModel, Field
from typing import Optional
from datetime import datetime

from pwd_registry.utils.constants import UserRole

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class UserCreate(BaseModel):
    username: str = Field(..., min_length=3, max_length=100)
    email: str = Field(..., max_length=150, pattern=EMAIL_PATTERN)
    password: str = Field(..., min_length=6, max_length=128)
    role: UserRole = UserRole.OFFICER
    profile_image: Optional[str] = Field(None, max_length=255)


class UserUpdate(BaseModel):
    """Partial update; role changes are admin-only."""
    username: Optional[str] = Field(None, min_length=3, max_length=100)
    email: Optional[str] = Field(None, max_length=150, pattern=EMAIL_PATTERN)
    role: Optional[UserRole] = None
    profile_image: Optional[str] = Field(None, max_length=255)


class UserPublic(BaseModel):
    """User fields safe to return (never the password hash)."""
    id: int
    username: str
    email: str
    role: UserRole
    profile_image: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class LoginRequest(BaseModel):
    identifier: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("identifier", "username", "email"),
        description="Username or email",
    )
    password: str = Field(..., min_length=1)


class ResetRequest(BaseModel):
    email: str = Field(..., pattern=EMAIL_PATTERN)


class VerifyOtpRequest(BaseModel):
    code: str = Field(..., pattern=r"^\d{4,10}$")


class ResetPasswordRequest(BaseModel):
    code: str = Field(..., pattern=r"^\d{4,10}$")
    new_password: str = Field(..., min_length=6, max_length=128)


class PasswordUpdateRequest(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6, max_length=128)
