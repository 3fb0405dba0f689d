"""
User, login and password-reset endpoints.
"""
from fastapi import APIRouter, BackgroundTasks, Depends
from sqlalchemy.orm import Session

from pwd_registry.config import settings
from pwd_registry.database import get_db
from pwd_registry.dependencies import get_current_user, get_current_admin, get_otp_notifier
from pwd_registry.models.user import User
from pwd_registry.schemas.common import success
from pwd_registry.schemas.user import (
    UserCreate,
    UserUpdate,
    LoginRequest,
    ResetRequest,
    VerifyOtpRequest,
    ResetPasswordRequest,
    PasswordUpdateRequest,
)
from pwd_registry.security import create_access_token
from pwd_registry.services.email_service import OtpNotifier
from pwd_registry.services.password_reset_service import PasswordResetService
from pwd_registry.services.user_service import UserService

router = APIRouter()

RESET_REQUESTED = "If an account exists for that email, a reset code has been sent"


@router.get("/list")
def list_users(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return success(UserService(db).list())


@router.get("/me")
def get_me(current_user: User = Depends(get_current_user)):
    """The authenticated user's own account."""
    return success(UserService.to_public(current_user))


@router.post("/login")
def login(body: LoginRequest, db: Session = Depends(get_db)):
    """
    Log in with username or email.

    Returns a bearer token plus the public user fields. A wrong identifier
    and a wrong password produce the same 401 message.
    """
    user = UserService(db).authenticate(body.identifier, body.password)
    token = create_access_token({"sub": str(user.id), "role": user.role.value})
    return success(
        {
            "access_token": token,
            "token_type": "bearer",
            "expires_in": settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
            "user": UserService.to_public(user),
        },
        "Login successful",
    )


@router.post("/request-reset")
def request_password_reset(
    body: ResetRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    notifier: OtpNotifier = Depends(get_otp_notifier)
):
    """Issue a one-time code and email it in the background."""
    issued = PasswordResetService(db).request_reset(body.email)
    if issued is not None:
        user, code = issued
        background_tasks.add_task(
            notifier.send_otp, user.email, user.username, code, settings.OTP_TTL_MINUTES
        )
    return success(message=RESET_REQUESTED)


@router.post("/verify-otp")
def verify_otp(body: VerifyOtpRequest, db: Session = Depends(get_db)):
    PasswordResetService(db).verify_otp(body.code)
    return success(message="Code verified")


@router.post("/reset")
def reset_password(body: ResetPasswordRequest, db: Session = Depends(get_db)):
    """Set a new password with a verified code; the code cannot be used again."""
    PasswordResetService(db).reset_password(body.code, body.new_password)
    return success(message="Password has been reset")


@router.patch("/update")
def update_own_password(
    body: PasswordUpdateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Change the caller's password; the current password must verify first."""
    UserService(db).update_password(current_user.id, body.current_password, body.new_password)
    return success(message="Password updated successfully")


@router.get("/{user_id}")
def get_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return success(UserService(db).get(user_id))


@router.post("/", status_code=201)
def create_user(
    body: UserCreate,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin)
):
    data = UserService(db).create(body.model_dump())
    return success(data, "User created successfully")


@router.patch("/{user_id}")
def update_user(
    user_id: int,
    body: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Officers may edit only their own profile; role changes need an admin."""
    data = UserService(db).update(user_id, body.model_dump(exclude_unset=True), current_user)
    return success(data, "User updated successfully")


@router.delete("/{user_id}")
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin)
):
    UserService(db).delete(user_id)
    return success(message="User deleted successfully")
