"""
Gender lookup endpoints (seeded, read-only).
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pwd_registry.database import get_db
from pwd_registry.dependencies import get_current_user
from pwd_registry.models.user import User
from pwd_registry.schemas.common import success
from pwd_registry.services.reference_service import GenderService

router = APIRouter()


@router.get("/list")
def list_genders(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return success(GenderService(db).list())


@router.get("/{gender_id}")
def get_gender(
    gender_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return success(GenderService(db).get(gender_id))
