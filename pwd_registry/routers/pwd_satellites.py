"""
Guardian, education and support-need endpoints.

Each satellite table gets its own router; all of them hang off a PWD record.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from pwd_registry.database import get_db
from pwd_registry.dependencies import get_current_user, get_current_admin
from pwd_registry.models.user import User
from pwd_registry.schemas.common import success
from pwd_registry.schemas.satellite import (
    GuardianCreate,
    GuardianUpdate,
    EducationCreate,
    EducationUpdate,
    SupportNeedCreate,
    SupportNeedUpdate,
)
from pwd_registry.services.satellite_service import GuardianService, EducationService, SupportNeedService

guardians_router = APIRouter()
education_router = APIRouter()
support_needs_router = APIRouter()


# Guardians

@guardians_router.get("/pwd/{pwd_id}")
def get_guardians_for_pwd(
    pwd_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return success(GuardianService(db).get_by_pwd(pwd_id))


@guardians_router.get("/{guardian_id}")
def get_guardian(
    guardian_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return success(GuardianService(db).get(guardian_id))


@guardians_router.post("/", status_code=201)
def create_guardian(
    body: GuardianCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """One guardian per PWD record; a second one is rejected with 409."""
    fields = body.model_dump()
    data = GuardianService(db).create(fields.pop("pwd_id"), fields)
    return success(data, "Guardian created successfully")


@guardians_router.patch("/{guardian_id}")
def update_guardian(
    guardian_id: int,
    body: GuardianUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    data = GuardianService(db).update(guardian_id, body.model_dump(exclude_unset=True))
    return success(data, "Guardian updated successfully")


@guardians_router.delete("/{guardian_id}")
def delete_guardian(
    guardian_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin)
):
    GuardianService(db).delete(guardian_id)
    return success(message="Guardian deleted successfully")


# Education

@education_router.get("/statistics")
def get_education_statistics(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Number of PWDs per education level."""
    return success(EducationService(db).level_distribution())


@education_router.get("/pwd/{pwd_id}")
def get_education_for_pwd(
    pwd_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return success(EducationService(db).get_by_pwd(pwd_id))


@education_router.get("/{education_id}")
def get_education(
    education_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return success(EducationService(db).get(education_id))


@education_router.post("/", status_code=201)
def create_education(
    body: EducationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    fields = body.model_dump()
    data = EducationService(db).create(fields.pop("pwd_id"), fields)
    return success(data, "Education record created successfully")


@education_router.patch("/{education_id}")
def update_education(
    education_id: int,
    body: EducationUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    data = EducationService(db).update(education_id, body.model_dump(exclude_unset=True))
    return success(data, "Education record updated successfully")


@education_router.delete("/{education_id}")
def delete_education(
    education_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin)
):
    EducationService(db).delete(education_id)
    return success(message="Education record deleted successfully")


# Support needs

@support_needs_router.get("/search")
def search_support_needs(
    term: str = Query(..., min_length=1),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return success(SupportNeedService(db).search(term))


@support_needs_router.get("/pwd/{pwd_id}")
def get_support_needs_for_pwd(
    pwd_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return success(SupportNeedService(db).get_by_pwd(pwd_id))


@support_needs_router.get("/{need_id}")
def get_support_need(
    need_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return success(SupportNeedService(db).get(need_id))


@support_needs_router.post("/", status_code=201)
def create_support_need(
    body: SupportNeedCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    fields = body.model_dump()
    data = SupportNeedService(db).create(fields.pop("pwd_id"), fields)
    return success(data, "Support need created successfully")


@support_needs_router.patch("/{need_id}")
def update_support_need(
    need_id: int,
    body: SupportNeedUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    data = SupportNeedService(db).update(need_id, body.model_dump(exclude_none=True))
    return success(data, "Support need updated successfully")


@support_needs_router.delete("/{need_id}")
def delete_support_need(
    need_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin)
):
    SupportNeedService(db).delete(need_id)
    return success(message="Support need deleted successfully")
