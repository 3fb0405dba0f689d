"""
Assistance type API endpoints.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pwd_registry.database import get_db
from pwd_registry.dependencies import get_current_user, get_current_admin
from pwd_registry.models.user import User
from pwd_registry.schemas.common import success
from pwd_registry.schemas.reference import ShortNameCreate, ShortNameUpdate
from pwd_registry.services.reference_service import AssistanceTypeService

router = APIRouter()


@router.get("/list")
def list_assistance_types(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return success(AssistanceTypeService(db).list())


@router.get("/{type_id}")
def get_assistance_type(
    type_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return success(AssistanceTypeService(db).get(type_id))


@router.post("/", status_code=201)
def create_assistance_type(
    body: ShortNameCreate,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin)
):
    service = AssistanceTypeService(db)
    new_id = service.create(body.model_dump())
    return success(service.get(new_id), "Assistance type created successfully")


@router.patch("/{type_id}")
def update_assistance_type(
    type_id: int,
    body: ShortNameUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin)
):
    data = AssistanceTypeService(db).update(type_id, body.model_dump(exclude_unset=True))
    return success(data, "Assistance type updated successfully")


@router.delete("/{type_id}")
def delete_assistance_type(
    type_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin)
):
    """Rejected while PWD records or assistance requests still use the type."""
    AssistanceTypeService(db).delete(type_id)
    return success(message="Assistance type deleted successfully")
