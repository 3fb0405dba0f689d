"""
Disability type API endpoints.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pwd_registry.database import get_db
from pwd_registry.dependencies import get_current_user, get_current_admin
from pwd_registry.models.user import User
from pwd_registry.schemas.common import success
from pwd_registry.schemas.reference import DisabilityTypeCreate, DisabilityTypeUpdate
from pwd_registry.services.reference_service import DisabilityTypeService

router = APIRouter()


@router.get("/list")
def list_types(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """All disability types with their category name."""
    return success(DisabilityTypeService(db).list())


@router.get("/category/{category_id}")
def list_types_by_category(
    category_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return success(DisabilityTypeService(db).list_by_category(category_id))


@router.get("/{type_id}")
def get_type(
    type_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return success(DisabilityTypeService(db).get(type_id))


@router.post("/", status_code=201)
def create_type(
    body: DisabilityTypeCreate,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin)
):
    service = DisabilityTypeService(db)
    new_id = service.create(body.model_dump())
    return success(service.get(new_id), "Disability type created successfully")


@router.patch("/{type_id}")
def update_type(
    type_id: int,
    body: DisabilityTypeUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin)
):
    data = DisabilityTypeService(db).update(type_id, body.model_dump(exclude_unset=True))
    return success(data, "Disability type updated successfully")


@router.delete("/{type_id}")
def delete_type(
    type_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin)
):
    DisabilityTypeService(db).delete(type_id)
    return success(message="Disability type deleted successfully")
