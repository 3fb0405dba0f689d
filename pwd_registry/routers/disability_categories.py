"""
Disability category API endpoints.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pwd_registry.database import get_db
from pwd_registry.dependencies import get_current_user, get_current_admin
from pwd_registry.models.user import User
from pwd_registry.schemas.common import success
from pwd_registry.schemas.reference import ShortNameCreate, ShortNameUpdate
from pwd_registry.services.reference_service import DisabilityCategoryService, DisabilityTypeService

router = APIRouter()


@router.get("/list")
def list_categories(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return success(DisabilityCategoryService(db).list())


@router.get("/{category_id}/types")
def list_category_types(
    category_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Disability types that belong to this category."""
    return success(DisabilityTypeService(db).list_by_category(category_id))


@router.get("/{category_id}")
def get_category(
    category_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return success(DisabilityCategoryService(db).get(category_id))


@router.post("/", status_code=201)
def create_category(
    body: ShortNameCreate,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin)
):
    service = DisabilityCategoryService(db)
    new_id = service.create(body.model_dump())
    return success(service.get(new_id), "Disability category created successfully")


@router.patch("/{category_id}")
def update_category(
    category_id: int,
    body: ShortNameUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin)
):
    data = DisabilityCategoryService(db).update(category_id, body.model_dump(exclude_unset=True))
    return success(data, "Disability category updated successfully")


@router.delete("/{category_id}")
def delete_category(
    category_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin)
):
    """Rejected while disability types or PWD records reference the category."""
    DisabilityCategoryService(db).delete(category_id)
    return success(message="Disability category deleted successfully")
