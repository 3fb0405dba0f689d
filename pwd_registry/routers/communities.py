"""
Community API endpoints.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from pwd_registry.database import get_db
from pwd_registry.dependencies import get_current_user, get_current_admin
from pwd_registry.models.user import User
from pwd_registry.schemas.common import success
from pwd_registry.schemas.reference import NameCreate, NameUpdate
from pwd_registry.services.reference_service import CommunityService

router = APIRouter()


@router.get("/list")
def list_communities(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """All communities ordered by name."""
    return success(CommunityService(db).list())


@router.get("/report")
def get_community_report(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Number of registered PWDs per community.

    Communities without any registrations are included with a zero count.
    """
    return success(CommunityService(db).beneficiary_report())


@router.get("/{community_id}")
def get_community(
    community_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return success(CommunityService(db).get(community_id))


@router.post("/", status_code=201)
def create_community(
    body: NameCreate,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin)
):
    service = CommunityService(db)
    new_id = service.create(body.model_dump())
    return success(service.get(new_id), "Community created successfully")


@router.patch("/{community_id}")
def update_community(
    community_id: int,
    body: NameUpdate,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin)
):
    data = CommunityService(db).update(community_id, body.model_dump(exclude_unset=True))
    return success(data, "Community updated successfully")


@router.delete("/{community_id}")
def delete_community(
    community_id: int,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin)
):
    """Rejected with 409 while PWD records still reference the community."""
    CommunityService(db).delete(community_id)
    return success(message="Community deleted successfully")
