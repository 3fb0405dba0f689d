"""
Assistance request schemas.
"""
from pydantic import BaseModel, Field
from typing import Optional

from pwd_registry.utils.constants import RequestStatus


class AssistanceRequestCreate(BaseModel):
    """New request; requested_by comes from the session, status starts pending."""
    assistance_type_id: int = Field(..., ge=1)
    beneficiary_id: int = Field(..., ge=1)
    description: Optional[str] = None
    amount_value_cost: Optional[float] = Field(None, ge=0)


class AssistanceRequestUpdate(BaseModel):
    assistance_type_id: Optional[int] = Field(None, ge=1)
    beneficiary_id: Optional[int] = Field(None, ge=1)
    description: Optional[str] = None
    amount_value_cost: Optional[float] = Field(None, ge=0)
    admin_review_notes: Optional[str] = None
    status: Optional[RequestStatus] = None


class RequestStatusUpdate(BaseModel):
    status: RequestStatus
    admin_notes: Optional[str] = None
