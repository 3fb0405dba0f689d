"""
PWD record schemas.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date

from pwd_registry.utils.constants import Quarter, PwdStatus


class PwdRecordCreate(BaseModel):
    """Registration payload; status always starts as pending."""
    quarter: Quarter
    year: int = Field(..., ge=1900, le=2999)
    gender_id: int = Field(..., ge=1)
    full_name: str = Field(..., min_length=1, max_length=150)
    occupation: Optional[str] = Field(None, max_length=100)
    contact: Optional[str] = Field(None, max_length=20)
    dob: Optional[date] = None
    age: Optional[int] = Field(None, ge=0, le=150)
    gh_card_number: Optional[str] = Field(None, max_length=50)
    nhis_number: Optional[str] = Field(None, max_length=50)
    profile_image: Optional[str] = Field(None, max_length=255)
    disability_category_id: int = Field(..., ge=1)
    disability_type_id: int = Field(..., ge=1)
    community_id: int = Field(..., ge=1)
    assistance_type_needed_id: Optional[int] = Field(None, ge=1)
    support_needs: Optional[str] = None
    supporting_documents: Optional[List[str]] = None


class PwdRecordUpdate(BaseModel):
    """Partial update; only fields present in the body are written."""
    quarter: Optional[Quarter] = None
    year: Optional[int] = Field(None, ge=1900, le=2999)
    gender_id: Optional[int] = Field(None, ge=1)
    full_name: Optional[str] = Field(None, min_length=1, max_length=150)
    occupation: Optional[str] = Field(None, max_length=100)
    contact: Optional[str] = Field(None, max_length=20)
    dob: Optional[date] = None
    age: Optional[int] = Field(None, ge=0, le=150)
    gh_card_number: Optional[str] = Field(None, max_length=50)
    nhis_number: Optional[str] = Field(None, max_length=50)
    profile_image: Optional[str] = Field(None, max_length=255)
    disability_category_id: Optional[int] = Field(None, ge=1)
    disability_type_id: Optional[int] = Field(None, ge=1)
    community_id: Optional[int] = Field(None, ge=1)
    assistance_type_needed_id: Optional[int] = Field(None, ge=1)
    support_needs: Optional[str] = None
    supporting_documents: Optional[List[str]] = None


class PwdStatusUpdate(BaseModel):
    status: PwdStatus
