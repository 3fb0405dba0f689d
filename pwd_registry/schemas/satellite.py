"""
Guardian, education and support-need schemas.
"""
from pydantic import BaseModel, Field
from typing import Optional


class GuardianCreate(BaseModel):
    pwd_id: int = Field(..., ge=1)
    name: Optional[str] = Field(None, max_length=150)
    occupation: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=20)
    relationship: Optional[str] = Field(None, max_length=50)


class GuardianUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=150)
    occupation: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=20)
    relationship: Optional[str] = Field(None, max_length=50)


class EducationCreate(BaseModel):
    pwd_id: int = Field(..., ge=1)
    education_level: Optional[str] = Field(None, max_length=100)
    school_name: Optional[str] = Field(None, max_length=150)


class EducationUpdate(BaseModel):
    education_level: Optional[str] = Field(None, max_length=100)
    school_name: Optional[str] = Field(None, max_length=150)


class SupportNeedCreate(BaseModel):
    pwd_id: int = Field(..., ge=1)
    assistance_needed: str = Field(..., min_length=1)


class SupportNeedUpdate(BaseModel):
    assistance_needed: Optional[str] = Field(None, min_length=1)
