"""
Reference data schemas.
"""
from pydantic import BaseModel, Field
from typing import Optional


class NameCreate(BaseModel):
    """Body for creating a community."""
    name: str = Field(..., min_length=1, max_length=150)


class NameUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=150)


class ShortNameCreate(BaseModel):
    """Disability categories and assistance types keep shorter names."""
    name: str = Field(..., min_length=1, max_length=100)


class ShortNameUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)


class DisabilityTypeCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    category_id: int = Field(..., ge=1)


class DisabilityTypeUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    category_id: Optional[int] = Field(None, ge=1)


class ReferenceRecord(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True
