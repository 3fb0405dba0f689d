"""
Activity log schemas.
"""
from pydantic import BaseModel, Field


class ActivityCreate(BaseModel):
    """Manually recorded activity."""
    activity: str = Field(..., min_length=1, max_length=1000)
