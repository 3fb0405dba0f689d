"""
Common Pydantic schemas shared across endpoints.
"""
from pydantic import BaseModel, Field
from typing import Optional, List, Any, Dict

from pwd_registry.config import settings


class PaginationParams(BaseModel):
    """Pagination parameters."""
    page: int = Field(1, ge=1, description="Page number (1-indexed)")
    per_page: int = Field(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE, description="Items per page")


class PaginationMeta(BaseModel):
    """Pagination block returned with every list."""
    total_records: int
    current_page: int
    per_page: int
    total_pages: int

    @classmethod
    def create(cls, total: int, page: int, per_page: int):
        """Factory method; total_pages = ceil(total / per_page)."""
        total_pages = (total + per_page - 1) // per_page
        return cls(
            total_records=total,
            current_page=page,
            per_page=per_page,
            total_pages=total_pages
        )


def success(data: Any = None, message: Optional[str] = None) -> Dict[str, Any]:
    """Build a success envelope, leaving out absent parts."""
    body: Dict[str, Any] = {"status": "success"}
    if message is not None:
        body["message"] = message
    if data is not None:
        body["data"] = data
    return body


def paginated(key: str, items: List[Any], pagination: PaginationMeta) -> Dict[str, Any]:
    """Nest a page of items under `key` next to its pagination block."""
    return {key: items, "pagination": pagination.model_dump()}
