"""
Domain exceptions for the PWD registry.

Services raise these instead of returning sentinel values; the API layer
turns each one into the standard error envelope with the matching HTTP
status (see ``pwd_registry.main``).

Usage:
    from pwd_registry.exceptions import NotFoundError

    if community is None:
        raise NotFoundError("Community", community_id)
"""
from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CONFLICT = "CONFLICT"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    INTERNAL_ERROR = "INTERNAL_ERROR"


HTTP_STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.VALIDATION_ERROR: 422,
    ErrorKind.CONFLICT: 409,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.INTERNAL_ERROR: 500,
}


class RegistryError(Exception):
    """Base exception for all registry errors"""

    kind = ErrorKind.INTERNAL_ERROR

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return HTTP_STATUS_BY_KIND[self.kind]


class NotFoundError(RegistryError):
    """Resource id absent"""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, resource_type: str, resource_id: Any = None, message: Optional[str] = None):
        if message is None:
            message = f"{resource_type} not found" if resource_id is None \
                else f"{resource_type} with ID {resource_id} not found"
        super().__init__(
            message,
            details={"resource_type": resource_type, "resource_id": resource_id}
        )


class ValidationFailedError(RegistryError):
    """Missing or malformed field, bad enum value, category/type mismatch"""

    kind = ErrorKind.VALIDATION_ERROR


class ConflictError(RegistryError):
    """Unique violation, in-use deletion, duplicate satellite row"""

    kind = ErrorKind.CONFLICT


class UnauthorizedError(RegistryError):
    """Bad credentials or missing/expired session"""

    kind = ErrorKind.UNAUTHORIZED

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message)


class ForbiddenError(RegistryError):
    """Authenticated but insufficient role"""

    kind = ErrorKind.FORBIDDEN

    def __init__(self, message: str = "Admin access required"):
        super().__init__(message)


class InternalError(RegistryError):
    """Persistence failure"""

    kind = ErrorKind.INTERNAL_ERROR
