"""
Closed enumerations and fixed lookup values.
"""
from enum import Enum


class Quarter(str, Enum):
    Q1 = "Q1"
    Q2 = "Q2"
    Q3 = "Q3"
    Q4 = "Q4"


class PwdStatus(str, Enum):
    """Review status of a PWD record."""
    PENDING = "pending"
    APPROVED = "approved"
    DECLINED = "declined"


class RequestStatus(str, Enum):
    """Workflow status of an assistance request."""
    PENDING = "pending"
    REVIEW = "review"
    READY_TO_ACCESS = "ready_to_access"
    ASSESSED = "assessed"
    DECLINED = "declined"


class UserRole(str, Enum):
    ADMIN = "admin"
    OFFICER = "officer"


# Seeded into the genders table
GENDER_NAMES = ["male", "female", "other"]


def enum_values(enum_cls) -> list:
    """Values stored in the database for an Enum column."""
    return [member.value for member in enum_cls]
