"""
Models package initialization.
"""
from pwd_registry.models.user import User, PasswordReset
from pwd_registry.models.reference import (
    Gender,
    Community,
    DisabilityCategory,
    DisabilityType,
    AssistanceType,
)
from pwd_registry.models.pwd_record import PwdRecord
from pwd_registry.models.satellites import PwdGuardian, PwdEducation, PwdSupportNeed
from pwd_registry.models.assistance_request import AssistanceRequest
from pwd_registry.models.activity_log import ActivityLog

__all__ = [
    "User",
    "PasswordReset",
    "Gender",
    "Community",
    "DisabilityCategory",
    "DisabilityType",
    "AssistanceType",
    "PwdRecord",
    "PwdGuardian",
    "PwdEducation",
    "PwdSupportNeed",
    "AssistanceRequest",
    "ActivityLog",
]
