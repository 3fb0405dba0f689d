"""
Services package initialization.
"""
from pwd_registry.services.reference_service import (
    GenderService,
    CommunityService,
    DisabilityCategoryService,
    DisabilityTypeService,
    AssistanceTypeService,
)
from pwd_registry.services.user_service import UserService
from pwd_registry.services.password_reset_service import PasswordResetService
from pwd_registry.services.pwd_record_service import PwdRecordService
from pwd_registry.services.satellite_service import GuardianService, EducationService, SupportNeedService
from pwd_registry.services.assistance_request_service import AssistanceRequestService
from pwd_registry.services.statistics_service import StatisticsService
from pwd_registry.services.email_service import EmailService
from pwd_registry.services.activity_log_service import ActivityLogService

__all__ = [
    "GenderService",
    "CommunityService",
    "DisabilityCategoryService",
    "DisabilityTypeService",
    "AssistanceTypeService",
    "UserService",
    "PasswordResetService",
    "PwdRecordService",
    "GuardianService",
    "EducationService",
    "SupportNeedService",
    "AssistanceRequestService",
    "StatisticsService",
    "EmailService",
    "ActivityLogService",
]
