"""
Schemas package initialization.
"""
from pwd_registry.schemas.common import (
    PaginationParams,
    PaginationMeta,
    success,
    paginated,
)
from pwd_registry.schemas.reference import (
    NameCreate,
    NameUpdate,
    ShortNameCreate,
    ShortNameUpdate,
    DisabilityTypeCreate,
    DisabilityTypeUpdate,
    ReferenceRecord,
)
from pwd_registry.schemas.activity_log import ActivityCreate
from pwd_registry.schemas.user import (
    UserCreate,
    UserUpdate,
    UserPublic,
    LoginRequest,
    ResetRequest,
    VerifyOtpRequest,
    ResetPasswordRequest,
    PasswordUpdateRequest,
)
from pwd_registry.schemas.pwd_record import PwdRecordCreate, PwdRecordUpdate, PwdStatusUpdate
from pwd_registry.schemas.satellite import (
    GuardianCreate,
    GuardianUpdate,
    EducationCreate,
    EducationUpdate,
    SupportNeedCreate,
    SupportNeedUpdate,
)
from pwd_registry.schemas.assistance_request import (
    AssistanceRequestCreate,
    AssistanceRequestUpdate,
    RequestStatusUpdate,
)
from pwd_registry.schemas.statistics import (
    PeriodStatistics,
    CurrentYearStatistics,
    ComparativeStatistics,
    ReportMetric,
)

__all__ = [
    "PaginationParams",
    "PaginationMeta",
    "success",
    "paginated",
    "ActivityCreate",
    "NameCreate",
    "NameUpdate",
    "ShortNameCreate",
    "ShortNameUpdate",
    "DisabilityTypeCreate",
    "DisabilityTypeUpdate",
    "ReferenceRecord",
    "UserCreate",
    "UserUpdate",
    "UserPublic",
    "LoginRequest",
    "ResetRequest",
    "VerifyOtpRequest",
    "ResetPasswordRequest",
    "PasswordUpdateRequest",
    "PwdRecordCreate",
    "PwdRecordUpdate",
    "PwdStatusUpdate",
    "GuardianCreate",
    "GuardianUpdate",
    "EducationCreate",
    "EducationUpdate",
    "SupportNeedCreate",
    "SupportNeedUpdate",
    "AssistanceRequestCreate",
    "AssistanceRequestUpdate",
    "RequestStatusUpdate",
    "PeriodStatistics",
    "CurrentYearStatistics",
    "ComparativeStatistics",
    "ReportMetric",
]
