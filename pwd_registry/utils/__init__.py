"""
Utils package initialization.
"""
from pwd_registry.utils.date_utils import (
    quarter_for_date,
    current_period,
    year_bounds,
    age_from_dob,
    parse_years_param,
)
from pwd_registry.utils.aggregators import (
    period_frame,
    aggregate_by_year,
    fill_quarters,
    align_years,
)
from pwd_registry.utils.constants import (
    Quarter,
    PwdStatus,
    RequestStatus,
    UserRole,
)

__all__ = [
    "quarter_for_date",
    "current_period",
    "year_bounds",
    "age_from_dob",
    "parse_years_param",
    "period_frame",
    "aggregate_by_year",
    "fill_quarters",
    "align_years",
    "Quarter",
    "PwdStatus",
    "RequestStatus",
    "UserRole",
]
