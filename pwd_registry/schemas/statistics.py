"""
Statistics schemas.
"""
from pydantic import BaseModel
from typing import List, Optional

from pwd_registry.utils.constants import Quarter


class PeriodStatistics(BaseModel):
    """Counts for one registration period."""
    quarter: Optional[Quarter] = None
    year: int
    total_registered_pwd: int
    total_assessed: int
    pending: int


class CurrentYearStatistics(BaseModel):
    year: int
    quarters: List[PeriodStatistics]
    total: PeriodStatistics


class ComparativeStatistics(BaseModel):
    """Parallel arrays; index i belongs to years[i]."""
    years: List[int]
    total_registered_pwd: List[int]
    total_assessed: List[int]
    pending: List[int]


class ReportMetric(BaseModel):
    metric: str
    value: int
