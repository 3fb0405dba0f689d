"""
Date utility functions for quarter handling.
"""
from datetime import date, datetime
from typing import Optional, Tuple

from pwd_registry.utils.constants import Quarter


def quarter_for_date(value: date) -> Quarter:
    """Return the calendar quarter containing a date."""
    return Quarter(f"Q{(value.month - 1) // 3 + 1}")


def current_period(today: Optional[date] = None) -> Tuple[Quarter, int]:
    """Return (quarter, year) for today (or the given date)."""
    today = today or date.today()
    return quarter_for_date(today), today.year


def year_bounds(year: int) -> Tuple[datetime, datetime]:
    """Half-open [start, end) datetime range covering a calendar year."""
    return datetime(year, 1, 1), datetime(year + 1, 1, 1)


def age_from_dob(dob: date, today: Optional[date] = None) -> int:
    """Whole years elapsed since a date of birth."""
    today = today or date.today()
    years = today.year - dob.year
    if (today.month, today.day) < (dob.month, dob.day):
        years -= 1
    return max(years, 0)


def parse_years_param(raw: str) -> list:
    """
    Parse a comma-separated years string ("2023,2024").

    Order and duplicates are preserved. Raises ValueError on anything
    that is not an integer.
    """
    parts = [p.strip() for p in raw.split(",") if p.strip()]
    if not parts:
        raise ValueError("At least one year must be provided")
    return [int(p) for p in parts]
