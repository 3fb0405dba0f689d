"""
Unit tests for date helpers and statistics aggregation.
"""
from collections import namedtuple
from datetime import date

import pytest

from pwd_registry.utils.aggregators import (
    period_frame,
    aggregate_by_year,
    fill_quarters,
    align_years,
    to_records,
)
from pwd_registry.utils.constants import Quarter
from pwd_registry.utils.date_utils import (
    quarter_for_date,
    current_period,
    age_from_dob,
    parse_years_param,
)

Row = namedtuple("Row", ["year", "quarter", "total_registered_pwd", "total_assessed"])


@pytest.mark.parametrize("month,expected", [
    (1, Quarter.Q1), (3, Quarter.Q1), (4, Quarter.Q2), (9, Quarter.Q3), (12, Quarter.Q4),
])
def test_quarter_for_date(month, expected):
    assert quarter_for_date(date(2024, month, 15)) == expected


def test_current_period():
    assert current_period(date(2025, 8, 1)) == (Quarter.Q3, 2025)


def test_age_from_dob():
    assert age_from_dob(date(1990, 5, 17), today=date(2024, 5, 16)) == 33
    assert age_from_dob(date(1990, 5, 17), today=date(2024, 5, 17)) == 34
    assert age_from_dob(date(2030, 1, 1), today=date(2024, 1, 1)) == 0


def test_parse_years_param_keeps_order_and_duplicates():
    assert parse_years_param("2025, 2023,2025") == [2025, 2023, 2025]


@pytest.mark.parametrize("raw", ["", " , ", "2024,twenty"])
def test_parse_years_param_rejects_bad_input(raw):
    with pytest.raises(ValueError):
        parse_years_param(raw)


def test_yearly_rollup_and_pending():
    df = period_frame([
        Row(2024, Quarter.Q1, 5, 2),
        Row(2024, Quarter.Q3, 3, 3),
        Row(2023, Quarter.Q2, 4, None),
    ])
    yearly = to_records(aggregate_by_year(df))
    assert yearly == [
        {"year": 2024, "total_registered_pwd": 8, "total_assessed": 5, "pending": 3},
        {"year": 2023, "total_registered_pwd": 4, "total_assessed": 0, "pending": 4},
    ]
    assert all(type(v) is int for row in yearly for v in row.values())


def test_fill_quarters_zero_fills():
    df = period_frame([Row(2024, "Q2", 7, 1)])
    filled = to_records(fill_quarters(df, 2024))
    assert [r["quarter"] for r in filled] == ["Q1", "Q2", "Q3", "Q4"]
    assert [r["pending"] for r in filled] == [0, 6, 0, 0]


def test_align_years_on_empty_frame():
    aligned = to_records(align_years(aggregate_by_year(period_frame([])), [2022, 2021]))
    assert [r["year"] for r in aligned] == [2022, 2021]
    assert all(r["total_registered_pwd"] == 0 for r in aligned)
