"""
Statistics aggregation helpers (pandas).

Input is one row per (year, quarter) with total_registered_pwd and
total_assessed counts; pending is always derived as the difference.
"""
import pandas as pd
from typing import Any, Dict, Iterable, List

from pwd_registry.utils.constants import Quarter

COUNT_COLUMNS = ["total_registered_pwd", "total_assessed", "pending"]
QUARTERS = [q.value for q in Quarter]


def period_frame(rows: Iterable[Any]) -> pd.DataFrame:
    """Build a (year, quarter, counts...) DataFrame from query rows."""
    df = pd.DataFrame(
        [{
            "year": int(r.year),
            "quarter": Quarter(r.quarter).value,
            "total_registered_pwd": int(r.total_registered_pwd or 0),
            "total_assessed": int(r.total_assessed or 0),
        } for r in rows],
        columns=["year", "quarter", "total_registered_pwd", "total_assessed"],
    )
    return add_pending(df)


def add_pending(df: pd.DataFrame) -> pd.DataFrame:
    df = df.copy()
    df["pending"] = df["total_registered_pwd"] - df["total_assessed"]
    return df


def aggregate_by_year(df: pd.DataFrame) -> pd.DataFrame:
    """
    Sum the period counts per year.

    Returns one row per year present in `df`, sorted by year descending.
    """
    if df.empty:
        return pd.DataFrame(columns=["year"] + COUNT_COLUMNS)

    yearly = df.groupby("year")[["total_registered_pwd", "total_assessed"]].sum().reset_index()
    yearly = add_pending(yearly)
    return yearly.sort_values("year", ascending=False).reset_index(drop=True)


def fill_quarters(df: pd.DataFrame, year: int) -> pd.DataFrame:
    """Exactly four rows Q1..Q4 for `year`, zero-filled where missing."""
    subset = df[df["year"] == year].set_index("quarter")[COUNT_COLUMNS]
    filled = subset.reindex(QUARTERS, fill_value=0)
    filled.index.name = "quarter"
    filled = filled.reset_index()
    filled.insert(0, "year", year)
    return filled


def align_years(yearly: pd.DataFrame, years: List[int]) -> pd.DataFrame:
    """
    One row per requested year, in the caller's order.

    Duplicates are kept and years without data are zero-filled.
    """
    indexed = yearly.set_index("year")[COUNT_COLUMNS] if not yearly.empty \
        else pd.DataFrame(columns=COUNT_COLUMNS)
    aligned = indexed.reindex(years, fill_value=0)
    aligned.index.name = "year"
    return aligned.reset_index()


def to_records(df: pd.DataFrame) -> List[Dict[str, Any]]:
    """Convert to plain-Python dicts (no numpy scalars in JSON output)."""
    records = []
    for row in df.to_dict("records"):
        records.append({
            key: (int(value) if key in COUNT_COLUMNS or key == "year" else value)
            for key, value in row.items()
        })
    return records
