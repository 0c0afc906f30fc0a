# dashboard/series.py — wide county rows -> per-county time series
# What it does:
# - to_series(): one Series per distinct COUNTY, points sorted by year
# - filter_records(): county / year narrowing of the raw rows
# - series_frame(): tidy frame of the current view for the data table

from __future__ import annotations
import math
from dataclasses import dataclass
from datetime import datetime

import pandas as pd

from dashboard.errors import InconsistentSeries
from fetch_years_data import CATEGORY_FIELD, VALUE_MARKER, YEAR_TOKEN_RE


@dataclass(frozen=True)
class TimePoint:
    year: datetime
    value: float


@dataclass(frozen=True)
class Series:
    name: str
    values: tuple[TimePoint, ...]

    def years(self) -> list[datetime]:
        return [p.year for p in self.values]


def year_token(key: str) -> str | None:
    """Return the 4-digit token of a "Percentage (YYYY)" column, else None."""
    if VALUE_MARKER not in key:
        return None
    m = YEAR_TOKEN_RE.search(key)
    return m.group(1) if m else None


def parse_year_column(key: str) -> datetime | None:
    """Jan 1st of the column's year, or None if the key is not a usable year column."""
    token = year_token(key)
    if token is None:
        return None
    try:
        return datetime.strptime(token, "%Y")
    except ValueError:
        return None


def _coerce(raw) -> float:
    # Missing, non-numeric or non-finite ("inf", NaN) cells count as 0
    v = pd.to_numeric(pd.Series([raw], dtype="object"), errors="coerce").iloc[0]
    if pd.isna(v) or not math.isfinite(v):
        return 0.0
    return float(v)


def to_series(records: list[dict]) -> list[Series]:
    """
    Build one Series per distinct COUNTY (first-seen order).
    Year columns are read from the first record; all rows share one column set.
    An empty record list yields an empty list.
    """
    if not records:
        return []

    year_cols = []
    for key in records[0]:
        year = parse_year_column(key)
        if year is not None:
            year_cols.append((year, key))
    year_cols.sort(key=lambda yc: yc[0])

    by_county: dict[str, dict] = {}
    for r in records:
        by_county.setdefault(r[CATEGORY_FIELD], r)

    out = []
    for name, row in by_county.items():
        points = tuple(TimePoint(year, _coerce(row.get(key))) for year, key in year_cols)
        out.append(Series(name=name, values=points))
    return out


def filter_records(records, selection) -> list[dict]:
    """
    Keep a record if (no counties selected or its COUNTY is selected) and
    (no year selected or any of its column names contains the year token).
    """
    counties = selection.counties
    year = selection.year
    return [
        r for r in records
        if (not counties or r[CATEGORY_FIELD] in counties)
        and (not year or any(year in key for key in r))
    ]


def shared_years(series: list[Series]) -> list[datetime]:
    """Common year list of all series; raises InconsistentSeries if they differ."""
    if not series:
        return []
    first = series[0].years()
    for s in series[1:]:
        if s.years() != first:
            raise InconsistentSeries(
                f"series {s.name!r} has years {s.years()} but {series[0].name!r} has {first}"
            )
    return first


def series_frame(series: list[Series]) -> pd.DataFrame:
    """Tidy frame with columns County, Year, Value."""
    rows = [
        {"County": s.name, "Year": p.year.year, "Value": p.value}
        for s in series
        for p in s.values
    ]
    return pd.DataFrame(rows, columns=["County", "Year", "Value"])
