from __future__ import annotations

from datetime import datetime

import pytest

from dashboard.errors import InconsistentSeries
from dashboard.filters import FilterSelection
from dashboard.series import (
    filter_records,
    parse_year_column,
    series_frame,
    shared_years,
    to_series,
    year_token,
)


def test_year_column_parsing() -> None:
    assert year_token("Percentage (2014)") == "2014"
    assert parse_year_column("Percentage (2014)") == datetime(2014, 1, 1)
    # Not a value column, or no parenthesized 4-digit token
    assert parse_year_column("Population (2014)") is None
    assert parse_year_column("Percentage 2014") is None
    assert parse_year_column("COUNTY") is None
    # Token present but not a valid year
    assert parse_year_column("Percentage (0000)") is None


def test_one_series_per_distinct_county(records) -> None:
    # Duplicate county rows collapse into one series
    rows = records + [dict(records[0])]
    out = to_series(rows)
    assert [s.name for s in out] == ["Arlington", "Fairfax"]
    assert all(len(s.values) == 2 for s in out)


def test_scenario_a_values(records) -> None:
    out = to_series(records)
    assert [[p.value for p in s.values] for s in out] == [[5.0, 7.0], [10.0, 12.0]]
    assert out[0].years() == [datetime(2009, 1, 1), datetime(2010, 1, 1)]


def test_points_sorted_by_year_even_when_columns_are_not() -> None:
    rows = [{"COUNTY": "A", "Percentage (2011)": 3, "Percentage (2009)": 1, "Percentage (2010)": 2}]
    (s,) = to_series(rows)
    assert [p.year.year for p in s.values] == [2009, 2010, 2011]
    assert [p.value for p in s.values] == [1.0, 2.0, 3.0]


def test_non_numeric_and_missing_cells_become_zero() -> None:
    rows = [
        {"COUNTY": "A", "Percentage (2009)": "n/a", "Percentage (2010)": "3.5", "Percentage (2011)": None},
        {"COUNTY": "B", "Percentage (2009)": 1},
    ]
    a, b = to_series(rows)
    assert [p.value for p in a.values] == [0.0, 3.5, 0.0]
    # Columns come from the first row; B lacks two of them
    assert [p.value for p in b.values] == [1.0, 0.0, 0.0]


def test_unparseable_year_columns_are_dropped() -> None:
    rows = [{"COUNTY": "A", "Percentage (0000)": 9, "Percentage (2009)": 1, "Percentage": 4}]
    (s,) = to_series(rows)
    assert [p.year.year for p in s.values] == [2009]


def test_empty_records_give_no_series() -> None:
    assert to_series([]) == []


def test_filter_then_transform_matches_transform_then_filter(records) -> None:
    full = [s for s in to_series(records) if s.name == "Arlington"]
    pre = to_series(filter_records(records, FilterSelection(counties=frozenset({"Arlington"}))))
    assert full == pre


def test_filter_records_by_county_and_year(records) -> None:
    assert filter_records(records, FilterSelection()) == records
    only = filter_records(records, FilterSelection(counties=frozenset({"Fairfax"})))
    assert [r["COUNTY"] for r in only] == ["Fairfax"]
    assert filter_records(records, FilterSelection(year="2010")) == records
    assert filter_records(records, FilterSelection(year="1999")) == []
    assert filter_records(records, FilterSelection(counties=frozenset({"Nowhere"}))) == []


def test_year_filter_is_a_substring_match_on_column_names() -> None:
    rows = [{"COUNTY": "A", "Percentage (2009)": 1, "Note 201": "x"}]
    # "201" is not a year column but still matches by substring
    assert filter_records(rows, FilterSelection(year="201")) == rows


def test_shared_years(records) -> None:
    out = to_series(records)
    assert shared_years(out) == [datetime(2009, 1, 1), datetime(2010, 1, 1)]
    assert shared_years([]) == []


def test_shared_years_rejects_mismatched_series() -> None:
    a = to_series([{"COUNTY": "A", "Percentage (2009)": 1}])
    b = to_series([{"COUNTY": "B", "Percentage (2010)": 1}])
    with pytest.raises(InconsistentSeries):
        shared_years(a + b)


def test_series_frame_is_tidy(records) -> None:
    df = series_frame(to_series(records))
    assert list(df.columns) == ["County", "Year", "Value"]
    assert len(df) == 4
    assert df.loc[df["County"] == "Fairfax", "Value"].tolist() == [10.0, 12.0]
    assert series_frame([]).empty


def test_non_finite_cells_become_zero() -> None:
    rows = [{
        "COUNTY": "A",
        "Percentage (2009)": "inf",
        "Percentage (2010)": float("-inf"),
        "Percentage (2011)": float("nan"),
        "Percentage (2012)": 2,
    }]
    (s,) = to_series(rows)
    assert [p.value for p in s.values] == [0.0, 0.0, 0.0, 2.0]
