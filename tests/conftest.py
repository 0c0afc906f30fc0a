from __future__ import annotations

import plotly.graph_objects as go
import pytest

from dashboard.filters import FilterController
from fetch_years_data import RecordStore


@pytest.fixture
def records() -> list[dict]:
    # Two counties, two year columns
    return [
        {"COUNTY": "Arlington", "Percentage (2009)": 5, "Percentage (2010)": 7},
        {"COUNTY": "Fairfax", "Percentage (2009)": 10, "Percentage (2010)": 12},
    ]


@pytest.fixture
def store(records) -> RecordStore:
    return RecordStore(records=tuple(records))


@pytest.fixture
def fig() -> go.Figure:
    return go.Figure()


@pytest.fixture
def controller(store, fig) -> FilterController:
    c = FilterController(store, fig)
    c.build()
    return c
