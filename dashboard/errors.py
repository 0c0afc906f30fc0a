# dashboard/errors.py — exception types for each stage of the chart pipeline
# What it does:
# - DashboardError: common base the views can catch
# - one subclass per failure: loading, year selection, empty domain, mismatched series

from __future__ import annotations


class DashboardError(Exception):
    """Base exception for all dashboard failures."""


class LoadFailure(DashboardError):
    """Raised when the dataset cannot be fetched or parsed."""


class InvalidYearSelection(DashboardError):
    """Raised when a selected year token does not parse into a one-year span."""


class EmptySelection(DashboardError):
    """Raised when there is nothing to derive a temporal domain from."""


class InconsistentSeries(DashboardError):
    """Raised when series in one view do not share the same year set."""
