"""Filtering, aggregation and view-state core."""

from __future__ import annotations

# NOTE: keep imports explicit for export clarity.
from .filters import (
    EXPERIENCE_BUCKETS,
    build_predicate,
    derive_rating,
    experience_bucket,
    filter_records,
    matches_date_range,
    matches_experience_level,
    matches_rating_min,
    matches_search_query,
    parse_experience_years,
)
from .metrics import DerivedMetrics, compute_metrics, estimate_in_progress
from .view_state import DashboardView, EditState, Tab, ViewStateController

__all__ = [
    "EXPERIENCE_BUCKETS",
    "DashboardView",
    "DerivedMetrics",
    "EditState",
    "Tab",
    "ViewStateController",
    "build_predicate",
    "compute_metrics",
    "derive_rating",
    "estimate_in_progress",
    "experience_bucket",
    "filter_records",
    "matches_date_range",
    "matches_experience_level",
    "matches_rating_min",
    "matches_search_query",
    "parse_experience_years",
]
