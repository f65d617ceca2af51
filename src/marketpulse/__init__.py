"""Derived-view computation for the market dashboard."""

from marketpulse.trend import compute_trend
from marketpulse.views import filter_by_field, group_by, ordered_buckets, search_text, sort_by

__all__ = [
    "compute_trend",
    "filter_by_field",
    "group_by",
    "ordered_buckets",
    "search_text",
    "sort_by",
]
