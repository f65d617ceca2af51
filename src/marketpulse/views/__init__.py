"""View composition primitives and page views."""

from .comparators import SORT_STRATEGIES, SortStrategy, resolve_sort_key
from .composer import filter_by_field, group_by, ordered_buckets, search_text, sort_by, take
from .pages import (
    DashboardLimits,
    allocation_from_holdings,
    compose_alerts_view,
    compose_allocation,
    compose_assets_view,
    compose_dashboard,
    compose_news_view,
    merge_universes,
)

__all__ = [
    "SORT_STRATEGIES",
    "DashboardLimits",
    "SortStrategy",
    "allocation_from_holdings",
    "compose_alerts_view",
    "compose_allocation",
    "compose_assets_view",
    "compose_dashboard",
    "compose_news_view",
    "filter_by_field",
    "group_by",
    "merge_universes",
    "ordered_buckets",
    "resolve_sort_key",
    "search_text",
    "sort_by",
    "take",
]
