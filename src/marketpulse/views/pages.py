"""Per-page view configuration chained through the composer primitives."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from marketpulse.domain.models import ALL, AllocationSlice, AssetType, Severity, SortKey
from marketpulse.records import as_number, as_sequence, number_or_zero, read_field
from marketpulse.views.composer import (
    filter_by_field,
    group_by,
    ordered_buckets,
    search_text,
    sort_by,
    take,
)

ASSET_TYPE_FIELD = "assetType"
ASSET_SEARCH_FIELDS = ("symbol", "name")
ASSET_DEFAULT_SORT = SortKey.CHANGE_DESC

NEWS_CATEGORY_FIELD = "category"
NEWS_SEARCH_FIELDS = ("title", "summary", "source")

ALERT_SEVERITY_FIELD = "severity"

ALLOCATION_PALETTE = ("#6366f1", "#8b5cf6", "#06b6d4", "#f59e0b", "#ef4444", "#22c55e")


@dataclass(frozen=True)
class DashboardLimits:
    """Panel sizes on the dashboard overview."""

    gainers: int = 3
    losers: int = 3
    news: int = 5
    alerts: int = 5
    events: int = 5


def merge_universes(
    stocks: Iterable[Any] | None,
    crypto: Iterable[Any] | None,
) -> list[dict[str, Any]]:
    """Concatenate stock and crypto payloads, tagging each record with its ``assetType``."""
    merged: list[dict[str, Any]] = []
    for asset_type, records in ((AssetType.STOCK, stocks), (AssetType.CRYPTO, crypto)):
        for record in as_sequence(records):
            if not isinstance(record, Mapping):
                continue
            merged.append({**record, ASSET_TYPE_FIELD: asset_type.value})
    return merged


def compose_assets_view(
    assets: Iterable[Any] | None,
    asset_type: str = ALL,
    query: str = "",
    sort: SortKey | str | None = ASSET_DEFAULT_SORT,
    default_sort: SortKey = ASSET_DEFAULT_SORT,
    sort_field: str | None = None,
) -> list[Any]:
    """Assets table: type filter, symbol/name search, then the selected ordering."""
    visible = filter_by_field(assets, ASSET_TYPE_FIELD, asset_type)
    visible = search_text(visible, query, ASSET_SEARCH_FIELDS)
    return sort_by(visible, sort, default=default_sort, field=sort_field)


def compose_news_view(
    items: Iterable[Any] | None,
    category: str = ALL,
    query: str = "",
) -> list[Any]:
    """News feed filtered by category and search, newest first."""
    visible = filter_by_field(items, NEWS_CATEGORY_FIELD, category)
    visible = search_text(visible, query, NEWS_SEARCH_FIELDS)
    return sort_by(visible, SortKey.TIMESTAMP_DESC, default=SortKey.TIMESTAMP_DESC)


def compose_alerts_view(
    alerts: Iterable[Any] | None,
    severity: str = ALL,
    order: Sequence[str] | None = None,
    include_unlisted: bool = False,
) -> list[dict[str, Any]]:
    """Alerts grouped into severity stacks in canonical order, empty stacks omitted."""
    visible = filter_by_field(alerts, ALERT_SEVERITY_FIELD, severity)
    groups = group_by(visible, ALERT_SEVERITY_FIELD)
    canonical = tuple(order) if order else Severity.canonical_order()
    return [
        bucket.to_record(key_name="severity", records_name="alerts")
        for bucket in ordered_buckets(groups, canonical, include_unlisted=include_unlisted)
    ]


def compose_allocation(
    performance: Any,
    sort: SortKey | str | None = None,
) -> list[dict[str, Any]]:
    """Chart slices from ``performance.assetAllocation`` with palette colours by position."""
    items = as_sequence(read_field(performance, "assetAllocation"))
    if sort is not None:
        items = sort_by(items, sort, default=SortKey.PERCENTAGE_DESC)
    slices = [
        AllocationSlice(
            name=read_field(item, "assetId"),
            value=round(as_number(read_field(item, "percentage")), 2),
            color=ALLOCATION_PALETTE[index % len(ALLOCATION_PALETTE)],
        )
        for index, item in enumerate(items)
    ]
    return [piece.to_record() for piece in slices]


def allocation_from_holdings(portfolio: Any) -> list[dict[str, Any]]:
    """Allocation slices derived from holding values when no performance payload exists."""
    holdings = as_sequence(read_field(portfolio, "assets"))
    values = [number_or_zero(read_field(holding, "value")) for holding in holdings]
    total = sum(values)
    if total <= 0:
        return []
    slices = [
        AllocationSlice(
            name=read_field(holding, "assetId"),
            value=round(value / total * 100.0, 2),
            color=ALLOCATION_PALETTE[index % len(ALLOCATION_PALETTE)],
        )
        for index, (holding, value) in enumerate(zip(holdings, values))
    ]
    return [piece.to_record() for piece in slices]


def compose_dashboard(
    dashboard: Any,
    limits: DashboardLimits | None = None,
) -> dict[str, list[Any]]:
    """Overview panels trimmed to their display sizes."""
    panel_limits = limits or DashboardLimits()
    return {
        "topGainers": take(read_field(dashboard, "topGainers"), panel_limits.gainers),
        "topLosers": take(read_field(dashboard, "topLosers"), panel_limits.losers),
        "recentNews": take(read_field(dashboard, "recentNews"), panel_limits.news),
        "activeAlerts": take(read_field(dashboard, "activeAlerts"), panel_limits.alerts),
        "upcomingEvents": take(read_field(dashboard, "upcomingEvents"), panel_limits.events),
        "aiInsights": as_sequence(read_field(dashboard, "aiInsights")),
    }
