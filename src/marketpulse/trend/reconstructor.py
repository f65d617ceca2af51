"""Portfolio value trend rebuilt from holdings and per-asset price histories."""

from __future__ import annotations

import logging
from collections.abc import Hashable, Iterable, Sequence
from typing import Any

import pandas as pd

from marketpulse.domain.models import TrendAlignment, TrendPoint
from marketpulse.records import as_number, as_sequence, read_field

logger = logging.getLogger(__name__)

ResolvedHolding = tuple[float, list[Any]]


def compute_trend(
    portfolio: Any,
    assets: Iterable[Any] | None,
    alignment: TrendAlignment | str = TrendAlignment.POSITION,
) -> list[dict[str, Any]]:
    """Return ``{timestamp, value}`` records of total portfolio value over time.

    Holdings whose ``assetId`` matches no supplied asset contribute nothing.
    With positional alignment every ``priceHistory`` is assumed to share one
    per-index time axis; the trend spans the longest resolvable history and
    skips indices no holding has a price for. Timestamp alignment merges
    contributions by timestamp instead. Never raises on malformed input.
    """
    holdings = as_sequence(read_field(portfolio, "assets"))
    asset_list = as_sequence(assets)
    if not holdings or not asset_list:
        return []

    resolved = _resolve_holdings(holdings, _asset_lookup(asset_list))
    if not resolved:
        return []

    if _normalize_alignment(alignment) is TrendAlignment.TIMESTAMP:
        points = _timestamp_trend(resolved)
    else:
        points = _positional_trend(resolved)
    logger.debug(
        "trend | points %d | holdings %d/%d", len(points), len(resolved), len(holdings)
    )
    return [point.to_record() for point in points]


def trend_frame(points: Sequence[Any]) -> pd.DataFrame:
    """Trend records as a frame with a UTC datetime index and a ``value`` column."""
    timestamps = [_as_timestamp_text(read_field(point, "timestamp")) for point in points]
    values = [as_number(read_field(point, "value")) for point in points]
    index = pd.to_datetime(
        pd.Index(timestamps, dtype="object"), errors="coerce", utc=True, format="ISO8601"
    )
    frame = pd.DataFrame({"value": pd.Series(values, dtype="float64").to_numpy()}, index=index)
    frame.index.name = "timestamp"
    return frame


def trend_summary(points: Sequence[Any]) -> dict[str, float | None]:
    """Start, end and change of a trend for the dashboard headline."""
    frame = trend_frame(points)
    if frame.empty:
        return {"start": None, "end": None, "change": None, "changePercent": None}
    start = float(frame["value"].iloc[0])
    end = float(frame["value"].iloc[-1])
    change = round(end - start, 2)
    change_percent = round(change / start * 100.0, 2) if start else None
    return {"start": start, "end": end, "change": change, "changePercent": change_percent}


def _as_timestamp_text(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _normalize_alignment(value: TrendAlignment | str) -> TrendAlignment:
    try:
        return TrendAlignment(str(value).strip().lower())
    except ValueError:
        logger.debug("Unknown trend alignment %r, using position", value)
        return TrendAlignment.POSITION


def _asset_lookup(assets: list[Any]) -> dict[Any, Any]:
    lookup: dict[Any, Any] = {}
    for asset in assets:
        symbol = read_field(asset, "symbol")
        if symbol is None or not isinstance(symbol, Hashable):
            continue
        lookup[symbol] = asset
    return lookup


def _resolve_holdings(holdings: list[Any], lookup: dict[Any, Any]) -> list[ResolvedHolding]:
    resolved: list[ResolvedHolding] = []
    for holding in holdings:
        asset_id = read_field(holding, "assetId")
        if not isinstance(asset_id, Hashable):
            continue
        asset = lookup.get(asset_id)
        if asset is None:
            continue
        history = as_sequence(read_field(asset, "priceHistory"))
        resolved.append((as_number(read_field(holding, "quantity")), history))
    return resolved


def _positional_trend(resolved: list[ResolvedHolding]) -> list[TrendPoint]:
    length = max((len(history) for _, history in resolved), default=0)
    points: list[TrendPoint] = []
    misaligned_index: int | None = None
    for index in range(length):
        total_value = 0.0
        timestamp: str | None = None
        seen_timestamps: set[Any] = set()
        for quantity, history in resolved:
            if index >= len(history) or history[index] is None:
                continue
            point = history[index]
            point_timestamp = read_field(point, "timestamp")
            if not isinstance(point_timestamp, Hashable):
                continue
            if point_timestamp:
                seen_timestamps.add(point_timestamp)
                timestamp = timestamp or point_timestamp
            total_value += as_number(read_field(point, "price")) * quantity
        if len(seen_timestamps) > 1 and misaligned_index is None:
            misaligned_index = index
        if timestamp:
            points.append(TrendPoint(timestamp=timestamp, value=round(total_value, 2)))
    if misaligned_index is not None:
        logger.warning(
            "Price histories disagree on timestamps starting at index %d; "
            "positional trend mixes samples",
            misaligned_index,
        )
    return points


def _timestamp_trend(resolved: list[ResolvedHolding]) -> list[TrendPoint]:
    rows: list[dict[str, Any]] = []
    for quantity, history in resolved:
        for point in history:
            if point is None:
                continue
            timestamp = read_field(point, "timestamp")
            if not isinstance(timestamp, Hashable) or not timestamp:
                continue
            rows.append(
                {
                    "timestamp": timestamp,
                    "value": as_number(read_field(point, "price")) * quantity,
                }
            )
    if not rows:
        return []

    frame = pd.DataFrame(rows)
    totals = frame.groupby("timestamp", sort=False)["value"].agg(lambda values: float(sum(values)))
    stamps = pd.Series([_as_timestamp_text(stamp) for stamp in totals.index], dtype="object")
    parsed = pd.to_datetime(stamps, errors="coerce", utc=True, format="ISO8601")
    order = parsed.sort_values(kind="mergesort", na_position="last").index
    ordered = totals.iloc[list(order)]
    return [
        TrendPoint(timestamp=timestamp, value=round(float(value), 2))
        for timestamp, value in ordered.items()
    ]
