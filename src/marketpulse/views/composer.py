"""Chainable filter, search, sort and group primitives shared by every view."""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Mapping, Sequence
from typing import Any

from marketpulse.domain.models import ALL, UNKNOWN, Bucket, SortKey
from marketpulse.records import as_sequence, read_field
from marketpulse.views.comparators import SORT_STRATEGIES, resolve_sort_key


def filter_by_field(records: Iterable[Any] | None, field: str, value: Any) -> list[Any]:
    """Keep records whose ``field`` equals ``value`` exactly; ``"all"`` keeps everything."""
    items = as_sequence(records)
    if value is None or value == ALL:
        return items
    return [record for record in items if read_field(record, field) == value]


def search_text(records: Iterable[Any] | None, query: str | None, fields: Sequence[str]) -> list[Any]:
    """Case-insensitive substring search across ``fields``.

    A record matches when any of the fields contains the trimmed query.
    Missing fields never match. A blank query returns the records unchanged.
    """
    items = as_sequence(records)
    needle = (query or "").strip().lower()
    if not needle:
        return items
    return [record for record in items if _matches(record, needle, fields)]


def sort_by(
    records: Iterable[Any] | None,
    key: SortKey | str | None,
    default: SortKey = SortKey.CHANGE_DESC,
    field: str | None = None,
) -> list[Any]:
    """Stable sort using a named comparator strategy.

    The comparator id picks key kind and direction. ``field`` overrides the
    record field the strategy reads by default.
    """
    items = as_sequence(records)
    strategy = SORT_STRATEGIES[resolve_sort_key(key, default)]
    return sorted(items, key=strategy.key_function(field), reverse=strategy.descending)


def group_by(
    records: Iterable[Any] | None,
    field: str,
    default: str = UNKNOWN,
) -> dict[Any, list[Any]]:
    """Bucket records by ``field``, keeping input order inside each bucket."""
    groups: dict[Any, list[Any]] = {}
    for record in as_sequence(records):
        value = read_field(record, field)
        if value is None or value == "":
            value = default
        elif not isinstance(value, Hashable):
            value = str(value)
        groups.setdefault(value, []).append(record)
    return groups


def ordered_buckets(
    groups: Mapping[Any, Sequence[Any]],
    order: Sequence[Any],
    include_unlisted: bool = False,
) -> list[Bucket]:
    """Iterate non-empty buckets in canonical ``order``.

    Keys outside ``order`` are dropped unless ``include_unlisted`` is set, in
    which case they follow the canonical keys in the mapping's own order.
    """
    buckets: list[Bucket] = []
    listed = set(order)
    for key in order:
        records = groups.get(key) or []
        if records:
            buckets.append(Bucket(key=key, records=list(records)))
    if include_unlisted:
        for key, records in groups.items():
            if key in listed or not records:
                continue
            buckets.append(Bucket(key=key, records=list(records)))
    return buckets


def take(records: Iterable[Any] | None, limit: int) -> list[Any]:
    """First ``limit`` records."""
    return as_sequence(records)[: max(0, int(limit))]


def _matches(record: Any, needle: str, fields: Sequence[str]) -> bool:
    for field_name in fields:
        value = read_field(record, field_name)
        if value is None:
            continue
        if needle in str(value).lower():
            return True
    return False
