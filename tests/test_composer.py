from __future__ import annotations

import copy
from dataclasses import dataclass

from marketpulse.domain.models import Severity, SortKey
from marketpulse.views.comparators import resolve_sort_key
from marketpulse.views.composer import (
    filter_by_field,
    group_by,
    ordered_buckets,
    search_text,
    sort_by,
    take,
)

ASSETS = [
    {"symbol": "NVDA", "name": "NVIDIA Corp", "assetType": "stock", "currentPrice": 900.0},
    {"symbol": "BTC", "name": "Bitcoin", "assetType": "crypto", "currentPrice": 64000.0},
    {"symbol": "AAPL", "name": "Apple Inc", "assetType": "stock", "currentPrice": 190.0},
    {"symbol": "ETH", "name": None, "assetType": "crypto"},
]


def test_filter_all_sentinel_returns_input() -> None:
    assert filter_by_field(ASSETS, "assetType", "all") == ASSETS
    assert filter_by_field(ASSETS, "missing", "all") == ASSETS


def test_filter_is_exact_and_case_sensitive() -> None:
    assert [a["symbol"] for a in filter_by_field(ASSETS, "assetType", "crypto")] == ["BTC", "ETH"]
    assert filter_by_field(ASSETS, "assetType", "Crypto") == []


def test_filter_is_idempotent() -> None:
    once = filter_by_field(ASSETS, "assetType", "stock")
    assert filter_by_field(once, "assetType", "stock") == once


def test_search_blank_query_is_noop() -> None:
    assert search_text(ASSETS, "", ["symbol", "name"]) == ASSETS
    assert search_text(ASSETS, "   ", ["symbol", "name"]) == ASSETS
    assert search_text(ASSETS, None, ["symbol", "name"]) == ASSETS


def test_search_matches_any_field_case_insensitively() -> None:
    hits = search_text(ASSETS, "  apple ", ["symbol", "name"])
    assert [a["symbol"] for a in hits] == ["AAPL"]

    hits = search_text(ASSETS, "t", ["symbol", "name"])
    assert [a["symbol"] for a in hits] == ["BTC", "ETH"]


def test_search_skips_missing_fields() -> None:
    assert search_text(ASSETS, "none", ["name"]) == []


def test_sort_is_stable_on_ties() -> None:
    records = [{"price": 5, "id": 0}, {"price": 20, "id": 1}, {"price": 5, "id": 2}]

    ordered = sort_by(records, "price-desc")

    assert [r["id"] for r in ordered] == [1, 0, 2]


def test_sort_reads_caller_supplied_field() -> None:
    records = [
        {"lastTrade": 3.0, "currentPrice": 1.0, "id": "a"},
        {"lastTrade": 9.0, "currentPrice": 2.0, "id": "b"},
        {"lastTrade": 3.0, "currentPrice": 3.0, "id": "c"},
    ]

    by_field = sort_by(records, SortKey.PRICE_DESC, field="lastTrade")
    by_default = sort_by(records, SortKey.PRICE_DESC)

    assert [r["id"] for r in by_field] == ["b", "a", "c"]
    assert [r["id"] for r in by_default] == ["c", "b", "a"]
    assert [r["id"] for r in sort_by(records, "price-asc", field="lastTrade")] == ["a", "c", "b"]


def test_sort_by_symbol_ignores_case() -> None:
    records = [{"symbol": "Zeta"}, {"symbol": "alpha"}, {"symbol": "Alpha"}, {"symbol": "beta"}]

    ordered = sort_by(records, SortKey.SYMBOL)

    assert [r["symbol"] for r in ordered] == ["alpha", "Alpha", "beta", "Zeta"]


def test_sort_by_symbol_tolerates_odd_values() -> None:
    records = [{"symbol": "b\x00c"}, {"symbol": None}, {"symbol": 42}, {"symbol": "a"}]

    ordered = sort_by(records, "symbol")

    assert [r["symbol"] for r in ordered] == [None, 42, "a", "b\x00c"]


def test_sort_missing_numbers_read_as_zero() -> None:
    ordered = sort_by(ASSETS, SortKey.PRICE_ASC)
    assert [a["symbol"] for a in ordered] == ["ETH", "AAPL", "NVDA", "BTC"]

    ordered = sort_by(ASSETS, SortKey.PRICE_DESC)
    assert [a["symbol"] for a in ordered] == ["BTC", "NVDA", "AAPL", "ETH"]


def test_sort_by_symbol_ascending() -> None:
    ordered = sort_by(ASSETS, "symbol")
    assert [a["symbol"] for a in ordered] == ["AAPL", "BTC", "ETH", "NVDA"]


def test_sort_by_timestamp_newest_first() -> None:
    items = [
        {"id": "a", "timestamp": "2024-03-01T09:00:00Z"},
        {"id": "b", "timestamp": None},
        {"id": "c", "timestamp": "2024-03-02T09:00:00+00:00"},
        {"id": "d", "timestamp": "2024-02-28T09:00:00"},
    ]
    ordered = sort_by(items, SortKey.TIMESTAMP_DESC)
    assert [item["id"] for item in ordered] == ["c", "a", "d", "b"]


def test_unknown_sort_key_uses_default() -> None:
    records = [{"changePercent": 1.0}, {"changePercent": 3.0}, {"changePercent": -2.0}]
    assert sort_by(records, "bogus") == sort_by(records, SortKey.CHANGE_DESC)
    assert resolve_sort_key("bogus", SortKey.SYMBOL) is SortKey.SYMBOL
    assert resolve_sort_key("Price-Asc") is SortKey.PRICE_ASC


def test_sort_does_not_mutate_input() -> None:
    before = copy.deepcopy(ASSETS)
    sort_by(ASSETS, SortKey.SYMBOL)
    assert ASSETS == before


def test_group_by_buckets_in_canonical_order() -> None:
    alerts = [{"severity": "low"}, {"severity": "critical"}, {"severity": "low"}]

    buckets = ordered_buckets(group_by(alerts, "severity"), Severity.canonical_order())

    assert [(bucket.key, len(bucket.records)) for bucket in buckets] == [
        ("critical", 1),
        ("low", 2),
    ]


def test_group_by_defaults_missing_values_to_unknown() -> None:
    groups = group_by([{"severity": None}, {}, {"severity": ""}], "severity")
    assert list(groups) == ["unknown"]
    assert len(groups["unknown"]) == 3


def test_group_then_flatten_reproduces_every_record_once() -> None:
    alerts = [
        {"id": 1, "severity": "medium"},
        {"id": 2, "severity": "info"},
        {"id": 3, "severity": "critical"},
        {"id": 4},
        {"id": 5, "severity": "medium"},
    ]

    buckets = ordered_buckets(
        group_by(alerts, "severity"), Severity.canonical_order(), include_unlisted=True
    )
    flattened = [record["id"] for bucket in buckets for record in bucket.records]

    assert sorted(flattened) == [1, 2, 3, 4, 5]
    assert [bucket.key for bucket in buckets] == ["critical", "medium", "info", "unknown"]
    assert [r["id"] for r in buckets[1].records] == [1, 5]


def test_buckets_keep_non_string_keys() -> None:
    events = [{"impact": 2, "id": "a"}, {"impact": 1, "id": "b"}, {"impact": 2, "id": "c"}]

    buckets = ordered_buckets(group_by(events, "impact"), [2, 1])

    assert [bucket.key for bucket in buckets] == [2, 1]
    assert buckets[0].to_record(key_name="impact") == {"impact": 2, "records": [events[0], events[2]]}


def test_unlisted_buckets_dropped_by_default() -> None:
    buckets = ordered_buckets(group_by([{"severity": "info"}], "severity"), ["critical"])
    assert buckets == []


def test_primitives_read_attribute_records() -> None:
    @dataclass(frozen=True)
    class Row:
        symbol: str
        assetType: str

    rows = [Row("ZZZ", "stock"), Row("AAA", "crypto")]

    assert filter_by_field(rows, "assetType", "crypto") == [rows[1]]
    assert sort_by(rows, "symbol") == [rows[1], rows[0]]


def test_take_limits_records() -> None:
    assert take(ASSETS, 2) == ASSETS[:2]
    assert take(None, 3) == []
    assert take(ASSETS, -1) == []


def test_chained_operations_match_materialized_steps() -> None:
    step = filter_by_field(ASSETS, "assetType", "stock")
    step = search_text(step, "a", ["symbol", "name"])
    step = sort_by(step, SortKey.SYMBOL)

    chained = sort_by(
        search_text(filter_by_field(ASSETS, "assetType", "stock"), "a", ["symbol", "name"]),
        SortKey.SYMBOL,
    )

    assert chained == step
    assert sort_by(chained, SortKey.SYMBOL) == chained
