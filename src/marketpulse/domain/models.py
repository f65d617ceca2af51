"""Dashboard domain enumerations and derived records."""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

ALL = "all"
UNKNOWN = "unknown"


class AssetType(StrEnum):
    """Asset universes shown on the assets page."""

    STOCK = "stock"
    CRYPTO = "crypto"


class Severity(StrEnum):
    """Alert severities in canonical display order."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @classmethod
    def canonical_order(cls) -> tuple[str, ...]:
        return tuple(member.value for member in cls)


class NewsCategory(StrEnum):
    """News categories offered as filter chips."""

    MACRO = "macro"
    TECHNOLOGY = "technology"
    CRYPTO = "crypto"
    EARNINGS = "earnings"
    REGULATORY = "regulatory"
    MARKET = "market"


class SortKey(StrEnum):
    """Named comparator strategies accepted by ``sort_by``."""

    CHANGE_DESC = "change-desc"
    PRICE_DESC = "price-desc"
    PRICE_ASC = "price-asc"
    VOLUME_DESC = "volume-desc"
    SYMBOL = "symbol"
    TIMESTAMP_DESC = "timestamp-desc"
    PERCENTAGE_DESC = "percentage-desc"


class TrendAlignment(StrEnum):
    """How per-asset price histories are joined into one trend."""

    POSITION = "position"
    TIMESTAMP = "timestamp"


@dataclass(frozen=True)
class TrendPoint:
    """Total portfolio value at one history sample."""

    timestamp: str
    value: float

    def to_record(self) -> dict[str, Any]:
        return {"timestamp": self.timestamp, "value": self.value}


@dataclass(frozen=True)
class AllocationSlice:
    """One pie slice of the allocation breakdown."""

    name: str
    value: float
    color: str

    def to_record(self) -> dict[str, Any]:
        return {"name": self.name, "value": self.value, "color": self.color}


@dataclass(frozen=True)
class Bucket:
    """Records sharing one value of a grouping field."""

    key: Hashable
    records: list[Any] = field(default_factory=list)

    def to_record(self, key_name: str = "key", records_name: str = "records") -> dict[str, Any]:
        """Convert bucket to a serializable dict with caller-chosen field names."""
        return {key_name: self.key, records_name: list(self.records)}
