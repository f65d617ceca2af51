"""Domain enumerations and derived record types."""

from .models import (
    ALL,
    UNKNOWN,
    AllocationSlice,
    AssetType,
    Bucket,
    NewsCategory,
    Severity,
    SortKey,
    TrendAlignment,
    TrendPoint,
)

__all__ = [
    "ALL",
    "UNKNOWN",
    "AllocationSlice",
    "AssetType",
    "Bucket",
    "NewsCategory",
    "Severity",
    "SortKey",
    "TrendAlignment",
    "TrendPoint",
]
