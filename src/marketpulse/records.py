"""Field access and numeric coercion for loosely-shaped API records."""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any


def read_field(record: Any, name: str, default: Any = None) -> Any:
    """Read ``name`` from a mapping or attribute object, ``default`` when absent."""
    if record is None:
        return default
    if isinstance(record, Mapping):
        return record.get(name, default)
    return getattr(record, name, default)


def as_number(value: Any) -> float:
    """Coerce to float; anything non-numeric becomes NaN."""
    if value is None:
        return math.nan
    if isinstance(value, (int, float)):
        return float(value)
    text = str(value).strip()
    if not text:
        return math.nan
    try:
        return float(text)
    except ValueError:
        return math.nan


def number_or_zero(value: Any) -> float:
    """Coerce to float with missing, non-numeric and NaN values reading as 0."""
    number = as_number(value)
    if math.isnan(number):
        return 0.0
    return number


def as_sequence(value: Any) -> list[Any]:
    """Return list items of a sequence payload, or an empty list for anything else."""
    if value is None or isinstance(value, (str, bytes, Mapping)):
        return []
    try:
        return list(value)
    except TypeError:
        return []
