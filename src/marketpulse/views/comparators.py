"""Named comparator strategies for ``sort_by``."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Literal

from marketpulse.domain.models import SortKey
from marketpulse.records import number_or_zero, read_field

logger = logging.getLogger(__name__)

KeyKind = Literal["numeric", "text", "timestamp"]


@dataclass(frozen=True)
class SortStrategy:
    """Candidate fields, key kind and direction behind one ``SortKey``.

    A record is ranked by the first candidate field it carries, so the
    price comparators order both asset payloads (``currentPrice``) and
    plain ``price`` records.
    """

    fields: tuple[str, ...]
    kind: KeyKind
    descending: bool = False

    def key_function(self, field: str | None = None) -> Callable[[Any], Any]:
        """Key extractor; ``field`` replaces the candidate fields when given."""
        extractor = _KEY_EXTRACTORS[self.kind]
        candidates = (field,) if field else self.fields
        return lambda record: extractor(_first_present(record, candidates))


SORT_STRATEGIES: dict[SortKey, SortStrategy] = {
    SortKey.CHANGE_DESC: SortStrategy(("changePercent",), "numeric", descending=True),
    SortKey.PRICE_DESC: SortStrategy(("currentPrice", "price"), "numeric", descending=True),
    SortKey.PRICE_ASC: SortStrategy(("currentPrice", "price"), "numeric"),
    SortKey.VOLUME_DESC: SortStrategy(("volume",), "numeric", descending=True),
    SortKey.SYMBOL: SortStrategy(("symbol",), "text"),
    SortKey.TIMESTAMP_DESC: SortStrategy(("timestamp",), "timestamp", descending=True),
    SortKey.PERCENTAGE_DESC: SortStrategy(("percentage",), "numeric", descending=True),
}


def resolve_sort_key(value: SortKey | str | None, default: SortKey = SortKey.CHANGE_DESC) -> SortKey:
    """Map a comparator identifier onto ``SortKey``, falling back to ``default``."""
    if isinstance(value, SortKey):
        return value
    if value is None:
        return default
    try:
        return SortKey(str(value).strip().lower())
    except ValueError:
        logger.debug("Unknown sort key %r, using %s", value, default.value)
        return default


def _first_present(record: Any, candidates: tuple[str, ...]) -> Any:
    for name in candidates:
        value = read_field(record, name)
        if value is not None:
            return value
    return None


def _text_key(value: Any) -> tuple[str, str]:
    # Case-insensitive; lowercase ranks first among case variants.
    text = "" if value is None else str(value)
    return (text.casefold(), text.swapcase())


def _timestamp_key(value: Any) -> tuple[int, float]:
    # Unparseable timestamps rank below every real one.
    if not isinstance(value, str) or not value.strip():
        return (0, 0.0)
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return (0, 0.0)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return (1, parsed.timestamp())


_KEY_EXTRACTORS: dict[str, Callable[[Any], Any]] = {
    "numeric": number_or_zero,
    "text": _text_key,
    "timestamp": _timestamp_key,
}
