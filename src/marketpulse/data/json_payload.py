"""JSON payload snapshots as returned by the dashboard API."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from marketpulse.errors import PayloadError


def unwrap_envelope(body: Any) -> Any:
    """Return ``body["data"]`` when the API wrapped its result, else ``body``."""
    if isinstance(body, Mapping):
        inner = body.get("data")
        if inner:
            return inner
    return body


def load_payload(path: str | Path) -> Any:
    """Read one API response body from disk and strip its envelope."""
    input_path = Path(path)
    if not input_path.exists():
        raise PayloadError(f"No payload found at {input_path}")
    try:
        with input_path.open("r", encoding="utf-8") as handle:
            body = json.load(handle)
    except json.JSONDecodeError as exc:
        raise PayloadError(f"Invalid JSON in {input_path}: {exc}") from exc
    return unwrap_envelope(body)
