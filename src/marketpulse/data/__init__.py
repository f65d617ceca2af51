"""API payload snapshot loading."""

from .json_payload import load_payload, unwrap_envelope

__all__ = ["load_payload", "unwrap_envelope"]
