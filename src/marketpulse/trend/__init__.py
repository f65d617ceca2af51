"""Portfolio value trend reconstruction."""

from .reconstructor import compute_trend, trend_frame, trend_summary

__all__ = ["compute_trend", "trend_frame", "trend_summary"]
