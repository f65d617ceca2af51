"""Logging helpers."""

from .logger import LOGGER_NAME, ViewLogger, setup_logger

__all__ = ["LOGGER_NAME", "ViewLogger", "setup_logger"]
