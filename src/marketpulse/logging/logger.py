"""Console and file logging setup and concise view summaries."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

LOGGER_NAME = "marketpulse"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logger(log_level: str = "INFO", log_file: str | None = None) -> logging.Logger:
    """Configure and return the package logger.

    One console handler is installed on first use. Each distinct `log_file`
    gets one file handler; repeated calls with the same path reuse it.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    logger.propagate = False
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    has_console = any(type(handler) is logging.StreamHandler for handler in logger.handlers)
    if not has_console:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        path = Path(log_file).resolve()
        if path not in _file_handler_paths(logger):
            path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(path, encoding="utf-8")
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger


def _file_handler_paths(logger: logging.Logger) -> set[Path]:
    return {
        Path(handler.baseFilename)
        for handler in logger.handlers
        if isinstance(handler, logging.FileHandler)
    }


class ViewLogger:
    """Logger with fixed line types for derived views."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger(LOGGER_NAME)

    def trend(self, points: Sequence[Any], holdings: int) -> None:
        parts = [f"trend | points {len(points)} | holdings {holdings}"]
        if points:
            first = points[0]
            last = points[-1]
            parts.append(f"start {self._format_value(first.get('value'))}")
            parts.append(f"end {self._format_value(last.get('value'))}")
        self._logger.info(" | ".join(parts))

    def view(self, name: str, total: int, visible: int, details: dict[str, Any] | None = None) -> None:
        parts = [f"view | {name} | in {total} | out {visible}"]
        if details:
            for key, value in details.items():
                if value in (None, ""):
                    continue
                parts.append(f"{key} {value}")
        self._logger.info(" | ".join(parts))

    def buckets(self, buckets: Sequence[dict[str, Any]], key_name: str, records_name: str) -> None:
        if not buckets:
            self._logger.info("buckets | empty")
            return None
        counts = [f"{bucket[key_name]} {len(bucket[records_name])}" for bucket in buckets]
        self._logger.info("buckets | %s", " | ".join(counts))

    def error(self, message: str) -> None:
        self._logger.error("error | %s", message)

    @staticmethod
    def _format_value(value: Any) -> str:
        if isinstance(value, (int, float)):
            return f"${value:,.2f}"
        return str(value)
