from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from marketpulse.logging import LOGGER_NAME


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Iterator[None]:
    """Drop handlers bound to per-test streams so they do not leak across tests."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
