"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import logging

from unittest.mock import AsyncMock

import pytest

from typing import TYPE_CHECKING

from blockhash_colors.helpers.logging import loggers


if TYPE_CHECKING:
    from collections.abc import Generator


SAMPLE_HASH = "00000000000000000001d4ae5c3e5b2f7b9b8a1c6e1d3f5a7c9e0b2d4f6a8c0e"


@pytest.fixture
def sample_hash() -> str:
    """A realistic Bitcoin block hash."""
    return SAMPLE_HASH


@pytest.fixture
def no_sleep(monkeypatch: pytest.MonkeyPatch) -> AsyncMock:
    """Replace backoff sleeps with an AsyncMock recording requested delays."""
    mock_sleep = AsyncMock()
    monkeypatch.setattr("blockhash_colors.helpers.http.sleep", mock_sleep)
    monkeypatch.setattr("blockhash_colors.pipeline.orchestrator.sleep", mock_sleep)
    return mock_sleep


@pytest.fixture
def restore_loggers() -> Generator[None]:
    """Undo level changes and file handlers added by configure_logging."""
    saved_levels = {
        name: (logger.level, {h: h.level for h in logger.handlers})
        for name, logger in loggers.items()
    }

    yield

    for name, logger in list(loggers.items()):
        level, handler_levels = saved_levels.get(name, (logger.level, {}))
        for handler in list(logger.handlers):
            if handler in handler_levels:
                handler.setLevel(handler_levels[handler])
            elif isinstance(handler, logging.FileHandler):
                handler.close()
                logger.removeHandler(handler)
        logger.setLevel(level)
