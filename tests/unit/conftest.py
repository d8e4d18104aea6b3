"""Shared fixtures for unit tests."""

import os
from collections.abc import Generator

import pytest
from loguru import logger

from respond.core.config import get_settings
from respond.core.logging import PACKAGE_LOGGER_NAME, _state
from respond.writers import ResponseBuffer


@pytest.fixture(autouse=True)
def clean_lru_cache() -> Generator[None]:
    """Clear the settings cache before and after each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove RESPOND_ variables so tests start from default settings.

    Args:
        monkeypatch: Pytest monkeypatch fixture.

    Returns:
        pytest.MonkeyPatch: The monkeypatch instance for env manipulation.
    """
    for key in list(os.environ.keys()):
        if key.startswith("RESPOND_"):
            monkeypatch.delenv(key, raising=False)
    return monkeypatch


@pytest.fixture(autouse=True)
def silent_package_logger() -> Generator[None]:
    """Restore the library default of a disabled package logger."""
    yield
    logger.disable(PACKAGE_LOGGER_NAME)
    _state.configured = False


@pytest.fixture
def buffer() -> ResponseBuffer:
    """Provide a fresh in-memory response writer.

    Returns:
        ResponseBuffer: An uncommitted response buffer.
    """
    return ResponseBuffer()


@pytest.fixture
def log_messages() -> Generator[list[str]]:
    """Enable the package logger and capture its messages.

    Yields:
        list[str]: Formatted messages emitted while the test runs.
    """
    messages: list[str] = []
    logger.enable(PACKAGE_LOGGER_NAME)
    handler_id = logger.add(messages.append, level="DEBUG", format="{message}")
    yield messages
    logger.remove(handler_id)
