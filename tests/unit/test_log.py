"""Unit tests for functions defined in src/log.py."""

import logging
import pytest
from rich.logging import RichHandler

from log import get_logger, resolve_log_level
from constants import CONFIG_TREE_LOG_LEVEL_ENV_VAR


def test_get_logger() -> None:
    """Check the function to retrieve logger."""
    logger_name = "foo"
    logger = get_logger(logger_name)
    assert logger is not None
    assert logger.name == logger_name
    assert logger.propagate is False

    # exactly one rich handler is attached
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], RichHandler)


def test_get_logger_is_idempotent() -> None:
    """Check that a second call does not stack handlers."""
    first = get_logger("test_idempotent")
    second = get_logger("test_idempotent")
    assert first is second
    assert len(second.handlers) == 1


def test_get_logger_invalid_env_var_fallback(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that invalid env var value falls back to INFO level."""
    monkeypatch.setenv(CONFIG_TREE_LOG_LEVEL_ENV_VAR, "FOOBAR")

    logger = get_logger("test_invalid")
    assert logger.level == logging.INFO


@pytest.mark.parametrize(
    "level_name,expected_level",
    [
        ("DEBUG", logging.DEBUG),
        ("debug", logging.DEBUG),
        ("INFO", logging.INFO),
        ("info", logging.INFO),
        ("WARNING", logging.WARNING),
        ("warning", logging.WARNING),
        ("ERROR", logging.ERROR),
        ("error", logging.ERROR),
        ("CRITICAL", logging.CRITICAL),
        ("critical", logging.CRITICAL),
    ],
)
def test_get_logger_log_level(
    monkeypatch: pytest.MonkeyPatch, level_name: str, expected_level: int
) -> None:
    """Test that all valid log levels work correctly, case-insensitively."""
    monkeypatch.setenv(CONFIG_TREE_LOG_LEVEL_ENV_VAR, level_name)

    logger = get_logger(f"test_{level_name}")
    assert logger.level == expected_level


def test_get_logger_default_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that get_logger() uses INFO level by default when env var is not set."""
    monkeypatch.delenv(CONFIG_TREE_LOG_LEVEL_ENV_VAR, raising=False)

    logger = get_logger("test_default")
    assert logger.level == logging.INFO


def test_get_logger_explicit_level(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that an explicit level name overrides the env var."""
    monkeypatch.setenv(CONFIG_TREE_LOG_LEVEL_ENV_VAR, "ERROR")

    logger = get_logger("test_explicit", "debug")
    assert logger.level == logging.DEBUG


@pytest.mark.parametrize(
    "level_name,expected_level",
    [
        ("warning", logging.WARNING),
        (" Info ", logging.INFO),
        ("FOOBAR", None),
        ("", None),
        (None, None),
    ],
)
def test_resolve_log_level(level_name: str | None, expected_level: int | None) -> None:
    """Test conversion of level names into logging constants."""
    assert resolve_log_level(level_name) == expected_level
