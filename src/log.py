"""Log utilities."""

import logging
import os
from typing import Optional

from rich.logging import RichHandler

from constants import CONFIG_TREE_LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL


def resolve_log_level(level_name: Optional[str]) -> Optional[int]:
    """
    Convert a level name into a logging level constant.

    Parameters:
        level_name: Level name in any case (e.g. "debug", "WARNING").

    Returns:
        Optional[int]: The logging level, or None if the name is unknown.
    """
    if not level_name:
        return None
    level = logging.getLevelName(level_name.strip().upper())
    return level if isinstance(level, int) else None


def get_logger(name: str, level_name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger writing to the console through Rich.

    The level comes from `level_name` when given, otherwise from the
    CONFIG_TREE_LOG_LEVEL environment variable, and falls back to INFO for
    unknown names. The logger gets a single RichHandler and does not
    propagate to ancestor loggers, so the engine's diagnostics are not
    duplicated by the host application's handlers.

    Parameters:
        name (str): Name of the logger to retrieve or create.
        level_name (Optional[str]): Explicit level name overriding the
            environment variable.

    Returns:
        logging.Logger: The configured logger instance.
    """
    logger = logging.getLogger(name)

    if any(isinstance(h, RichHandler) for h in logger.handlers):
        return logger

    logger.handlers = [RichHandler(show_path=False)]
    logger.propagate = False

    if level_name is None:
        level_name = os.environ.get(CONFIG_TREE_LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL)

    level = resolve_log_level(level_name)
    if level is None:
        logger.warning(
            "Invalid log level '%s', falling back to %s",
            level_name,
            DEFAULT_LOG_LEVEL,
        )
        level = logging.getLevelName(DEFAULT_LOG_LEVEL)

    logger.setLevel(level)
    return logger
