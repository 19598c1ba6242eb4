"""Constants used across the config tree engine."""

from typing import Final

# Logging
CONFIG_TREE_LOG_LEVEL_ENV_VAR: Final[str] = "CONFIG_TREE_LOG_LEVEL"
DEFAULT_LOG_LEVEL: Final[str] = "INFO"

# Environment file cascade
ENV_FILE_NAME: Final[str] = ".env"
LOCAL_ENV_SUFFIX: Final[str] = ".local"
# .env.local is not consulted for this environment
TEST_ENVIRONMENT: Final[str] = "test"

# Debug dump
DEBUG_OUTPUT_HEADER: Final[str] = "Config Debug Output:"
NIL_MARKER: Final[str] = "nil"
INDENT: Final[str] = "  "
MASK_CHAR: Final[str] = "*"

# Vocabulary callers can reuse when they have no domain-specific one
DEFAULT_SENSITIVE_KEYS: Final[tuple[str, ...]] = (
    "pass",
    "secret",
    "key",
    "token",
    "dsn",
)
