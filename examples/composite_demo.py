"""Populate and validate a composite configuration from the environment.

Run with: python examples/composite_demo.py
"""

import os
from pathlib import Path

from pydantic import BaseModel, Field

from configuration.composite import CompositeConfig
from configuration.errors import ConfigurationError
from constants import DEFAULT_SENSITIVE_KEYS
from diagnostics.debug_dump import debug

DEMO_ENVIRONMENT = {
    "APP_NAME": "MyAwesomeApp",
    "DEBUG": "true",
    "DB_HOST": "postgres.example.com",
    "DB_USERNAME": "myuser",
    "DB_PASSWORD": "mypassword",
    "DB_NAME": "production_db",
    "REDIS_HOST": "redis.example.com",
    "SERVER_PORT": "3000",
}


def env_or_default(name: str, default: str) -> str:
    """Return the variable's value, or the default when unset or empty."""
    return os.environ.get(name) or default


class DatabaseConfig(BaseModel):
    """Database connection settings read from DB_* variables."""

    host: str = Field("", min_length=1)
    port: int = Field(0, ge=1, le=65535)
    username: str = Field("", min_length=1)
    password: str = Field("", min_length=1)
    database: str = Field("", min_length=1)

    def populate(self) -> None:
        """Read the database settings."""
        self.host = env_or_default("DB_HOST", "localhost")
        self.port = int(env_or_default("DB_PORT", "5432"))
        self.username = env_or_default("DB_USERNAME", "admin")
        self.password = env_or_default("DB_PASSWORD", "password")
        self.database = env_or_default("DB_NAME", "myapp")


class RedisConfig(BaseModel):
    """Redis connection settings read from REDIS_* variables."""

    host: str = Field("", min_length=1)
    port: int = Field(0, ge=1, le=65535)
    password: str = ""

    def populate(self) -> None:
        """Read the redis settings."""
        self.host = env_or_default("REDIS_HOST", "localhost")
        self.port = int(env_or_default("REDIS_PORT", "6379"))
        self.password = os.environ.get("REDIS_PASSWORD", "")


class ServerConfig(BaseModel):
    """HTTP server settings read from SERVER_* variables."""

    host: str = Field("", min_length=1)
    port: int = Field(0, ge=1, le=65535)

    def populate(self) -> None:
        """Read the server settings."""
        self.host = env_or_default("SERVER_HOST", "0.0.0.0")
        self.port = int(env_or_default("SERVER_PORT", "8080"))


class AppConfig(BaseModel):
    """Root of the application configuration."""

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    redis: RedisConfig = Field(default_factory=RedisConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    app_name: str = Field("", min_length=1)
    debug: bool = False

    def populate(self) -> None:
        """Read the application settings."""
        self.app_name = env_or_default("APP_NAME", "DefaultApp")
        self.debug = os.environ.get("DEBUG") in ("true", "1")


def main() -> None:
    """Populate the sample tree and print it with secrets masked."""
    print("Composite Configuration Example")
    print("===============================")

    os.environ.update(DEMO_ENVIRONMENT)

    app_config = AppConfig()
    # the engine does not populate the root itself
    app_config.populate()

    try:
        CompositeConfig().populate_and_validate(
            app_config, "dev", Path(__file__).parent
        )
    except ConfigurationError as e:
        raise SystemExit(f"Configuration error: {e}") from e

    print("\nConfiguration loaded successfully!")
    print(debug(app_config, DEFAULT_SENSITIVE_KEYS), end="")


if __name__ == "__main__":
    main()
