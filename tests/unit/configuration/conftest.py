"""Shared fixtures and sample configuration trees for configuration tests."""

import os
from dataclasses import dataclass, field
from typing import Generator

import pytest
from pydantic import BaseModel, Field
from pytest_mock import MockerFixture

# =============================================================================
# Sample configuration tree
# =============================================================================


class DatabaseConfig(BaseModel):
    """Database configuration populated from DB_* variables."""

    host: str = Field("", min_length=1)
    port: int = Field(0, ge=1, le=65535)
    username: str = Field("", min_length=1)
    password: str = Field("", min_length=1)

    def populate(self) -> None:
        """Read the database settings from the environment."""
        self.host = os.environ.get("DB_HOST", "localhost")
        self.port = int(os.environ.get("DB_PORT", "5432"))
        self.username = os.environ.get("DB_USERNAME", "admin")
        # no default, must come from the environment
        self.password = os.environ.get("DB_PASSWORD", "")


class RedisConfig(BaseModel):
    """Redis configuration populated from REDIS_* variables."""

    host: str = Field("", min_length=1)
    port: int = Field(0, ge=1, le=65535)
    password: str = ""

    def populate(self) -> None:
        """Read the redis settings from the environment."""
        self.host = os.environ.get("REDIS_HOST", "localhost")
        self.port = int(os.environ.get("REDIS_PORT", "6379"))
        self.password = os.environ.get("REDIS_PASSWORD", "")


class ServicesConfig(BaseModel):
    """Grouping record without a populate() of its own."""

    redis: RedisConfig = Field(default_factory=RedisConfig)


class AppConfig(BaseModel):
    """Root of the sample tree."""

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    services: ServicesConfig = Field(default_factory=ServicesConfig)
    app_name: str = Field("", min_length=1)
    debug: bool = False
    root_populated: bool = False

    def populate(self) -> None:
        """Read the application settings from the environment."""
        self.app_name = os.environ.get("APP_NAME", "DefaultApp")
        self.debug = os.environ.get("DEBUG") in ("true", "1")
        self.root_populated = True


# =============================================================================
# Trees recording the order of populate() calls
# =============================================================================


@dataclass
class Leaf:
    """Record appending its label to a shared call log when populated."""

    label: str
    calls: list[str]
    populated: bool = False

    def populate(self) -> None:
        """Record the call."""
        self.calls.append(self.label)
        self.populated = True


@dataclass
class Branch:
    """Populatable record holding two populatable children."""

    label: str
    calls: list[str]
    first: Leaf
    second: Leaf

    def populate(self) -> None:
        """Record the call."""
        self.calls.append(self.label)


@dataclass
class Failing:
    """Record whose populate() always fails."""

    message: str = "boom"

    def populate(self) -> None:
        """Fail."""
        raise ValueError(self.message)


@dataclass
class Plain:
    """Record without a populate() of its own."""

    child: Leaf


@dataclass
class RecordingRoot:
    """Root of a recording tree, with a populate() the engine must skip."""

    calls: list[str]
    branch: Branch
    tail: Leaf
    names: list[Leaf] = field(default_factory=list)
    by_name: dict[str, Leaf] = field(default_factory=dict)

    def populate(self) -> None:
        """Record the call."""
        self.calls.append("root")


def build_recording_root(calls: list[str]) -> RecordingRoot:
    """Build a recording tree sharing a single call log."""
    return RecordingRoot(
        calls=calls,
        branch=Branch(
            label="branch",
            calls=calls,
            first=Leaf("branch.first", calls),
            second=Leaf("branch.second", calls),
        ),
        tail=Leaf("tail", calls),
        names=[Leaf("names[0]", calls)],
        by_name={"leaf": Leaf("by_name.leaf", calls)},
    )


# =============================================================================
# Fixtures
# =============================================================================

SAMPLE_ENV_VARS = (
    "APP_NAME",
    "DEBUG",
    "DB_HOST",
    "DB_PORT",
    "DB_USERNAME",
    "DB_PASSWORD",
    "REDIS_HOST",
    "REDIS_PORT",
    "REDIS_PASSWORD",
    "SAMPLE_VAR",
    "OTHER_VAR",
)


@pytest.fixture(autouse=True)
def isolated_environ(
    mocker: MockerFixture, monkeypatch: pytest.MonkeyPatch
) -> Generator[None, None, None]:
    """Restore the process environment after each test.

    Env files loaded by a test set process variables; they must not leak
    into other tests.
    """
    mocker.patch.dict(os.environ)
    for name in SAMPLE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield
