"""Errors raised while populating and validating a configuration tree."""

from dataclasses import dataclass
from pathlib import Path
from typing import Sequence


@dataclass(frozen=True)
class Violation:
    """A single unmet constraint reported by the validation engine.

    Attributes:
        field_path: Dotted path to the offending field, relative to the root.
        rule: Identifier of the violated rule (e.g. "string_too_short").
        message: Human-readable description of the violation.
    """

    field_path: str
    rule: str
    message: str

    def __str__(self) -> str:
        """Render the violation as a single diagnostic line."""
        return f"{self.field_path}: {self.message} [{self.rule}]"


class ConfigurationError(Exception):
    """Base class for all configuration tree errors."""


class EnvLoadError(ConfigurationError):
    """An environment file exists but could not be read or parsed."""

    def __init__(self, path: str | Path, cause: object) -> None:
        """
        Initialize the error.

        Parameters:
            path: The environment file that failed to load.
            cause: The underlying error or a description of it.
        """
        self.path = Path(path)
        self.cause = cause
        super().__init__(
            f"error occurred while trying to load env file: {self.path}. "
            f"Error message: {cause}"
        )


class InvalidRootError(ConfigurationError):
    """The value handed to the engine is not a configuration record."""

    def __init__(self, actual: object) -> None:
        """
        Initialize the error.

        Parameters:
            actual: The offending root value.
        """
        self.actual_type = type(actual).__name__
        super().__init__(
            f"expected a configuration record, got {self.actual_type}"
        )


class PopulateFieldError(ConfigurationError):
    """A node's populate() call failed.

    The field path grows while the error unwinds through nested records, so
    the final path runs from a direct child of the root down to the field
    whose populate() raised.
    """

    def __init__(self, field_path: Sequence[str], cause: BaseException) -> None:
        """
        Initialize the error.

        Parameters:
            field_path: Field names from the outermost record down to the
                failing field.
            cause: The exception raised by populate().
        """
        self.field_path = tuple(field_path)
        self.cause = cause
        super().__init__(
            f"failed to populate field {'.'.join(self.field_path)}: {cause}"
        )

    @property
    def field_name(self) -> str:
        """Name of the field whose populate() raised."""
        return self.field_path[-1]

    def with_parent(self, parent: str) -> "PopulateFieldError":
        """
        Return a copy of this error scoped under an enclosing field.

        Parameters:
            parent: Name of the field holding the record where this error
                was raised.

        Returns:
            PopulateFieldError: Error with `parent` prepended to the path.
        """
        return PopulateFieldError((parent, *self.field_path), self.cause)


class ConfigValidationError(ConfigurationError):
    """The populated tree violates one or more declared constraints."""

    def __init__(self, violations: Sequence[Violation]) -> None:
        """
        Initialize the error.

        Parameters:
            violations: The non-empty violation set.
        """
        self.violations = list(violations)
        lines = "\n".join(f"  {violation}" for violation in self.violations)
        super().__init__(f"config validation failed:\n{lines}")
