"""Population and validation of composite configuration trees.

A composite configuration is a record whose fields hold further records.
Every nested record that implements the `Config` protocol is asked to fill
itself in (usually from environment variables), then the whole tree is
validated once.

Example:
    class DatabaseConfig(BaseModel):
        host: str = Field("", min_length=1)

        def populate(self) -> None:
            self.host = os.environ.get("DB_HOST", "localhost")

    class AppConfig(BaseModel):
        database: DatabaseConfig = DatabaseConfig()

    app_config = AppConfig()
    CompositeConfig().populate_and_validate(app_config, "dev", ".")
"""

from pathlib import Path
from typing import Any, Optional, Protocol, runtime_checkable

from configuration.env_loader import load_env_vars
from configuration.errors import (
    ConfigValidationError,
    InvalidRootError,
    PopulateFieldError,
)
from configuration.shapes import Shape, deref, record_fields, shape_of
from configuration.validation import PydanticValidator, Validator
from log import get_logger

logger = get_logger(__name__)


@runtime_checkable
class Config(Protocol):
    """A configuration node able to fill in its own fields."""

    def populate(self) -> None:
        """Fill in the node's fields, raising on failure."""


class CompositeConfig:
    """Populates and validates configuration trees with nested records."""

    def __init__(self, validator: Optional[Validator] = None) -> None:
        """
        Initialize the composite config with a validation engine.

        Parameters:
            validator: Validation engine to run on populated trees. Defaults
                to a PydanticValidator.
        """
        self.validator: Validator = (
            validator if validator is not None else PydanticValidator()
        )

    def populate_and_validate(
        self,
        composite: Any,
        default_env: str,
        default_app_dir: str | Path,
    ) -> None:
        """
        Populate all nested configs of a tree and validate the result.

        Environment files are loaded first. The root's own populate() is not
        called; callers populate the root themselves before handing it over.

        Parameters:
            composite: The root record of the configuration tree.
            default_env: Environment name used to pick the env files.
            default_app_dir: Directory holding the env files.

        Raises:
            EnvLoadError: If an env file cannot be loaded.
            InvalidRootError: If the root is not a record.
            PopulateFieldError: If a nested populate() call fails.
            ConfigValidationError: If the populated tree is invalid.
        """
        load_env_vars(default_env, default_app_dir)

        self.populate_nested_configs(composite)

        violations = self.validator.validate(composite)
        if violations:
            logger.error(
                "Config validation failed with %d violation(s)", len(violations)
            )
            raise ConfigValidationError(violations)

        logger.debug("Populated and validated %s", type(deref(composite)).__name__)

    def populate_nested_configs(self, composite: Any) -> None:
        """
        Walk a record and populate every nested field implementing Config.

        Fields are visited in declaration order, depth first. A field's own
        populate() runs before its nested fields are visited. Sequences,
        mappings and scalars are not descended into. The first failure stops
        the walk.

        Parameters:
            composite: The record to walk (or a reference to one).

        Raises:
            InvalidRootError: If `composite` is not a record.
            PopulateFieldError: If a populate() call fails.
        """
        record = deref(composite)
        if shape_of(record) is not Shape.RECORD:
            raise InvalidRootError(record)

        for field in record_fields(record):
            if not field.private and isinstance(field.value, Config):
                logger.debug("Populating field %s", field.name)
                try:
                    field.value.populate()
                except Exception as e:  # pylint: disable=broad-exception-caught
                    raise PopulateFieldError((field.name,), e) from e

            if shape_of(field.value) is Shape.RECORD:
                try:
                    self.populate_nested_configs(field.value)
                except PopulateFieldError as e:
                    raise e.with_parent(field.name) from e.cause
