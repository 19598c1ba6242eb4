"""Validation engine for populated configuration trees.

Constraints are declared on the record fields with pydantic, for example

    class DatabaseConfig(BaseModel):
        host: str = Field("", min_length=1)
        port: int = Field(0, ge=1, le=65535)

or with `Annotated[int, Field(ge=1)]` on dataclass fields. Defaults are not
validated when a record is created, so an empty tree can be built first and
filled in by `populate()` afterwards; the constraints are checked here, once,
against the values the tree holds after population.

Every record of the tree is checked against its own runtime type, so a
subclass stored in a field declared with its base class, or a record stored
in an `Any` field, is held to its own constraints.
"""

from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic_core import ErrorDetails

from configuration.errors import Violation
from configuration.shapes import Shape, deref, record_fields, shape_of

FieldPath = tuple[str | int, ...]


@runtime_checkable
class Validator(Protocol):
    """Validation engine consumed by the traversal engine."""

    def validate(self, tree: Any) -> list[Violation]:
        """Return the violated constraints of a tree, empty when valid."""


def _field_key(record: Any, name: str) -> str:
    """Return the key a record field is validated under (its alias, if any)."""
    if isinstance(record, BaseModel):
        return type(record).model_fields[name].alias or name
    return name


def _record_input(record: Any) -> dict[str, Any]:
    """
    Build the validation input of a single record from its current values.

    Nested records are passed through as instances; pydantic accepts
    instances of the declared type without re-checking them, and they are
    validated on their own against their runtime type.

    Parameters:
        record: A pydantic model or dataclass instance.

    Returns:
        dict[str, Any]: Field values keyed as the record's validator expects.
    """
    return {
        _field_key(record, field.name): deref(field.value)
        for field in record_fields(record)
    }


def _to_violation(prefix: FieldPath, error: ErrorDetails) -> Violation:
    """Convert one pydantic error entry into a violation under a field path."""
    loc = (*prefix, *error["loc"])
    field_path = ".".join(str(part) for part in loc) or "<root>"
    return Violation(field_path=field_path, rule=error["type"], message=error["msg"])


class PydanticValidator:
    """Validation engine driven by pydantic field constraints.

    Type adapters are built once per record type and reused, so a single
    instance can serve any number of trees.
    """

    def __init__(self) -> None:
        """Initialize the validator with an empty adapter cache."""
        self._adapters: dict[type, TypeAdapter[Any]] = {}

    def _adapter_for(self, record_type: type) -> TypeAdapter[Any]:
        """Return the cached type adapter for a record type."""
        adapter = self._adapters.get(record_type)
        if adapter is None:
            adapter = TypeAdapter(record_type)
            self._adapters[record_type] = adapter
        return adapter

    def validate(self, tree: Any) -> list[Violation]:
        """
        Validate a populated tree against its declared constraints.

        Parameters:
            tree: A pydantic model or dataclass instance (or a reference
                to one).

        Returns:
            list[Violation]: The violated constraints in tree order; empty
            when valid.
        """
        violations: list[Violation] = []
        self._validate_node(tree, (), violations, set())
        # nested dataclass instances may be re-checked by their parent too
        return list(dict.fromkeys(violations))

    def _validate_node(
        self,
        value: Any,
        path: FieldPath,
        violations: list[Violation],
        seen: set[int],
    ) -> None:
        """Validate every record reachable from a value, depth first."""
        value = deref(value)
        shape = shape_of(value)

        if shape is Shape.RECORD:
            if id(value) in seen:
                return
            seen.add(id(value))
            violations.extend(self._validate_record(value, path))
            for field in record_fields(value):
                self._validate_node(
                    field.value,
                    (*path, _field_key(value, field.name)),
                    violations,
                    seen,
                )
        elif shape is Shape.SEQUENCE:
            for index, item in enumerate(value):
                self._validate_node(item, (*path, index), violations, seen)
        elif shape is Shape.MAPPING:
            for key, item in value.items():
                self._validate_node(item, (*path, key), violations, seen)

    def _validate_record(self, record: Any, path: FieldPath) -> list[Violation]:
        """Validate one record's own fields against its runtime type."""
        try:
            self._adapter_for(type(record)).validate_python(_record_input(record))
        except ValidationError as e:
            return [
                _to_violation(path, error) for error in e.errors(include_url=False)
            ]
        return []
