"""Shape classification for configuration tree values.

Both tree walkers (population and the debug dump) look at values through the
same small set of shapes instead of probing types ad hoc:

* RECORD: a pydantic model or dataclass instance with named fields,
* SEQUENCE: a list or tuple,
* MAPPING: any Mapping,
* REFERENCE: a weak reference that has to be followed,
* NIL: None,
* SCALAR: everything else.
"""

import dataclasses
import weakref
from collections.abc import Mapping
from enum import Enum
from typing import Any, NamedTuple

from pydantic import BaseModel


class Shape(Enum):
    """Structural shape of a configuration tree value."""

    RECORD = "record"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    REFERENCE = "reference"
    NIL = "nil"
    SCALAR = "scalar"


# Shapes the debug dump descends into
STRUCTURED_SHAPES = frozenset({Shape.RECORD, Shape.SEQUENCE, Shape.MAPPING})


class RecordField(NamedTuple):
    """A named field of a record, in declaration order.

    Attributes:
        name: Attribute name of the field.
        value: Current value of the field.
        private: True for fields outside the public surface (leading "_").
    """

    name: str
    value: Any
    private: bool


def is_record(value: Any) -> bool:
    """Check whether a value is a record instance (not a record class)."""
    if isinstance(value, BaseModel):
        return True
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def shape_of(value: Any) -> Shape:
    """
    Classify a value into one of the tree shapes.

    Parameters:
        value: Any value found in a configuration tree.

    Returns:
        Shape: The structural shape of the value.
    """
    if value is None:
        return Shape.NIL
    if isinstance(value, weakref.ReferenceType):
        return Shape.REFERENCE
    if is_record(value):
        return Shape.RECORD
    if isinstance(value, Mapping):
        return Shape.MAPPING
    if isinstance(value, (list, tuple)):
        return Shape.SEQUENCE
    return Shape.SCALAR


def deref(value: Any) -> Any:
    """
    Follow a chain of references down to the referenced value.

    Parameters:
        value: A value that may be a (chain of) weak reference(s).

    Returns:
        The first non-reference value, or None when a reference in the
        chain is dead.
    """
    while isinstance(value, weakref.ReferenceType):
        value = value()
    return value


def record_fields(record: Any) -> list[RecordField]:
    """
    List the fields of a record in declaration order.

    Pydantic computed fields and private attributes are not part of the
    declared fields and are therefore not listed.

    Parameters:
        record: A pydantic model or dataclass instance.

    Returns:
        list[RecordField]: The record's fields with their current values.
    """
    if isinstance(record, BaseModel):
        names = list(type(record).model_fields)
    else:
        names = [f.name for f in dataclasses.fields(record)]
    return [
        RecordField(name, getattr(record, name, None), name.startswith("_"))
        for name in names
    ]
