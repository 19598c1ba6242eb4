"""Redacted text dump of configuration trees for debugging.

The dump walks any configuration tree (records, sequences, mappings and
scalars) and renders it as indented text. Values of fields and mapping keys
whose names contain one of the caller's sensitive keywords are masked, so the
output is safe to log. Rendering never raises and never mutates the tree, so
it can be used while reporting population or validation failures.

Example output:
    Config Debug Output:
    Database:
      Host: db.example.com
      Password: d***********3
    Tags:
      [0]: production
"""

from enum import Enum
from typing import Any, Sequence

import constants
from configuration.shapes import (
    STRUCTURED_SHAPES,
    Shape,
    deref,
    record_fields,
    shape_of,
)


def debug(config: Any, sensitive_keys: Sequence[str]) -> str:
    """
    Render a configuration tree as indented text with sensitive values masked.

    Parameters:
        config: The root of the configuration tree; may be None.
        sensitive_keys: Keywords matched case-insensitively against field
            names and mapping keys; matching values are masked.

    Returns:
        str: The rendered tree, starting with a fixed header line.
    """
    if config is None:
        return f"{constants.DEBUG_OUTPUT_HEADER}\n{constants.NIL_MARKER}\n"

    out: list[str] = [f"{constants.DEBUG_OUTPUT_HEADER}\n"]
    _debug_value(config, sensitive_keys, out, 0)
    return "".join(out)


def _debug_value(
    value: Any, sensitive_keys: Sequence[str], out: list[str], indent: int
) -> None:
    """Render a value of any shape at the given indent level."""
    value = deref(value)
    shape = shape_of(value)

    if shape is Shape.NIL:
        out.append(f"{_indent(indent)}{constants.NIL_MARKER}\n")
    elif shape is Shape.RECORD:
        _debug_record(value, sensitive_keys, out, indent)
    elif shape is Shape.SEQUENCE:
        _debug_sequence(value, sensitive_keys, out, indent)
    elif shape is Shape.MAPPING:
        _debug_mapping(value, sensitive_keys, out, indent)
    else:
        out.append(f"{_indent(indent)}{format_scalar(value)}\n")


def _debug_record(
    record: Any, sensitive_keys: Sequence[str], out: list[str], indent: int
) -> None:
    """Render the public fields of a record, one per line."""
    for field in record_fields(record):
        if field.private:
            continue

        out.append(f"{_indent(indent)}{field.name}: ")
        value = deref(field.value)

        if is_sensitive_field(field.name, sensitive_keys):
            out.append(f"{mask_sensitive_data(format_scalar(value))}\n")
            continue

        if shape_of(value) in STRUCTURED_SHAPES:
            out.append("\n")
            _debug_value(value, sensitive_keys, out, indent + 1)
        else:
            out.append(f"{format_scalar(value)}\n")


def _debug_sequence(
    items: Sequence[Any], sensitive_keys: Sequence[str], out: list[str], indent: int
) -> None:
    """Render sequence elements as indexed lines."""
    if len(items) == 0:
        out.append(f"{_indent(indent)}[]\n")
        return

    for index, item in enumerate(items):
        out.append(f"{_indent(indent)}[{index}]: ")
        item = deref(item)
        if shape_of(item) is Shape.RECORD:
            out.append("\n")
            _debug_value(item, sensitive_keys, out, indent + 1)
        else:
            out.append(f"{format_scalar(item)}\n")


def _debug_mapping(
    mapping: Any, sensitive_keys: Sequence[str], out: list[str], indent: int
) -> None:
    """Render mapping entries sorted by key text."""
    if len(mapping) == 0:
        out.append(f"{_indent(indent)}{{}}\n")
        return

    entries = sorted(
        ((_safe_str(key), item) for key, item in mapping.items()),
        key=lambda entry: entry[0],
    )
    for key, item in entries:
        out.append(f"{_indent(indent)}{key}: ")
        item = deref(item)

        if is_sensitive_field(key, sensitive_keys):
            out.append(f"{mask_sensitive_data(format_scalar(item))}\n")
            continue

        if shape_of(item) is Shape.RECORD:
            out.append("\n")
            _debug_value(item, sensitive_keys, out, indent + 1)
        else:
            out.append(f"{format_scalar(item)}\n")


def format_scalar(value: Any) -> str:
    """
    Return the natural single-line text form of a value.

    Parameters:
        value: The value to render.

    Returns:
        str: "true"/"false" for booleans, "nil" for None, the value of an
        enum member and str() for anything else. Values whose str() fails
        render as "<unprintable TypeName>".
    """
    if value is None:
        return constants.NIL_MARKER
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return _safe_str(value.value)
    return _safe_str(value)


def _safe_str(value: Any) -> str:
    """Return str(value), or a placeholder naming the type if str() fails."""
    try:
        return str(value)
    except Exception:  # pylint: disable=broad-exception-caught
        return f"<unprintable {type(value).__name__}>"


def is_sensitive_field(field_name: str, sensitive_keys: Sequence[str]) -> bool:
    """
    Check whether a field name contains any sensitive keyword.

    Parameters:
        field_name: Field name or mapping key text.
        sensitive_keys: Keywords to look for, case-insensitively.

    Returns:
        bool: True if any keyword is a substring of the name.
    """
    lowered = field_name.lower()
    return any(key.lower() in lowered for key in sensitive_keys)


def _mask_middle(text: str) -> str:
    """Keep the first and last character, replacing the rest with '*'."""
    return text[0] + constants.MASK_CHAR * (len(text) - 2) + text[-1]


def mask_sensitive_data(data: str) -> str:
    """
    Mask sensitive text for safe logging, preserving its length.

    Connection strings ("user:pass@host:port/db") only have the credentials
    before the first "@" masked; the rest stays readable.

    Parameters:
        data: The text to mask.

    Returns:
        str: The masked text.
    """
    if not data:
        return ""

    if "@" in data and ":" in data:
        credentials, rest = data.split("@", 1)
        if len(credentials) > 2:
            return f"{_mask_middle(credentials)}@{rest}"

    if len(data) <= 2:
        return constants.MASK_CHAR * len(data)

    return _mask_middle(data)


def _indent(level: int) -> str:
    """Return the indentation for a nesting level."""
    return constants.INDENT * level
