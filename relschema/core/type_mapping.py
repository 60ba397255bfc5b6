"""Shared type mapping utilities for Arrow types.

Attribute types are PyArrow data types. This module turns the short type
names used in declarations and schema files into Arrow types and back, and
defines the protocol adapters implement for their own type systems.
"""

import re
from typing import Protocol, Union

import pyarrow as pa

# String type names to Arrow types (used by declarations and schema files)
STRING_TO_ARROW_TYPE: dict[str, pa.DataType] = {
    "str": pa.string(),
    "string": pa.string(),
    "text": pa.string(),
    "int": pa.int64(),
    "integer": pa.int64(),
    "int64": pa.int64(),
    "int32": pa.int32(),
    "int16": pa.int16(),
    "float": pa.float64(),
    "double": pa.float64(),
    "float64": pa.float64(),
    "float32": pa.float32(),
    "bool": pa.bool_(),
    "boolean": pa.bool_(),
    "datetime": pa.timestamp("us"),  # Microsecond precision timestamp
    "timestamp": pa.timestamp("us"),
    "date": pa.date32(),
    "binary": pa.binary(),
}

# Canonical names returned by arrow_type_to_string
CANONICAL_NAMES = (
    "str",
    "int",
    "int32",
    "int16",
    "float",
    "float32",
    "bool",
    "datetime",
    "date",
    "binary",
)

TypeLike = Union[str, pa.DataType]

# Arrow's own names, used inside nested notation such as ``list<item: float>``
ARROW_TYPE_NAMES: dict[str, pa.DataType] = {
    "null": pa.null(),
    "bool": pa.bool_(),
    "int8": pa.int8(),
    "int16": pa.int16(),
    "int32": pa.int32(),
    "int64": pa.int64(),
    "uint8": pa.uint8(),
    "uint16": pa.uint16(),
    "uint32": pa.uint32(),
    "uint64": pa.uint64(),
    "halffloat": pa.float16(),
    "float": pa.float32(),
    "double": pa.float64(),
    "string": pa.string(),
    "large_string": pa.large_string(),
    "binary": pa.binary(),
    "large_binary": pa.large_binary(),
}

_COMPOUND_TYPE = re.compile(r"^(\w+)\s*([(<\[])(.*)([)>\]])$", re.DOTALL)
_CLOSING = {"(": ")", "<": ">", "[": "]"}


def string_to_arrow_type(type_name: str) -> pa.DataType:
    """Convert string type name to Arrow type.

    Short names are tried first; anything else is read as Arrow's own
    notation (``decimal128(10, 2)``, ``timestamp[us, tz=UTC]``,
    ``list<item: int64>``), which is what ``arrow_type_to_string`` emits for
    types without a short name.

    Args:
        type_name: String type name (e.g., "int", "str", "datetime")

    Returns:
        Arrow DataType

    Raises:
        ValueError: If type_name is not supported
    """
    arrow_type = STRING_TO_ARROW_TYPE.get(type_name.strip().lower())
    if arrow_type is not None:
        return arrow_type
    try:
        return parse_arrow_type(type_name)
    except ValueError:
        raise ValueError(
            f"Unsupported type name: {type_name}. "
            f"Supported types: {list(STRING_TO_ARROW_TYPE.keys())} "
            "or Arrow type notation"
        ) from None


def parse_arrow_type(text: str) -> pa.DataType:
    """Parse the string rendering of an Arrow type back into the type.

    Raises:
        ValueError: If the text is not Arrow type notation
    """
    text = text.strip()
    name = text.lower()
    if name in ARROW_TYPE_NAMES:
        return ARROW_TYPE_NAMES[name]

    match = _COMPOUND_TYPE.match(text)
    if match is None or _CLOSING[match.group(2)] != match.group(4):
        raise ValueError(f"Not an Arrow type: {text}")
    name, args = match.group(1).lower(), match.group(3)

    if name in ("decimal128", "decimal256"):
        precision, scale = _split_args(args)
        factory = pa.decimal128 if name == "decimal128" else pa.decimal256
        return factory(int(precision), int(scale))
    if name == "timestamp":
        unit, *rest = _split_args(args)
        tz = None
        for part in rest:
            key, _, value = part.partition("=")
            if key.strip() == "tz":
                tz = value.strip()
        return pa.timestamp(unit.strip(), tz=tz)
    if name in ("date32", "date64"):
        return getattr(pa, name)()
    if name in ("time32", "time64", "duration"):
        return getattr(pa, name)(args.strip())
    if name == "fixed_size_binary":
        return pa.binary(int(args))
    if name in ("list", "large_list"):
        factory = pa.list_ if name == "list" else pa.large_list
        return factory(_parse_field(args))
    if name == "struct":
        return pa.struct([_parse_field(part) for part in _split_args(args)])
    if name == "map":
        key_type, item_type = _split_args(args)
        return pa.map_(parse_arrow_type(key_type), parse_arrow_type(item_type))
    raise ValueError(f"Not an Arrow type: {text}")


def _parse_field(text: str) -> pa.Field:
    """Parse ``name: type`` with an optional ``not null`` suffix."""
    name, sep, type_text = text.partition(":")
    if not sep:
        raise ValueError(f"Not an Arrow field: {text}")
    type_text = type_text.strip()
    nullable = not type_text.endswith(" not null")
    if not nullable:
        type_text = type_text[: -len(" not null")]
    return pa.field(name.strip(), parse_arrow_type(type_text), nullable=nullable)


def _split_args(text: str) -> list[str]:
    """Split on commas outside of brackets."""
    parts, depth, start = [], 0, 0
    for i, char in enumerate(text):
        if char in "(<[":
            depth += 1
        elif char in ")>]":
            depth -= 1
        elif char == "," and depth == 0:
            parts.append(text[start:i])
            start = i + 1
    parts.append(text[start:])
    return [part.strip() for part in parts]


def arrow_type_to_string(arrow_type: pa.DataType) -> str:
    """Convert Arrow type to canonical string name.

    Types without a short name fall back to Arrow's own rendering
    (e.g. ``struct<id: int64>``).
    """
    for name in CANONICAL_NAMES:
        if arrow_type.equals(STRING_TO_ARROW_TYPE[name]):
            return name
    return str(arrow_type)


def to_arrow_type(value: TypeLike) -> pa.DataType:
    """Accept either an Arrow type or a type name."""
    if isinstance(value, pa.DataType):
        return value
    if isinstance(value, str):
        return string_to_arrow_type(value)
    raise TypeError(f"Expected a pyarrow DataType or type name, got {type(value).__name__}")


def base_type_name(connector_type: str) -> str:
    """Strip length/precision arguments: ``VARCHAR(255)`` -> ``VARCHAR``."""
    return connector_type.split("(", 1)[0].strip().upper()


def decimal_type(connector_type: str) -> pa.DataType:
    """Map ``DECIMAL(p,s)``/``NUMERIC(p,s)`` to an Arrow decimal.

    Without precision arguments the value is treated as a double.
    """
    if "(" not in connector_type:
        return pa.float64()
    args = connector_type.split("(", 1)[1].rstrip(") ").split(",")
    precision = int(args[0])
    scale = int(args[1]) if len(args) > 1 else 0
    return pa.decimal128(precision, scale)


class TypeMapper(Protocol):
    """Protocol for adapter-specific type mapping.

    Adapters implement this protocol to map the type names their data
    sources report onto Arrow types.
    """

    def connector_type_to_arrow(self, connector_type: str) -> pa.DataType:
        """Map adapter-specific type to Arrow type.

        Args:
            connector_type: Adapter-specific type string

        Returns:
            PyArrow DataType
        """
        ...
