"""Core module for relschema package."""

from relschema.core.exceptions import (
    AdapterError,
    ConfigurationError,
    InferenceError,
    InvalidStateError,
    SchemaError,
    UnknownAttributeError,
)
from relschema.core.logging import configure_logging

__all__ = [
    "SchemaError",
    "ConfigurationError",
    "UnknownAttributeError",
    "InvalidStateError",
    "InferenceError",
    "AdapterError",
    "configure_logging",
]
