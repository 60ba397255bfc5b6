"""relschema - Relation schema descriptors.

Typed, immutable-after-finalization descriptions of a data source's
attributes, declared through a builder or inferred from a live source.
"""

__version__ = "0.1.0"

# Registers the built-in adapters
from relschema import adapters  # noqa: F401

# Public API
from relschema.api import define_schema, from_yaml, infer_schema

# Exceptions
from relschema.core.exceptions import (
    AdapterError,
    ConfigurationError,
    InferenceError,
    InvalidStateError,
    SchemaError,
    UnknownAttributeError,
)

# Core classes
from relschema.schema import (
    Attribute,
    AttributeMeta,
    Schema,
    SchemaDSL,
    SchemaState,
    foreign_key,
)

__all__ = [
    # Version
    "__version__",
    # Public API
    "define_schema",
    "from_yaml",
    "infer_schema",
    # Core classes
    "Attribute",
    "AttributeMeta",
    "Schema",
    "SchemaDSL",
    "SchemaState",
    "foreign_key",
    # Exceptions
    "SchemaError",
    "ConfigurationError",
    "UnknownAttributeError",
    "InvalidStateError",
    "InferenceError",
    "AdapterError",
]
