"""Configuration models and schema file loading."""

from relschema.models.loader import dump_schema, load_schema_config, load_schemas
from relschema.models.schema_config import (
    AttributeConfig,
    SchemaConfig,
    SchemaFileConfig,
)

__all__ = [
    "AttributeConfig",
    "SchemaConfig",
    "SchemaFileConfig",
    "dump_schema",
    "load_schema_config",
    "load_schemas",
]
