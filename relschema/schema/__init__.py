"""Schema package: attributes, the declaration DSL and schemas."""

from relschema.schema.attribute import (
    Attribute,
    AttributeMeta,
    coerce_attribute,
    foreign_key,
)
from relschema.schema.dsl import SchemaDSL
from relschema.schema.schema import Schema, SchemaState

__all__ = [
    "Attribute",
    "AttributeMeta",
    "Schema",
    "SchemaDSL",
    "SchemaState",
    "coerce_attribute",
    "foreign_key",
]
