"""Schema configuration models for schema files."""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from relschema.adapters.registry import get_inferrer
from relschema.core.type_mapping import to_arrow_type
from relschema.schema import Attribute, Schema, SchemaDSL


class AttributeConfig(BaseModel):
    name: str
    type: str
    primary_key: bool = False
    foreign_key: bool = False
    relation: Optional[str] = None
    nullable: bool = True
    metadata: dict[str, Any] = Field(default_factory=dict)

    @field_validator("type")
    @classmethod
    def validate_type(cls, value: str) -> str:
        """Reject type names that do not map to an Arrow type."""
        to_arrow_type(value)
        return value

    @model_validator(mode="after")
    def validate_relation(self):
        """Foreign keys must name the relation they reference."""
        if self.foreign_key and not self.relation:
            raise ValueError(
                f"attribute '{self.name}': relation is required for foreign keys"
            )
        return self

    def to_attribute(self) -> Attribute:
        tags: dict[str, Any] = {"nullable": self.nullable, **self.metadata}
        if self.foreign_key:
            tags.update(foreign_key=True, relation=self.relation)
        return Attribute(type=self.type).with_meta(**tags)


class SchemaConfig(BaseModel):
    """Declaration of one dataset's schema.

    Either ``attributes`` or ``adapter`` must be set. With an adapter and no
    attributes the schema is left pending until inferred.
    """

    dataset: str = Field(description="Dataset (table/collection) name")
    adapter: Optional[str] = Field(
        default=None, description="Registered inferrer used for inference"
    )
    options: dict[str, Any] = Field(
        default_factory=dict, description="Options passed to the inferrer"
    )
    attributes: List[AttributeConfig] = Field(default_factory=list)
    primary_key: List[str] = Field(
        default_factory=list, description="Primary key attribute names"
    )

    @model_validator(mode="after")
    def validate_source(self):
        """Require declared attributes or an adapter to infer them."""
        if not self.attributes and self.adapter is None:
            raise ValueError(
                f"schema '{self.dataset}' needs attributes or an adapter"
            )
        return self

    def to_schema(self) -> Schema:
        inferrer = get_inferrer(self.adapter, **self.options) if self.adapter else None
        block = self._declare if self.attributes else None
        return SchemaDSL(self.dataset, block, inferrer=inferrer).finalize()

    def _declare(self, s: SchemaDSL) -> None:
        for attribute in self.attributes:
            s.attribute(attribute.name, attribute.to_attribute())
        pk = self.primary_key or [a.name for a in self.attributes if a.primary_key]
        if pk:
            s.primary_key(*pk)


class SchemaFileConfig(BaseModel):
    """Top-level structure of a schema file."""

    schemas: List[SchemaConfig] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_unique_datasets(self):
        """Dataset names must be unique within a file."""
        seen = set()
        for schema in self.schemas:
            if schema.dataset in seen:
                raise ValueError(f"duplicate schema for dataset '{schema.dataset}'")
            seen.add(schema.dataset)
        return self


__all__ = ["AttributeConfig", "SchemaConfig", "SchemaFileConfig"]
