"""Attribute models for relation schemas.

An attribute pairs a name with a PyArrow data type and a set of metadata
tags. Attributes are immutable: tagging one (``with_meta``) always returns a
new value, so the same attribute can be shared between schemas safely.
"""

from __future__ import annotations

import json
from types import MappingProxyType
from typing import Any, Mapping, Optional

import pyarrow as pa
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from relschema.core.type_mapping import TypeLike, to_arrow_type

# Tags stored as fields on AttributeMeta; everything else lands in extras
KNOWN_TAGS = ("primary_key", "foreign_key", "relation", "nullable")


class AttributeMeta(BaseModel):
    """Metadata tags attached to an attribute.

    The tags schema queries depend on are typed fields. Adapter-specific
    tags are kept verbatim in ``extras``.
    """

    model_config = ConfigDict(frozen=True)

    primary_key: bool = Field(
        default=False, description="Whether the attribute is part of the primary key"
    )
    foreign_key: bool = Field(
        default=False, description="Whether the attribute references another relation"
    )
    relation: Optional[str] = Field(
        default=None, description="Referenced relation for foreign keys"
    )
    nullable: bool = Field(
        default=True, description="Whether the attribute allows null values"
    )
    extras: Mapping[str, Any] = Field(
        default_factory=dict,
        validate_default=True,
        description="Adapter-specific tags",
    )

    @field_validator("extras", mode="after")
    @classmethod
    def freeze_extras(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return MappingProxyType(dict(value))

    @model_validator(mode="after")
    def validate_relation(self):
        """A foreign key must name the relation it references."""
        if self.foreign_key and not self.relation:
            raise ValueError("relation is required when foreign_key is set")
        return self

    def get(self, key: str, default: Any = None) -> Any:
        if key in KNOWN_TAGS:
            return getattr(self, key)
        return self.extras.get(key, default)

    def __getitem__(self, key: str) -> Any:
        if key in KNOWN_TAGS:
            return getattr(self, key)
        return self.extras[key]

    def merge(self, **tags: Any) -> "AttributeMeta":
        """Return new metadata with ``tags`` applied on top of this one."""
        known = {key: value for key, value in tags.items() if key in KNOWN_TAGS}
        extras = {key: value for key, value in tags.items() if key not in KNOWN_TAGS}
        fields = {key: getattr(self, key) for key in KNOWN_TAGS}
        fields.update(known)
        return AttributeMeta(**fields, extras={**self.extras, **extras})

    def to_dict(self) -> dict[str, Any]:
        """Flatten known tags and extras into one mapping."""
        data = {key: getattr(self, key) for key in KNOWN_TAGS}
        data.update(self.extras)
        return data


class Attribute(BaseModel):
    """A typed attribute of a relation schema."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: Optional[str] = Field(default=None, description="Attribute name")
    type: pa.DataType = Field(description="Attribute value type")
    meta: AttributeMeta = Field(
        default_factory=AttributeMeta, description="Attribute metadata tags"
    )

    @field_validator("type", mode="before")
    @classmethod
    def coerce_type(cls, value: Any) -> pa.DataType:
        try:
            return to_arrow_type(value)
        except TypeError as e:
            raise ValueError(str(e)) from e

    def with_meta(self, **tags: Any) -> "Attribute":
        """Return a copy tagged with ``tags``.

        ``name`` is accepted as a tag and names the copy; every other tag
        goes to the metadata.
        """
        name = tags.pop("name", self.name)
        meta = self.meta.merge(**tags) if tags else self.meta
        return Attribute(name=name, type=self.type, meta=meta)

    def to_arrow_field(self) -> pa.Field:
        """Convert to a PyArrow field, carrying tags as field metadata."""
        metadata: dict[str, str] = {}
        if self.meta.primary_key:
            metadata["primary_key"] = "true"
        if self.meta.foreign_key:
            metadata["foreign_key"] = "true"
            metadata["relation"] = self.meta.relation
        for key, value in self.meta.extras.items():
            metadata[key] = json.dumps(value, default=str)
        return pa.field(
            self.name, self.type, nullable=self.meta.nullable, metadata=metadata or None
        )

    @classmethod
    def from_arrow_field(cls, field: pa.Field, **tags: Any) -> "Attribute":
        """Create an attribute from a PyArrow field.

        Field metadata written by ``to_arrow_field`` (or by hand, using the
        same keys) is read back into tags. Extra ``tags`` are applied last.
        """
        meta: dict[str, Any] = {"nullable": field.nullable}
        for raw_key, raw_value in (field.metadata or {}).items():
            key = raw_key.decode() if isinstance(raw_key, bytes) else raw_key
            value = raw_value.decode() if isinstance(raw_value, bytes) else raw_value
            if key == "name":
                continue
            if key in ("primary_key", "foreign_key"):
                meta[key] = value.lower() == "true"
            elif key == "relation":
                meta[key] = value
            else:
                meta[key] = _decode_tag(value)
        meta.update(tags)
        return cls(name=field.name, type=field.type).with_meta(**meta)


def _decode_tag(value: str) -> Any:
    try:
        return json.loads(value)
    except ValueError:
        return value


def coerce_attribute(value: Attribute | TypeLike) -> Attribute:
    """Turn a type name, Arrow type or attribute into an attribute."""
    if isinstance(value, Attribute):
        return value
    return Attribute(type=value)


def foreign_key(relation: str, type: TypeLike = "int") -> Attribute:
    """Build an unnamed attribute referencing ``relation``.

    Example:
        s.attribute("user_id", foreign_key("users"))
    """
    return Attribute(type=type, meta=AttributeMeta(foreign_key=True, relation=relation))
