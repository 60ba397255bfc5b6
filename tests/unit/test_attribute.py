"""Tests for attribute models."""

import pyarrow as pa
import pytest
from pydantic import ValidationError

from relschema.schema import Attribute, AttributeMeta, coerce_attribute, foreign_key


class TestAttribute:
    """Tests for Attribute."""

    def test_type_name_is_coerced_to_arrow(self):
        """Test that type names resolve to Arrow types."""
        assert Attribute(type="int").type == pa.int64()
        assert Attribute(type="string").type == pa.string()
        assert Attribute(type=pa.date32()).type == pa.date32()

    def test_unknown_type_name_fails(self):
        """Test that unsupported type names are rejected."""
        with pytest.raises(ValidationError):
            Attribute(type="uuid-ish")

    def test_with_meta_returns_new_attribute(self):
        """Test that tagging never mutates the receiver."""
        base = Attribute(type="int")
        tagged = base.with_meta(name="id", primary_key=True, source="api")

        assert base.name is None
        assert base.meta.primary_key is False
        assert base.meta.extras == {}
        assert tagged.name == "id"
        assert tagged.meta.primary_key is True
        assert tagged.meta["source"] == "api"
        assert tagged.type == base.type

    def test_with_meta_keeps_existing_tags(self):
        """Test that later tags are merged over earlier ones."""
        attr = Attribute(type="int").with_meta(source="api").with_meta(primary_key=True)

        assert attr.meta.extras == {"source": "api"}
        assert attr.meta.primary_key is True

    def test_attribute_is_frozen(self):
        """Test that attributes cannot be reassigned."""
        attr = Attribute(name="id", type="int")
        with pytest.raises(ValidationError):
            attr.name = "other"

    def test_extras_are_read_only(self):
        """Test that adapter tags cannot be changed in place."""
        attr = Attribute(type="int").with_meta(source="api")
        with pytest.raises(TypeError):
            attr.meta.extras["source"] = "db"

    def test_equality_includes_metadata(self):
        """Test that attributes compare by name, type and tags."""
        a = Attribute(type="int").with_meta(name="id")
        b = Attribute(type="int").with_meta(name="id")
        c = b.with_meta(primary_key=True)

        assert a == b
        assert a != c

    def test_arrow_field_keeps_tags(self):
        """Test that tags survive conversion to and from Arrow fields."""
        attr = Attribute(type="int").with_meta(
            name="user_id",
            foreign_key=True,
            relation="users",
            nullable=False,
            source="api",
        )

        field = attr.to_arrow_field()
        assert field.name == "user_id"
        assert field.nullable is False
        assert Attribute.from_arrow_field(field) == attr


class TestAttributeMeta:
    """Tests for AttributeMeta."""

    def test_defaults(self):
        """Test default tag values."""
        meta = AttributeMeta()
        assert meta.primary_key is False
        assert meta.foreign_key is False
        assert meta.relation is None
        assert meta.nullable is True

    def test_foreign_key_requires_relation(self):
        """Test that foreign keys must name a relation."""
        with pytest.raises(ValidationError):
            AttributeMeta(foreign_key=True)

    def test_get_reads_known_tags_and_extras(self):
        """Test uniform access to fixed and adapter tags."""
        meta = AttributeMeta(primary_key=True, extras={"db_type": "BIGINT"})

        assert meta.get("primary_key") is True
        assert meta.get("db_type") == "BIGINT"
        assert meta.get("missing", "default") == "default"
        with pytest.raises(KeyError):
            meta["missing"]

    def test_to_dict_flattens(self):
        """Test that to_dict merges known tags and extras."""
        meta = AttributeMeta(extras={"inferred": True})
        assert meta.to_dict() == {
            "primary_key": False,
            "foreign_key": False,
            "relation": None,
            "nullable": True,
            "inferred": True,
        }


def test_foreign_key_helper():
    """Test that foreign_key builds an unnamed referencing attribute."""
    attr = foreign_key("users")

    assert attr.name is None
    assert attr.type == pa.int64()
    assert attr.meta.foreign_key is True
    assert attr.meta.relation == "users"
    assert foreign_key("users", "string").type == pa.string()


def test_coerce_attribute_passes_attributes_through():
    """Test that coerce_attribute accepts attributes, types and names."""
    attr = Attribute(type="int")

    assert coerce_attribute(attr) is attr
    assert coerce_attribute("int") == attr
    assert coerce_attribute(pa.int64()) == attr
