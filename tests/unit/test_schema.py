"""Tests for Schema queries, equality and freezing."""

import pyarrow as pa
import pytest

from relschema.core.exceptions import (
    ConfigurationError,
    InvalidStateError,
    UnknownAttributeError,
)
from relschema.schema import Attribute, Schema, SchemaDSL, SchemaState, foreign_key


def _declare(s):
    s.attribute("id", "int")
    s.attribute("email", "string")


class TestSchemaQueries:
    """Tests for the read API of finalized schemas."""

    def test_iteration_in_declaration_order(self, users_schema):
        """Test that iteration follows declaration order and restarts."""
        names = [a.name for a in users_schema]

        assert names == ["id", "name", "email"]
        assert [a.name for a in users_schema] == names
        assert len(users_schema) == 3

    def test_lookup_returns_declared_type(self, users_schema):
        """Test that lookup returns the declared, name-tagged attribute."""
        email = users_schema.lookup("email")

        assert email.name == "email"
        assert email.type == pa.string()
        assert users_schema["email"] == email
        assert "email" in users_schema
        assert "missing" not in users_schema

    def test_lookup_unknown_attribute_fails(self, users_schema):
        """Test that unknown names raise instead of returning None."""
        with pytest.raises(UnknownAttributeError) as exc_info:
            users_schema.lookup("missing")

        assert exc_info.value.context == {"dataset": "users"}
        with pytest.raises(KeyError):
            users_schema["missing"]

    def test_lookup_roundtrip_matches_iteration(self, tasks_schema):
        """Test that re-looking up iterated attributes yields equal values."""
        for attribute in tasks_schema:
            assert tasks_schema.lookup(attribute.name) == attribute

    def test_primary_key(self, users_schema):
        """Test that primary_key returns tagged attributes."""
        (pk,) = users_schema.primary_key()

        assert pk.name == "id"
        assert pk.type == pa.int64()
        assert pk.meta.primary_key is True

    def test_primary_key_empty(self):
        """Test that a schema without keys returns an empty list."""
        schema = SchemaDSL("logs", _declare).finalize()
        assert schema.primary_key() == []

    def test_foreign_key(self, tasks_schema):
        """Test that foreign_key finds the referencing attribute."""
        fk = tasks_schema.foreign_key("users")

        assert fk is not None
        assert fk.name == "user_id"
        assert fk.meta.relation == "users"

    def test_foreign_key_none_found(self, tasks_schema, users_schema):
        """Test that foreign_key returns None without a match."""
        assert tasks_schema.foreign_key("projects") is None
        assert users_schema.foreign_key("users") is None

    def test_foreign_key_first_match_wins(self):
        """Test that the first matching attribute is returned."""

        def block(s):
            s.attribute("author_id", foreign_key("users"))
            s.attribute("editor_id", foreign_key("users"))

        schema = SchemaDSL("posts", block).finalize()
        assert schema.foreign_key("users").name == "author_id"

    def test_is_defined(self, users_schema, static_inferrer):
        """Test that is_defined separates finalized and pending schemas."""
        assert users_schema.is_defined() is True
        assert SchemaDSL("users", inferrer=static_inferrer).finalize().is_defined() is False


class TestSchemaConstruction:
    """Tests for constructing schemas directly."""

    def test_attributes_are_normalized(self):
        """Test that plain types are wrapped and named after their keys."""
        schema = Schema("users", {"id": "int", "email": Attribute(type="string")})

        assert schema.lookup("id") == Attribute(name="id", type="int")
        assert schema.lookup("email").name == "email"
        assert schema.state is SchemaState.FINALIZED

    def test_attributes_or_inferrer_required(self):
        """Test that a schema with no way to get attributes is rejected."""
        with pytest.raises(ConfigurationError):
            Schema("users")

    def test_empty_attributes_are_defined(self):
        """Test that an empty mapping still counts as defined."""
        schema = Schema("empty", {})

        assert schema.is_defined()
        assert list(schema) == []

    def test_source_mapping_is_not_shared(self):
        """Test that later changes to the input mapping are not visible."""
        attributes = {"id": "int"}
        schema = Schema("users", attributes)
        attributes["email"] = "string"

        assert schema.attribute_names() == ["id"]


class TestSchemaFreezing:
    """Tests for immutability of finalized schemas."""

    def test_finalized_schema_rejects_assignment(self, users_schema):
        """Test that dataset and attributes cannot be reassigned."""
        with pytest.raises(InvalidStateError):
            users_schema.dataset = "people"
        with pytest.raises(InvalidStateError):
            users_schema.attributes = {}
        with pytest.raises(InvalidStateError):
            del users_schema.inferrer

    def test_attribute_mapping_is_read_only(self, users_schema):
        """Test that the attribute mapping cannot be changed in place."""
        with pytest.raises(TypeError):
            users_schema.attributes["extra"] = Attribute(type="int")

    def test_pending_schema_rejects_reads(self, static_inferrer):
        """Test that reads before inference fail loudly."""
        schema = SchemaDSL("users", inferrer=static_inferrer).finalize()

        with pytest.raises(InvalidStateError):
            schema.lookup("email")
        with pytest.raises(InvalidStateError):
            iter(schema)
        with pytest.raises(InvalidStateError):
            schema.primary_key()
        with pytest.raises(InvalidStateError):
            schema.foreign_key("users")


class TestSchemaEquality:
    """Tests for the equality contract."""

    def test_identical_declarations_are_equal(self):
        """Test that same dataset and declarations give equal schemas."""
        a = SchemaDSL("users", _declare).finalize()
        b = SchemaDSL("users", _declare).finalize()

        assert a == b
        assert hash(a) == hash(b)
        assert len({a, b}) == 1

    def test_pending_schema_is_unhashable(self, static_inferrer):
        """Test that only finalized schemas can be used as keys."""
        schema = SchemaDSL("users", inferrer=static_inferrer).finalize()

        with pytest.raises(InvalidStateError):
            hash(schema)

        schema.infer({})
        assert {schema: "users"}[schema] == "users"

    def test_changed_type_breaks_equality(self):
        """Test that a different attribute type breaks equality."""

        def other(s):
            s.attribute("id", "string")
            s.attribute("email", "string")

        assert SchemaDSL("users", _declare).finalize() != SchemaDSL("users", other).finalize()

    def test_changed_metadata_breaks_equality(self):
        """Test that metadata is part of equality."""

        def keyed(s):
            _declare(s)
            s.primary_key("id")

        assert SchemaDSL("users", _declare).finalize() != SchemaDSL("users", keyed).finalize()

    def test_changed_dataset_breaks_equality(self):
        """Test that the dataset is part of equality."""
        assert SchemaDSL("users", _declare).finalize() != SchemaDSL("people", _declare).finalize()

    def test_inferrer_is_part_of_equality(self, static_inferrer):
        """Test that schemas with and without an inferrer differ."""
        plain = SchemaDSL("users", _declare).finalize()
        inferring = SchemaDSL("users", _declare, inferrer=static_inferrer).finalize()

        assert plain != inferring

    def test_not_equal_to_other_types(self, users_schema):
        """Test comparison with unrelated objects."""
        assert users_schema != {"dataset": "users"}


class TestArrowConversion:
    """Tests for Arrow schema conversion."""

    def test_to_arrow_schema(self, tasks_schema):
        """Test that attributes become Arrow fields with tag metadata."""
        arrow_schema = tasks_schema.to_arrow_schema()

        assert arrow_schema.names == ["id", "user_id", "title", "priority"]
        assert arrow_schema.field("priority").type == pa.int32()
        assert arrow_schema.field("id").metadata == {b"primary_key": b"true"}
        assert arrow_schema.field("user_id").metadata[b"relation"] == b"users"

    def test_from_arrow_schema_restores_schema(self, tasks_schema):
        """Test that converting back yields an equal schema."""
        restored = Schema.from_arrow_schema(tasks_schema.to_arrow_schema(), dataset="tasks")
        assert restored == tasks_schema
