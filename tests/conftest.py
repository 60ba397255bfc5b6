"""Pytest configuration and shared fixtures."""

from typing import Any

import pyarrow as pa
import pytest

from relschema.adapters import Inferrer
from relschema.adapters import registry as adapter_registry
from relschema.schema import Attribute, Schema, SchemaDSL, foreign_key


class StaticInferrer(Inferrer):
    """Inferrer returning a fixed attribute set and recording its calls."""

    adapter = "static"

    def __init__(self, builder=None, attributes: dict[str, Any] | None = None):
        super().__init__(builder)
        self.attributes = attributes or {"email": "string"}
        self.calls: list[tuple[Any, Any]] = []

    def infer_attributes(self, dataset, gateway):
        self.calls.append((dataset, gateway))
        return {name: Attribute(type=t) for name, t in self.attributes.items()}


@pytest.fixture
def static_inferrer():
    """The StaticInferrer class, usable as an inferrer factory."""
    return StaticInferrer


@pytest.fixture
def users_schema() -> Schema:
    """A declared users schema with a primary key."""

    def users(s):
        s.attribute("id", "int")
        s.attribute("name", "string")
        s.attribute("email", "string")
        s.primary_key("id")

    return SchemaDSL("users", users).finalize()


@pytest.fixture
def tasks_schema() -> Schema:
    """A declared tasks schema referencing users."""

    def tasks(s):
        s.attribute("id", "int")
        s.attribute("user_id", foreign_key("users"))
        s.attribute("title", "string")
        s.attribute("priority", "int32")
        s.primary_key("id")

    return SchemaDSL("tasks", tasks).finalize()


@pytest.fixture
def arrow_gateway():
    """Mapping of dataset name to Arrow data."""
    users = pa.schema(
        [
            pa.field("id", pa.int64(), nullable=False, metadata={"primary_key": "true"}),
            pa.field("email", pa.string()),
            pa.field(
                "profile",
                pa.struct([pa.field("age", pa.int32()), pa.field("city", pa.string())]),
            ),
        ]
    )
    tasks = pa.table(
        {
            "id": pa.array([1, 2], pa.int64()),
            "title": pa.array(["be cool", "be nice"]),
        }
    )
    return {"users": users, "tasks": tasks}


@pytest.fixture
def isolated_registry():
    """Restore the adapter registry after the test."""
    saved = dict(adapter_registry._inferrer_registry)
    yield adapter_registry
    adapter_registry._inferrer_registry.clear()
    adapter_registry._inferrer_registry.update(saved)


@pytest.fixture
def duckdb_connection():
    """In-memory DuckDB database with users and orders tables."""
    duckdb = pytest.importorskip("duckdb")
    conn = duckdb.connect(":memory:")
    conn.execute(
        "CREATE TABLE users (id INTEGER PRIMARY KEY, email VARCHAR NOT NULL, age INTEGER)"
    )
    conn.execute(
        "CREATE TABLE orders ("
        "id BIGINT PRIMARY KEY, "
        "user_id INTEGER REFERENCES users(id), "
        "created_at TIMESTAMP)"
    )
    yield conn
    conn.close()


@pytest.fixture
def sqlite_engine():
    """In-memory SQLite engine with users and orders tables."""
    sqlalchemy = pytest.importorskip("sqlalchemy")
    engine = sqlalchemy.create_engine("sqlite://")
    with engine.begin() as conn:
        conn.execute(
            sqlalchemy.text(
                "CREATE TABLE users (id INTEGER PRIMARY KEY, email VARCHAR(255) NOT NULL)"
            )
        )
        conn.execute(
            sqlalchemy.text(
                "CREATE TABLE orders ("
                "id INTEGER PRIMARY KEY, "
                "user_id INTEGER REFERENCES users(id), "
                "total REAL)"
            )
        )
    yield engine
    engine.dispose()
