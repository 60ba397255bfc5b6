"""SQL inferrer: attributes from SQLAlchemy database reflection."""

from __future__ import annotations

from typing import Any, Optional

try:
    from sqlalchemy import inspect
except ImportError:
    inspect = None  # type: ignore

from relschema.adapters.base import Inferrer
from relschema.adapters.registry import register_inferrer
from relschema.schema.attribute import Attribute

from .type_mapper import SQLTypeMapper


@register_inferrer("sql")
class SQLInferrer(Inferrer):
    """Infers attributes from a table through SQLAlchemy's inspector.

    The gateway is a SQLAlchemy engine or connection, so any dialect
    SQLAlchemy can reflect (PostgreSQL, MySQL, SQLite, ...) is supported.
    Reflection errors such as ``NoSuchTableError`` propagate unchanged.
    """

    adapter = "sql"

    def __init__(
        self, builder: Optional[Any] = None, db_schema: Optional[str] = None
    ) -> None:
        """Initialize SQLInferrer.

        Raises:
            ImportError: If sqlalchemy is not installed (install with: pip install relschema[sql])
        """
        if inspect is None:
            raise ImportError(
                "SQLInferrer requires sqlalchemy. "
                "Install it with: pip install relschema[sql]"
            )
        super().__init__(builder, db_schema=db_schema)
        self.db_schema = db_schema
        self._type_mapper = SQLTypeMapper()

    def infer_attributes(self, dataset: str, gateway: Any) -> dict[str, Attribute]:
        inspector = inspect(gateway)
        columns = inspector.get_columns(dataset, schema=self.db_schema)
        primary_key = inspector.get_pk_constraint(dataset, schema=self.db_schema)
        foreign_keys = inspector.get_foreign_keys(dataset, schema=self.db_schema)

        attributes: dict[str, Attribute] = {}
        for column in columns:
            db_type = str(column["type"])
            tags: dict[str, Any] = {
                "nullable": bool(column.get("nullable", True)),
                "db_type": db_type,
            }
            if column.get("default") is not None:
                tags["default"] = str(column["default"])
            if column.get("comment"):
                tags["comment"] = column["comment"]
            attributes[column["name"]] = Attribute(
                name=column["name"],
                type=self._type_mapper.connector_type_to_arrow(db_type),
            ).with_meta(**tags)

        for name in primary_key.get("constrained_columns") or []:
            attributes[name] = attributes[name].with_meta(primary_key=True)

        for foreign_key in foreign_keys:
            relation = foreign_key["referred_table"]
            referred = foreign_key.get("referred_columns") or []
            for index, name in enumerate(foreign_key["constrained_columns"]):
                tags = {"foreign_key": True, "relation": relation}
                if index < len(referred):
                    tags["references"] = f"{relation}.{referred[index]}"
                attributes[name] = attributes[name].with_meta(**tags)

        return attributes
