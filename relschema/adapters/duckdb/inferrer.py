"""DuckDB inferrer: attributes from a table's catalog entries."""

from __future__ import annotations

import re
from typing import Any, Optional

try:
    import duckdb
except ImportError:
    duckdb = None  # type: ignore

from relschema.adapters.base import Inferrer
from relschema.adapters.registry import register_inferrer
from relschema.core.exceptions import InferenceError
from relschema.schema.attribute import Attribute

from .type_mapper import DuckDBTypeMapper

COLUMNS_QUERY = """
    SELECT column_name, data_type, is_nullable, column_default
    FROM information_schema.columns
    WHERE table_schema = ? AND table_name = ?
    ORDER BY ordinal_position
"""

CONSTRAINTS_QUERY = """
    SELECT constraint_type, constraint_column_names, constraint_text
    FROM duckdb_constraints()
    WHERE schema_name = ? AND table_name = ?
      AND constraint_type IN ('PRIMARY KEY', 'FOREIGN KEY')
"""

# REFERENCES users(id) / REFERENCES "app"."users" (id)
REFERENCES_PATTERN = re.compile(
    r'REFERENCES\s+(?:"?\w+"?\.)?"?(\w+)"?', re.IGNORECASE
)


@register_inferrer("duckdb")
class DuckDBInferrer(Inferrer):
    """Infers attributes from a DuckDB table.

    The gateway is a DuckDB connection. Columns come from
    ``information_schema.columns`` in ordinal order; primary and foreign
    keys from ``duckdb_constraints()``.
    """

    adapter = "duckdb"

    def __init__(self, builder: Optional[Any] = None, db_schema: str = "main") -> None:
        """Initialize DuckDBInferrer.

        Raises:
            ImportError: If duckdb is not installed (install with: pip install relschema[duckdb])
        """
        if duckdb is None:
            raise ImportError(
                "DuckDBInferrer requires duckdb. "
                "Install it with: pip install relschema[duckdb]"
            )
        super().__init__(builder, db_schema=db_schema)
        self.db_schema = db_schema
        self._type_mapper = DuckDBTypeMapper()

    def infer_attributes(self, dataset: str, gateway: Any) -> dict[str, Attribute]:
        rows = gateway.execute(COLUMNS_QUERY, [self.db_schema, dataset]).fetchall()
        if not rows:
            raise InferenceError(
                f"Table does not exist or has no columns: '{dataset}'",
                context={"adapter": self.adapter, "schema": self.db_schema},
            )

        attributes: dict[str, Attribute] = {}
        for column_name, data_type, is_nullable, column_default in rows:
            tags: dict[str, Any] = {
                "nullable": is_nullable == "YES",
                "db_type": data_type,
            }
            if column_default is not None:
                tags["default"] = column_default
            attributes[column_name] = Attribute(
                name=column_name,
                type=self._type_mapper.connector_type_to_arrow(data_type),
            ).with_meta(**tags)

        constraints = gateway.execute(
            CONSTRAINTS_QUERY, [self.db_schema, dataset]
        ).fetchall()
        for constraint_type, column_names, constraint_text in constraints:
            if constraint_type == "PRIMARY KEY":
                tags = {"primary_key": True}
            else:
                match = REFERENCES_PATTERN.search(constraint_text or "")
                if match is None:
                    continue
                tags = {"foreign_key": True, "relation": match.group(1)}
            for column_name in column_names:
                if column_name in attributes:
                    attributes[column_name] = attributes[column_name].with_meta(**tags)

        return attributes
