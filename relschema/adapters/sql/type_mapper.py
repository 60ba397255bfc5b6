"""Type mapper for SQLAlchemy-reflected databases."""

import pyarrow as pa

from relschema.core.type_mapping import base_type_name, decimal_type


class SQLTypeMapper:
    """Type mapper for SQL databases reflected through SQLAlchemy.

    Understands the type names PostgreSQL, SQLite and MySQL report; unknown
    types map to strings.
    """

    def connector_type_to_arrow(self, connector_type: str) -> pa.DataType:
        """Map SQL type to Arrow type.

        Args:
            connector_type: SQL type string (e.g., "VARCHAR(255)", "BIGINT")

        Returns:
            PyArrow DataType
        """
        sql_type_upper = base_type_name(connector_type)

        if sql_type_upper in (
            "VARCHAR",
            "TEXT",
            "CHAR",
            "CHARACTER VARYING",
            "NVARCHAR",
            "UUID",
        ):
            return pa.string()
        elif sql_type_upper in ("BIGINT", "INT8", "BIGSERIAL"):
            return pa.int64()
        elif sql_type_upper in ("INTEGER", "INT", "INT4", "SERIAL"):
            return pa.int32()
        elif sql_type_upper in ("SMALLINT", "INT2"):
            return pa.int16()
        elif sql_type_upper in ("DOUBLE PRECISION", "DOUBLE", "FLOAT8", "FLOAT"):
            return pa.float64()
        elif sql_type_upper in ("REAL", "FLOAT4"):
            return pa.float32()
        elif sql_type_upper in ("NUMERIC", "DECIMAL"):
            return decimal_type(connector_type)
        elif sql_type_upper in ("BOOLEAN", "BOOL"):
            return pa.bool_()
        elif sql_type_upper.startswith("TIMESTAMP") or sql_type_upper == "DATETIME":
            return pa.timestamp("us")
        elif sql_type_upper == "DATE":
            return pa.date32()
        elif sql_type_upper in ("BLOB", "BYTEA", "BINARY", "VARBINARY"):
            return pa.binary()
        else:
            # Default to string for unknown types
            return pa.string()
