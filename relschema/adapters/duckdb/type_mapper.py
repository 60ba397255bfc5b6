"""Type mapper for DuckDB adapter."""

import pyarrow as pa

from relschema.core.type_mapping import base_type_name, decimal_type


class DuckDBTypeMapper:
    """Type mapper for DuckDB adapter.

    Maps the type names DuckDB reports in ``information_schema.columns``
    to Arrow types.
    """

    def connector_type_to_arrow(self, connector_type: str) -> pa.DataType:
        """Map DuckDB type to Arrow type.

        Args:
            connector_type: DuckDB type string (e.g., "VARCHAR", "DECIMAL(18,3)")

        Returns:
            PyArrow DataType
        """
        duckdb_type_upper = base_type_name(connector_type)

        if duckdb_type_upper in ("VARCHAR", "TEXT", "CHAR", "STRING", "UUID"):
            return pa.string()
        elif duckdb_type_upper in ("BIGINT", "INT8", "LONG"):
            return pa.int64()
        elif duckdb_type_upper in ("INTEGER", "INT", "INT4", "SIGNED"):
            return pa.int32()
        elif duckdb_type_upper in ("SMALLINT", "INT2", "SHORT"):
            return pa.int16()
        elif duckdb_type_upper in ("DOUBLE", "FLOAT8"):
            return pa.float64()
        elif duckdb_type_upper in ("FLOAT", "FLOAT4", "REAL"):
            return pa.float32()
        elif duckdb_type_upper in ("DECIMAL", "NUMERIC"):
            return decimal_type(connector_type)
        elif duckdb_type_upper in ("BOOLEAN", "BOOL"):
            return pa.bool_()
        elif duckdb_type_upper.startswith("TIMESTAMP"):
            return pa.timestamp("us")
        elif duckdb_type_upper == "DATE":
            return pa.date32()
        elif duckdb_type_upper in ("BLOB", "BYTEA", "BINARY", "VARBINARY"):
            return pa.binary()
        else:
            # Default to string for unknown types
            return pa.string()
