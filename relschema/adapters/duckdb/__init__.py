"""DuckDB adapter module."""

from relschema.adapters.duckdb.inferrer import DuckDBInferrer
from relschema.adapters.duckdb.type_mapper import DuckDBTypeMapper

__all__ = ["DuckDBInferrer", "DuckDBTypeMapper"]
