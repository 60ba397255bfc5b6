"""SQL (SQLAlchemy) adapter module."""

from relschema.adapters.sql.inferrer import SQLInferrer
from relschema.adapters.sql.type_mapper import SQLTypeMapper

__all__ = ["SQLInferrer", "SQLTypeMapper"]
