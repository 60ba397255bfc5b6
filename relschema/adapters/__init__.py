"""Adapter inferrers and their registry.

This module exposes:
- Inferrer: base class for adapter inferrers
- Registry functions: register_inferrer, get_inferrer, list_inferrer_types
- Built-in inferrers: ArrowInferrer, DuckDBInferrer, SQLInferrer
"""

from relschema.adapters.base import Inferrer

# Registry must be imported first (adapter modules use decorators on import)
from relschema.adapters.registry import (
    clear_registries,
    get_inferrer,
    list_inferrer_types,
    register_inferrer,
)

# Adapter modules register themselves via @register_inferrer decorator on import
from relschema.adapters.arrow.inferrer import ArrowInferrer
from relschema.adapters.duckdb.inferrer import DuckDBInferrer
from relschema.adapters.sql.inferrer import SQLInferrer


def reregister_builtins() -> None:
    """Re-register built-in inferrers after the registry is cleared.

    This is intended for tests that call clear_registries() but need
    the built-in adapters available afterwards.
    """
    current = list_inferrer_types()
    if "arrow" not in current:
        register_inferrer("arrow", ArrowInferrer)
    if "duckdb" not in current:
        register_inferrer("duckdb", DuckDBInferrer)
    if "sql" not in current:
        register_inferrer("sql", SQLInferrer)


__all__ = [
    "Inferrer",
    "register_inferrer",
    "reregister_builtins",
    "get_inferrer",
    "list_inferrer_types",
    "clear_registries",
    "ArrowInferrer",
    "DuckDBInferrer",
    "SQLInferrer",
]
