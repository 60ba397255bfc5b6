"""Inferrer registry for managing adapter inferrers.

This module provides a registry pattern for inferrer implementations,
allowing adapters to register themselves and schemas to look them up by
name (e.g. from a schema file).
"""

from __future__ import annotations

import functools
from typing import Any, Callable, overload

from relschema.core.exceptions import AdapterError
from relschema.schema.dsl import InferrerFactory

# Global registry
_inferrer_registry: dict[str, InferrerFactory] = {}


@overload
def register_inferrer(adapter: str) -> Callable[[InferrerFactory], InferrerFactory]: ...


@overload
def register_inferrer(adapter: str, factory: InferrerFactory) -> None: ...


def register_inferrer(
    adapter: str,
    factory: InferrerFactory | None = None,
) -> Callable[[InferrerFactory], InferrerFactory] | None:
    """Register an inferrer factory.

    Can be used as a decorator or called directly:

        # As decorator
        @register_inferrer("duckdb")
        class DuckDBInferrer(Inferrer):
            ...

        # Direct call
        register_inferrer("duckdb", DuckDBInferrer)

    Args:
        adapter: Unique identifier for the adapter (e.g., 'duckdb', 'sql').
        factory: Inferrer class or factory (optional if used as decorator).

    Raises:
        AdapterError: If an inferrer with the same name is already registered.
    """

    def _register(f: InferrerFactory) -> InferrerFactory:
        if adapter in _inferrer_registry:
            raise AdapterError(
                f"Inferrer '{adapter}' is already registered",
                context={"adapter": adapter},
            )
        _inferrer_registry[adapter] = f
        return f

    if factory is not None:
        _register(factory)
        return None

    return _register


def get_inferrer(adapter: str, **options: Any) -> InferrerFactory:
    """Return the factory registered for ``adapter`` with ``options`` bound.

    Raises:
        AdapterError: If the adapter is not registered.
    """
    factory = _inferrer_registry.get(adapter)
    if factory is None:
        available = ", ".join(sorted(_inferrer_registry.keys())) or "(none)"
        raise AdapterError(
            f"Unknown adapter: '{adapter}'",
            context={"adapter": adapter, "available_adapters": available},
        )
    if options:
        return functools.partial(factory, **options)
    return factory


def list_inferrer_types() -> list[str]:
    """Return a list of all registered adapters."""
    return sorted(_inferrer_registry.keys())


def clear_registries() -> None:
    """Clear all registered inferrers. Intended for testing only."""
    _inferrer_registry.clear()
