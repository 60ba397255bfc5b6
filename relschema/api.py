"""Public Python API for relschema package.

This module provides the main entry points for declaring, loading and
inferring relation schemas.
"""

import functools
from typing import Any, Callable, Dict, Optional, Union

from relschema.adapters.registry import get_inferrer
from relschema.models.loader import load_schemas
from relschema.schema import Schema, SchemaDSL
from relschema.schema.dsl import DeclarationBlock, InferrerFactory


def define_schema(
    dataset: Any,
    block: Optional[DeclarationBlock] = None,
    *,
    inferrer: Optional[InferrerFactory] = None,
) -> Union[Schema, Callable[[DeclarationBlock], Schema]]:
    """Declare a schema for ``dataset``.

    Called with a block (or an inferrer), returns the schema. Called with
    neither, returns a decorator that turns the decorated function into the
    declaration block:

        >>> @define_schema("users")
        ... def users(s):
        ...     s.attribute("id", "int")
        ...     s.primary_key("id")
        >>> users.primary_key()[0].name
        'id'

    Raises:
        ConfigurationError: See ``SchemaDSL``.
        UnknownAttributeError: If the block marks an undeclared primary key.
    """
    if block is None and inferrer is None:

        def decorator(func: DeclarationBlock) -> Schema:
            return SchemaDSL(dataset, func).finalize()

        return decorator

    return SchemaDSL(dataset, block, inferrer=inferrer).finalize()


def from_yaml(path: str) -> Dict[str, Schema]:
    """Load schemas from a YAML schema file.

    Args:
        path: Path to schema YAML file

    Returns:
        Schemas keyed by dataset, in file order

    Raises:
        ConfigurationError: If the file is missing, invalid, or a schema
            cannot be built

    Example:
        >>> schemas = from_yaml("examples/schemas/shop.yaml")
        >>> schemas["orders"].foreign_key("users").name
        'user_id'
    """
    return load_schemas(path)


def infer_schema(
    dataset: Any,
    gateway: Any,
    inferrer: Union[str, InferrerFactory],
    **options: Any,
) -> Schema:
    """Infer a finalized schema for ``dataset`` in one step.

    Args:
        dataset: Dataset to infer
        gateway: Data source handle passed to the inferrer
        inferrer: Registered adapter name (e.g. "duckdb") or inferrer factory
        **options: Inferrer options, bound before the schema is built

    Returns:
        Finalized Schema

    Raises:
        AdapterError: If ``inferrer`` names an unregistered adapter
    """
    if isinstance(inferrer, str):
        factory = get_inferrer(inferrer, **options)
    elif options:
        factory = functools.partial(inferrer, **options)
    else:
        factory = inferrer
    schema = SchemaDSL(dataset, inferrer=factory).finalize()
    return schema.infer(gateway)
