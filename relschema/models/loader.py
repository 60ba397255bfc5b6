"""Schema file loader with YAML parsing."""

import logging
from pathlib import Path
from typing import Any, Dict

import yaml
from pydantic import ValidationError

from relschema.core.exceptions import ConfigurationError, SchemaError
from relschema.core.type_mapping import arrow_type_to_string, string_to_arrow_type
from relschema.models.schema_config import SchemaFileConfig
from relschema.schema import Attribute, Schema

logger = logging.getLogger(__name__)


def load_schema_config(path: str) -> SchemaFileConfig:
    """
    Load and validate a schema file without building schemas.

    Args:
        path: Path to schema YAML file

    Returns:
        Validated SchemaFileConfig

    Raises:
        ConfigurationError: If file not found, invalid YAML, or validation fails
    """
    schema_path = Path(path)
    try:
        with open(schema_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigurationError(
            f"Schema file not found: {path}", context={"path": str(path)}
        )
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Invalid YAML in schema file: {e}", context={"path": str(path)}
        ) from e

    if not isinstance(data, dict):
        raise ConfigurationError(
            "Schema file must contain a YAML dictionary",
            context={"path": str(path)},
        )

    try:
        return SchemaFileConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(
            f"Schema file validation failed: {e}", context={"path": str(path)}
        ) from e


def load_schemas(path: str) -> Dict[str, Schema]:
    """
    Load schemas from a YAML file, keyed by dataset.

    Args:
        path: Path to schema YAML file

    Returns:
        Schemas in file order; adapter-only entries are pending

    Raises:
        ConfigurationError: If the file is invalid or a schema cannot be built
    """
    config = load_schema_config(path)
    schemas: Dict[str, Schema] = {}
    for schema_config in config.schemas:
        try:
            schemas[schema_config.dataset] = schema_config.to_schema()
        except SchemaError as e:
            raise ConfigurationError(
                f"Cannot build schema '{schema_config.dataset}': {e.message}",
                context={"path": str(path), **e.context},
            ) from e
        except ValueError as e:
            raise ConfigurationError(
                f"Cannot build schema '{schema_config.dataset}': {e}",
                context={"path": str(path), "dataset": schema_config.dataset},
            ) from e
    logger.debug("Loaded %d schemas", len(schemas), extra={"context": {"path": path}})
    return schemas


def dump_schema(schema: Schema) -> Dict[str, Any]:
    """Render a finalized schema as a schema-file entry.

    Raises:
        ConfigurationError: If an attribute type has no name that loads back
            to the same type (e.g. dictionary types)
    """
    attributes = []
    for attribute in schema:
        meta = attribute.meta
        entry: Dict[str, Any] = {
            "name": attribute.name,
            "type": _type_name(attribute),
        }
        if meta.foreign_key:
            entry.update(foreign_key=True, relation=meta.relation)
        if not meta.nullable:
            entry["nullable"] = False
        if meta.extras:
            entry["metadata"] = dict(meta.extras)
        attributes.append(entry)
    return {
        "dataset": schema.dataset,
        "attributes": attributes,
        "primary_key": [attribute.name for attribute in schema.primary_key()],
    }


def _type_name(attribute: Attribute) -> str:
    name = arrow_type_to_string(attribute.type)
    try:
        loaded = string_to_arrow_type(name)
    except ValueError:
        loaded = None
    if loaded is None or not loaded.equals(attribute.type):
        raise ConfigurationError(
            f"Type of attribute '{attribute.name}' cannot be written to a schema file",
            context={"type": name},
        )
    return name
