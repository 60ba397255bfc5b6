"""Arrow inferrer: attributes from PyArrow tables and schemas."""

from __future__ import annotations

from typing import Any, Iterable, Literal, Mapping, Optional, get_args

import pyarrow as pa
from pydantic import ValidationError

from relschema.adapters.base import Inferrer
from relschema.adapters.registry import register_inferrer
from relschema.core.exceptions import ConfigurationError, InferenceError
from relschema.schema.attribute import Attribute

ReflectionLevel = Literal["none", "shallow", "one", "deep", "full"]


@register_inferrer("arrow")
class ArrowInferrer(Inferrer):
    """Infers attributes from Arrow data.

    The gateway is a mapping of dataset name to ``pa.Table``,
    ``pa.RecordBatch`` or ``pa.Schema``. Shallow reflection keeps top-level
    fields; deep reflection flattens structs (``user__id``) and lists of
    structs (``tags__item__name``).
    """

    adapter = "arrow"

    def __init__(
        self,
        builder: Optional[Any] = None,
        reflection_level: ReflectionLevel = "deep",
    ) -> None:
        if reflection_level not in get_args(ReflectionLevel):
            raise ConfigurationError(
                f"Unknown reflection level: '{reflection_level}'",
                context={"supported": ", ".join(get_args(ReflectionLevel))},
            )
        super().__init__(builder, reflection_level=reflection_level)
        self.reflection_level = reflection_level

    def infer_attributes(
        self, dataset: Any, gateway: Mapping[str, Any]
    ) -> dict[str, Attribute]:
        """Infer attributes from the Arrow schema of ``gateway[dataset]``."""
        if dataset not in gateway:
            raise InferenceError(
                f"Dataset not found: '{dataset}'", context={"adapter": self.adapter}
            )
        source = gateway[dataset]
        schema = source if isinstance(source, pa.Schema) else source.schema

        if self.reflection_level in ("none", "shallow", "one"):
            attributes = self._from_arrow_schema(schema)
        else:
            attributes = list(self._flatten_schema(schema))

        if not attributes:
            raise InferenceError(
                f"Dataset has no fields: '{dataset}'", context={"adapter": self.adapter}
            )
        return {attribute.name: attribute for attribute in attributes}

    def _from_arrow_schema(self, schema: pa.Schema) -> list[Attribute]:
        return [self._attribute(field, field.name) for field in schema]

    def _flatten_schema(self, schema: pa.Schema) -> Iterable[Attribute]:
        for field in schema:
            yield from self._flatten_field(field.name, field)

    def _flatten_field(self, prefix: str, field: pa.Field) -> Iterable[Attribute]:
        field_type = field.type
        if pa.types.is_struct(field_type):
            for child in field_type:
                yield from self._flatten_field(f"{prefix}__{child.name}", child)
            return

        if pa.types.is_list(field_type) or pa.types.is_large_list(field_type):
            value_type = field_type.value_type
            if pa.types.is_struct(value_type):
                for child in value_type:
                    yield from self._flatten_field(f"{prefix}__item__{child.name}", child)
                return

        yield self._attribute(field.with_name(prefix), prefix)

    def _attribute(self, field: pa.Field, path: str) -> Attribute:
        try:
            return Attribute.from_arrow_field(field, inferred=True, source_path=path)
        except ValidationError as e:
            raise InferenceError(
                f"Invalid metadata on field '{path}': {e.errors()[0]['msg']}",
                context={"adapter": self.adapter, "field": path},
            ) from e
