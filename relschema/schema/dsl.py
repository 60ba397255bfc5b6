"""Declarative builder for relation schemas."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from relschema.core.exceptions import ConfigurationError, UnknownAttributeError
from relschema.core.type_mapping import TypeLike
from relschema.schema.attribute import Attribute, coerce_attribute
from relschema.schema.schema import BoundInferrer, Schema, SchemaState

logger = logging.getLogger(__name__)

InferrerFactory = Callable[["SchemaDSL"], BoundInferrer]
DeclarationBlock = Callable[["SchemaDSL"], Any]


class SchemaDSL:
    """Accumulates attribute declarations for one dataset.

    The declaration block receives the builder as its only argument and runs
    immediately:

        def users(s):
            s.attribute("id", "int")
            s.attribute("email", "string")
            s.primary_key("id")

        schema = SchemaDSL("users", users).finalize()

    Without a block, an inferrer factory is required; the resulting schema is
    then pending until ``Schema.infer`` is called with a gateway.
    """

    state = SchemaState.BUILDING

    def __init__(
        self,
        dataset: Any = None,
        block: Optional[DeclarationBlock] = None,
        *,
        inferrer: Optional[InferrerFactory] = None,
    ) -> None:
        """Initialize the builder and run the declaration block.

        Args:
            dataset: Identifier of the underlying data source.
            block: Callable declaring attributes on the builder.
            inferrer: Factory binding an inferrer to this builder.

        Raises:
            ConfigurationError: If neither a block nor an inferrer is given.
        """
        self.dataset = dataset
        self.inferrer = inferrer
        self.attributes: Optional[dict[str, Attribute]] = None

        if block is not None:
            block(self)
        elif inferrer is None:
            raise ConfigurationError(
                "A block or an inferrer is required to define a schema",
                context={"dataset": dataset},
            )

    def attribute(self, name: str, type: Attribute | TypeLike) -> Attribute:
        """Declare an attribute; re-declaring a name replaces it."""
        if self.attributes is None:
            self.attributes = {}
        attribute = coerce_attribute(type).with_meta(name=name)
        self.attributes[name] = attribute
        return attribute

    def primary_key(self, *names: str) -> "SchemaDSL":
        """Mark declared attributes as the primary key.

        Raises:
            UnknownAttributeError: If any name was not declared; no attribute
                is changed in that case.
        """
        declared = self.attributes or {}
        missing = [name for name in names if name not in declared]
        if missing:
            raise UnknownAttributeError(
                missing[0],
                context={"dataset": self.dataset, "missing": ", ".join(missing)},
            )
        for name in names:
            declared[name] = declared[name].with_meta(primary_key=True)
        return self

    def finalize(self) -> Schema:
        """Build a schema from the declarations.

        Each call returns a new schema with its own attribute mapping and a
        freshly bound inferrer; the builder is left unchanged.

        Raises:
            ConfigurationError: If nothing was declared and there is no
                inferrer to fall back on.
        """
        if self.attributes is None and self.inferrer is None:
            raise ConfigurationError(
                "Schema declares no attributes and has no inferrer",
                context={"dataset": self.dataset},
            )
        inferrer = self.inferrer(self) if self.inferrer is not None else None
        schema = Schema(self.dataset, self.attributes, inferrer=inferrer)
        logger.debug(
            "Schema finalized",
            extra={"dataset": self.dataset, "context": {"state": schema.state.value}},
        )
        return schema

    __call__ = finalize
