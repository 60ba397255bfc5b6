"""Relation schema: the finalized (or inference-pending) attribute set of a dataset."""

from __future__ import annotations

import logging
import threading
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Iterator, Mapping, Optional

import pyarrow as pa

from relschema.core.exceptions import (
    ConfigurationError,
    InvalidStateError,
    UnknownAttributeError,
)
from relschema.schema.attribute import Attribute, coerce_attribute

logger = logging.getLogger(__name__)

BoundInferrer = Callable[[Any, Any], Mapping[str, Any]]


class SchemaState(str, Enum):
    """Lifecycle state of a schema."""

    BUILDING = "building"  # Attributes being declared on a SchemaDSL
    PENDING = "pending"  # No attributes yet, waiting for inference
    FINALIZED = "finalized"  # Attributes present, schema frozen


class Schema:
    """Relation schema.

    A schema is either finalized, holding an ordered read-only mapping of
    attributes, or pending, holding only an inferrer that populates it once
    ``infer`` is called with a gateway. Schemas freeze as soon as their
    attributes are set; after that every query is a pure function of state.

    Reading attributes from a pending schema raises ``InvalidStateError``.
    """

    def __init__(
        self,
        dataset: Any = None,
        attributes: Optional[Mapping[str, Any]] = None,
        inferrer: Optional[BoundInferrer] = None,
    ) -> None:
        """Initialize a schema.

        Args:
            dataset: Identifier of the underlying data source.
            attributes: Mapping of attribute name to attribute (or type).
                None leaves the schema pending.
            inferrer: Bound inferrer used by ``infer``.

        Raises:
            ConfigurationError: If neither attributes nor an inferrer is given.
        """
        if attributes is None and inferrer is None:
            raise ConfigurationError(
                "A schema needs attributes or an inferrer to obtain them",
                context={"dataset": dataset},
            )
        self._lock = threading.Lock()
        self.dataset = dataset
        self.inferrer = inferrer
        self.attributes: Optional[Mapping[str, Attribute]] = None
        self.state = SchemaState.PENDING

        if attributes is not None:
            self.attributes = _normalize(attributes)
            self.state = SchemaState.FINALIZED

    def __setattr__(self, name: str, value: Any) -> None:
        if getattr(self, "state", None) is SchemaState.FINALIZED:
            raise InvalidStateError(
                f"Cannot set '{name}' on a finalized schema",
                context={"dataset": self.dataset},
            )
        super().__setattr__(name, value)

    def __delattr__(self, name: str) -> None:
        raise InvalidStateError(
            f"Cannot delete '{name}' from a schema", context={"dataset": self.dataset}
        )

    def _defined(self, operation: str) -> Mapping[str, Attribute]:
        if self.attributes is None:
            raise InvalidStateError(
                f"Cannot {operation} before the schema is inferred",
                context={"dataset": self.dataset},
            )
        return self.attributes

    def __iter__(self) -> Iterator[Attribute]:
        """Iterate over attributes in declaration order."""
        return iter(self._defined("iterate attributes").values())

    def __len__(self) -> int:
        return len(self._defined("count attributes"))

    def __contains__(self, name: object) -> bool:
        return name in self._defined("look up attributes")

    def __getitem__(self, name: str) -> Attribute:
        return self.lookup(name)

    def lookup(self, name: str) -> Attribute:
        """Return the attribute called ``name``.

        Raises:
            UnknownAttributeError: If the schema has no such attribute.
        """
        attributes = self._defined("look up attributes")
        try:
            return attributes[name]
        except KeyError:
            raise UnknownAttributeError(
                name, context={"dataset": self.dataset}
            ) from None

    def attribute_names(self) -> list[str]:
        return list(self._defined("list attribute names"))

    def primary_key(self) -> list[Attribute]:
        """Return primary key attributes in declaration order (may be empty)."""
        return [attribute for attribute in self if attribute.meta.primary_key]

    def foreign_key(self, relation: str) -> Optional[Attribute]:
        """Return the attribute referencing ``relation``, or None.

        Uniqueness is not enforced: with several matching attributes the
        first one in declaration order wins.
        """
        for attribute in self:
            if attribute.meta.foreign_key and attribute.meta.relation == relation:
                return attribute
        return None

    def is_defined(self) -> bool:
        """Whether attributes have been populated."""
        return self.attributes is not None

    def infer(self, gateway: Any, dataset: Any = None) -> "Schema":
        """Populate attributes through the inferrer and freeze the schema.

        Runs at most once. A failing inferrer leaves the schema pending and
        its error propagates unchanged.

        Args:
            gateway: Data source handle passed through to the inferrer.
            dataset: Dataset to use when the schema was created without one.

        Returns:
            The schema itself, now finalized.

        Raises:
            InvalidStateError: If the schema is already defined.
            ConfigurationError: If no dataset is known, or ``dataset``
                contradicts the schema's own.
        """
        with self._lock:
            if self.is_defined():
                raise InvalidStateError(
                    "Schema is already defined and cannot be inferred again",
                    context={"dataset": self.dataset},
                )
            if self.dataset is not None and dataset is not None and dataset != self.dataset:
                raise ConfigurationError(
                    "Dataset does not match the schema's dataset",
                    context={"dataset": self.dataset, "given": dataset},
                )
            resolved = self.dataset if self.dataset is not None else dataset
            if resolved is None:
                raise ConfigurationError("A dataset is required to infer a schema")

            logger.debug("Inferring schema", extra={"dataset": resolved})
            inferred = self.inferrer(resolved, gateway)

            attributes = _normalize(inferred)

            self.dataset = resolved
            self.attributes = attributes
            self.state = SchemaState.FINALIZED

        logger.info(
            "Schema inferred",
            extra={"dataset": resolved, "context": {"attributes": len(self.attributes)}},
        )
        return self

    def to_arrow_schema(self) -> pa.Schema:
        """Convert schema to PyArrow Schema.

        Returns:
            PyArrow Schema object
        """
        return pa.schema([attribute.to_arrow_field() for attribute in self])

    @classmethod
    def from_arrow_schema(cls, arrow_schema: pa.Schema, dataset: Any = None) -> "Schema":
        """Create a finalized Schema from PyArrow Schema.

        Args:
            arrow_schema: PyArrow Schema object
            dataset: Optional dataset identifier

        Returns:
            Schema instance
        """
        attributes = {field.name: Attribute.from_arrow_field(field) for field in arrow_schema}
        return cls(dataset, attributes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Schema):
            return NotImplemented
        return (
            self.dataset == other.dataset
            and _as_dict(self.attributes) == _as_dict(other.attributes)
            and self.inferrer == other.inferrer
        )

    def __hash__(self) -> int:
        # Only finalized schemas hash; inference would change the value
        attributes = frozenset(
            (name, str(attr.type)) for name, attr in self._defined("hash").items()
        )
        return hash((self.dataset, attributes, type(self.inferrer).__name__))

    def __repr__(self) -> str:
        names = list(self.attributes) if self.attributes is not None else None
        return (
            f"Schema(dataset={self.dataset!r}, state={self.state.value}, "
            f"attributes={names!r})"
        )


def _as_dict(attributes: Optional[Mapping[str, Attribute]]) -> Optional[dict[str, Attribute]]:
    return dict(attributes) if attributes is not None else None


def _normalize(attributes: Mapping[str, Any]) -> Mapping[str, Attribute]:
    """Coerce values to attributes named after their keys, read-only."""
    normalized = {}
    for name, value in attributes.items():
        attribute = coerce_attribute(value)
        if attribute.name != name:
            attribute = attribute.with_meta(name=name)
        normalized[name] = attribute
    return MappingProxyType(normalized)
