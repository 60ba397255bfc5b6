"""Base class for adapter inferrers.

An inferrer is bound to the builder that declared the schema and is later
called with a dataset and a gateway to produce the schema's attributes.
"""

from __future__ import annotations

import functools
import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar, Optional

from relschema.schema.attribute import Attribute

if TYPE_CHECKING:
    from relschema.schema.dsl import SchemaDSL

logger = logging.getLogger(__name__)


class Inferrer(ABC):
    """Infers attributes for a dataset from a gateway.

    Subclasses implement ``infer_attributes``. Options are passed as keyword
    arguments and bound ahead of time with ``configure``:

        SchemaDSL("users", inferrer=DuckDBInferrer.configure(db_schema="app"))
    """

    adapter: ClassVar[str] = ""

    def __init__(self, builder: Optional["SchemaDSL"] = None, **options: Any) -> None:
        self.builder = builder
        self.options = options

    @classmethod
    def configure(cls, **options: Any) -> functools.partial:
        """Bind options, returning a factory that only needs the builder."""
        return functools.partial(cls, **options)

    def __call__(self, dataset: Any, gateway: Any) -> dict[str, Attribute]:
        attributes = self.infer_attributes(dataset, gateway)
        logger.debug(
            "Inferred %d attributes",
            len(attributes),
            extra={"dataset": dataset, "adapter": self.adapter},
        )
        return attributes

    @abstractmethod
    def infer_attributes(self, dataset: Any, gateway: Any) -> dict[str, Attribute]:
        """Return attributes for ``dataset``, keyed by name, in source order.

        Raises:
            InferenceError: If the dataset yields no attributes.
        """
        ...

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Inferrer):
            return NotImplemented
        return type(self) is type(other) and self.options == other.options

    def __hash__(self) -> int:
        return hash((type(self), tuple(sorted(self.options.items()))))

    def __repr__(self) -> str:
        options = ", ".join(f"{k}={v!r}" for k, v in self.options.items())
        return f"{type(self).__name__}({options})"
