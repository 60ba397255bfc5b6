"""Arrow adapter module."""

from relschema.adapters.arrow.inferrer import ArrowInferrer, ReflectionLevel

__all__ = ["ArrowInferrer", "ReflectionLevel"]
