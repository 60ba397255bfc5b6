"""Exception hierarchy for the relschema package."""


class SchemaError(Exception):
    """Base exception for all relschema errors."""

    def __init__(self, message: str, context: dict | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class ConfigurationError(SchemaError):
    """Raised when a schema cannot be set up from what it was given.

    Covers builders with neither a declaration block nor an inferrer,
    invalid schema files, and inference requested without a dataset.
    """

    pass


class UnknownAttributeError(SchemaError, KeyError):
    """Raised when an attribute name is not part of a schema."""

    def __init__(self, name: str, context: dict | None = None):
        super().__init__(f"Unknown attribute: '{name}'", context=context)
        self.name = name


class InvalidStateError(SchemaError):
    """Raised when an operation does not fit the schema's lifecycle state."""

    pass


class InferenceError(SchemaError):
    """Raised when an adapter cannot produce attributes for a dataset."""

    pass


class AdapterError(SchemaError):
    """Raised when adapter registry operations fail."""

    pass
