"""
Error taxonomy for type model extraction.

Every error raised during a run derives from ExtractionError and aborts the
whole run. An external type that cannot be found is not an error.
"""

from typing import Optional


class ExtractionError(Exception):
    """Base class for all extraction failures."""

    pass


class InvalidProjectError(ExtractionError):
    """Raised when the project handle is missing or does not exist."""

    pass


class MalformedSignatureError(ExtractionError):
    """Raised when a type signature cannot be parsed.

    Also raised when a recursive resolution (nested generic arguments,
    supertype chains) exceeds the configured depth.
    """

    def __init__(self, message: str, signature: Optional[str] = None):
        super().__init__(message)
        self.signature = signature


class DuplicateTypeError(ExtractionError):
    """Raised when a qualified name is added to the model twice."""

    def __init__(self, name: str):
        super().__init__(f"Type {name} is already part of the model")
        self.name = name


class ProviderError(ExtractionError):
    """Raised when the source symbol provider fails."""

    pass


class FrozenModelError(ExtractionError):
    """Raised when a type is added to a model after extraction finished."""

    def __init__(self, name: str):
        super().__init__(f"Cannot add {name}, the model is frozen")
        self.name = name
