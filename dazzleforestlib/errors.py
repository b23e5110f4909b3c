"""Exceptions raised by DazzleForestLib.

Everything the library raises on its own account derives from ForestError,
so callers can catch library failures without also catching errors raised
by their own children/key functions.
"""

from typing import Any, Iterable, Optional, Tuple


class ForestError(Exception):
    """Base class for all DazzleForestLib errors."""
    pass


class InvalidArgumentError(ForestError, ValueError):
    """Raised when an argument can never produce a valid forest.

    Always raised before any node is built, so nothing needs undoing.
    """
    pass


class CycleDetectedError(ForestError):
    """Raised when the input describes a cycle instead of a tree.

    Attributes:
        keys: The models (or keys) found on the cycle
    """

    def __init__(self, message: str, keys: Iterable[Any] = ()):
        super().__init__(message)
        self.keys: Tuple[Any, ...] = tuple(keys)


class DepthExceededError(ForestError):
    """Raised when construction goes deeper than the configured limit.

    Attributes:
        max_depth: The limit that was exceeded
        model: The model that would have been placed past the limit
    """

    def __init__(self, message: str, max_depth: int, model: Optional[Any] = None):
        super().__init__(message)
        self.max_depth = max_depth
        self.model = model


class ConfigurationError(ForestError):
    """Raised when a BuildConfig or TraversalConfig fails validation."""
    pass
