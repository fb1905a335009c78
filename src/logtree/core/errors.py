"""Exceptions raised while building and formatting structured log entries.

Every error here is a synchronous contract violation by the caller. None of
them are transient, so they are raised straight back to the code that made the
log call and nothing is emitted for that call.
"""

from collections.abc import Mapping
from typing import Any


class LogTreeError(Exception):
    """Base class for all logtree errors."""


class InvalidArgumentError(LogTreeError, ValueError):
    """A blank key or namespace name, or an invalid setting, was supplied."""


class NamingConflictError(LogTreeError, ValueError):
    """A metric key or namespace name is already taken within the same node."""


class CauseAlreadySetError(LogTreeError, RuntimeError):
    """A second cause was attached to a log entry that already has one.

    Attributes:
        first_cause: The cause that was attached first.
    """

    def __init__(self, first_cause: BaseException) -> None:
        super().__init__(f"Exception already set: {first_cause!r}")
        self.first_cause = first_cause


class DepthExceededError(LogTreeError, ValueError):
    """Formatting descended past the configured maximum depth.

    Attributes:
        max_depth: The configured limit that was exceeded.
    """

    def __init__(self, max_depth: int) -> None:
        super().__init__(f"Max depth of {max_depth} exceeded")
        self.max_depth = max_depth


class InvalidKeyError(LogTreeError, ValueError):
    """A mapping with a ``None`` key was encountered while formatting.

    Attributes:
        mapping: The mapping holding the ``None`` key.
        depth: Depth of the mapping within the formatted value.
    """

    def __init__(self, mapping: Mapping[Any, Any], depth: int) -> None:
        super().__init__(f"null key in {mapping!r} at depth {depth}")
        self.mapping = mapping
        self.depth = depth


__all__ = [
    "CauseAlreadySetError",
    "DepthExceededError",
    "InvalidArgumentError",
    "InvalidKeyError",
    "LogTreeError",
    "NamingConflictError",
]
