"""Core domain models for structured log entries."""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

# Reserved top-level field holding the free-form message text.
MESSAGE_FIELD = "message"

# Reserved top-level field holding the cause when it is folded into the payload.
CAUSE_FIELD = "cause"


class Level(IntEnum):
    """Log severity, ordered from least to most severe."""

    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4


@dataclass(frozen=True)
class CapturedLogEntry:
    """A structured log entry as captured by an in-memory logger.

    Attributes:
        level: Severity the entry was logged at.
        message: The built value tree, keyed by field name.
        cause: The exception attached to the entry, if any.
    """

    level: Level
    message: dict[str, Any] = field(default_factory=dict)
    cause: BaseException | None = None

    def __str__(self) -> str:
        cause_text = f" {self.cause!r}" if self.cause is not None else ""
        return f"{self.level.name}: {self.message}{cause_text}"


__all__ = ["CAUSE_FIELD", "MESSAGE_FIELD", "CapturedLogEntry", "Level"]
