"""Port interfaces for structured logging.

These protocols define the contracts between the level-gated facade, the
entry builder handed to customization callbacks, the formatter and the sink.
The core depends only on these interfaces, not on concrete adapters.
"""

from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any, Protocol, runtime_checkable

from logtree.core.models import Level


@runtime_checkable
class LogEntryCustomizer(Protocol):
    """What a customization callback may do to the entry being logged."""

    def namespace(self, name: str | Enum) -> "LogEntryCustomizer":
        """Return the nested namespace called ``name``, creating it on first use."""
        ...

    def attach_metric(self, key: str | Enum, value: Any) -> "LogEntryCustomizer":
        """Attach a key/value pair to the entry."""
        ...

    def attach_cause(self, error: BaseException) -> "LogEntryCustomizer":
        """Attach the single exception for the entry."""
        ...


# Signature of the callback passed alongside a log message.
Customize = Callable[[LogEntryCustomizer], object]


@runtime_checkable
class LogEntryFormatterPort(Protocol):
    """Port for turning a built value tree into log-line text."""

    @property
    def cause_in_message(self) -> bool:
        """True if the cause belongs in the payload rather than beside it."""
        ...

    def format(self, entry: Mapping[str, Any] | None) -> str:
        """Format a built value tree."""
        ...


@runtime_checkable
class LogSinkPort(Protocol):
    """Port for the log destination that receives formatted entries.

    Examples: LoggingSink (stdlib logging).
    """

    def is_enabled(self, level: Level) -> bool:
        """Return True if entries at ``level`` would be accepted."""
        ...

    def emit(self, level: Level, text: str, cause: BaseException | None = None) -> None:
        """Write formatted text, with the cause passed separately if present."""
        ...


__all__ = ["Customize", "LogEntryCustomizer", "LogEntryFormatterPort", "LogSinkPort"]
