"""Level-gated structured logging facade."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from logtree.core.entry import LogEntryBuilder
from logtree.core.errors import NamingConflictError
from logtree.core.formatting import JsonLogEntryFormatter
from logtree.core.models import CAUSE_FIELD, Level
from logtree.core.ports import Customize, LogEntryFormatterPort, LogSinkPort


class StructuredLogger(ABC):
    """Logging surface with one method per severity level.

    The ``customize`` callback is only invoked if the level is enabled, so it
    may do work that would be wasted on a disabled level.

    Example:
        ```python
        logger.info("order placed", lambda e: e.attach_metric("order_id", 42))
        ```
    """

    @abstractmethod
    def log(self, level: Level, message: str, customize: Customize | None = None) -> None:
        """Log a message at ``level``, if that level is enabled.

        Args:
            level: Severity of the entry.
            message: The free-form message text.
            customize: Called with the entry builder to attach metrics,
                namespaces and a cause.
        """

    def trace(self, message: str, customize: Customize | None = None) -> None:
        """Log a TRACE message, if enabled."""
        self.log(Level.TRACE, message, customize)

    def debug(self, message: str, customize: Customize | None = None) -> None:
        """Log a DEBUG message, if enabled."""
        self.log(Level.DEBUG, message, customize)

    def info(self, message: str, customize: Customize | None = None) -> None:
        """Log an INFO message, if enabled."""
        self.log(Level.INFO, message, customize)

    def warn(self, message: str, customize: Customize | None = None) -> None:
        """Log a WARN message, if enabled."""
        self.log(Level.WARN, message, customize)

    warning = warn

    def error(self, message: str, customize: Customize | None = None) -> None:
        """Log an ERROR message, if enabled."""
        self.log(Level.ERROR, message, customize)


def _fold_cause(entry: dict[str, Any] | None, cause: BaseException) -> dict[str, Any]:
    """Add the cause to the root of a built entry under the reserved key."""
    folded = dict(entry or {})
    if CAUSE_FIELD in folded:
        raise NamingConflictError(
            f"Metric name clashes with reserved field: {CAUSE_FIELD}"
        )
    folded[CAUSE_FIELD] = cause
    return dict(sorted(folded.items()))


class SinkStructuredLogger(StructuredLogger):
    """Structured logger that formats entries and writes them to a sink.

    Nothing is built, formatted or emitted for levels the sink has disabled.
    Any error raised while building or formatting aborts the call before the
    sink sees it.
    """

    def __init__(
        self,
        sink: LogSinkPort,
        root_ns: str | None = None,
        formatter: LogEntryFormatterPort | None = None,
        builder_factory: Callable[[str], LogEntryBuilder] = LogEntryBuilder.create,
    ) -> None:
        """Initialize the logger.

        Args:
            sink: Destination for formatted entries.
            root_ns: Optional namespace that callbacks' metrics are nested in.
            formatter: Formatter for built entries. Defaults to a
                JsonLogEntryFormatter using the process settings.
            builder_factory: Creates the root builder from the message text.
        """
        self._sink = sink
        self._root_ns = root_ns
        self._formatter = formatter if formatter is not None else JsonLogEntryFormatter()
        self._builder_factory = builder_factory

    def log(self, level: Level, message: str, customize: Customize | None = None) -> None:
        if not self._sink.is_enabled(level):
            return

        builder = self._builder_factory(message)
        if customize is not None:
            if self._root_ns is not None:
                customize(builder.namespace(self._root_ns))
            else:
                customize(builder)

        entry = builder.build()
        cause = builder.cause
        if cause is not None and self._formatter.cause_in_message:
            entry = _fold_cause(entry, cause)
            cause = None

        self._sink.emit(level, self._formatter.format(entry), cause)


__all__ = ["SinkStructuredLogger", "StructuredLogger"]
