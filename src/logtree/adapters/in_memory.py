"""In-memory structured logger for tests."""

from collections.abc import Mapping
from typing import Any

from logtree.core.entry import LogEntryBuilder
from logtree.core.models import MESSAGE_FIELD, CapturedLogEntry, Level
from logtree.core.ports import Customize
from logtree.core.structured import StructuredLogger


def log_entry(
    level: Level,
    message: str | Mapping[Any, Any],
    additional: Mapping[Any, Any] | None = None,
    cause: BaseException | None = None,
) -> CapturedLogEntry:
    """Create the entry an InMemoryStructuredLogger would capture.

    Args:
        level: The log level.
        message: The message text, or a complete structured message.
        additional: Extra key/value pairs to include beside a text message.
        cause: The expected cause.

    Returns:
        The entry, with keys converted to str and held in sorted order.
    """
    if isinstance(message, Mapping):
        fields: dict[Any, Any] = dict(message)
    else:
        fields = dict(additional or {})
        fields[MESSAGE_FIELD] = message
    converted: dict[str, Any] = {}
    for key, value in fields.items():
        converted.setdefault(str(key), value)
    return CapturedLogEntry(
        level=level,
        message=dict(sorted(converted.items())),
        cause=cause,
    )


class InMemoryStructuredLogger(StructuredLogger):
    """Structured logger that captures entries instead of formatting them.

    Pass it to code that expects a StructuredLogger, then assert on the
    captured entries. Suitable for testing only.

    Example:
        ```python
        logger = InMemoryStructuredLogger()
        service = OrderService(logger)
        service.place(order)
        assert logger.entries() == [log_entry(Level.INFO, "order placed")]
        ```
    """

    def __init__(self, min_level: Level = Level.TRACE) -> None:
        """Initialize the logger.

        Args:
            min_level: Entries below this level are ignored.
        """
        self._min_level = min_level
        self._entries: list[CapturedLogEntry] = []

    def log(self, level: Level, message: str, customize: Customize | None = None) -> None:
        if level < self._min_level:
            return

        builder = LogEntryBuilder.create(message)
        if customize is not None:
            customize(builder)

        self._entries.append(
            log_entry(level, builder.build() or {}, cause=builder.cause)
        )

    def entries(self) -> list[CapturedLogEntry]:
        """Return all captured entries."""
        return list(self._entries)

    def text_entries(self) -> list[str]:
        """Return all captured entries formatted as text."""
        return [str(entry) for entry in self._entries]

    def clear(self) -> None:
        """Clear all captured entries so the logger can be reused."""
        self._entries.clear()


__all__ = ["InMemoryStructuredLogger", "log_entry"]
