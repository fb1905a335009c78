"""Python logging adapter for logtree.

This adapter bridges structured loggers to the standard library logging
module: the level check is delegated to ``Logger.isEnabledFor`` and formatted
entries are written with ``Logger.log``, with any cause passed as
``exc_info`` so handlers render its traceback.
"""

import logging

from logtree.core.formatting import JsonLogEntryFormatter
from logtree.core.models import Level
from logtree.core.structured import SinkStructuredLogger, StructuredLogger

# Numeric level for TRACE, below logging.DEBUG
TRACE = 5

logging.addLevelName(TRACE, "TRACE")

# Map of logtree levels to standard library levels
_STDLIB_LEVELS: dict[Level, int] = {
    Level.TRACE: TRACE,
    Level.DEBUG: logging.DEBUG,
    Level.INFO: logging.INFO,
    Level.WARN: logging.WARNING,
    Level.ERROR: logging.ERROR,
}

# Root namespace used for the library's own log entries
INTERNAL_NAMESPACE = "logtree"


class LoggingSink:
    """Log sink that writes formatted entries to a stdlib logger.

    Example:
        ```python
        sink = LoggingSink(logging.getLogger("orders"))
        logger = SinkStructuredLogger(sink)
        ```
    """

    def __init__(self, logger: logging.Logger) -> None:
        """Initialize the sink with the logger to write to.

        Args:
            logger: Standard library logger receiving the entries.
        """
        self._logger = logger

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def is_enabled(self, level: Level) -> bool:
        """Return True if the logger accepts ``level``."""
        return self._logger.isEnabledFor(_STDLIB_LEVELS[level])

    def emit(self, level: Level, text: str, cause: BaseException | None = None) -> None:
        """Write formatted text to the logger.

        Args:
            level: Severity of the entry.
            text: The formatted entry.
            cause: Exception to hand to the logger as ``exc_info``.
        """
        self._logger.log(_STDLIB_LEVELS[level], text, exc_info=cause)


def get_logger(
    name: str,
    root_ns: str | None = None,
    formatter: JsonLogEntryFormatter | None = None,
) -> StructuredLogger:
    """Get a structured logger writing to ``logging.getLogger(name)``.

    Args:
        name: Standard library logger name, usually ``__name__``.
        root_ns: Optional namespace to nest every entry's metrics in.
        formatter: Formatter to use. Defaults to one built from settings.

    Returns:
        The structured logger.
    """
    return SinkStructuredLogger(
        LoggingSink(logging.getLogger(name)), root_ns=root_ns, formatter=formatter
    )


def get_internal_logger(name: str) -> StructuredLogger:
    """Get a structured logger for logtree's own code.

    Entries from this logger nest their metrics under the ``logtree``
    namespace.
    """
    return get_logger(name, root_ns=INTERNAL_NAMESPACE)


__all__ = [
    "INTERNAL_NAMESPACE",
    "TRACE",
    "LoggingSink",
    "get_internal_logger",
    "get_logger",
]
