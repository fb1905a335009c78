"""logtree: structured logging with namespaced metrics.

Example:
    ```python
    from logtree import get_logger

    logger = get_logger(__name__)
    logger.info(
        "order placed",
        lambda e: e.attach_metric("order_id", 42).namespace("timing").attach_metric("ms", 3),
    )
    ```
"""

from logtree.adapters.in_memory import InMemoryStructuredLogger, log_entry
from logtree.adapters.logging import LoggingSink, get_internal_logger, get_logger
from logtree.config import LoggingSettings, get_settings
from logtree.core.entry import LogEntryBuilder
from logtree.core.errors import (
    CauseAlreadySetError,
    DepthExceededError,
    InvalidArgumentError,
    InvalidKeyError,
    LogTreeError,
    NamingConflictError,
)
from logtree.core.formatting import JsonLogEntryFormatter
from logtree.core.models import CapturedLogEntry, Level
from logtree.core.ports import LogEntryCustomizer, LogEntryFormatterPort, LogSinkPort
from logtree.core.structured import SinkStructuredLogger, StructuredLogger

__all__ = [
    "CapturedLogEntry",
    "CauseAlreadySetError",
    "DepthExceededError",
    "InMemoryStructuredLogger",
    "InvalidArgumentError",
    "InvalidKeyError",
    "JsonLogEntryFormatter",
    "Level",
    "LogEntryBuilder",
    "LogEntryCustomizer",
    "LogEntryFormatterPort",
    "LogSinkPort",
    "LogTreeError",
    "LoggingSettings",
    "LoggingSink",
    "NamingConflictError",
    "SinkStructuredLogger",
    "StructuredLogger",
    "get_internal_logger",
    "get_logger",
    "get_settings",
    "log_entry",
]
