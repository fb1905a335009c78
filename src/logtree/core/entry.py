"""Builder for the metric and namespace tree of a single log call."""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from logtree.core.errors import (
    CauseAlreadySetError,
    InvalidArgumentError,
    NamingConflictError,
)
from logtree.core.models import MESSAGE_FIELD


@dataclass
class _CauseSlot:
    """Write-once cell shared by every node of one entry tree."""

    value: BaseException | None = None


def _require_name(name: str | Enum, what: str) -> str:
    """Normalize a key or namespace name, rejecting blank ones."""
    if isinstance(name, Enum):
        name = name.name
    if not isinstance(name, str) or not name.strip():
        raise InvalidArgumentError(f"{what} must be a non-blank string: {name!r}")
    return name


class LogEntryBuilder:
    """Accumulates metrics, namespaces and a cause for one log call.

    Metric keys and namespace names share one key space per node, so a name
    can be a metric or a namespace but never both. The cause slot is shared
    by the whole tree: one cause may be attached, from any node.

    Example:
        ```python
        builder = LogEntryBuilder.create("request done")
        builder.attach_metric("status", 200)
        builder.namespace("timing").attach_metric("elapsed_ms", 12)
        builder.build()
        # {"message": "request done", "status": 200, "timing": {"elapsed_ms": 12}}
        ```
    """

    def __init__(self, cause_slot: _CauseSlot | None = None) -> None:
        """Create an empty node.

        Args:
            cause_slot: The tree-wide cause cell. Root nodes create their own;
                child nodes receive their parent's.
        """
        self._metrics: dict[str, Any] = {}
        self._namespaces: dict[str, LogEntryBuilder] = {}
        self._cause_slot = cause_slot if cause_slot is not None else _CauseSlot()

    @classmethod
    def create(cls, message: str | None) -> "LogEntryBuilder":
        """Create a root builder seeded with the message text.

        Args:
            message: The free-form log message.

        Returns:
            A new root builder with ``message`` attached.
        """
        builder = cls()
        builder.attach_metric(MESSAGE_FIELD, message)
        return builder

    def namespace(self, name: str | Enum) -> "LogEntryBuilder":
        """Return the child namespace called ``name``, creating it if needed.

        Args:
            name: Namespace name, unique among this node's metric keys.

        Returns:
            The child builder. The same child is returned for the same name.

        Raises:
            InvalidArgumentError: If ``name`` is blank.
            NamingConflictError: If ``name`` is already a metric key here.
        """
        name = _require_name(name, "namespace")
        if name in self._metrics:
            raise NamingConflictError(
                f"Namespace name clashes with existing metric name: {name}"
            )
        child = self._namespaces.get(name)
        if child is None:
            child = LogEntryBuilder(self._cause_slot)
            self._namespaces[name] = child
        return child

    def attach_metric(self, key: str | Enum, value: Any) -> "LogEntryBuilder":
        """Attach a key/value pair to this node.

        ``None`` values are stored, so the key stays taken, but are left out
        of the built entry.

        Args:
            key: Metric name, unique within this node.
            value: Any value the formatter can render.

        Returns:
            This builder, for chaining.

        Raises:
            InvalidArgumentError: If ``key`` is blank.
            NamingConflictError: If ``key`` is already a namespace or metric.
        """
        key = _require_name(key, "key")
        if key in self._namespaces:
            raise NamingConflictError(
                f"Metric name clashes with existing namespace name: {key}"
            )
        if key in self._metrics:
            raise NamingConflictError(f"Metric key already set: {key}")
        self._metrics[key] = value
        return self

    def attach_cause(self, error: BaseException) -> "LogEntryBuilder":
        """Attach the exception for this log call.

        Args:
            error: The exception to attach.

        Returns:
            This builder, for chaining.

        Raises:
            CauseAlreadySetError: If any node in the tree already has a cause.
        """
        first = self._cause_slot.value
        if first is not None:
            raise CauseAlreadySetError(first) from first
        self._cause_slot.value = error
        return self

    @property
    def cause(self) -> BaseException | None:
        """The exception attached anywhere in the tree, if any."""
        return self._cause_slot.value

    def build(self) -> dict[str, Any] | None:
        """Snapshot the tree as nested dicts with sorted keys.

        Returns:
            The value tree with ``None`` metrics and empty namespaces removed,
            or None if nothing is left.
        """
        result: dict[str, Any] = dict(self._metrics)
        for name, child in self._namespaces.items():
            result[name] = child.build()
        built = {key: result[key] for key in sorted(result) if result[key] is not None}
        return built or None


__all__ = ["LogEntryBuilder"]
