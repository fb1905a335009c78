"""Standard log messages for component lifecycle events."""

from enum import Enum

# Target type for whole services
SERVICE_TYPE = "service"

_PREFIX = "logtree.lifecycle"


def lifecycle_log_message(target_type: str, event: Enum) -> str:
    """Build the log message for a lifecycle event.

    Args:
        target_type: Kind of thing changing state, e.g. ``"service"``.
        event: The lifecycle event.

    Returns:
        Message of the form ``logtree.lifecycle.<type>.<event>``.
    """
    return f"{_PREFIX}.{target_type.lower()}.{event.name.lower()}"


class BasicLifecycle(Enum):
    """Basic lifecycle events shared by most components."""

    starting = "starting"
    started = "started"
    stopping = "stopping"
    stopped = "stopped"

    def log_message(self, target_type: str) -> str:
        return lifecycle_log_message(target_type, self)


__all__ = ["SERVICE_TYPE", "BasicLifecycle", "lifecycle_log_message"]
