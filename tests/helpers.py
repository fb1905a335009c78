"""Test doubles shared across unit, integration and BDD tests."""

from dataclasses import dataclass, field

from logtree.core.models import Level


@dataclass
class EmittedEntry:
    """One call recorded by RecordingSink."""

    level: Level
    text: str
    cause: BaseException | None


@dataclass
class RecordingSink:
    """LogSinkPort fake that records emitted entries.

    Attributes:
        min_level: Levels below this one report as disabled.
        emitted: Every entry passed to emit(), in order.
        enabled_checks: Every level passed to is_enabled(), in order.
    """

    min_level: Level = Level.TRACE
    emitted: list[EmittedEntry] = field(default_factory=list)
    enabled_checks: list[Level] = field(default_factory=list)

    def is_enabled(self, level: Level) -> bool:
        self.enabled_checks.append(level)
        return level >= self.min_level

    def emit(self, level: Level, text: str, cause: BaseException | None = None) -> None:
        self.emitted.append(EmittedEntry(level, text, cause))


def nested_lists(levels: int, leaf: object = 1) -> object:
    """Wrap ``leaf`` in ``levels`` lists, so the leaf sits at depth ``levels``."""
    value = leaf
    for _ in range(levels):
        value = [value]
    return value
