"""BDD step definitions for structured logging features."""

from dataclasses import dataclass, field

import pytest
from pytest_bdd import given, parsers, then, when
from tests.helpers import RecordingSink, nested_lists

from logtree.core.entry import LogEntryBuilder
from logtree.core.errors import (
    CauseAlreadySetError,
    DepthExceededError,
    InvalidKeyError,
    LogTreeError,
    NamingConflictError,
)
from logtree.core.formatting import JsonLogEntryFormatter
from logtree.core.models import Level
from logtree.core.ports import LogEntryCustomizer
from logtree.core.structured import SinkStructuredLogger


@dataclass
class LoggingScenarioContext:
    """Shared state between steps in a structured logging scenario."""

    sink: RecordingSink = field(default_factory=RecordingSink)
    logger: SinkStructuredLogger | None = None
    builder: LogEntryBuilder | None = None
    formatter: JsonLogEntryFormatter = field(
        default_factory=lambda: JsonLogEntryFormatter(8, cause_in_message=False)
    )
    callback_calls: int = 0
    output: str | None = None
    error: LogTreeError | None = None


@pytest.fixture
def ctx() -> LoggingScenarioContext:
    """Fresh scenario context for each test."""
    return LoggingScenarioContext()


def _capture(ctx: LoggingScenarioContext, action) -> None:  # type: ignore[no-untyped-def]
    """Run a step action, keeping any logtree error for later Then steps."""
    try:
        action()
    except LogTreeError as e:
        ctx.error = e


# === Level gating ===
@given(parsers.parse('a recording sink accepting "{level}" and above'))
def step_recording_sink(ctx: LoggingScenarioContext, level: str) -> None:
    ctx.sink = RecordingSink(min_level=Level[level])


@given("a structured logger writing to that sink")
def step_structured_logger(ctx: LoggingScenarioContext) -> None:
    ctx.logger = SinkStructuredLogger(ctx.sink, formatter=ctx.formatter)


@when(parsers.parse('an "{level}" entry "{message}" is logged with metric "{key}" set to {value:d}'))
def step_log_with_metric(
    ctx: LoggingScenarioContext, level: str, message: str, key: str, value: int
) -> None:
    assert ctx.logger is not None

    def customize(entry: LogEntryCustomizer) -> None:
        ctx.callback_calls += 1
        entry.attach_metric(key, value)

    ctx.logger.log(Level[level], message, customize)


@when(parsers.parse('an "{level}" entry "{message}" is logged with cause "{text}"'))
def step_log_with_cause(
    ctx: LoggingScenarioContext, level: str, message: str, text: str
) -> None:
    assert ctx.logger is not None
    ctx.logger.log(Level[level], message, lambda e: e.attach_cause(RuntimeError(text)))


@then(parsers.parse("the callback was invoked {count:d} times"))
def step_callback_count(ctx: LoggingScenarioContext, count: int) -> None:
    assert ctx.callback_calls == count


@then("nothing was emitted")
def step_nothing_emitted(ctx: LoggingScenarioContext) -> None:
    assert ctx.sink.emitted == []


@then(parsers.parse("the emitted text is '{text}'"))
def step_emitted_text(ctx: LoggingScenarioContext, text: str) -> None:
    assert [e.text for e in ctx.sink.emitted] == [text]


@then(parsers.parse('the emitted cause is "{text}"'))
def step_emitted_cause(ctx: LoggingScenarioContext, text: str) -> None:
    cause = ctx.sink.emitted[0].cause
    assert isinstance(cause, RuntimeError)
    assert str(cause) == text


# === Entry building ===
@given(parsers.parse('a log entry for message "{message}"'))
def step_log_entry(ctx: LoggingScenarioContext, message: str) -> None:
    ctx.builder = LogEntryBuilder.create(message)


@when(parsers.parse('metric "{key}" with value {value:d} is attached in namespace "{name}"'))
def step_metric_in_namespace(
    ctx: LoggingScenarioContext, key: str, value: int, name: str
) -> None:
    assert ctx.builder is not None
    builder = ctx.builder
    _capture(ctx, lambda: builder.namespace(name).attach_metric(key, value))


@when(parsers.parse('metric "{key}" with value {value:d} is attached'))
def step_metric(ctx: LoggingScenarioContext, key: str, value: int) -> None:
    assert ctx.builder is not None
    builder = ctx.builder
    _capture(ctx, lambda: builder.attach_metric(key, value))


@when(parsers.parse('metric "{key}" with no value is attached'))
def step_null_metric(ctx: LoggingScenarioContext, key: str) -> None:
    assert ctx.builder is not None
    builder = ctx.builder
    _capture(ctx, lambda: builder.attach_metric(key, None))


@when(parsers.parse('namespace "{name}" is requested'))
def step_namespace(ctx: LoggingScenarioContext, name: str) -> None:
    assert ctx.builder is not None
    builder = ctx.builder
    _capture(ctx, lambda: builder.namespace(name))


@when(parsers.parse('a cause "{text}" is attached in namespace "{name}"'))
def step_cause_in_namespace(ctx: LoggingScenarioContext, text: str, name: str) -> None:
    assert ctx.builder is not None
    builder = ctx.builder
    _capture(ctx, lambda: builder.namespace(name).attach_cause(RuntimeError(text)))


@then(parsers.parse("the built entry formats as '{text}'"))
def step_built_entry(ctx: LoggingScenarioContext, text: str) -> None:
    assert ctx.builder is not None
    assert ctx.formatter.format(ctx.builder.build()) == text


@then("a naming conflict is raised")
def step_naming_conflict(ctx: LoggingScenarioContext) -> None:
    assert isinstance(ctx.error, NamingConflictError)


@then(parsers.parse('a cause already set error referencing "{text}" is raised'))
def step_cause_already_set(ctx: LoggingScenarioContext, text: str) -> None:
    assert isinstance(ctx.error, CauseAlreadySetError)
    assert str(ctx.error.first_cause) == text


# === Formatting ===
@given(parsers.parse("a formatter with max depth {max_depth:d}"))
def step_formatter(ctx: LoggingScenarioContext, max_depth: int) -> None:
    ctx.formatter = JsonLogEntryFormatter(max_depth, cause_in_message=False)


@when(parsers.parse("a value nested {levels:d} levels deep is formatted"))
def step_format_nested(ctx: LoggingScenarioContext, levels: int) -> None:
    value = nested_lists(levels)

    def action() -> None:
        ctx.output = ctx.formatter.format(value)

    _capture(ctx, action)


@when("a mapping with a null key is formatted")
def step_format_null_key(ctx: LoggingScenarioContext) -> None:
    def action() -> None:
        ctx.output = ctx.formatter.format({None: "value"})

    _capture(ctx, action)


@then("the formatting succeeds")
def step_formatting_succeeds(ctx: LoggingScenarioContext) -> None:
    assert ctx.error is None
    assert ctx.output is not None


@then(parsers.parse("the formatting fails with max depth {max_depth:d}"))
def step_formatting_fails(ctx: LoggingScenarioContext, max_depth: int) -> None:
    assert isinstance(ctx.error, DepthExceededError)
    assert ctx.error.max_depth == max_depth
    assert ctx.output is None


@then(parsers.parse("an invalid key error at depth {depth:d} is raised"))
def step_invalid_key(ctx: LoggingScenarioContext, depth: int) -> None:
    assert isinstance(ctx.error, InvalidKeyError)
    assert ctx.error.depth == depth
