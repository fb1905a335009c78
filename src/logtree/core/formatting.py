"""JSON-style formatter for built log entry trees.

Values are rendered by an ordered chain of handlers; the first handler whose
predicate accepts a value formats it. The order matters: specific scalar and
numeric types come before the generic numeric fallback, and everything that
no handler claims is rendered as an escaped string.

Python's type hierarchy overlaps in three places, so those predicates exclude
types explicitly to keep each value with its intended handler:
``bool`` is an ``int`` subclass, and mappings, tuples and byte strings are all
``Collection`` instances.
"""

import array
import json
import math
import numbers
import struct
import traceback
from collections.abc import Callable, Collection, Mapping
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

from logtree.config import get_settings
from logtree.core.errors import DepthExceededError, InvalidArgumentError, InvalidKeyError

_NULL = "null"
_COMMA = ","
_COLON = ":"
_OBJECT_START = "{"
_OBJECT_END = "}"
_ARRAY_START = "["
_ARRAY_END = "]"

# array.array type codes holding unicode characters ('w' is Python 3.13+).
_CHAR_TYPECODES = frozenset({"u", "w"})

_PRIMITIVE_ARRAYS = (bytes, bytearray, array.array)

_FLOAT32 = struct.Struct("f")


@dataclass(frozen=True)
class _Handler:
    """One link in the formatting chain.

    Attributes:
        handles: Predicate deciding whether this handler formats a value.
        write: Appends the formatted value to the output parts. Container
            writers also receive the current depth and the max depth.
        container: True if ``write`` recurses into child values.
    """

    handles: Callable[[Any], bool]
    write: Callable[..., None]
    container: bool = False


def _escape(text: str) -> str:
    """Quote and JSON-escape text."""
    return json.dumps(text, ensure_ascii=False)


def _float_text(value: float) -> str:
    """Canonical text of a float, using json's tokens for non-finite values."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return float.__repr__(float(value))


def _float32_text(value: float) -> str:
    """Shortest float text that reads back as the same single-precision value."""
    if not math.isfinite(value):
        return _float_text(value)
    for precision in range(1, 10):
        text = f"{value:.{precision}g}"
        try:
            if _FLOAT32.unpack(_FLOAT32.pack(float(text)))[0] == value:
                break
        except OverflowError:
            continue
    return _float_text(float(text))


def _real_float_text(value: numbers.Real) -> str:
    try:
        return _float_text(float(value))
    except OverflowError:
        # too large for a double
        return "Infinity" if value > 0 else "-Infinity"


def _text_of(value: Any) -> str:
    """Descriptive text for values with no dedicated handler."""
    if isinstance(value, BaseException):
        if value.__traceback__ is not None:
            lines = traceback.format_exception(value)
        else:
            lines = traceback.format_exception_only(value)
        return "".join(lines).rstrip("\n")
    return str(value)


def _key_text(key: Any) -> str:
    if isinstance(key, bool):
        return "true" if key else "false"
    if isinstance(key, Enum):
        return key.name
    if isinstance(key, str):
        return key
    return str(key)


def _write_null(parts: list[str], value: None) -> None:
    parts.append(_NULL)


def _write_string(parts: list[str], value: str) -> None:
    parts.append(_escape(value))


def _write_decimal(parts: list[str], value: Decimal) -> None:
    parts.append(str(value))


def _write_float(parts: list[str], value: float) -> None:
    parts.append(_float_text(value))


def _write_int(parts: list[str], value: int) -> None:
    parts.append(int.__repr__(value))


def _write_number(parts: list[str], value: numbers.Real) -> None:
    """Emit integral text if the value has no fractional part."""
    try:
        integral = math.trunc(value)
    except (ValueError, OverflowError):
        # NaN and infinities have no integral part
        parts.append(_real_float_text(value))
        return
    if integral == value:
        parts.append(int.__repr__(int(integral)))
    else:
        parts.append(_real_float_text(value))


def _write_bool(parts: list[str], value: bool) -> None:
    parts.append("true" if value else "false")


def _write_collection(
    parts: list[str], items: Collection[Any], depth: int, max_depth: int
) -> None:
    parts.append(_ARRAY_START)
    for index, item in enumerate(items):
        if index:
            parts.append(_COMMA)
        _format(parts, item, depth + 1, max_depth)
    parts.append(_ARRAY_END)


def _write_mapping(
    parts: list[str], mapping: Mapping[Any, Any], depth: int, max_depth: int
) -> None:
    parts.append(_OBJECT_START)
    for index, (key, value) in enumerate(mapping.items()):
        if key is None:
            raise InvalidKeyError(mapping, depth)
        if index:
            parts.append(_COMMA)
        parts.append(_escape(_key_text(key)))
        parts.append(_COLON)
        _format(parts, value, depth + 1, max_depth)
    parts.append(_OBJECT_END)


def _write_primitive_array(
    parts: list[str], items: bytes | bytearray | array.array
) -> None:
    typecode = getattr(items, "typecode", "B")
    if typecode in _CHAR_TYPECODES:
        element: Callable[[Any], str] = _escape
    elif typecode == "f":
        element = _float32_text
    elif typecode == "d":
        element = _float_text
    else:
        element = int.__repr__
    parts.append(_ARRAY_START)
    parts.append(_COMMA.join(element(item) for item in items))
    parts.append(_ARRAY_END)


def _write_fallback(parts: list[str], value: Any) -> None:
    parts.append(_escape(_text_of(value)))


def _is_collection(value: Any) -> bool:
    return isinstance(value, Collection) and not isinstance(
        value, (str, Mapping, tuple, *_PRIMITIVE_ARRAYS)
    )


_HANDLERS: tuple[_Handler, ...] = (
    _Handler(lambda v: v is None, _write_null),
    _Handler(lambda v: isinstance(v, str), _write_string),
    _Handler(lambda v: isinstance(v, Decimal), _write_decimal),
    _Handler(lambda v: isinstance(v, float), _write_float),
    _Handler(lambda v: isinstance(v, int) and not isinstance(v, bool), _write_int),
    _Handler(
        lambda v: isinstance(v, numbers.Real) and not isinstance(v, bool),
        _write_number,
    ),
    _Handler(lambda v: isinstance(v, bool), _write_bool),
    _Handler(_is_collection, _write_collection, container=True),
    _Handler(lambda v: isinstance(v, Mapping), _write_mapping, container=True),
    _Handler(lambda v: isinstance(v, _PRIMITIVE_ARRAYS), _write_primitive_array),
    _Handler(lambda v: isinstance(v, tuple), _write_collection, container=True),
    _Handler(lambda v: True, _write_fallback),
)


def _format(parts: list[str], value: Any, depth: int, max_depth: int) -> None:
    if depth > max_depth:
        raise DepthExceededError(max_depth)
    handler = next(h for h in _HANDLERS if h.handles(value))
    if handler.container:
        handler.write(parts, value, depth, max_depth)
    else:
        handler.write(parts, value)


class JsonLogEntryFormatter:
    """Formats value trees as compact JSON-style text.

    Example:
        ```python
        formatter = JsonLogEntryFormatter(max_depth=8)
        formatter.format({"message": "hi", "count": 3})
        # '{"message":"hi","count":3}'
        ```
    """

    def __init__(
        self,
        max_depth: int | None = None,
        cause_in_message: bool | None = None,
    ) -> None:
        """Initialize the formatter.

        Args:
            max_depth: Deepest nesting level that may be formatted. Defaults
                to the ``max_depth`` setting.
            cause_in_message: Whether the cause is folded into the payload.
                Defaults to the ``cause_in_message`` setting.

        Raises:
            InvalidArgumentError: If ``max_depth`` is negative.
        """
        if max_depth is None or cause_in_message is None:
            settings = get_settings()
            if max_depth is None:
                max_depth = settings.max_depth
            if cause_in_message is None:
                cause_in_message = settings.cause_in_message
        if max_depth < 0:
            raise InvalidArgumentError(f"max_depth must not be negative: {max_depth}")
        self._max_depth = max_depth
        self._cause_in_message = cause_in_message

    @property
    def max_depth(self) -> int:
        return self._max_depth

    @property
    def cause_in_message(self) -> bool:
        return self._cause_in_message

    def format(self, entry: Any) -> str:
        """Format a value tree, or any single value.

        Args:
            entry: The value to format, normally a built entry dict.

        Returns:
            The formatted text.

        Raises:
            DepthExceededError: If the value nests deeper than ``max_depth``.
            InvalidKeyError: If a mapping holds a ``None`` key.
        """
        parts: list[str] = []
        _format(parts, entry, 0, self._max_depth)
        return "".join(parts)


__all__ = ["JsonLogEntryFormatter"]
