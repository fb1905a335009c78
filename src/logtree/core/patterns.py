"""Composite observers: one observer object that fans out to many."""

import inspect
from collections.abc import Callable
from typing import Any, Generic, TypeVar

T = TypeVar("T")

_VOID_ANNOTATIONS = (inspect.Signature.empty, None, type(None), "None")


def _observer_methods(observer_type: type) -> list[str]:
    """Return the public method names of an observer type.

    Raises:
        TypeError: If any public method declares a non-None return type.
    """
    names: list[str] = []
    invalid: list[str] = []
    for name, member in inspect.getmembers(observer_type, inspect.isfunction):
        if name.startswith("_"):
            continue
        names.append(name)
        if inspect.signature(member).return_annotation not in _VOID_ANNOTATIONS:
            invalid.append(name)
    if invalid:
        raise TypeError(
            "Only observer types where all methods return None are supported. "
            f"Type: {observer_type.__qualname__} invalid methods: {invalid}"
        )
    return names


def _fan_out(name: str, observers: tuple[Any, ...]) -> Callable[..., None]:
    def method(self: Any, *args: Any, **kwargs: Any) -> None:
        for observer in observers:
            getattr(observer, name)(*args, **kwargs)

    method.__name__ = name
    return method


class CompositeObserverBuilder(Generic[T]):
    """Builds a single observer that forwards every call to many observers.

    Delegates are invoked in the order they were added.

    Example:
        ```python
        class JobObserver(Protocol):
            def finished(self, job_id: str) -> None: ...

        observer = (
            CompositeObserverBuilder(JobObserver, metrics_observer)
            .add(audit_observer)
            .build()
        )
        observer.finished("job-1")  # calls both observers
        ```
    """

    def __init__(self, observer_type: type[T], observer: T) -> None:
        """Initialize the builder.

        Args:
            observer_type: Class or Protocol defining the observer methods.
            observer: The first delegate.

        Raises:
            TypeError: If ``observer_type`` is not a class or has a method
                returning something other than None.
        """
        if not isinstance(observer_type, type):
            raise TypeError(f"observer_type must be a class: {observer_type!r}")
        self._observer_type = observer_type
        self._methods = _observer_methods(observer_type)
        self._observers: list[T] = []
        self.add(observer)

    def add(self, observer: T) -> "CompositeObserverBuilder[T]":
        """Add a delegate.

        Raises:
            TypeError: If ``observer`` is None.
        """
        if observer is None:
            raise TypeError("observer must not be None")
        self._observers.append(observer)
        return self

    def build(self) -> T:
        """Create the composite from the delegates added so far."""
        observers = tuple(self._observers)
        type_name = self._observer_type.__qualname__
        namespace: dict[str, Any] = {
            name: _fan_out(name, observers) for name in self._methods
        }
        namespace["__init__"] = lambda self: None
        namespace["__repr__"] = lambda self: f"Composite observer for {type_name}"
        metaclass = type(self._observer_type)
        composite = metaclass(
            f"Composite{self._observer_type.__name__}", (self._observer_type,), namespace
        )
        return composite()


__all__ = ["CompositeObserverBuilder"]
