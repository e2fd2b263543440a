"""
Result envelope for fallible marker resolution.

Loading contexts report "not found" as a value instead of an exception so the
registry builder can tell an expected miss apart from an unexpected failure
without a try/except around every name.

Examples:
    >>> from annomap.result import Ok, Err
    >>> Ok(42).unwrap()
    42
    >>> Err(KeyError("x")).unwrap_or(0)
    0

    Pattern matching::

        match loader.try_load(name):
            case Ok(marker):
                table[name] = marker
            case Err(MarkerNotFoundError()):
                skipped.append(name)

Tags:
    result-pattern, error-handling, annomap

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful result containing a value."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        """Get the value. Safe for Ok."""
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def map(self, f: Callable[[T], U]) -> Result[U]:
        """Transform the value if Ok."""
        return Ok(f(self.value))

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[T]):
    """
    Failed result containing an error.

    ``unwrap()`` re-raises the wrapped exception, so a caller that does not
    care about the distinction gets ordinary exception semantics.
    """

    error: Exception

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> T:
        """Raise the wrapped error."""
        raise self.error

    def unwrap_or(self, default: T) -> T:
        return default

    def map(self, f: Callable[[T], U]) -> Result[U]:
        """No-op for Err; the error propagates unchanged."""
        return self  # type: ignore[return-value]

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result = Union[Ok[T], Err[T]]


def try_result(f: Callable[[], T]) -> Result[T]:
    """
    Call ``f`` and wrap its outcome.

    Any ``Exception`` becomes an ``Err``; ``BaseException`` subclasses such as
    ``KeyboardInterrupt`` still propagate.
    """
    try:
        return Ok(f())
    except Exception as e:
        return Err(e)


__all__ = ["Ok", "Err", "Result", "try_result"]
