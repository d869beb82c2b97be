"""JSON value aliases plus the small Option/Result carriers used by contexts."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable, Generic, TypeVar, Union

from jsonkit.errors import DecodeError

JsonScalar = Union[str, int, Decimal, float, bool, None]
JsonValue = Union[JsonScalar, list[Any], dict[str, Any]]
JsonObject = dict[str, JsonValue]

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Some(Generic[T]):
    """A present value. ``Some(None)`` is a found JSON null."""

    value: T


# Absence is ``None``; presence is always wrapped in ``Some``.
Option = Union[Some[T], None]


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    def is_ok(self) -> bool:
        return True

    def map(self, fn: Callable[[T], U]) -> Ok[U]:
        return Ok(fn(self.value))

    def and_then(self, fn: Callable[[T], Any]) -> Any:
        return fn(self.value)

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    error: DecodeError

    def is_ok(self) -> bool:
        return False

    def map(self, fn: Callable[[Any], Any]) -> Err:
        return self

    def and_then(self, fn: Callable[[Any], Any]) -> Err:
        return self

    def unwrap(self) -> Any:
        raise self.error


Result = Union[Ok[T], Err]
