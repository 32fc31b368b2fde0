"""Result[T, E] monad — Ok and Err variants, plus the degraded-store payload."""

from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Callable, Generic, NoReturn, TypeVar

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")


class Ok(Generic[T]):
    """Successful result variant."""

    __slots__ = ("_value",)

    def __init__(self, value: T) -> None:
        self._value = value

    @property
    def value(self) -> T:
        return self._value

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self._value

    def unwrap_or(self, default: T) -> T:  # noqa: ARG002
        return self._value

    def map(self, func: Callable[[T], U]) -> "Ok[U]":
        return Ok(func(self._value))

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Ok) and other._value == self._value

    def __repr__(self) -> str:
        return f"Ok({self._value!r})"


class Err(Generic[E]):
    """Error result variant."""

    __slots__ = ("_error",)

    def __init__(self, error: E) -> None:
        self._error = error

    @property
    def error(self) -> E:
        return self._error

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        if isinstance(self._error, BaseException):
            raise self._error
        cause = getattr(self._error, "error", None)
        if isinstance(cause, BaseException):
            raise cause
        raise RuntimeError(f"unwrap() called on {self!r}")

    def unwrap_or(self, default: T) -> T:
        return default

    def map(self, func: Callable[[T], U]) -> "Err[E]":  # noqa: ARG002
        return self

    def __repr__(self) -> str:
        return f"Err({self._error!r})"


type Result[T, E] = Ok[T] | Err[E]


class DegradedReason(str, Enum):
    CIRCUIT_OPEN = "circuit_open"
    TIMEOUT = "timeout"
    STORE_ERROR = "store_error"


@dataclasses.dataclass(frozen=True)
class Degraded:
    """Why a store call produced no answer. ``error`` is the underlying failure."""

    reason: DegradedReason
    error: BaseException | None = None


__all__ = ["Degraded", "DegradedReason", "Err", "Ok", "Result"]
