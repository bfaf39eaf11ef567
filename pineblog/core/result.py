"""
Result type for command and query handlers.

Expected outcomes (validation failures, missing entities, persistence
errors) travel in the Failure arm instead of being raised, so callers can
pattern-match:

    match await dispatcher.send(cmd):
        case Success(value=post):
            ...
        case Failure(exception=NotFoundError()):
            ...

Invariant: a Result is exactly one of Success or Failure. is_success is
derived from the arm, never stored.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, NoReturn, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    """Successful outcome carrying a value."""

    value: T

    @property
    def is_success(self) -> bool:
        return True

    @property
    def is_failure(self) -> bool:
        return False

    @property
    def exception(self) -> None:
        return None

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Failure:
    """Failed outcome carrying the exception that describes it."""

    exception: BaseException

    def __post_init__(self) -> None:
        if not isinstance(self.exception, BaseException):
            raise TypeError(
                f"Failure requires an exception instance, got {type(self.exception).__name__}"
            )

    @property
    def is_success(self) -> bool:
        return False

    @property
    def is_failure(self) -> bool:
        return True

    @property
    def value(self) -> None:
        return None

    def unwrap(self) -> NoReturn:
        """Raise the carried exception."""
        raise self.exception


Result = Union[Success[T], Failure]


def ok(value: T) -> Success[T]:
    return Success(value)


def fail(exception: BaseException) -> Failure:
    return Failure(exception)
