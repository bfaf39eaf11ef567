"""
Rule-based validation for commands and queries.

A Validator holds one Rule per field; each Rule holds any number of checks.
validate() runs every check of every rule and returns the full set of
failures, so a command with three bad fields yields three failures.

A check is a callable taking the field value and returning an error message,
or None when the value is acceptable.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

C = TypeVar("C")

Check = Callable[[Any], "str | None"]


@dataclass(frozen=True)
class ValidationFailure:
    """One violated rule on one field."""

    field: str
    message: str
    code: str = "invalid"


# --- Checks ---


def not_empty(message: str = "must not be empty") -> Check:
    def check(value: Any) -> str | None:
        if value is None:
            return message
        if isinstance(value, str) and not value.strip():
            return message
        if isinstance(value, (bytes, list, tuple, dict, set)) and not value:
            return message
        return None

    return check


def max_length(limit: int) -> Check:
    def check(value: Any) -> str | None:
        if value is not None and len(value) > limit:
            return f"must be at most {limit} characters"
        return None

    return check


def min_value(minimum: int) -> Check:
    def check(value: Any) -> str | None:
        if value is not None and value < minimum:
            return f"must be at least {minimum}"
        return None

    return check


def no_parent_segments() -> Check:
    """Reject paths that could climb out of the store root."""

    def check(value: Any) -> str | None:
        if not value:
            return None
        segments = str(value).replace("\\", "/").split("/")
        if ".." in segments:
            return "must not contain '..' segments"
        return None

    return check


def predicate(fn: Callable[[Any], bool], message: str) -> Check:
    def check(value: Any) -> str | None:
        return None if fn(value) else message

    return check


# --- Rules & Validator ---


class Rule:
    """Checks applied to a single field."""

    def __init__(
        self,
        field: str,
        *checks: Check,
        getter: Callable[[Any], Any] | None = None,
        code: str = "invalid",
    ) -> None:
        self.field = field
        self.checks = checks
        self.getter = getter or (lambda obj: getattr(obj, field, None))
        self.code = code

    def evaluate(self, obj: Any) -> list[ValidationFailure]:
        value = self.getter(obj)
        failures: list[ValidationFailure] = []
        for check in self.checks:
            message = check(value)
            if message is not None:
                failures.append(ValidationFailure(self.field, message, self.code))
        return failures


class Validator(Generic[C]):
    """Aggregating validator; never stops at the first failure."""

    def __init__(self, *rules: Rule) -> None:
        self.rules = rules

    def validate(self, obj: C) -> frozenset[ValidationFailure]:
        failures: set[ValidationFailure] = set()
        for rule in self.rules:
            failures.update(rule.evaluate(obj))
        return frozenset(failures)

    def __call__(self, obj: C) -> frozenset[ValidationFailure]:
        return self.validate(obj)
