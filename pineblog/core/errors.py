"""
Error kinds surfaced through Result failures.

Each kind carries a short `kind` tag and an advisory `status_code` that an
outer HTTP layer may map to a response. Nothing in the core depends on the
status codes.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from pineblog.domain.validation import ValidationFailure


class BlogError(Exception):
    """Base class for all domain errors."""

    kind: ClassVar[str] = "error"
    status_code: ClassVar[int] = 500


class ValidationFailedError(BlogError):
    """A command or query failed one or more validation rules."""

    kind = "validation"
    status_code = 400

    def __init__(self, failures: Iterable[ValidationFailure]) -> None:
        self.failures: frozenset[ValidationFailure] = frozenset(failures)
        super().__init__(self.aggregated_message())

    @property
    def errors(self) -> dict[str, list[str]]:
        """Failure messages grouped by field name, fields and messages sorted."""
        grouped: dict[str, list[str]] = {}
        for failure in sorted(self.failures, key=lambda f: (f.field, f.message)):
            grouped.setdefault(failure.field, []).append(failure.message)
        return grouped

    def aggregated_message(self) -> str:
        parts = [
            f"{field}: {message}"
            for field, messages in self.errors.items()
            for message in messages
        ]
        return "Validation failed: " + "; ".join(parts)


class NotFoundError(BlogError):
    """A referenced entity does not exist."""

    kind = "not_found"
    status_code = 404

    def __init__(self, entity: str, key: str) -> None:
        self.entity = entity
        self.key = key
        super().__init__(f"{entity} not found: {key}")


class PersistenceError(BlogError):
    """The repository, unit of work or file store reported a failure."""

    kind = "persistence"
    status_code = 500


class OperationCancelledError(BlogError):
    """The caller cancelled the operation before it completed."""

    kind = "cancelled"
    status_code = 499


class HandlerNotRegisteredError(LookupError):
    """No handler is registered for a request type."""

    def __init__(self, request_type: type) -> None:
        self.request_type = request_type
        super().__init__(f"No handler registered for {request_type.__name__}")
