"""
Dispatcher - the single path from a command or query to its handler.

Each request type is registered once, with its handler and an optional
validator. send() moves a request through two states:

- Validating: the validator runs synchronously. Any failure ends the
  request with Failure(ValidationFailedError) and the handler is not called.
- Handling: the handler is awaited and its Result returned.

Domain errors raised inside a handler are converted to Failure. Other
exceptions are faults and propagate. Cancellation is never turned into a
Result: asyncio.CancelledError propagates, and a set cancel event raises
OperationCancelledError.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from pineblog.core.errors import (
    BlogError,
    HandlerNotRegisteredError,
    OperationCancelledError,
    ValidationFailedError,
)
from pineblog.core.result import Failure, Result
from pineblog.domain.validation import ValidationFailure

logger = logging.getLogger(__name__)

Handler = Callable[[Any], Awaitable[Result[Any]]]
ValidateFn = Callable[[Any], frozenset[ValidationFailure]]


@dataclass(frozen=True)
class Registration:
    handler: Handler
    validator: ValidateFn | None = None


class Dispatcher:
    """Routes each request to exactly one registered handler."""

    def __init__(self) -> None:
        self._registry: dict[type, Registration] = {}

    def register(
        self,
        request_type: type,
        handler: Handler,
        validator: ValidateFn | None = None,
    ) -> None:
        """Register the handler for request_type. Raises ValueError on duplicates."""
        if request_type in self._registry:
            raise ValueError(f"Handler already registered for {request_type.__name__}")
        self._registry[request_type] = Registration(handler, validator)

    def is_registered(self, request_type: type) -> bool:
        return request_type in self._registry

    def _lookup(self, request: Any) -> Registration:
        registration = self._registry.get(type(request))
        if registration is None:
            raise HandlerNotRegisteredError(type(request))
        return registration

    async def send(self, request: Any, *, cancel: asyncio.Event | None = None) -> Result[Any]:
        """
        Validate then handle request.

        Raises:
            HandlerNotRegisteredError: request type has no handler.
            OperationCancelledError: cancel was set before or during handling.
        """
        registration = self._lookup(request)
        name = type(request).__name__

        if cancel is not None and cancel.is_set():
            raise OperationCancelledError(f"{name} cancelled before dispatch")

        if registration.validator is not None:
            failures = registration.validator(request)
            if failures:
                error = ValidationFailedError(failures)
                logger.warning("%s rejected: %s", name, error.aggregated_message())
                return Failure(error)

        logger.debug("Dispatching %s", name)
        if cancel is None:
            return await self._handle(registration, request)
        return await self._handle_cancellable(registration, request, cancel, name)

    async def _handle(self, registration: Registration, request: Any) -> Result[Any]:
        try:
            return await registration.handler(request)
        except BlogError as exc:
            logger.warning("%s failed: %s", type(request).__name__, exc)
            return Failure(exc)

    async def _handle_cancellable(
        self,
        registration: Registration,
        request: Any,
        cancel: asyncio.Event,
        name: str,
    ) -> Result[Any]:
        handling = asyncio.ensure_future(self._handle(registration, request))
        cancelled = asyncio.ensure_future(cancel.wait())
        try:
            await asyncio.wait({handling, cancelled}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            cancelled.cancel()
            if not handling.done():
                handling.cancel()
                try:
                    await handling
                except asyncio.CancelledError:
                    pass

        if handling.cancelled():
            raise OperationCancelledError(f"{name} cancelled")
        return handling.result()
