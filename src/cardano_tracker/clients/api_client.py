"""Typed JSON API client: transport, validation and retry composed."""

import logging
from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import BaseModel

from .errors import VesprApiError, get_error_message_for_status
from .retry import with_retry
from .transport import (
    HttpStatusFailure,
    NetworkFailure,
    RequestDescriptor,
    Success,
    TimedOut,
    Transport,
    TransportOutcome,
)
from .validation import parse_json, validate_response

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class ApiClient:
    """Issues requests through a transport and returns validated models.

    Every failure surfaces as ``VesprApiError``; transport outcomes, JSON
    errors and validation errors never leak to callers.
    """

    def __init__(self, transport: Transport, max_retries: int = 3, retry_base_delay_ms: int = 1000):
        self.transport = transport
        self.max_retries = max_retries
        self.retry_base_delay_ms = retry_base_delay_ms

    async def get(
        self,
        path: str,
        model: type[ModelT],
        context: str,
        params: Mapping[str, str] | None = None,
    ) -> ModelT:
        request = RequestDescriptor(method="GET", path=path, model=model, context=context, params=params)
        return await self.request(request)

    async def post(self, path: str, model: type[ModelT], context: str, body: Any) -> ModelT:
        request = RequestDescriptor(method="POST", path=path, model=model, context=context, body=body)
        return await self.request(request)

    async def request(self, request: RequestDescriptor) -> Any:
        """Run ``request`` with retries on transient failures."""
        return await with_retry(
            lambda: self.request_once(request),
            request.context,
            max_retries=self.max_retries,
            retry_base_delay_ms=self.retry_base_delay_ms,
        )

    async def request_once(self, request: RequestDescriptor) -> Any:
        """Single attempt: one round trip, then parse and validate."""
        outcome = await self.transport.send(request)
        body = self._unwrap(outcome)

        try:
            data = parse_json(body)
        except VesprApiError:
            logger.error("api_parse_error", extra={"context": request.context, "latency_ms": outcome.elapsed_ms})
            raise

        try:
            result = validate_response(data, request.model)
        except VesprApiError as e:
            logger.error(
                "api_validation_error",
                extra={"context": request.context, "issues": e.message, "latency_ms": outcome.elapsed_ms},
            )
            raise

        logger.info("api_success", extra={"context": request.context, "latency_ms": outcome.elapsed_ms})
        return result

    @staticmethod
    def _unwrap(outcome: TransportOutcome) -> bytes:
        """Return the body of a successful outcome, or raise the matching error."""
        if isinstance(outcome, Success):
            return outcome.body
        elif isinstance(outcome, TimedOut):
            raise VesprApiError("Request timed out. Try again.", cause=outcome.cause)
        elif isinstance(outcome, NetworkFailure):
            raise VesprApiError(
                "Unable to connect to VESPR API. Check your internet connection.",
                cause=outcome.cause,
            )
        elif isinstance(outcome, HttpStatusFailure):
            raise VesprApiError(get_error_message_for_status(outcome.status), status_code=outcome.status)
        else:
            raise TypeError(f"Unknown transport outcome: {outcome!r}")
