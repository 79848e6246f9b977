"""Single-attempt HTTP transport.

``AiohttpTransport.send`` performs exactly one round trip and reports what
happened as a ``TransportOutcome`` value instead of raising, so the retry and
validation layers can branch on it explicitly.
"""

import asyncio
import contextlib
import logging
import time
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal, Protocol

import aiohttp
from asyncio_throttle import Throttler
from pydantic import BaseModel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RequestDescriptor:
    """One API call: where to send it and what shape to expect back."""

    method: Literal["GET", "POST"]
    path: str
    model: type[BaseModel]
    context: str
    params: Mapping[str, str] | None = None
    body: Any = None


@dataclass(frozen=True)
class Success:
    status: int
    body: bytes
    elapsed_ms: int


@dataclass(frozen=True)
class TimedOut:
    elapsed_ms: int
    cause: BaseException | None = None


@dataclass(frozen=True)
class NetworkFailure:
    elapsed_ms: int
    cause: BaseException | None = None


@dataclass(frozen=True)
class HttpStatusFailure:
    status: int
    elapsed_ms: int


TransportOutcome = Success | TimedOut | NetworkFailure | HttpStatusFailure


class Transport(Protocol):
    """Anything that can perform one request round trip."""

    async def send(self, request: RequestDescriptor) -> TransportOutcome: ...


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


class AiohttpTransport:
    """Transport backed by an ``aiohttp.ClientSession``."""

    def __init__(
        self,
        base_url: str,
        headers: Mapping[str, str] | None = None,
        timeout_ms: int = 30000,
        rate_limit: int | None = None,
        session: aiohttp.ClientSession | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.headers = dict(headers or {})
        self.timeout_seconds = timeout_ms / 1000
        self._session = session
        self._own_session = session is None

        # Client-side rate limiting, requests per minute
        self.throttler = Throttler(rate_limit=rate_limit, period=60) if rate_limit else None

    async def __aenter__(self):
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession(
                headers=self.headers,
                # asyncio.timeout() in send() enforces the per-request deadline
                timeout=aiohttp.ClientTimeout(total=None),
                raise_for_status=False,
            )
        return self._session

    def _throttle(self):
        return self.throttler if self.throttler is not None else contextlib.nullcontext()

    async def send(self, request: RequestDescriptor) -> TransportOutcome:
        """Perform one round trip for ``request``."""
        session = await self._ensure_session()
        url = f"{self.base_url}{request.path}"
        log_context = {"method": request.method, "path": request.path, "context": request.context}

        logger.info("api_request", extra=log_context)
        start = time.perf_counter()

        try:
            async with self._throttle():
                async with asyncio.timeout(self.timeout_seconds):
                    async with session.request(
                        request.method,
                        url,
                        params=request.params,
                        json=request.body if request.method == "POST" else None,
                    ) as response:
                        status = response.status
                        body = await response.read() if 200 <= status < 300 else b""
        except TimeoutError as e:
            elapsed = _elapsed_ms(start)
            logger.error("api_timeout", extra={**log_context, "latency_ms": elapsed})
            return TimedOut(elapsed_ms=elapsed, cause=e)
        except (aiohttp.ClientError, OSError) as e:
            elapsed = _elapsed_ms(start)
            logger.error(
                "api_network_error",
                extra={**log_context, "latency_ms": elapsed, "error": str(e) or type(e).__name__},
            )
            return NetworkFailure(elapsed_ms=elapsed, cause=e)

        elapsed = _elapsed_ms(start)
        if not 200 <= status < 300:
            logger.error("api_error", extra={**log_context, "status_code": status, "latency_ms": elapsed})
            return HttpStatusFailure(status=status, elapsed_ms=elapsed)

        logger.info("api_response", extra={**log_context, "status_code": status, "latency_ms": elapsed})
        return Success(status=status, body=body, elapsed_ms=elapsed)

    async def close(self) -> None:
        """Close HTTP session."""
        if self._session and self._own_session:
            await self._session.close()
            self._session = None
            logger.info("transport_closed", extra={"base_url": self.base_url})
