"""
HTTP pipeline for Craftgate API.

Every call passes through an ordered chain of stages wrapping a single
`send(request) -> RawResponse` coroutine:

    TracingMiddleware -> RetryMiddleware -> SigningMiddleware -> AiohttpTransport

Signing sits inside the retry loop so each physical send carries a fresh
nonce and signature.
"""

import asyncio
import logging
import time
from typing import Awaitable, Callable, Optional

import aiohttp
from yarl import URL

from .auth import ApiCredentials, CraftgateSigner, generate_nonce
from .exceptions import ConnectivityError, HttpServerError, TransportError
from .models.config import RetryConfig
from .models.transport import PreparedRequest, RawResponse
from .monitoring import PerformanceMonitor
from .session_manager import SessionManager

logger = logging.getLogger(__name__)

SendFn = Callable[[PreparedRequest], Awaitable[RawResponse]]

TRANSIENT_EXCEPTIONS = (
    aiohttp.ClientConnectionError,
    aiohttp.ClientPayloadError,
    asyncio.TimeoutError,
)
# Connection errors that a retry cannot fix
PERMANENT_EXCEPTIONS = (aiohttp.ClientSSLError, aiohttp.ServerFingerprintMismatch)


class AiohttpTransport:
    """Sends requests over the session owned by a SessionManager."""

    def __init__(self, session_manager: SessionManager):
        self._session_manager = session_manager

    async def __call__(self, request: PreparedRequest) -> RawResponse:
        session = await self._session_manager.create_session()

        # encoded=True keeps the URL byte-identical to the signed string
        async with session.request(
            request.method,
            URL(request.url, encoded=True),
            headers=request.headers,
            data=request.body,
        ) as response:
            body = await response.read()
            return RawResponse(
                status=response.status,
                body=body,
                headers=dict(response.headers),
            )


class SigningMiddleware:
    """Attaches authentication headers to every attempt."""

    def __init__(self, next_stage: SendFn, signer: CraftgateSigner):
        self._next = next_stage
        self._signer = signer

    async def __call__(self, request: PreparedRequest) -> RawResponse:
        signature = self._signer.sign(request.url, request.body)
        return await self._next(request.with_headers(signature.as_dict()))


class RetryMiddleware:
    """Retries transient failures with exponential backoff."""

    def __init__(self, next_stage: SendFn, retry_config: Optional[RetryConfig] = None):
        self._next = next_stage
        self._retry_config = retry_config or RetryConfig()

    async def __call__(self, request: PreparedRequest) -> RawResponse:
        max_retries = self._retry_config.max_retries
        last_exception: Optional[BaseException] = None
        last_response: Optional[RawResponse] = None

        for attempt in range(max_retries + 1):
            try:
                response = await self._next(request)
            except PERMANENT_EXCEPTIONS as e:
                raise TransportError(f"{type(e).__name__}: {e}") from e
            except TRANSIENT_EXCEPTIONS as e:
                last_exception, last_response = e, None
                reason = f"{type(e).__name__}: {e}"
            except aiohttp.ClientError as e:
                raise TransportError(f"{type(e).__name__}: {e}") from e
            else:
                if not self._retry_config.is_transient_status(response.status):
                    return response
                last_exception, last_response = None, response
                reason = f"HTTP {response.status}"

            # Don't sleep after the last attempt
            if attempt == max_retries:
                break

            delay = self._retry_config.delay_for(attempt)
            logger.warning(
                f"Transient failure on {request.method} {request.url} ({reason}), "
                f"retry {attempt + 1}/{max_retries} in {delay:.2f}s"
            )
            await asyncio.sleep(delay)

        logger.error(
            f"{request.method} {request.url} failed after {max_retries + 1} attempts"
        )
        if last_response is not None:
            raise HttpServerError(
                f"Server error {last_response.status}: {last_response.text()[:200]}",
                status_code=last_response.status,
                response_body=last_response.body,
            )
        raise ConnectivityError(
            f"Request failed after {max_retries + 1} attempts: {last_exception}"
        ) from last_exception


class TracingMiddleware:
    """Logs each logical call and records its metrics."""

    def __init__(self, next_stage: SendFn, monitor: Optional[PerformanceMonitor] = None):
        self._next = next_stage
        self._monitor = monitor

    async def __call__(self, request: PreparedRequest) -> RawResponse:
        path = URL(request.url, encoded=True).path
        start = time.perf_counter()
        status_code = None
        error = None
        try:
            response = await self._next(request)
            status_code = response.status
            return response
        except BaseException as e:
            # Cancellation included; always re-raised
            status_code = getattr(e, "status_code", None)
            error = type(e).__name__
            logger.debug(f"{request.method} {path} raised {error}")
            raise
        finally:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.debug(f"{request.method} {path} -> {status_code} in {duration_ms:.1f} ms")
            if self._monitor is not None:
                self._monitor.record_request(
                    path, request.method, status_code, duration_ms, error
                )


def build_pipeline(
    transport: SendFn,
    credentials: ApiCredentials,
    retry_config: Optional[RetryConfig] = None,
    monitor: Optional[PerformanceMonitor] = None,
    nonce_factory: Callable[[], str] = generate_nonce,
) -> SendFn:
    """Compose tracing, retry and signing around a transport."""
    signer = CraftgateSigner(credentials, nonce_factory)
    signed = SigningMiddleware(transport, signer)
    retried = RetryMiddleware(signed, retry_config)
    return TracingMiddleware(retried, monitor)
