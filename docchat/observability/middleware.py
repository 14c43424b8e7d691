"""
FastAPI middleware for observability.

Assigns every request an id (taken from ``X-Request-ID`` when the client
sends one), makes it visible to all log records emitted while the request
is handled, and logs one line per request with status and latency.

Dependencies: fastapi, starlette, docchat.observability
System role: Request/response observability injection
"""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from docchat.observability.correlation import clear_request_id, set_request_id
from docchat.observability.log_utils import log_exception_with_context, log_with_context

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Request id propagation and access logging."""

    async def dispatch(self, request: Request, call_next):
        """
        Tag the request with an id and log its outcome.

        Latency of streamed answers is measured to the first byte; the
        remainder of the body is sent after this middleware returns.

        Args:
            request: FastAPI request
            call_next: Next middleware in chain

        Returns:
            Response: Downstream response with the X-Request-ID header set
        """
        request_id = set_request_id(request.headers.get(REQUEST_ID_HEADER))
        started = time.perf_counter()
        route = f"{request.method} {request.url.path}"

        try:
            response: Response = await call_next(request)
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{route} - unhandled exception",
                e,
                elapsed_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            raise
        finally:
            clear_request_id()

        response.headers[REQUEST_ID_HEADER] = request_id
        log_with_context(
            logger,
            logging.INFO,
            f"{route} - {response.status_code}",
            request_id=request_id,
            status_code=response.status_code,
            content_type=response.headers.get("content-type"),
            elapsed_ms=round((time.perf_counter() - started) * 1000, 2),
            client_host=request.client.host if request.client else None,
        )
        return response
