"""
API error handling.

Maps the domain exception hierarchy onto HTTP status codes and uniform
ErrorResponse bodies. Only errors raised before a streaming response has
started can be reported this way.

Dependencies: fastapi, docchat.core.exceptions, docchat.models.common
System role: Exception-to-HTTP translation
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from docchat.core.exceptions import (
    ConfigurationError,
    DocChatException,
    EmbeddingError,
    GenerationError,
    IndexNotReadyError,
    SessionNotFoundError,
    StageTimeoutError,
)
from docchat.models.common import ErrorResponse

logger = logging.getLogger(__name__)


def status_for(exc: DocChatException) -> int:
    """Return the HTTP status code for a domain exception."""
    if isinstance(exc, ConfigurationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, SessionNotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, StageTimeoutError):
        return status.HTTP_504_GATEWAY_TIMEOUT
    if isinstance(exc, (GenerationError, EmbeddingError)):
        return status.HTTP_502_BAD_GATEWAY
    if isinstance(exc, IndexNotReadyError):
        return status.HTTP_503_SERVICE_UNAVAILABLE
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(exc: DocChatException) -> JSONResponse:
    """Build a JSON error response for a domain exception."""
    code = status_for(exc)
    if code >= 500:
        logger.error(f"Request failed: {exc}", extra={"error_type": type(exc).__name__, "status_code": code})
    else:
        logger.warning(f"Request rejected: {exc}", extra={"error_type": type(exc).__name__, "status_code": code})
    body = ErrorResponse(error=exc.message, details=exc.details or None)
    return JSONResponse(status_code=code, content=jsonable_encoder(body))


async def _domain_exception_handler(request: Request, exc: DocChatException) -> JSONResponse:
    return error_response(exc)


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    body = ErrorResponse(error="Invalid request body", details={"errors": jsonable_encoder(exc.errors())})
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump())


def register_exception_handlers(app: FastAPI) -> None:
    """Install domain and request validation handlers on the app."""
    app.add_exception_handler(DocChatException, _domain_exception_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
