"""Error taxonomy and JSON exception handlers.

Invariants:
- Every failure reaches the client as JSON carrying an ``error`` key.
- Upstream details are redacted before they are surfaced.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from reliva.utils.redaction import redact_secrets

logger = logging.getLogger("reliva.errors")


class ApiError(Exception):
    """Base error rendered as ``{"error": message, **extra}``."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, *, status_code: int | None = None, **extra: Any) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.extra = extra

    def body(self) -> dict[str, Any]:
        return {"error": self.message, **self.extra}


class MissingParameterError(ApiError):
    """A required query or body field is absent."""

    status_code = status.HTTP_400_BAD_REQUEST


class InvalidIdentifierError(ApiError):
    """A composite identifier could not be decoded."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(ApiError):
    """The identifier is well formed but no source holds a record for it."""

    status_code = status.HTTP_404_NOT_FOUND


class NotConfiguredError(ApiError):
    """A provider credential is missing from the environment."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class UpstreamUnavailableError(ApiError):
    """Every source for a request failed or timed out."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, *, details: str | None = None, **extra: Any) -> None:
        if details is not None:
            extra["details"] = redact_secrets(details)
        super().__init__(message, **extra)


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    return f"{location}: {message}" if location else message


def register_exception_handlers(app: FastAPI) -> None:
    """Attach JSON error handlers for the taxonomy and framework errors."""

    @app.exception_handler(ApiError)
    async def _handle_api_error(request: Request, exc: ApiError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, redact_secrets(exc.message))
        return JSONResponse(status_code=exc.status_code, content=exc.body())

    @app.exception_handler(HTTPException)
    async def _handle_http_exception(request: Request, exc: HTTPException) -> JSONResponse:
        detail = exc.detail if isinstance(exc.detail, str) else "Request failed"
        return JSONResponse(status_code=exc.status_code, content={"error": detail}, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def _handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": _validation_message(exc)},
        )

    @app.exception_handler(Exception)
    async def _handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )
