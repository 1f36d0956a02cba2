"""
Error handling for the LegalEase File API.

Every failure leaves the API as the same JSON body:

    {"error": <code>, "message": <text>, "details": [...] | null, "request_id": <id> | null}

Services raise the exceptions below; lookups that simply find nothing
return None and the router decides whether that is a 404.
"""

import logging
import traceback
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

# Error codes for plain HTTP exceptions raised by Starlette/FastAPI itself
HTTP_ERROR_CODES = {
    400: "bad_request",
    404: "not_found",
    405: "method_not_allowed",
    409: "conflict",
    413: "payload_too_large",
    429: "rate_limit_exceeded",
    500: "internal_error",
    502: "bad_gateway",
    503: "service_unavailable",
    504: "timeout",
}


# =============================================================================
# Exceptions
# =============================================================================

class LegalEaseError(Exception):
    """Base exception carrying its HTTP status and error code."""

    def __init__(
        self,
        message: str,
        error_code: str = "legalease_error",
        status_code: int = 500,
        details: list[dict] | None = None,
    ):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details
        super().__init__(message)


class NotFoundError(LegalEaseError):
    """Document, court, template or case id that does not exist."""

    def __init__(self, resource: str, identifier: Any = None):
        message = f"{resource} not found"
        if identifier:
            message = f"{resource} '{identifier}' not found"
        super().__init__(message, error_code="not_found", status_code=404)


class BadRequestError(LegalEaseError):
    """Malformed or missing input, rejected before any work is done."""

    def __init__(self, message: str, details: list[dict] | None = None):
        super().__init__(message, error_code="bad_request", status_code=400, details=details)


class UploadRejectedError(BadRequestError):
    """An uploaded file that cannot be accepted (type, size or content)."""

    def __init__(self, message: str, filename: Optional[str] = None, **detail: Any):
        context = {"filename": filename, **detail} if filename or detail else None
        super().__init__(message, details=[context] if context else None)
        self.filename = filename


class ConflictError(LegalEaseError):
    """Request conflicts with a record's current state (e.g. a status regression)."""

    def __init__(self, message: str = "Resource conflict"):
        super().__init__(message, error_code="conflict", status_code=409)


class AIProviderError(LegalEaseError):
    """The LLM provider failed, refused or answered with something unusable."""

    def __init__(self, provider: str, message: str = "AI service error"):
        super().__init__(f"{provider}: {message}", error_code="ai_provider_error", status_code=502)
        self.provider = provider


# =============================================================================
# Exception Handlers
# =============================================================================

def get_request_id(request: Request) -> Optional[str]:
    """Id assigned by the logging middleware, else whatever the caller sent."""
    return getattr(request.state, "request_id", None) or request.headers.get("X-Request-Id")


def error_response(
    request: Request,
    status_code: int,
    error: str,
    message: str,
    details: list[dict] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": error,
            "message": message,
            "details": details,
            "request_id": get_request_id(request),
        },
    )


async def legalease_error_handler(request: Request, exc: LegalEaseError) -> JSONResponse:
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "%s: %s",
        exc.error_code,
        exc.message,
        extra={"error_code": exc.error_code, "path": request.url.path},
    )
    return error_response(request, exc.status_code, exc.error_code, exc.message, exc.details)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(
        request,
        exc.status_code,
        HTTP_ERROR_CODES.get(exc.status_code, "error"),
        str(exc.detail) if exc.detail else f"HTTP {exc.status_code}",
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Malformed bodies, missing form fields and unknown enum values
    (filing type, status, court class) are input errors: 400, not 422.
    """
    details = [
        {
            "loc": [str(part) for part in error.get("loc", [])],
            "msg": error.get("msg", ""),
            "type": error.get("type", ""),
        }
        for error in exc.errors()
    ]
    logger.info("Validation error on %s: %d issues", request.url.path, len(details))
    return error_response(request, 400, "bad_request", "Invalid request data", details)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled exception on %s: %s",
        request.url.path,
        exc,
        exc_info=True,
        extra={
            "path": request.url.path,
            "method": request.method,
            "traceback": traceback.format_exc(),
        },
    )
    # Internal details stay in the log
    return error_response(request, 500, "internal_error", "An unexpected error occurred")


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(LegalEaseError, legalease_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
