"""
Per-client request limits (slowapi).

Every route shares `RATE_LIMIT_DEFAULT`, keyed on the caller's address as
seen through any proxy. Tests turn the limiter off with
`RATE_LIMIT_ENABLED=false`.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from app.core.config import Settings
from app.core.errors import error_response
from app.core.logging_middleware import client_address

logger = logging.getLogger(__name__)

RETRY_AFTER_SECONDS = 60


def client_key(request: Request) -> str:
    return client_address(request) or get_remote_address(request)


def on_rate_limited(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    logger.warning(
        "Rate limit hit by %s on %s %s",
        client_key(request),
        request.method,
        request.url.path,
    )
    response = error_response(
        request,
        429,
        "rate_limit_exceeded",
        "Too many requests. Please slow down.",
        details=[{"limit": str(exc.detail), "retry_after": RETRY_AFTER_SECONDS}],
    )
    response.headers["Retry-After"] = str(RETRY_AFTER_SECONDS)
    return response


def setup_rate_limiting(app: FastAPI, settings: Settings) -> Limiter:
    limiter = Limiter(
        key_func=client_key,
        default_limits=[settings.rate_limit_default],
        storage_uri="memory://",
        enabled=settings.rate_limit_enabled,
    )
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, on_rate_limited)
    app.add_middleware(SlowAPIMiddleware)
    return limiter
