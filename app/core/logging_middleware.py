"""
Request logging middleware.

One log line when a request arrives and one when it finishes, both tagged
with a request id. The id comes from the caller's `X-Request-Id` header
or is generated, is stored on `request.state.request_id` for the error
handlers, and is echoed back with `X-Response-Time`.
"""

import logging
import time
import uuid
from typing import Callable, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("legalease.requests")

QUIET_PATHS = frozenset({"/healthz", "/readyz", "/favicon.ico"})


def client_address(request: Request) -> Optional[str]:
    """First hop of X-Forwarded-For, then X-Real-IP, then the socket peer."""
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip
    return request.client.host if request.client else None


def _level_for(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        path = request.url.path
        if path in QUIET_PATHS:
            return await call_next(request)

        request_id = request.headers.get("X-Request-Id") or uuid.uuid4().hex[:8]
        request.state.request_id = request_id
        context = {
            "request_id": request_id,
            "method": request.method,
            "path": path,
            "client_ip": client_address(request),
        }
        logger.info("-> %s %s", request.method, path, extra=context)

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.exception(
                "<- %s %s raised after %.1fms",
                request.method,
                path,
                elapsed_ms,
                extra={**context, "status_code": 500, "duration_ms": round(elapsed_ms, 1)},
            )
            raise

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.log(
            _level_for(response.status_code),
            "<- %s %s %d in %.1fms",
            request.method,
            path,
            response.status_code,
            elapsed_ms,
            extra={**context, "status_code": response.status_code, "duration_ms": round(elapsed_ms, 1)},
        )
        response.headers["X-Request-Id"] = request_id
        response.headers["X-Response-Time"] = f"{elapsed_ms:.1f}ms"
        return response
