"""
Request timeout middleware.

Bounds every request; the two routes that wait on the LLM (upload
analysis and document generation) get a multiple of the base timeout.
Expiry answers 504 in the standard error body.
"""

import asyncio
import logging
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.errors import error_response

logger = logging.getLogger(__name__)

LLM_ROUTE_FACTORS = {
    "/api/documents/upload": 2.0,
    "/api/documents/generate": 3.0,
}


class TimeoutMiddleware(BaseHTTPMiddleware):
    """app.add_middleware(TimeoutMiddleware, timeout=settings.request_timeout_seconds)"""

    def __init__(self, app, timeout: float = 60.0):
        super().__init__(app)
        self.default_timeout = timeout

    def timeout_for(self, path: str) -> float:
        for prefix, factor in LLM_ROUTE_FACTORS.items():
            if path.startswith(prefix):
                return self.default_timeout * factor
        return self.default_timeout

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        timeout = self.timeout_for(request.url.path)
        try:
            return await asyncio.wait_for(call_next(request), timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning(
                "Request timeout: %s %s (%.1fs)",
                request.method,
                request.url.path,
                timeout,
                extra={"timeout_seconds": timeout, "path": request.url.path},
            )
            response = error_response(
                request,
                504,
                "timeout",
                f"Request timed out after {timeout:g} seconds",
                details=[{"timeout_seconds": timeout}],
            )
            response.headers["Retry-After"] = "30"
            return response
