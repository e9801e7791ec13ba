"""
Request logging middleware — one access line per request.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger("studyhard.access")

# Probes and docs are not worth an access line
EXEMPT_PATHS = {
    "/", "/api/health", "/docs", "/redoc", "/openapi.json",
}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        path = request.url.path

        if path in EXEMPT_PATHS or request.method == "OPTIONS":
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        logger.info(
            "%s %s -> %s (%.1f ms)",
            request.method, path, response.status_code, elapsed_ms,
        )
        return response
