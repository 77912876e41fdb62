"""
Request Logging Middleware

Pure ASGI middleware that logs method, path, status code and duration for
every HTTP request, and flags slow ones.
"""

import logging
import time

logger = logging.getLogger(__name__)

SLOW_REQUEST_MS = 2000


class RequestLoggingMiddleware:
    """Middleware to log HTTP request timings"""

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        path = scope.get("path", "")
        if self._should_skip(path):
            await self.app(scope, receive, send)
            return

        start_time = time.time()
        status_code = 500

        async def send_wrapper(message):
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        except Exception as e:
            logger.error(f"Request processing error: {e}")
            raise
        finally:
            response_time_ms = (time.time() - start_time) * 1000
            method = scope.get("method", "")
            logger.info(f"{method} {path} -> {status_code} ({response_time_ms:.0f}ms)")
            if response_time_ms > SLOW_REQUEST_MS:
                logger.warning(
                    f"Slow request: {method} {path} "
                    f"took {response_time_ms:.0f}ms (status: {status_code})"
                )

    def _should_skip(self, path: str) -> bool:
        skip_paths = [
            "/docs",
            "/redoc",
            "/favicon.ico",
            "/health",
        ]
        return any(path.startswith(skip_path) for skip_path in skip_paths) or path.endswith("/openapi.json")
