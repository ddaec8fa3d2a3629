"""
Request Logging Middleware

One access-log line per request on the ``link_analytics`` logger:
METHOD PATH STATUS TIMEms IP:<client>

Server errors are logged at error level, refused redirects and API errors
(4xx) at warning, everything else at info. The elapsed time is also
returned in the X-Process-Time header.
"""

import logging
import time

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware

from link_analytics.core.network import get_client_ip

logger = logging.getLogger("link_analytics")


def level_for_status(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class LoggingMiddleware(BaseHTTPMiddleware):
    """Access logging for every route, including redirects."""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()

        response = await call_next(request)

        elapsed = time.perf_counter() - started
        logger.log(
            level_for_status(response.status_code),
            f"{request.method} {request.url.path} "
            f"{response.status_code} {elapsed * 1000:.2f}ms "
            f"IP:{get_client_ip(request) or 'unknown'}"
        )
        response.headers["X-Process-Time"] = f"{elapsed:.6f}"
        return response


def add_logging_middleware(app: FastAPI) -> None:
    app.add_middleware(LoggingMiddleware)
