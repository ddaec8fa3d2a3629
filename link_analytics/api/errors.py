"""
Error Responses

Turns LinkAnalyticsError subclasses into HTTP responses. The public
redirect route answers browsers with a small HTML page; API routes and
clients that ask for JSON get ``{"success": false, "message": ...}``.
Request validation failures on API routes use the same envelope.
"""

import html
import logging

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse

from link_analytics.core.exceptions import (
    LinkAnalyticsError,
    LinkNotFoundError,
    LinkUnavailableError,
)

logger = logging.getLogger(__name__)

NO_CACHE_HEADERS = {"Cache-Control": "no-cache, no-store, must-revalidate, max-age=0"}

PAGE_TEMPLATE = """<!DOCTYPE html>
<html><head><meta charset="UTF-8"><title>{title}</title></head>
<body>
    <div style="text-align: center; margin-top: 50px; font-family: Arial;">
        <h2>{title}</h2>
        <p>{message}</p>
        <a href="/" style="color: #007bff;">&larr; Go to Homepage</a>
    </div>
</body></html>
"""


def wants_json(request: Request) -> bool:
    if request.url.path.startswith("/api/"):
        return True
    return "application/json" in request.headers.get("accept", "")


def render_error_page(exc: LinkAnalyticsError) -> str:
    if isinstance(exc, LinkNotFoundError):
        title = "404 - Not Found"
        message = f'The short code "{html.escape(str(exc.identifier))}" does not exist.'
    elif isinstance(exc, LinkUnavailableError):
        title = "Link Expired" if exc.reason == "expired" else "Link Inactive"
        message = html.escape(exc.message)
    else:
        title = "Error"
        message = html.escape(exc.message)
    return PAGE_TEMPLATE.format(title=title, message=message)


async def link_analytics_error_handler(request: Request, exc: LinkAnalyticsError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}", exc_info=exc)

    if wants_json(request):
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": exc.message},
        )

    return HTMLResponse(
        content=render_error_page(exc),
        status_code=exc.status_code,
        headers=NO_CACHE_HEADERS,
    )


def describe_validation_errors(exc: RequestValidationError) -> str:
    """Invalid fields joined with "; ", e.g. "days: Input should be greater than or equal to 1"."""
    parts = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("query", "path", "body")]
        location = ".".join(loc)
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(parts) or "Invalid request"


async def validation_error_handler(request: Request, exc: RequestValidationError):
    if not request.url.path.startswith("/api/"):
        return await request_validation_exception_handler(request, exc)

    return JSONResponse(
        status_code=422,
        content={"success": False, "message": describe_validation_errors(exc)},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(LinkAnalyticsError, link_analytics_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
