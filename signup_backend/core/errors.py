"""Application error types and their HTTP rendering.

Each error carries the status code it maps to. Handlers raise these and a
single exception handler turns them into responses, so route code never
builds error responses by hand.
"""

from __future__ import annotations

import logging
from typing import ClassVar, Dict, Optional

from fastapi import Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base error for expected request failures.

    Attributes:
        message: Client-facing message, safe to expose.
        headers: Extra response headers (e.g. an auth challenge).
        plain: Render the message as text/plain instead of a JSON body.
    """

    status_code: ClassVar[int] = 500

    def __init__(
        self,
        message: str,
        *,
        headers: Optional[Dict[str, str]] = None,
        plain: bool = False,
    ):
        super().__init__(message)
        self.message = message
        self.headers = headers or {}
        self.plain = plain


class ClientInputError(AppError):
    """Malformed JSON, missing fields or invalid values."""

    status_code = 400


class AuthError(AppError):
    """Missing or invalid admin credentials."""

    status_code = 401


class MethodNotAllowedError(AppError):
    status_code = 405


class ConflictError(AppError):
    """Duplicate email or a repeated admin setup."""

    status_code = 409


class RateLimitError(AppError):
    status_code = 429


class InternalError(AppError):
    """Store or runtime failure; the message must stay generic."""

    status_code = 500


def render_error(exc: AppError) -> Response:
    if exc.plain:
        return PlainTextResponse(
            exc.message, status_code=exc.status_code, headers=exc.headers
        )
    return JSONResponse(
        {"error": exc.message}, status_code=exc.status_code, headers=exc.headers
    )


async def app_error_handler(request: Request, exc: AppError) -> Response:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(
            f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}"
        )
    return render_error(exc)


async def routing_error_handler(
    request: Request, exc: StarletteHTTPException
) -> Response:
    """Unmatched paths and unsupported methods both answer 404 plain text."""
    if exc.status_code in (404, 405):
        return PlainTextResponse("Not Found", status_code=404)
    return await http_exception_handler(request, exc)


def internal_error_response() -> Response:
    return JSONResponse({"error": "Internal server error"}, status_code=500)


def setup_exception_handlers(app) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, routing_error_handler)
