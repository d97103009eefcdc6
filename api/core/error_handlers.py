"""
Central error responder.

Every error raised while handling a request ends up here and leaves as
one JSON shape:

    {"status": "fail" | "error", "message": "...", "stack": "...", "error": {...}}

`stack` and `error` are diagnostics and are only included outside
production.
"""

from __future__ import annotations

import logging
import traceback
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import config
from .errors import AppError, classify_status

logger = logging.getLogger(__name__)

GENERIC_SERVER_MESSAGE = "Internal server error"


def _format_stack(exc: BaseException) -> str:
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))


def _validation_message(exc: RequestValidationError) -> str:
    parts: list[str] = []
    for err in exc.errors():
        # Drop the leading "body"/"path" marker; clients only know field names.
        location = [str(item) for item in err.get("loc", ())[1:]]
        field = ".".join(location) or "body"
        parts.append(f"{field}: {err.get('msg', 'invalid value')}")
    return "Invalid request data. " + "; ".join(parts)


def error_response(
    exc: BaseException,
    *,
    status_code: int,
    message: str,
    is_operational: bool,
) -> JSONResponse:
    status = classify_status(status_code)
    body: dict[str, Any] = {"status": status, "message": message}
    if not config.is_production():
        body["stack"] = _format_stack(exc)
        body["error"] = {
            "type": type(exc).__name__,
            "status_code": status_code,
            "status": status,
            "is_operational": is_operational,
        }
    return JSONResponse(status_code=status_code, content=body)


def _log(request: Request, exc: BaseException, status_code: int, message: str) -> None:
    if status_code >= 500:
        logger.error(
            "request_failed method=%s path=%s status=%s message=%s",
            request.method,
            request.url.path,
            status_code,
            message,
            exc_info=(type(exc), exc, exc.__traceback__),
        )
    else:
        logger.warning(
            "request_rejected method=%s path=%s status=%s message=%s",
            request.method,
            request.url.path,
            status_code,
            message,
        )


def register_error_handlers(app: FastAPI) -> None:
    """
    Install the responder on `app`. Call once, after creating the app.
    """

    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
        _log(request, exc, exc.status_code, exc.message)
        return error_response(
            exc,
            status_code=exc.status_code,
            message=exc.message,
            is_operational=exc.is_operational,
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        message = _validation_message(exc)
        _log(request, exc, 400, message)
        return error_response(exc, status_code=400, message=message, is_operational=True)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        message = str(exc.detail)
        _log(request, exc, exc.status_code, message)
        return error_response(
            exc,
            status_code=exc.status_code,
            message=message,
            is_operational=True,
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        message = GENERIC_SERVER_MESSAGE if config.is_production() else (str(exc) or GENERIC_SERVER_MESSAGE)
        _log(request, exc, 500, message)
        return error_response(exc, status_code=500, message=message, is_operational=False)
