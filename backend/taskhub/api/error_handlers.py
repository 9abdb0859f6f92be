"""Error Handlers — map every failure escaping a route to the Taskhub error envelope.

Invariants:
    - TaskhubError → its own status, envelope and headers (401 keeps WWW-Authenticate)
    - RequestValidationError → BadRequestError (400 VALIDATION_ERROR), never FastAPI's 422
    - Anything else → 500 INTERNAL_ERROR; the response names the route, never the exception
    - Each rejection is logged once, with method and path, at a level matching its status

Design Decisions:
    - Routes decode their own bodies (read_payload) so the gate and the id lookup run
      first; the RequestValidationError layer only sees what FastAPI still validates
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from taskhub.core.errors import (
    BadRequestError, ErrorCategory, ErrorSeverity, TaskhubError,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    app.add_exception_handler(TaskhubError, _render_taskhub_error)
    app.add_exception_handler(RequestValidationError, _render_request_rejection)
    app.add_exception_handler(Exception, _render_unexpected_failure)


def _request_extra(request: Request, code: str) -> dict:
    return {"error_code": code, "method": request.method, "path": request.url.path}


async def _render_taskhub_error(request: Request, exc: TaskhubError) -> JSONResponse:
    if exc.http_status >= 500:
        logger.error(
            f"{request.method} {request.url.path} failed: {exc.message}",
            extra=_request_extra(request, exc.code),
        )
    else:
        logger.warning(
            f"{request.method} {request.url.path} rejected: {exc.message}",
            extra=_request_extra(request, exc.code),
        )
    return JSONResponse(
        status_code=exc.http_status,
        content=exc.to_response(),
        headers=exc.headers,
    )


async def _render_request_rejection(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    """FastAPI-side decoding failures share the BadRequestError envelope."""
    return await _render_taskhub_error(
        request, BadRequestError.from_decoder_errors(list(exc.errors())),
    )


async def _render_unexpected_failure(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}",
        exc_info=exc,
        extra=_request_extra(request, "INTERNAL_ERROR"),
    )
    error = TaskhubError(
        f"{request.method} {request.url.path} could not be completed",
        "INTERNAL_ERROR",
        ErrorCategory.INTERNAL,
        ErrorSeverity.CRITICAL,
        http_status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    return JSONResponse(status_code=error.http_status, content=error.to_response())
