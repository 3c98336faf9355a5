"""API middleware for AgroMarket.

Provides:
- Request context (request ID, method, path) for every log event, including
  the catalog store's mutation events
- Error handling, with storage write failures reported separately from other
  unhandled errors
- The error envelope for HTTP exceptions raised by the routes
"""

import time
from typing import Callable
from uuid import uuid4

import structlog
from fastapi import FastAPI, HTTPException, Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger()

_CONTEXT_KEYS = ("request_id", "method", "path")


def error_response(
    status_code: int,
    error_code: str,
    message: str,
    details: list | dict,
    request: Request,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Build the error envelope shared by every error path."""
    return JSONResponse(
        status_code=status_code,
        content={
            "error_code": error_code,
            "message": message,
            "details": details,
            "request_id": getattr(request.state, "request_id", None),
        },
        headers=headers,
    )


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Binds the request context to structlog for the duration of a request.

    The request ID is taken from the X-Request-ID header or generated, and
    echoed back on the response.
    """

    HEADER_NAME = "X-Request-ID"

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        request_id = request.headers.get(self.HEADER_NAME) or str(uuid4())
        request.state.request_id = request_id
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        start_time = time.perf_counter()
        response = None
        try:
            response = await call_next(request)
        finally:
            logger.info(
                "Request completed",
                status_code=getattr(response, "status_code", 500),
                duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
            )
            structlog.contextvars.unbind_contextvars(*_CONTEXT_KEYS)

        response.headers[self.HEADER_NAME] = request_id
        return response


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Turns unhandled exceptions into error envelopes.

    Storage failures (the catalog file cannot be written) answer 503 so
    clients can retry; the catalog itself is left unchanged by the store.
    Anything else answers 500.
    """

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        try:
            return await call_next(request)
        except OSError as e:
            logger.error("Catalog storage unavailable", error=str(e))
            return error_response(
                status.HTTP_503_SERVICE_UNAVAILABLE,
                "STORAGE_UNAVAILABLE",
                "The catalog could not be saved, no changes were made",
                [],
                request,
            )
        except Exception as e:
            logger.exception("Unhandled exception", error=str(e))
            return error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "INTERNAL_ERROR",
                "An internal error occurred",
                [],
                request,
            )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Render route errors in the envelope and log the rejection."""
    detail = exc.detail
    if isinstance(detail, dict):
        error_code = detail.get("error_code", "ERROR")
        message = detail.get("message", str(detail))
        details = detail.get("details", [])
    else:
        error_code = "ERROR"
        message = str(detail)
        details = []

    logger.info("Request rejected", status_code=exc.status_code, error_code=error_code)
    return error_response(
        exc.status_code,
        error_code,
        message,
        details,
        request,
        headers=getattr(exc, "headers", None),
    )


def setup_middleware(app: FastAPI) -> None:
    """Configure middleware and the HTTP exception handler.

    Middleware is added in reverse order (last added = first executed), so
    the request context is bound before errors are handled.

    Args:
        app: FastAPI application instance.
    """
    app.add_middleware(ErrorHandlerMiddleware)
    app.add_middleware(RequestIdMiddleware)
    app.add_exception_handler(HTTPException, http_exception_handler)
