"""Request context middleware.

Every request gets a correlation ID and has its method and path bound
into the structlog context, so catalog log events carry them without
passing them around. Catalog errors are mapped by the exception
handlers in ``productdesk.main``; only errors nothing else handles
reach this layer.
"""

import time
from typing import Callable
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from productdesk.api.schemas import error_body

logger = structlog.get_logger()

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Correlate logs with requests and turn stray exceptions into 500s."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())
        request.state.request_id = request_id

        with structlog.contextvars.bound_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        ):
            started = time.perf_counter()
            try:
                response = await call_next(request)
            except Exception as e:
                logger.exception("Unexpected error", error_type=type(e).__name__)
                response = JSONResponse(
                    status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                    content=error_body(
                        "INTERNAL_ERROR",
                        "An internal error occurred",
                        request_id=request_id,
                    ),
                )

            response.headers[REQUEST_ID_HEADER] = request_id
            logger.info(
                "Request completed",
                query=request.url.query or None,
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )

        return response


def setup_middleware(app: FastAPI) -> None:
    """Install the request context middleware on ``app``."""
    app.add_middleware(RequestContextMiddleware)
