"""ProductDesk API main application module.

This module builds the FastAPI application and configures core
middleware, routers, exception handlers and the database lifecycle.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from productdesk.api.categories import router as categories_router
from productdesk.api.health import router as health_router
from productdesk.api.middleware import setup_middleware
from productdesk.api.products import router as products_router
from productdesk.api.schemas import error_body
from productdesk.catalog.exceptions import (
    CatalogError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from productdesk.infrastructure.config import Settings, settings as default_settings
from productdesk.infrastructure.database import Database
from productdesk.infrastructure.logging import configure_logging

logger = structlog.get_logger()

API_PREFIX = "/api"

ERROR_STATUS = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    StoreError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Settings to use; defaults to the environment-loaded ones.

    Returns:
        Configured application. The database handle is opened when the
        lifespan starts and disposed when it ends.
    """
    settings = settings or default_settings
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info(
            "Starting ProductDesk API",
            version=settings.api_version,
            debug=settings.debug,
        )

        database = Database(settings.database_url, echo=settings.debug)
        if settings.create_tables:
            await database.create_all()
        app.state.database = database

        yield

        logger.info("Shutting down ProductDesk API")
        await database.dispose()

    app = FastAPI(
        title="ProductDesk API",
        description="Product and category catalog management backend",
        version=settings.api_version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings

    # CORS middleware (must be added before custom middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request ID, log context and the last-resort 500
    setup_middleware(app)

    # Include routers
    app.include_router(health_router, tags=["Health"])
    app.include_router(categories_router, prefix=API_PREFIX)
    app.include_router(products_router, prefix=API_PREFIX)

    register_exception_handlers(app)

    return app


# ============================================================================
# Custom Exception Handlers
# ============================================================================


def register_exception_handlers(app: FastAPI) -> None:
    """Attach handlers mapping exceptions to the standard error format."""

    @app.exception_handler(CatalogError)
    async def catalog_exception_handler(request: Request, exc: CatalogError) -> JSONResponse:
        """Map catalog errors to status codes."""
        request_id = getattr(request.state, "request_id", None)
        status_code = ERROR_STATUS.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)

        details = []
        if isinstance(exc, ValidationError):
            details = [{"field": exc.field, "message": exc.message}]

        if status_code >= 500:
            logger.error(
                "Catalog operation failed",
                error=exc.message,
                cause=repr(exc.__cause__),
            )
        else:
            logger.info(
                "Catalog request rejected",
                error_code=exc.error_code,
                error=exc.message,
            )

        return JSONResponse(
            status_code=status_code,
            content=error_body(exc.error_code, exc.message, details, request_id),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Report request schema violations with per-field details."""
        request_id = getattr(request.state, "request_id", None)
        details = [
            {
                "field": ".".join(str(part) for part in error["loc"][1:]) or None,
                "message": error["msg"],
            }
            for error in exc.errors()
        ]
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=error_body(
                "VALIDATION_ERROR", "Request validation failed", details, request_id
            ),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        """Handle HTTP exceptions with consistent format."""
        request_id = getattr(request.state, "request_id", None)

        detail = exc.detail
        if isinstance(detail, dict):
            error_code = detail.get("error_code", "ERROR")
            message = detail.get("message", str(detail))
        else:
            error_code = "ERROR"
            message = str(detail)

        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(error_code, message, request_id=request_id),
            headers=getattr(exc, "headers", None),
        )


app = create_app()
