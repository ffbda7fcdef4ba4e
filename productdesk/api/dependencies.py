"""FastAPI dependencies.

Resolve the request-scoped database session and catalog services from
the ``Database`` handle stored on the application state.
"""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Query, Request
from fastapi.exceptions import RequestValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from productdesk.catalog.service import (
    MAX_OFFSET,
    CategoryService,
    PaginationParams,
    ProductService,
)
from productdesk.infrastructure.database import Database


def get_database(request: Request) -> Database:
    """Get the database handle opened at startup."""
    return request.app.state.database


async def get_session(
    database: Annotated[Database, Depends(get_database)],
) -> AsyncGenerator[AsyncSession, None]:
    """Get a database session for one request.

    Yields:
        AsyncSession committed on success and rolled back on error.
    """
    async with database.session() as session:
        yield session


def get_category_service(
    request: Request,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CategoryService:
    """Get category service bound to the request session."""
    return CategoryService(session, max_page_size=request.app.state.settings.max_page_size)


def get_product_service(
    request: Request,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ProductService:
    """Get product service bound to the request session."""
    return ProductService(session, max_page_size=request.app.state.settings.max_page_size)


def get_pagination(
    request: Request,
    page: Annotated[int, Query(ge=1, le=MAX_OFFSET, description="Page number (1-based)")] = 1,
    limit: Annotated[int | None, Query(ge=1, description="Items per page")] = None,
    sort_by: Annotated[str, Query(alias="sortBy", description="Sort field")] = "name",
    order: Annotated[str, Query(pattern="^(asc|desc)$", description="Sort order")] = "asc",
) -> PaginationParams:
    """Read the listing window from the query string.

    The default and largest page size come from the settings the app was
    built with.

    Raises:
        RequestValidationError: If ``limit`` exceeds ``max_page_size``.
    """
    app_settings = request.app.state.settings
    max_limit = app_settings.max_page_size
    if limit is None:
        limit = app_settings.default_page_size
    elif limit > max_limit:
        raise RequestValidationError(
            [
                {
                    "type": "less_than_equal",
                    "loc": ("query", "limit"),
                    "msg": f"Input should be less than or equal to {max_limit}",
                    "input": limit,
                }
            ]
        )
    return PaginationParams(page=page, limit=limit, sort_by=sort_by, sort_order=order)
