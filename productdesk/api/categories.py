"""Category API endpoints.

Provides listing, retrieval, creation, partial update and deletion
of categories.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status

from productdesk.api.dependencies import get_category_service, get_pagination
from productdesk.api.schemas import (
    CategoryListData,
    CategoryResponse,
    DataResponse,
    ErrorResponse,
    MessageResponse,
    PaginationSchema,
)
from productdesk.catalog.schemas import CategoryCreate, CategoryUpdate
from productdesk.catalog.service import CategoryFilter, CategoryService, PaginationParams

router = APIRouter(tags=["Categories"])

CategoryServiceDep = Annotated[CategoryService, Depends(get_category_service)]
PaginationDep = Annotated[PaginationParams, Depends(get_pagination)]


# ============================================================================
# Endpoints
# ============================================================================


@router.get(
    "/categories",
    response_model=DataResponse[CategoryListData],
    responses={400: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
    summary="List categories",
    description="List categories with optional name search, sorting and pagination.",
)
async def list_categories(
    service: CategoryServiceDep,
    pagination: PaginationDep,
    search: Annotated[str, Query(description="Case-insensitive name substring")] = "",
) -> DataResponse[CategoryListData]:
    """List categories.

    Returns:
        Page of categories with the pagination envelope.
    """
    result = await service.list_categories(
        CategoryFilter(search=search or None), pagination
    )

    return DataResponse(
        data=CategoryListData(
            categories=[CategoryResponse.model_validate(c) for c in result.items],
            pagination=PaginationSchema(**result.envelope()),
        )
    )


@router.get(
    "/category/{category_id}",
    response_model=DataResponse[CategoryResponse],
    responses={404: {"model": ErrorResponse}},
    summary="Get category",
)
async def get_category(
    category_id: str,
    service: CategoryServiceDep,
) -> DataResponse[CategoryResponse]:
    """Get a category by ID.

    Raises:
        NotFoundError: If the category does not exist.
    """
    category = await service.get_category(category_id)
    return DataResponse(data=CategoryResponse.model_validate(category))


@router.post(
    "/category",
    response_model=DataResponse[CategoryResponse],
    status_code=status.HTTP_201_CREATED,
    responses={422: {"model": ErrorResponse}},
    summary="Create category",
)
async def create_category(
    body: CategoryCreate,
    service: CategoryServiceDep,
) -> DataResponse[CategoryResponse]:
    """Create a category."""
    category = await service.create_category(body)
    return DataResponse(data=CategoryResponse.model_validate(category))


@router.put(
    "/category/{category_id}",
    response_model=MessageResponse[CategoryResponse],
    responses={404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
    summary="Update category",
    description="Partially update a category. Omitted fields keep their values.",
)
async def update_category(
    category_id: str,
    body: CategoryUpdate,
    service: CategoryServiceDep,
) -> MessageResponse[CategoryResponse]:
    """Update a category."""
    category = await service.update_category(category_id, body)
    return MessageResponse(
        data=CategoryResponse.model_validate(category),
        message="Category updated successfully",
    )


@router.delete(
    "/category/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"model": ErrorResponse}},
    summary="Delete category",
    description="Delete a category. Products referencing it are kept.",
)
async def delete_category(
    category_id: str,
    service: CategoryServiceDep,
) -> Response:
    """Delete a category."""
    await service.delete_category(category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
