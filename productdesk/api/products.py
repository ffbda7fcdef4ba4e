"""Product API endpoints.

Provides listing, retrieval, creation, partial update and deletion
of products. Every product returned carries its populated category.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status

from productdesk.api.dependencies import get_pagination, get_product_service
from productdesk.api.schemas import (
    DataResponse,
    ErrorResponse,
    MessageResponse,
    PaginationSchema,
    ProductListData,
    ProductResponse,
    product_to_response,
)
from productdesk.catalog.schemas import ProductCreate, ProductUpdate
from productdesk.catalog.service import PaginationParams, ProductFilter, ProductService

router = APIRouter(tags=["Products"])

ProductServiceDep = Annotated[ProductService, Depends(get_product_service)]
PaginationDep = Annotated[PaginationParams, Depends(get_pagination)]


# ============================================================================
# Endpoints
# ============================================================================


@router.get(
    "/products",
    response_model=DataResponse[ProductListData],
    responses={400: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
    summary="List products",
    description=(
        "List products with optional search over name and description, "
        "category filter, sorting and pagination."
    ),
)
async def list_products(
    service: ProductServiceDep,
    pagination: PaginationDep,
    search: Annotated[
        str, Query(description="Case-insensitive substring of name or description")
    ] = "",
    category_id: Annotated[
        str, Query(alias="categoryId", description="Only products in this category")
    ] = "",
) -> DataResponse[ProductListData]:
    """List products.

    Returns:
        Page of products with the pagination envelope.
    """
    result = await service.list_products(
        ProductFilter(search=search or None, category_id=category_id or None),
        pagination,
    )

    return DataResponse(
        data=ProductListData(
            products=[product_to_response(p) for p in result.items],
            pagination=PaginationSchema(**result.envelope()),
        )
    )


@router.get(
    "/product/{product_id}",
    response_model=DataResponse[ProductResponse],
    responses={404: {"model": ErrorResponse}},
    summary="Get product",
)
async def get_product(
    product_id: str,
    service: ProductServiceDep,
) -> DataResponse[ProductResponse]:
    """Get a product by ID.

    Raises:
        NotFoundError: If the product does not exist.
    """
    product = await service.get_product(product_id)
    return DataResponse(data=product_to_response(product))


@router.post(
    "/product",
    response_model=DataResponse[ProductResponse],
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
    summary="Create product",
)
async def create_product(
    body: ProductCreate,
    service: ProductServiceDep,
) -> DataResponse[ProductResponse]:
    """Create a product.

    Raises:
        ValidationError: If the referenced category does not exist.
    """
    product = await service.create_product(body)
    return DataResponse(data=product_to_response(product))


@router.put(
    "/product/{product_id}",
    response_model=MessageResponse[ProductResponse],
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
    },
    summary="Update product",
    description="Partially update a product. Omitted fields keep their values.",
)
async def update_product(
    product_id: str,
    body: ProductUpdate,
    service: ProductServiceDep,
) -> MessageResponse[ProductResponse]:
    """Update a product."""
    product = await service.update_product(product_id, body)
    return MessageResponse(
        data=product_to_response(product),
        message="Product updated successfully",
    )


@router.delete(
    "/product/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"model": ErrorResponse}},
    summary="Delete product",
)
async def delete_product(
    product_id: str,
    service: ProductServiceDep,
) -> Response:
    """Delete a product."""
    await service.delete_product(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
