"""API schemas for the ProductDesk API.

Pydantic models for response serialization. Request bodies reuse the
write payloads from ``productdesk.catalog.schemas``.
"""

from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

from productdesk.catalog.models import Product
from productdesk.catalog.schemas import CamelModel

T = TypeVar("T")


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorDetail(BaseModel):
    """Detailed error information."""

    field: str | None = Field(default=None, description="Field that caused the error")
    message: str = Field(..., description="Error message")


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    success: bool = Field(default=False)
    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: list[ErrorDetail] = Field(
        default_factory=list, description="Additional error details"
    )
    request_id: str | None = Field(
        default=None, description="Request ID for correlation"
    )


class PaginationSchema(BaseModel):
    """Pagination envelope for a windowed result set."""

    current: int = Field(..., description="Current page number (1-based)")
    pages: int = Field(..., description="Total number of pages")
    total: int = Field(..., description="Total number of matching items")
    limit: int = Field(..., description="Items per page")


class DataResponse(BaseModel, Generic[T]):
    """Successful response wrapping a payload."""

    success: bool = True
    data: T


class MessageResponse(DataResponse[T], Generic[T]):
    """Successful response with a confirmation message."""

    message: str


# ============================================================================
# Category Schemas
# ============================================================================


class CategoryResponse(CamelModel):
    """Category representation."""

    id: str = Field(..., description="Unique category identifier")
    name: str = Field(..., description="Category name")
    created_at: datetime = Field(..., description="When the category was created")
    updated_at: datetime = Field(..., description="When the category was last updated")


class CategoryListData(BaseModel):
    """Page of categories."""

    categories: list[CategoryResponse]
    pagination: PaginationSchema


# ============================================================================
# Product Schemas
# ============================================================================


class ProductResponse(CamelModel):
    """Product representation.

    ``categoryId`` holds the embedded category, or the bare identifier
    when the referenced category no longer exists.
    """

    id: str = Field(..., description="Unique product identifier")
    name: str = Field(..., description="Product name")
    description: str | None = Field(default=None, description="Product description")
    price: float = Field(..., description="Unit price")
    quantity: int = Field(..., description="Units on hand")
    category_id: CategoryResponse | str = Field(
        ..., description="Populated category, or its ID if it cannot be resolved"
    )
    created_at: datetime = Field(..., description="When the product was created")
    updated_at: datetime = Field(..., description="When the product was last updated")


class ProductListData(BaseModel):
    """Page of products."""

    products: list[ProductResponse]
    pagination: PaginationSchema


# ============================================================================
# Converters
# ============================================================================


def product_to_response(product: Product) -> ProductResponse:
    """Convert a Product with its populated category to a response schema."""
    category: CategoryResponse | str
    if product.category is not None:
        category = CategoryResponse.model_validate(product.category)
    else:
        category = product.category_id

    return ProductResponse(
        id=product.id,
        name=product.name,
        description=product.description,
        price=product.price,
        quantity=product.quantity,
        category_id=category,
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


def error_body(
    error_code: str,
    message: str,
    details: list[dict[str, Any]] | None = None,
    request_id: str | None = None,
) -> dict[str, Any]:
    """Build an error response body."""
    return ErrorResponse(
        error_code=error_code,
        message=message,
        details=[ErrorDetail(**d) for d in details or []],
        request_id=request_id,
    ).model_dump()
