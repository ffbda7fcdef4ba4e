"""Product Catalog.

Category and product persistence, query/pagination services, and
the typed write payloads they accept.
"""

from productdesk.catalog.exceptions import (
    CatalogError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from productdesk.catalog.models import Category, Product
from productdesk.catalog.repository import CategoryRepository, ProductRepository
from productdesk.catalog.schemas import (
    CategoryCreate,
    CategoryUpdate,
    ProductCreate,
    ProductUpdate,
)
from productdesk.catalog.service import (
    CategoryFilter,
    CategoryService,
    PaginatedResult,
    PaginationParams,
    ProductFilter,
    ProductService,
)

__all__ = [
    # Errors
    "CatalogError",
    "NotFoundError",
    "StoreError",
    "ValidationError",
    # Models
    "Category",
    "Product",
    # Payloads
    "CategoryCreate",
    "CategoryUpdate",
    "ProductCreate",
    "ProductUpdate",
    # Repositories
    "CategoryRepository",
    "ProductRepository",
    # Services
    "CategoryFilter",
    "CategoryService",
    "PaginatedResult",
    "PaginationParams",
    "ProductFilter",
    "ProductService",
]
