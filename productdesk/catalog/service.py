"""Catalog services for category and product operations.

Combine repository operations with the catalog rules: pagination
arithmetic, search/category filter composition, category existence
checks on product writes, and translation of store failures into
``StoreError``.
"""

import math
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from productdesk.catalog.exceptions import NotFoundError, StoreError, ValidationError
from productdesk.catalog.models import Category, Product
from productdesk.catalog.repository import CategoryRepository, ProductRepository
from productdesk.catalog.schemas import (
    CategoryCreate,
    CategoryUpdate,
    ProductCreate,
    ProductUpdate,
)
from productdesk.infrastructure.config import settings

T = TypeVar("T")

logger = structlog.get_logger()

# Largest row offset the stores accept (signed 64-bit)
MAX_OFFSET = 2**63 - 1
SORT_ORDERS = ("asc", "desc")


# ============================================================================
# Query Types
# ============================================================================


@dataclass
class CategoryFilter:
    """Filter parameters for category listing.

    Attributes:
        search: Case-insensitive substring of the name. Empty means all.
    """

    search: str | None = None


@dataclass
class ProductFilter:
    """Filter parameters for product listing.

    Attributes:
        search: Case-insensitive substring of name or description.
        category_id: Restrict to products referencing this category.
    """

    search: str | None = None
    category_id: str | None = None


@dataclass
class PaginationParams:
    """Pagination and sort parameters.

    Attributes:
        page: Page number (1-indexed).
        limit: Items per page.
        sort_by: Sort field.
        sort_order: Sort order (asc/desc).
    """

    page: int = 1
    limit: int = field(default_factory=lambda: settings.default_page_size)
    sort_by: str = "name"
    sort_order: str = "asc"

    def validate(self, max_limit: int | None = None) -> None:
        """Check the window is well formed.

        Args:
            max_limit: Largest allowed page size. Defaults to the
                configured ``max_page_size``.

        Raises:
            ValidationError: If page or limit is out of range, the page
                starts beyond the largest storable offset, or the order is
                neither asc nor desc.
        """
        if max_limit is None:
            max_limit = settings.max_page_size
        if self.page < 1:
            raise ValidationError("Page must be at least 1", field="page", value=self.page)
        if self.limit < 1:
            raise ValidationError("Limit must be at least 1", field="limit", value=self.limit)
        if self.limit > max_limit:
            raise ValidationError(
                f"Limit must be at most {max_limit}", field="limit", value=self.limit
            )
        if self.offset > MAX_OFFSET:
            raise ValidationError("Page is out of range", field="page", value=self.page)
        if self.sort_order.lower() not in SORT_ORDERS:
            raise ValidationError(
                "Order must be 'asc' or 'desc'", field="order", value=self.sort_order
            )

    @property
    def offset(self) -> int:
        """Calculate offset from page number."""
        return (self.page - 1) * self.limit


@dataclass
class PaginatedResult(Generic[T]):
    """Paginated result container.

    Attributes:
        items: Items in the requested window.
        total: Count of all matching items, ignoring the window.
        page: Current page.
        limit: Items per page.
    """

    items: list[T]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        """Calculate total pages."""
        return math.ceil(self.total / self.limit)

    def envelope(self) -> dict[str, int]:
        """Build the pagination block returned to clients.

        Returns:
            Dict with current, pages, total and limit.
        """
        return {
            "current": self.page,
            "pages": self.total_pages,
            "total": self.total,
            "limit": self.limit,
        }


@contextmanager
def translate_store_errors(operation: str, **context: Any) -> Iterator[None]:
    """Re-raise store failures as ``StoreError`` with the cause chained.

    Args:
        operation: Description used in the error message.
        **context: Extra key/values for the log event.

    Raises:
        StoreError: If the wrapped block raises ``SQLAlchemyError``.
    """
    try:
        yield
    except SQLAlchemyError as e:
        logger.exception("Store operation failed", operation=operation, **context)
        raise StoreError(operation) from e


# ============================================================================
# Category Service
# ============================================================================


class CategoryService:
    """Service for category operations.

    Example usage:
        async with database.session() as session:
            service = CategoryService(session)
            result = await service.list_categories(
                CategoryFilter(search="gar"),
                PaginationParams(page=1, limit=10),
            )
    """

    def __init__(self, session: AsyncSession, max_page_size: int | None = None) -> None:
        """Initialize service with database session.

        Args:
            session: Async SQLAlchemy session scoped to one request.
            max_page_size: Largest page size accepted by listings.
                Defaults to the configured ``max_page_size``.
        """
        self.session = session
        self.max_page_size = max_page_size or settings.max_page_size
        self.repository = CategoryRepository(session)

    async def list_categories(
        self,
        filters: CategoryFilter,
        pagination: PaginationParams,
    ) -> PaginatedResult[Category]:
        """List categories with search, sort and pagination.

        Args:
            filters: Filter parameters.
            pagination: Pagination parameters.

        Returns:
            Paginated category results.

        Raises:
            ValidationError: If pagination parameters are invalid.
            StoreError: If the store query fails.
        """
        pagination.validate(self.max_page_size)

        with translate_store_errors("fetch categories"):
            categories = await self.repository.find_all(
                search=filters.search,
                sort_by=pagination.sort_by,
                sort_order=pagination.sort_order,
                limit=pagination.limit,
                offset=pagination.offset,
            )
            total = await self.repository.count(search=filters.search)

        return PaginatedResult(
            items=list(categories),
            total=total,
            page=pagination.page,
            limit=pagination.limit,
        )

    async def get_category(self, category_id: str) -> Category:
        """Get category by ID.

        Args:
            category_id: Category ID.

        Returns:
            The category.

        Raises:
            NotFoundError: If no category has this ID.
            StoreError: If the store query fails.
        """
        with translate_store_errors("fetch category", category_id=category_id):
            category = await self.repository.get_by_id(category_id)

        if category is None:
            raise NotFoundError("Category", category_id)
        return category

    async def create_category(self, data: CategoryCreate) -> Category:
        """Create a category.

        Args:
            data: Validated create payload.

        Returns:
            The stored category.

        Raises:
            StoreError: If the insert fails.
        """
        with translate_store_errors("create category"):
            category = await self.repository.save(Category(name=data.name))
            await self.session.commit()

        logger.info("Category created", category_id=category.id, name=category.name)
        return category

    async def update_category(self, category_id: str, data: CategoryUpdate) -> Category:
        """Apply a partial update to a category.

        Only fields present in ``data`` change.

        Args:
            category_id: Category ID.
            data: Partial update payload.

        Returns:
            The updated category.

        Raises:
            NotFoundError: If no category has this ID.
            StoreError: If the update fails.
        """
        category = await self.get_category(category_id)
        changes = data.changes()

        with translate_store_errors("update category", category_id=category_id):
            category = await self.repository.update(category, changes)
            await self.session.commit()

        logger.info("Category updated", category_id=category_id, fields=sorted(changes))
        return category

    async def delete_category(self, category_id: str) -> None:
        """Delete a category.

        Products referencing the category are left in place and keep
        the now dangling reference.

        Args:
            category_id: Category ID.

        Raises:
            NotFoundError: If no category has this ID.
            StoreError: If the delete fails.
        """
        category = await self.get_category(category_id)

        with translate_store_errors("delete category", category_id=category_id):
            orphaned = await ProductRepository(self.session).count_by_category(category_id)
            await self.repository.delete(category)
            await self.session.commit()

        logger.info("Category deleted", category_id=category_id, orphaned_products=orphaned)


# ============================================================================
# Product Service
# ============================================================================


class ProductService:
    """Service for product operations.

    Every product returned by this service has ``category`` populated,
    or set to None when the referenced category no longer exists.

    Example usage:
        async with database.session() as session:
            service = ProductService(session)
            product = await service.create_product(
                ProductCreate(name="Desk lamp", price=24.5, category_id=category.id)
            )
    """

    def __init__(self, session: AsyncSession, max_page_size: int | None = None) -> None:
        """Initialize service with database session.

        Args:
            session: Async SQLAlchemy session scoped to one request.
            max_page_size: Largest page size accepted by listings.
                Defaults to the configured ``max_page_size``.
        """
        self.session = session
        self.max_page_size = max_page_size or settings.max_page_size
        self.repository = ProductRepository(session)
        self.categories = CategoryRepository(session)

    async def list_products(
        self,
        filters: ProductFilter,
        pagination: PaginationParams,
    ) -> PaginatedResult[Product]:
        """List products with search, category filter, sort and pagination.

        Args:
            filters: Filter parameters.
            pagination: Pagination parameters.

        Returns:
            Paginated product results.

        Raises:
            ValidationError: If pagination parameters are invalid.
            StoreError: If the store query fails.
        """
        pagination.validate(self.max_page_size)

        with translate_store_errors("fetch products"):
            products = await self.repository.find_all(
                search=filters.search,
                category_id=filters.category_id,
                sort_by=pagination.sort_by,
                sort_order=pagination.sort_order,
                limit=pagination.limit,
                offset=pagination.offset,
            )
            total = await self.repository.count(
                search=filters.search,
                category_id=filters.category_id,
            )

        for product in products:
            self._warn_if_dangling(product)

        return PaginatedResult(
            items=list(products),
            total=total,
            page=pagination.page,
            limit=pagination.limit,
        )

    async def get_product(self, product_id: str) -> Product:
        """Get product by ID.

        Args:
            product_id: Product ID.

        Returns:
            The product with its category populated.

        Raises:
            NotFoundError: If no product has this ID.
            StoreError: If the store query fails.
        """
        with translate_store_errors("fetch product", product_id=product_id):
            product = await self.repository.get_by_id(product_id)

        if product is None:
            raise NotFoundError("Product", product_id)

        self._warn_if_dangling(product)
        return product

    async def create_product(self, data: ProductCreate) -> Product:
        """Create a product.

        Args:
            data: Validated create payload.

        Returns:
            The stored product with its category populated.

        Raises:
            ValidationError: If the referenced category does not exist.
            StoreError: If the insert fails.
        """
        await self._ensure_category_exists(data.category_id)

        with translate_store_errors("create product"):
            product = await self.repository.save(
                Product(
                    name=data.name,
                    description=data.description,
                    price=data.price,
                    quantity=data.quantity,
                    category_id=data.category_id,
                )
            )
            await self.session.commit()

        logger.info(
            "Product created",
            product_id=product.id,
            category_id=product.category_id,
        )
        return product

    async def update_product(self, product_id: str, data: ProductUpdate) -> Product:
        """Apply a partial update to a product.

        Only fields present in ``data`` change.

        Args:
            product_id: Product ID.
            data: Partial update payload.

        Returns:
            The updated product with its category populated.

        Raises:
            NotFoundError: If no product has this ID.
            ValidationError: If a new category ID does not exist.
            StoreError: If the update fails.
        """
        product = await self.get_product(product_id)
        changes = data.changes()

        new_category_id = changes.get("category_id")
        if new_category_id is not None and new_category_id != product.category_id:
            await self._ensure_category_exists(new_category_id)

        with translate_store_errors("update product", product_id=product_id):
            product = await self.repository.update(product, changes)
            await self.session.commit()

        logger.info("Product updated", product_id=product_id, fields=sorted(changes))
        self._warn_if_dangling(product)
        return product

    async def delete_product(self, product_id: str) -> None:
        """Delete a product.

        Args:
            product_id: Product ID.

        Raises:
            NotFoundError: If no product has this ID.
            StoreError: If the delete fails.
        """
        product = await self.get_product(product_id)

        with translate_store_errors("delete product", product_id=product_id):
            await self.repository.delete(product)
            await self.session.commit()

        logger.info("Product deleted", product_id=product_id)

    async def _ensure_category_exists(self, category_id: str) -> None:
        with translate_store_errors("fetch category", category_id=category_id):
            exists = await self.categories.exists(category_id)

        if not exists:
            raise ValidationError(
                f"Category does not exist: {category_id}",
                field="categoryId",
                value=category_id,
            )

    @staticmethod
    def _warn_if_dangling(product: Product) -> None:
        if product.has_dangling_category:
            logger.warning(
                "Product references missing category",
                product_id=product.id,
                category_id=product.category_id,
            )
