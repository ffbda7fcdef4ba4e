"""Category and product repositories for database operations.

Provide CRUD operations with filtering, sorting, and skip/limit
pagination. The same condition builder feeds both ``find_all`` and
``count`` so totals match the filtered set.
"""

from collections.abc import Sequence
from typing import Any

from sqlalchemy import ColumnElement, Select, and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from productdesk.catalog.models import Category, Product


def _apply_sort(
    query: Select,
    columns: dict[str, Any],
    default: Any,
    tiebreaker: Any,
    sort_by: str,
    sort_order: str,
) -> Select:
    """Order a query by a whitelisted column.

    Unknown fields fall back to ``default``. Rows with equal sort keys
    are ordered by ``tiebreaker`` so page windows do not overlap.
    """
    column = columns.get(sort_by, default)
    if sort_order.lower() == "desc":
        return query.order_by(column.desc(), tiebreaker.desc())
    return query.order_by(column.asc(), tiebreaker.asc())


class CategoryRepository:
    """Repository for Category database operations.

    Example usage:
        async with database.session() as session:
            repo = CategoryRepository(session)
            categories = await repo.find_all(search="shoe", limit=10)
    """

    SORT_COLUMNS = {
        "name": Category.name,
        "createdAt": Category.created_at,
        "created_at": Category.created_at,
        "updatedAt": Category.updated_at,
        "updated_at": Category.updated_at,
    }

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def save(self, category: Category) -> Category:
        """Add a category and flush it to the database.

        Args:
            category: Category to save.

        Returns:
            Saved category with generated fields populated.
        """
        self.session.add(category)
        await self.session.flush()
        await self.session.refresh(category)
        return category

    async def get_by_id(self, category_id: str) -> Category | None:
        """Get category by ID.

        Args:
            category_id: Category ID.

        Returns:
            Category if found, None otherwise.
        """
        result = await self.session.execute(
            select(Category).where(Category.id == category_id)
        )
        return result.scalar_one_or_none()

    async def exists(self, category_id: str) -> bool:
        """Check whether a category exists.

        Args:
            category_id: Category ID.

        Returns:
            True if a category with this ID is stored.
        """
        result = await self.session.execute(
            select(func.count(Category.id)).where(Category.id == category_id)
        )
        return result.scalar_one() > 0

    async def find_all(
        self,
        search: str | None = None,
        sort_by: str = "name",
        sort_order: str = "asc",
        limit: int = 10,
        offset: int = 0,
    ) -> Sequence[Category]:
        """Find categories with filtering, sorting, and pagination.

        Args:
            search: Case-insensitive substring to match in the name.
            sort_by: Sort field (name, createdAt, updatedAt).
            sort_order: Sort order (asc, desc).
            limit: Maximum results.
            offset: Number of matching rows to skip.

        Returns:
            Sequence of matching categories.
        """
        query = select(Category)

        conditions = self._build_conditions(search)
        if conditions:
            query = query.where(and_(*conditions))

        query = _apply_sort(
            query, self.SORT_COLUMNS, Category.name, Category.id, sort_by, sort_order
        )
        query = query.limit(limit).offset(offset)

        result = await self.session.execute(query)
        return result.scalars().all()

    async def count(self, search: str | None = None) -> int:
        """Count categories matching filters.

        Args:
            search: Case-insensitive substring to match in the name.

        Returns:
            Count of matching categories.
        """
        query = select(func.count(Category.id))

        conditions = self._build_conditions(search)
        if conditions:
            query = query.where(and_(*conditions))

        result = await self.session.execute(query)
        return result.scalar_one()

    async def update(self, category: Category, changes: dict[str, Any]) -> Category:
        """Apply field changes to a category.

        Args:
            category: Persistent category.
            changes: Attribute values to overwrite.

        Returns:
            Updated category reloaded from the database.
        """
        for field_name, value in changes.items():
            setattr(category, field_name, value)
        await self.session.flush()
        await self.session.refresh(category)
        return category

    async def delete(self, category: Category) -> None:
        """Delete a category.

        Args:
            category: Persistent category.
        """
        await self.session.delete(category)
        await self.session.flush()

    def _build_conditions(self, search: str | None) -> list[ColumnElement[bool]]:
        conditions: list[ColumnElement[bool]] = []
        if search:
            conditions.append(Category.name.icontains(search, autoescape=True))
        return conditions


class ProductRepository:
    """Repository for Product database operations.

    Every read eagerly loads ``Product.category`` so callers always see
    the populated relation.

    Example usage:
        async with database.session() as session:
            repo = ProductRepository(session)
            products = await repo.find_all(
                category_id="6a1f...",
                search="lamp",
                sort_by="price",
                limit=20,
            )
    """

    SORT_COLUMNS = {
        "name": Product.name,
        "price": Product.price,
        "quantity": Product.quantity,
        "createdAt": Product.created_at,
        "created_at": Product.created_at,
        "updatedAt": Product.updated_at,
        "updated_at": Product.updated_at,
    }

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def save(self, product: Product) -> Product:
        """Add a product and return it with its category populated.

        Args:
            product: Product to save.

        Returns:
            Saved product.
        """
        self.session.add(product)
        await self.session.flush()
        return await self._reload(product.id)

    async def get_by_id(self, product_id: str) -> Product | None:
        """Get product by ID with its category populated.

        Args:
            product_id: Product ID.

        Returns:
            Product if found, None otherwise.
        """
        query = (
            select(Product)
            .where(Product.id == product_id)
            .options(selectinload(Product.category))
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def find_all(
        self,
        search: str | None = None,
        category_id: str | None = None,
        sort_by: str = "name",
        sort_order: str = "asc",
        limit: int = 10,
        offset: int = 0,
    ) -> Sequence[Product]:
        """Find products with filtering, sorting, and pagination.

        Args:
            search: Case-insensitive substring to match in name or description.
            category_id: Filter by exact category ID.
            sort_by: Sort field (name, price, quantity, createdAt, updatedAt).
            sort_order: Sort order (asc, desc).
            limit: Maximum results.
            offset: Number of matching rows to skip.

        Returns:
            Sequence of matching products.
        """
        query = select(Product)

        conditions = self._build_conditions(search, category_id)
        if conditions:
            query = query.where(and_(*conditions))

        query = _apply_sort(
            query, self.SORT_COLUMNS, Product.name, Product.id, sort_by, sort_order
        )
        query = query.limit(limit).offset(offset)
        query = query.options(selectinload(Product.category)).execution_options(
            populate_existing=True
        )

        result = await self.session.execute(query)
        return result.scalars().all()

    async def count(
        self,
        search: str | None = None,
        category_id: str | None = None,
    ) -> int:
        """Count products matching filters.

        Args:
            search: Case-insensitive substring to match in name or description.
            category_id: Filter by exact category ID.

        Returns:
            Count of matching products.
        """
        query = select(func.count(Product.id))

        conditions = self._build_conditions(search, category_id)
        if conditions:
            query = query.where(and_(*conditions))

        result = await self.session.execute(query)
        return result.scalar_one()

    async def count_by_category(self, category_id: str) -> int:
        """Count products referencing a category.

        Args:
            category_id: Category ID.

        Returns:
            Number of referencing products.
        """
        return await self.count(category_id=category_id)

    async def update(self, product: Product, changes: dict[str, Any]) -> Product:
        """Apply field changes to a product.

        Args:
            product: Persistent product.
            changes: Attribute values to overwrite.

        Returns:
            Updated product with its category re-populated.
        """
        for field_name, value in changes.items():
            setattr(product, field_name, value)
        await self.session.flush()
        return await self._reload(product.id)

    async def delete(self, product: Product) -> None:
        """Delete a product.

        Args:
            product: Persistent product.
        """
        await self.session.delete(product)
        await self.session.flush()

    async def _reload(self, product_id: str) -> Product:
        # Refresh column values and the category relation after a write
        query = (
            select(Product)
            .where(Product.id == product_id)
            .options(selectinload(Product.category))
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(query)
        return result.scalar_one()

    def _build_conditions(
        self,
        search: str | None,
        category_id: str | None,
    ) -> list[ColumnElement[bool]]:
        conditions: list[ColumnElement[bool]] = []

        if search:
            conditions.append(
                or_(
                    Product.name.icontains(search, autoescape=True),
                    Product.description.icontains(search, autoescape=True),
                )
            )

        if category_id:
            conditions.append(Product.category_id == category_id)

        return conditions
