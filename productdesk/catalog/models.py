"""SQLAlchemy models for the catalog.

Defines Category and Product tables. Products reference categories by
ID without a store-level foreign key, so deleting a category leaves
referencing products in place.
"""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import DateTime, Double, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from productdesk.infrastructure.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Category(Base):
    """Product category.

    Attributes:
        id: Unique category identifier (UUID).
        name: Display name. Not unique.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    __tablename__ = "categories"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Category(id={self.id}, name={self.name})>"


class Product(Base):
    """Product in the catalog.

    Attributes:
        id: Unique product identifier (UUID).
        name: Product name.
        description: Optional free-text description.
        price: Unit price in major currency units, stored unrounded.
        quantity: Units on hand.
        category_id: ID of the owning category. May dangle.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    __tablename__ = "products"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[float] = mapped_column(Double, nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    category_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
    )

    # Populated at read time; None when the category no longer exists
    category: Mapped[Category | None] = relationship(
        Category,
        primaryjoin="foreign(Product.category_id) == Category.id",
        viewonly=True,
        lazy="raise",
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Product(id={self.id}, name={self.name[:30]})>"

    @property
    def has_dangling_category(self) -> bool:
        """Whether the referenced category failed to resolve."""
        return self.category is None
