"""Write payloads for catalog entities.

Pydantic models for create and partial-update operations. Partial
updates track which fields were supplied, and ``changes()`` returns
only those, so omitted fields keep their stored values.
"""

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model exposing camelCase JSON while keeping snake_case attributes."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PartialUpdate(CamelModel):
    """Base for partial-update payloads.

    Subclasses list in ``required_fields`` the fields that may be omitted
    but never explicitly set to null.
    """

    required_fields: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="after")
    def reject_null_required(self) -> "PartialUpdate":
        for name in self.required_fields:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{to_camel(name)} cannot be null")
        return self

    def changes(self) -> dict[str, Any]:
        """Get the supplied fields.

        Returns:
            Mapping of attribute name to new value for every field present
            in the payload.
        """
        return self.model_dump(exclude_unset=True, by_alias=False)


# ============================================================================
# Category
# ============================================================================


class CategoryCreate(CamelModel):
    """Payload for creating a category."""

    name: str = Field(..., min_length=1, max_length=200, description="Category name")


class CategoryUpdate(PartialUpdate):
    """Partial update for a category."""

    required_fields: ClassVar[tuple[str, ...]] = ("name",)

    name: str | None = Field(default=None, min_length=1, max_length=200)


# ============================================================================
# Product
# ============================================================================


class ProductCreate(CamelModel):
    """Payload for creating a product."""

    name: str = Field(..., min_length=1, max_length=200, description="Product name")
    description: str | None = Field(default=None, description="Optional description")
    price: float = Field(..., ge=0, allow_inf_nan=False, description="Unit price")
    quantity: int = Field(default=0, ge=0, description="Units on hand")
    category_id: str = Field(..., min_length=1, max_length=36, description="Owning category ID")


class ProductUpdate(PartialUpdate):
    """Partial update for a product.

    ``description`` may be set to null to clear it; the other fields
    may only be omitted.
    """

    required_fields: ClassVar[tuple[str, ...]] = ("name", "price", "quantity", "category_id")

    name: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    price: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    quantity: int | None = Field(default=None, ge=0)
    category_id: str | None = Field(default=None, min_length=1, max_length=36)
