"""Tests for catalog write payloads."""

import pytest
from pydantic import ValidationError

from productdesk.catalog.schemas import (
    CategoryCreate,
    CategoryUpdate,
    ProductCreate,
    ProductUpdate,
)


class TestCategoryPayloads:
    """Tests for category create/update payloads."""

    def test_create_requires_non_empty_name(self) -> None:
        """Empty name is rejected."""
        with pytest.raises(ValidationError):
            CategoryCreate(name="")

    def test_create_keeps_whitespace(self) -> None:
        """Names are stored as given."""
        assert CategoryCreate(name="  Garden ").name == "  Garden "

    def test_update_without_fields_changes_nothing(self) -> None:
        """An empty patch changes nothing."""
        patch = CategoryUpdate()
        assert patch.changes() == {}

    def test_update_rejects_null_name(self) -> None:
        """Explicit null for a required field is rejected."""
        with pytest.raises(ValidationError):
            CategoryUpdate.model_validate({"name": None})


class TestProductPayloads:
    """Tests for product create/update payloads."""

    def test_create_accepts_camel_case(self) -> None:
        """categoryId maps to category_id."""
        data = ProductCreate.model_validate(
            {"name": "Lamp", "price": 10, "categoryId": "cat-1"}
        )
        assert data.category_id == "cat-1"
        assert data.quantity == 0
        assert data.description is None

    def test_create_rejects_negative_price(self) -> None:
        """Price must be non-negative."""
        with pytest.raises(ValidationError):
            ProductCreate(name="Lamp", price=-1, category_id="cat-1")

    def test_create_rejects_negative_quantity(self) -> None:
        """Quantity must be non-negative."""
        with pytest.raises(ValidationError):
            ProductCreate(name="Lamp", price=1, quantity=-3, category_id="cat-1")

    def test_create_requires_category(self) -> None:
        """categoryId is mandatory."""
        with pytest.raises(ValidationError):
            ProductCreate.model_validate({"name": "Lamp", "price": 1})

    def test_update_changes_only_supplied_fields(self) -> None:
        """Only present fields appear in changes."""
        patch = ProductUpdate.model_validate({"price": 9.99})
        assert patch.changes() == {"price": 9.99}

    def test_update_changes_use_attribute_names(self) -> None:
        """Changes are keyed by model attribute, not JSON alias."""
        patch = ProductUpdate.model_validate({"categoryId": "cat-2", "quantity": 0})
        assert patch.changes() == {"category_id": "cat-2", "quantity": 0}

    def test_update_allows_clearing_description(self) -> None:
        """Description may be explicitly nulled."""
        patch = ProductUpdate.model_validate({"description": None})
        assert patch.changes() == {"description": None}

    @pytest.mark.parametrize("field", ["name", "price", "quantity", "categoryId"])
    def test_update_rejects_null_required_fields(self, field: str) -> None:
        """Required fields may be omitted but not nulled."""
        with pytest.raises(ValidationError):
            ProductUpdate.model_validate({field: None})

    @pytest.mark.parametrize("price", ["inf", "-inf", "nan", float("inf"), float("nan")])
    def test_create_rejects_non_finite_price(self, price) -> None:
        """Infinite and NaN prices are not numbers a store can hold."""
        with pytest.raises(ValidationError):
            ProductCreate.model_validate({"name": "Lamp", "price": price, "categoryId": "cat-1"})

    @pytest.mark.parametrize("price", ["inf", "nan"])
    def test_update_rejects_non_finite_price(self, price: str) -> None:
        """Partial updates apply the same price rule."""
        with pytest.raises(ValidationError):
            ProductUpdate.model_validate({"price": price})
