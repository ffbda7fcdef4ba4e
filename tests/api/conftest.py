"""Shared fixtures for API tests."""

from typing import Any, Callable

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def create_category(client: TestClient) -> Callable[..., dict[str, Any]]:
    """Factory creating a category through the API."""

    def _create(name: str = "Electronics") -> dict[str, Any]:
        response = client.post("/api/category", json={"name": name})
        assert response.status_code == 201
        return response.json()["data"]

    return _create


@pytest.fixture
def create_product(
    client: TestClient,
    create_category: Callable[..., dict[str, Any]],
) -> Callable[..., dict[str, Any]]:
    """Factory creating a product through the API.

    Creates a category first unless ``categoryId`` is given.
    """

    def _create(**overrides: Any) -> dict[str, Any]:
        payload = {
            "name": "Desk Lamp",
            "description": "Dimmable LED lamp",
            "price": 24.9,
            "quantity": 4,
        }
        payload.update(overrides)
        if "categoryId" not in payload:
            payload["categoryId"] = create_category()["id"]

        response = client.post("/api/product", json=payload)
        assert response.status_code == 201, response.json()
        return response.json()["data"]

    return _create
