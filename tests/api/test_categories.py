"""Tests for category API endpoints."""

from typing import Any, Callable

from fastapi.testclient import TestClient


class TestListCategories:
    """Tests for GET /api/categories endpoint."""

    def test_list_empty(self, client: TestClient) -> None:
        """Should return an empty page with a zero-page envelope."""
        response = client.get("/api/categories")
        assert response.status_code == 200
        body = response.json()

        assert body["success"] is True
        assert body["data"]["categories"] == []
        assert body["data"]["pagination"] == {
            "current": 1,
            "pages": 0,
            "total": 0,
            "limit": 10,
        }

    def test_list_sorted_and_paginated(
        self, client: TestClient, create_category: Callable[..., dict[str, Any]]
    ) -> None:
        """Should window the name-sorted result set."""
        for name in ["Toys", "Books", "Garden", "Audio", "Kitchen"]:
            create_category(name)

        response = client.get("/api/categories", params={"page": 2, "limit": 2})
        assert response.status_code == 200
        data = response.json()["data"]

        assert [c["name"] for c in data["categories"]] == ["Garden", "Kitchen"]
        assert data["pagination"] == {"current": 2, "pages": 3, "total": 5, "limit": 2}

    def test_list_descending(
        self, client: TestClient, create_category: Callable[..., dict[str, Any]]
    ) -> None:
        """Should honour sortBy and order."""
        for name in ["Books", "Toys"]:
            create_category(name)

        response = client.get("/api/categories", params={"sortBy": "name", "order": "desc"})
        names = [c["name"] for c in response.json()["data"]["categories"]]
        assert names == ["Toys", "Books"]

    def test_search_includes_created_category(
        self, client: TestClient, create_category: Callable[..., dict[str, Any]]
    ) -> None:
        """Searching a substring of a new category's name should find it."""
        created = create_category("Outdoor Furniture")
        create_category("Books")

        response = client.get("/api/categories", params={"search": "door fur"})
        data = response.json()["data"]

        assert [c["id"] for c in data["categories"]] == [created["id"]]
        assert data["pagination"]["total"] == 1

    def test_empty_search_same_as_omitted(
        self, client: TestClient, create_category: Callable[..., dict[str, Any]]
    ) -> None:
        """search= should behave like no search."""
        create_category("Books")
        create_category("Toys")

        with_empty = client.get("/api/categories", params={"search": ""}).json()
        without = client.get("/api/categories").json()
        assert with_empty == without

    def test_zero_limit_rejected(self, client: TestClient) -> None:
        """limit=0 should be a validation error."""
        response = client.get("/api/categories", params={"limit": 0})
        assert response.status_code == 422
        body = response.json()
        assert body["success"] is False
        assert body["error_code"] == "VALIDATION_ERROR"
        assert body["details"][0]["field"] == "limit"

    def test_zero_page_rejected(self, client: TestClient) -> None:
        """page=0 should be a validation error."""
        response = client.get("/api/categories", params={"page": 0})
        assert response.status_code == 422

    def test_limit_above_max_rejected(self, client: TestClient) -> None:
        """limit above max_page_size is a request validation error."""
        response = client.get("/api/categories", params={"limit": 101})
        assert response.status_code == 422
        assert response.json()["details"][0]["field"] == "limit"

    def test_page_beyond_offset_range_rejected(self, client: TestClient) -> None:
        """A page whose offset cannot be stored is a 400, not a server error."""
        response = client.get("/api/categories", params={"page": 10**18})
        assert response.status_code == 400
        body = response.json()
        assert body["error_code"] == "VALIDATION_ERROR"
        assert body["details"][0]["field"] == "page"

    def test_page_beyond_integer_range_rejected(self, client: TestClient) -> None:
        """Pages past the 64-bit range fail request validation."""
        response = client.get("/api/categories", params={"page": 10**19})
        assert response.status_code == 422

    def test_invalid_order_rejected(self, client: TestClient) -> None:
        """order must be asc or desc."""
        response = client.get("/api/categories", params={"order": "up"})
        assert response.status_code == 422


class TestCreateCategory:
    """Tests for POST /api/category endpoint."""

    def test_create_category(self, client: TestClient) -> None:
        """Should create a category and return it."""
        response = client.post("/api/category", json={"name": "Books"})
        assert response.status_code == 201
        body = response.json()

        assert body["success"] is True
        assert body["data"]["name"] == "Books"
        assert "id" in body["data"]
        assert "createdAt" in body["data"]
        assert "updatedAt" in body["data"]

    def test_create_requires_name(self, client: TestClient) -> None:
        """Missing name should be rejected."""
        response = client.post("/api/category", json={})
        assert response.status_code == 422

    def test_create_rejects_empty_name(self, client: TestClient) -> None:
        """Empty name should be rejected."""
        response = client.post("/api/category", json={"name": ""})
        assert response.status_code == 422


class TestGetCategory:
    """Tests for GET /api/category/{id} endpoint."""

    def test_get_category(
        self, client: TestClient, create_category: Callable[..., dict[str, Any]]
    ) -> None:
        """Should return the category."""
        created = create_category("Books")

        response = client.get(f"/api/category/{created['id']}")
        assert response.status_code == 200
        assert response.json()["data"] == created

    def test_get_missing_category(self, client: TestClient) -> None:
        """Should return 404 for unknown IDs."""
        response = client.get("/api/category/does-not-exist")
        assert response.status_code == 404
        body = response.json()
        assert body["error_code"] == "NOT_FOUND"
        assert "does-not-exist" in body["message"]


class TestUpdateCategory:
    """Tests for PUT /api/category/{id} endpoint."""

    def test_update_category(
        self, client: TestClient, create_category: Callable[..., dict[str, Any]]
    ) -> None:
        """Should rename the category."""
        created = create_category("Bokks")

        response = client.put(f"/api/category/{created['id']}", json={"name": "Books"})
        assert response.status_code == 200
        body = response.json()

        assert body["success"] is True
        assert body["message"] == "Category updated successfully"
        assert body["data"]["id"] == created["id"]
        assert body["data"]["name"] == "Books"

    def test_update_missing_category(self, client: TestClient) -> None:
        """Should return 404 for unknown IDs."""
        response = client.put("/api/category/does-not-exist", json={"name": "Books"})
        assert response.status_code == 404

    def test_update_rejects_null_name(
        self, client: TestClient, create_category: Callable[..., dict[str, Any]]
    ) -> None:
        """Explicit null name should be rejected."""
        created = create_category("Books")

        response = client.put(f"/api/category/{created['id']}", json={"name": None})
        assert response.status_code == 422


class TestDeleteCategory:
    """Tests for DELETE /api/category/{id} endpoint."""

    def test_delete_category(
        self, client: TestClient, create_category: Callable[..., dict[str, Any]]
    ) -> None:
        """Should delete and return 204 with no body."""
        created = create_category("Books")

        response = client.delete(f"/api/category/{created['id']}")
        assert response.status_code == 204
        assert response.content == b""

        assert client.get(f"/api/category/{created['id']}").status_code == 404

    def test_delete_missing_category(self, client: TestClient) -> None:
        """Should return 404 for unknown IDs."""
        response = client.delete("/api/category/does-not-exist")
        assert response.status_code == 404
