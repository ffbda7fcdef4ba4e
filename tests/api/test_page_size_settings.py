"""Tests for page size limits taken from the app's settings."""

from typing import Any, Callable

import pytest
from fastapi.testclient import TestClient

from productdesk.infrastructure.config import Settings


@pytest.fixture
def settings(settings: Settings) -> Settings:
    """Test settings with non-default page sizes."""
    return settings.model_copy(update={"default_page_size": 3, "max_page_size": 20})


class TestConfiguredPageSize:
    """Listings honour the Settings passed to create_app."""

    def test_default_limit_from_settings(
        self,
        client: TestClient,
        create_category: Callable[..., dict[str, Any]],
    ) -> None:
        """Omitting limit uses default_page_size."""
        for name in ["A", "B", "C", "D"]:
            create_category(name)

        body = client.get("/api/categories").json()["data"]
        assert len(body["categories"]) == 3
        assert body["pagination"] == {"current": 1, "pages": 2, "total": 4, "limit": 3}

    @pytest.mark.parametrize("path", ["/api/categories", "/api/products"])
    def test_limit_above_configured_max_rejected(self, client: TestClient, path: str) -> None:
        """limit above max_page_size is a 422 on every listing."""
        response = client.get(path, params={"limit": 50})
        assert response.status_code == 422
        detail = response.json()["details"][0]
        assert detail["field"] == "limit"
        assert "20" in detail["message"]

    def test_limit_at_configured_max_accepted(self, client: TestClient) -> None:
        """limit equal to max_page_size is allowed."""
        response = client.get("/api/products", params={"limit": 20})
        assert response.status_code == 200
        assert response.json()["data"]["pagination"]["limit"] == 20
