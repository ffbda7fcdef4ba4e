"""Catalog exceptions.

Errors raised by the catalog services. Each carries a machine-readable
error code and a details dictionary; store failures keep the original
exception chained as ``__cause__``.
"""

from typing import Any


class CatalogError(Exception):
    """Base class for all catalog exceptions."""

    error_code = "CATALOG_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize catalog error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(CatalogError):
    """Raised when input violates a shape, range, or reference rule."""

    error_code = "VALIDATION_ERROR"

    def __init__(self, message: str, field: str | None = None, **details: Any) -> None:
        """Initialize validation error.

        Args:
            message: Explanation of the violation.
            field: Name of the offending field, if any.
            **details: Extra context.
        """
        if field is not None:
            details["field"] = field
        super().__init__(message, details=details)
        self.field = field


class NotFoundError(CatalogError):
    """Raised when an entity does not exist."""

    error_code = "NOT_FOUND"

    def __init__(self, entity_type: str, entity_id: str) -> None:
        """Initialize not found error.

        Args:
            entity_type: Type of entity (e.g., "Category", "Product").
            entity_id: ID that was looked up.
        """
        super().__init__(
            f"{entity_type} not found: {entity_id}",
            details={"entity_type": entity_type, "entity_id": entity_id},
        )
        self.entity_type = entity_type
        self.entity_id = entity_id


class StoreError(CatalogError):
    """Raised when the persistence store fails."""

    error_code = "STORE_ERROR"

    def __init__(self, operation: str) -> None:
        """Initialize store error.

        Args:
            operation: What was being attempted (e.g., "fetch categories").
        """
        super().__init__(
            f"Failed to {operation}",
            details={"operation": operation},
        )
        self.operation = operation
