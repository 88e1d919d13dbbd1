"""Domain exceptions.

Every error the catalog core signals is a ``CatalogError`` carrying an
``ErrorKind``. Callers at the transport layer map the kind to their own
representation (e.g. an HTTP status code) without inspecting messages.
"""

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Kinds of recoverable catalog errors."""

    NOT_FOUND = "not_found"
    INVALID_INPUT = "invalid_input"
    DUPLICATE = "duplicate"


class CatalogError(Exception):
    """Base class for all catalog exceptions.

    Attributes:
        kind: Error kind used by upstream layers to pick a representation.
        message: Human-readable error message.
        details: Additional structured context.
    """

    kind: ErrorKind = ErrorKind.INVALID_INPUT

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize catalog error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# Lookup Errors
# ============================================================================


class ProductNotFoundError(CatalogError):
    """Raised when no product exists for the requested id."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, product_id: str) -> None:
        """Initialize product not found error.

        Args:
            product_id: The id that was looked up.
        """
        super().__init__(
            f"Product not found: {product_id}",
            details={"product_id": product_id},
        )


class DuplicateProductError(CatalogError):
    """Raised when inserting a product whose id already exists."""

    kind = ErrorKind.DUPLICATE

    def __init__(self, product_id: str) -> None:
        """Initialize duplicate product error.

        Args:
            product_id: The colliding id.
        """
        super().__init__(
            f"Product id already exists: {product_id}",
            details={"product_id": product_id},
        )


# ============================================================================
# Input Errors
# ============================================================================


class InvalidProductDataError(CatalogError):
    """Raised on a format, range, enum or business rule violation."""

    kind = ErrorKind.INVALID_INPUT


class InvalidStatusTransitionError(InvalidProductDataError):
    """Raised when a status change is not allowed from the current status."""

    def __init__(
        self,
        product_id: str,
        current_status: str,
        target_status: str,
        allowed_transitions: list[str] | None = None,
    ) -> None:
        """Initialize invalid status transition error.

        Args:
            product_id: ID of the product.
            current_status: Current status of the product.
            target_status: Attempted target status.
            allowed_transitions: Statuses reachable from the current one.
        """
        allowed = allowed_transitions or []
        message = (
            f"Cannot change status of product {product_id} "
            f"from '{current_status}' to '{target_status}'. "
            f"Allowed transitions: {allowed}"
        )
        super().__init__(
            message,
            details={
                "product_id": product_id,
                "current_status": current_status,
                "target_status": target_status,
                "allowed_transitions": allowed,
            },
        )
