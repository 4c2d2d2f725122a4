"""Domain exceptions.

Errors raised by the catalog layer and translated to HTTP responses
by the API layer.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain exceptions.

    All domain errors should inherit from this class to allow
    catching domain-specific errors at the application layer.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# Catalog Errors
# ============================================================================


class ProductNotFoundError(DomainError):
    """Raised when no visible product matches the requested slug.

    Inactive products are reported the same way as missing ones.
    """

    def __init__(self, slug: str) -> None:
        """Initialize product not found error.

        Args:
            slug: Slug that was requested.
        """
        super().__init__(
            f"Product not found: {slug}",
            details={"slug": slug},
        )
        self.slug = slug
