"""Domain layer - catalog errors shared by the service and API layers."""

from shoestore.domain.exceptions import DomainError, ProductNotFoundError

__all__ = [
    "DomainError",
    "ProductNotFoundError",
]
