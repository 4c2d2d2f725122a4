"""Product Catalog.

Provides the storefront's category directory, product query engine,
derived pricing, and deterministic catalog generation.
"""

from shoestore.catalog.generator import CatalogGenerator, GeneratorConfig
from shoestore.catalog.models import Category, Product
from shoestore.catalog.pricing import display_price, is_on_sale
from shoestore.catalog.repository import (
    CategoryRepository,
    CategorySummary,
    ProductFilter,
    ProductRepository,
)
from shoestore.catalog.service import (
    CatalogListing,
    CatalogQueryDefaults,
    CatalogService,
    HomePage,
    PaginatedResult,
    PaginationParams,
    ProductDetail,
)

__all__ = [
    # Models
    "Category",
    "Product",
    # Pricing
    "display_price",
    "is_on_sale",
    # Generator
    "CatalogGenerator",
    "GeneratorConfig",
    # Repository
    "CategoryRepository",
    "CategorySummary",
    "ProductFilter",
    "ProductRepository",
    # Service
    "CatalogListing",
    "CatalogQueryDefaults",
    "CatalogService",
    "HomePage",
    "PaginatedResult",
    "PaginationParams",
    "ProductDetail",
]
