"""API schemas for the storefront.

Pydantic models for response serialization. Page payloads use the
camelCase keys the frontend reads (``relatedProducts``,
``featuredProducts``), everything else is snake_case.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorDetail(BaseModel):
    """Detailed error information."""

    field: str | None = Field(default=None, description="Field that caused the error")
    message: str = Field(..., description="Error message")


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: list[ErrorDetail] = Field(
        default_factory=list, description="Additional error details"
    )
    request_id: str | None = Field(
        default=None, description="Request ID for correlation"
    )


# ============================================================================
# Category Schemas
# ============================================================================


class ProductCategorySchema(BaseModel):
    """Category embedded in a product."""

    id: int
    name: str
    slug: str
    description: str
    image: str | None = None


class CategorySchema(ProductCategorySchema):
    """Category with its number of active products."""

    products_count: int = Field(..., description="Number of active products")


# ============================================================================
# Product Schemas
# ============================================================================


class ProductSchema(BaseModel):
    """Product with derived pricing fields."""

    id: int
    name: str
    slug: str
    description: str
    price: Decimal = Field(..., description="List price")
    sale_price: Decimal | None = Field(default=None, description="Discounted price")
    display_price: Decimal = Field(..., description="Price shown to the customer")
    is_on_sale: bool = Field(..., description="Whether the sale price is below list price")
    brand: str
    color: str
    sizes: list[str] = Field(default_factory=list)
    images: list[str] = Field(default_factory=list)
    category_id: int
    category: ProductCategorySchema
    is_featured: bool
    is_active: bool
    stock_quantity: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PaginationLinkSchema(BaseModel):
    """One entry of the paginator's link bar."""

    url: str | None = Field(default=None, description="Target URL, null when disabled")
    label: str
    active: bool = False


class ProductPageSchema(BaseModel):
    """One page of products."""

    data: list[ProductSchema]
    current_page: int
    last_page: int
    per_page: int
    total: int
    from_: int | None = Field(default=None, serialization_alias="from")
    to: int | None = None
    links: list[PaginationLinkSchema] = Field(default_factory=list)


# ============================================================================
# Page Schemas
# ============================================================================


class ProductListingResponse(BaseModel):
    """Product listing page payload."""

    products: ProductPageSchema
    categories: list[CategorySchema]
    brands: list[str]
    colors: list[str]
    filters: dict[str, str] = Field(
        default_factory=dict, description="Filter inputs echoed back"
    )


class ProductDetailResponse(BaseModel):
    """Product detail page payload."""

    product: ProductSchema
    related_products: list[ProductSchema] = Field(
        default_factory=list, serialization_alias="relatedProducts"
    )


class HomeResponse(BaseModel):
    """Landing page payload."""

    featured_products: list[ProductSchema] = Field(
        default_factory=list, serialization_alias="featuredProducts"
    )
    latest_products: list[ProductSchema] = Field(
        default_factory=list, serialization_alias="latestProducts"
    )
    categories: list[CategorySchema] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str
    timestamp: datetime
    service: str
    version: str
