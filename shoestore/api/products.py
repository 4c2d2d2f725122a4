"""Product API endpoints.

Provides the catalog listing and product detail pages.
"""

from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from shoestore.api.schemas import (
    CategorySchema,
    ErrorResponse,
    PaginationLinkSchema,
    ProductCategorySchema,
    ProductDetailResponse,
    ProductListingResponse,
    ProductPageSchema,
    ProductSchema,
)
from shoestore.catalog.models import Category, Product
from shoestore.catalog.pricing import display_price, is_on_sale
from shoestore.catalog.repository import CategorySummary
from shoestore.catalog.service import CatalogService, PaginatedResult, echo_filters
from shoestore.infrastructure.database import get_session

router = APIRouter(prefix="/products", tags=["Products"])

CENTS = Decimal("0.01")

# Page links shown either side of the current page before eliding
LINKS_ON_EACH_SIDE = 3


# ============================================================================
# Dependencies
# ============================================================================


def get_catalog_service(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CatalogService:
    """Get catalog service bound to the request's session."""
    return CatalogService(session)


# ============================================================================
# Converters
# ============================================================================


def _money(value: Decimal | None) -> Decimal | None:
    if value is None:
        return None
    return Decimal(value).quantize(CENTS)


def category_to_schema(category: Category) -> ProductCategorySchema:
    """Convert Category entity to the embedded schema."""
    return ProductCategorySchema(
        id=category.id,
        name=category.name,
        slug=category.slug,
        description=category.description,
        image=category.image,
    )


def summary_to_schema(summary: CategorySummary) -> CategorySchema:
    """Convert a category summary to the counted schema."""
    category = summary.category
    return CategorySchema(
        id=category.id,
        name=category.name,
        slug=category.slug,
        description=category.description,
        image=category.image,
        products_count=summary.products_count,
    )


def product_to_schema(product: Product) -> ProductSchema:
    """Convert Product entity to response schema.

    Display price and sale status are computed here on every call.
    """
    return ProductSchema(
        id=product.id,
        name=product.name,
        slug=product.slug,
        description=product.description,
        price=_money(product.price),
        sale_price=_money(product.sale_price),
        display_price=_money(display_price(product)),
        is_on_sale=is_on_sale(product),
        brand=product.brand,
        color=product.color,
        sizes=list(product.sizes or []),
        images=list(product.images or []),
        category_id=product.category_id,
        category=category_to_schema(product.category),
        is_featured=product.is_featured,
        is_active=product.is_active,
        stock_quantity=product.stock_quantity,
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


def page_window(
    current_page: int,
    last_page: int,
    on_each_side: int = LINKS_ON_EACH_SIDE,
) -> list[int | None]:
    """Get the page numbers to show in the link bar.

    Short page ranges are listed in full. Longer ones keep the first two
    and last two pages plus a slider around the current page, with
    ``None`` marking each elided gap.

    Args:
        current_page: Page being viewed (may lie past the last page).
        last_page: Number of pages.
        on_each_side: Neighbours shown either side of the current page.

    Returns:
        Page numbers in order, with ``None`` for "..." separators.
    """
    if last_page < on_each_side * 2 + 8:
        return list(range(1, last_page + 1))

    window = on_each_side + 4
    start = [1, 2]
    finish = [last_page - 1, last_page]

    if current_page <= window:
        return list(range(1, window + on_each_side + 1)) + [None] + finish
    if current_page > last_page - window:
        first = last_page - (window + on_each_side - 1)
        return start + [None] + list(range(first, last_page + 1))

    slider = range(current_page - on_each_side, current_page + on_each_side + 1)
    return start + [None] + list(slider) + [None] + finish


def build_page_links(
    request: Request,
    result: PaginatedResult[Product],
) -> list[PaginationLinkSchema]:
    """Build the previous / page numbers / next link bar.

    URLs keep the current query string with only ``page`` replaced.
    """

    def page_url(page: int) -> str:
        return str(request.url.include_query_params(page=page))

    links = [
        PaginationLinkSchema(
            url=page_url(result.page - 1) if result.has_prev else None,
            label="« Previous",
        )
    ]
    links.extend(
        PaginationLinkSchema(url=None, label="...")
        if number is None
        else PaginationLinkSchema(
            url=page_url(number),
            label=str(number),
            active=number == result.page,
        )
        for number in page_window(result.page, result.total_pages)
    )
    links.append(
        PaginationLinkSchema(
            url=page_url(result.page + 1) if result.has_next else None,
            label="Next »",
        )
    )
    return links


def page_to_schema(
    request: Request,
    result: PaginatedResult[Product],
) -> ProductPageSchema:
    """Convert a paginated result to the page schema."""
    return ProductPageSchema(
        data=[product_to_schema(p) for p in result.items],
        current_page=result.page,
        last_page=result.total_pages,
        per_page=result.page_size,
        total=result.total,
        from_=result.first_index,
        to=result.last_index,
        links=build_page_links(request, result),
    )


# ============================================================================
# Endpoints
# ============================================================================


@router.get(
    "",
    response_model=ProductListingResponse,
    summary="List products",
    description=(
        "Paginated listing of active products with search, filters and sorting. "
        "Blank or malformed parameters are ignored rather than rejected."
    ),
)
async def list_products(
    request: Request,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
    search: Annotated[str | None, Query(description="Substring of name, brand or description")] = None,
    category: Annotated[str | None, Query(description="Category ID")] = None,
    brand: Annotated[str | None, Query(description="Exact brand")] = None,
    color: Annotated[str | None, Query(description="Exact color")] = None,
    min_price: Annotated[str | None, Query(description="Minimum list price")] = None,
    max_price: Annotated[str | None, Query(description="Maximum list price")] = None,
    sort: Annotated[str | None, Query(description="created_at, price or name")] = None,
    order: Annotated[str | None, Query(description="asc or desc")] = None,
    page: Annotated[str | None, Query(description="Page number (1-based)")] = None,
) -> ProductListingResponse:
    """List products for the catalog page.

    Returns:
        Product page, category options with counts, brand and color
        options, and the echoed filters.
    """
    params = {
        "search": search,
        "category": category,
        "brand": brand,
        "color": color,
        "min_price": min_price,
        "max_price": max_price,
        "sort": sort,
        "order": order,
        "page": page,
    }
    listing = await service.list_products(params)

    return ProductListingResponse(
        products=page_to_schema(request, listing.products),
        categories=[summary_to_schema(s) for s in listing.categories],
        brands=listing.brands,
        colors=listing.colors,
        filters=echo_filters(params),
    )


@router.get(
    "/{slug}",
    response_model=ProductDetailResponse,
    responses={
        404: {"model": ErrorResponse},
    },
    summary="Get product details",
    description="Get an active product by slug with up to four related products.",
)
async def get_product(
    slug: str,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> ProductDetailResponse:
    """Get a product by slug.

    Args:
        slug: Product slug.
        service: Catalog service.

    Returns:
        Product details and related products.

    Raises:
        ProductNotFoundError: If no active product has this slug. Rendered
            as a 404 by the application's exception handler.
    """
    detail = await service.get_product_detail(slug)

    return ProductDetailResponse(
        product=product_to_schema(detail.product),
        related_products=[product_to_schema(p) for p in detail.related_products],
    )
