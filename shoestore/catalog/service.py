"""Catalog service for storefront pages.

High-level service that combines repository operations with the
request-parameter rules of the storefront: blank values mean "not
supplied" and malformed values fall back to defaults instead of failing.
"""

from collections.abc import Mapping
from dataclasses import asdict, dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Generic, TypeVar

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from shoestore.catalog.generator import CatalogGenerator, GeneratorConfig
from shoestore.catalog.models import Product
from shoestore.catalog.repository import (
    SORT_FIELDS,
    SORT_ORDERS,
    CategoryRepository,
    CategorySummary,
    ProductFilter,
    ProductRepository,
)
from shoestore.domain.exceptions import ProductNotFoundError
from shoestore.infrastructure.config import settings

T = TypeVar("T")

logger = structlog.get_logger()

# Request keys echoed back to the listing page
FILTER_KEYS = (
    "search",
    "category",
    "brand",
    "color",
    "min_price",
    "max_price",
    "sort",
    "order",
)


@dataclass(frozen=True)
class CatalogQueryDefaults:
    """Fallback values for the product listing.

    Attributes:
        sort: Sort field used when none (or an unknown one) is given.
        order: Sort order used when none (or an unknown one) is given.
        page_size: Products per page.
    """

    sort: str = "created_at"
    order: str = "desc"
    page_size: int = 12

    @classmethod
    def from_settings(cls) -> "CatalogQueryDefaults":
        """Build defaults from application settings."""
        return cls(
            sort=settings.catalog_default_sort,
            order=settings.catalog_default_order,
            page_size=settings.catalog_page_size,
        )


@dataclass
class PaginationParams:
    """Pagination parameters.

    Attributes:
        page: Page number (1-indexed).
        page_size: Items per page.
        sort_by: Sort field.
        sort_order: Sort order (asc/desc).
    """

    page: int = 1
    page_size: int = 12
    sort_by: str = "created_at"
    sort_order: str = "desc"

    @property
    def offset(self) -> int:
        """Calculate offset from page number."""
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        """Get limit (alias for page_size)."""
        return self.page_size


@dataclass
class PaginatedResult(Generic[T]):
    """Paginated result container.

    Attributes:
        items: List of items.
        total: Total count.
        page: Current page.
        page_size: Items per page.
    """

    items: list[T]
    total: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        """Calculate total pages, never less than one."""
        return max((self.total + self.page_size - 1) // self.page_size, 1)

    @property
    def has_next(self) -> bool:
        """Check if there's a next page."""
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        """Check if there's a previous page."""
        return self.page > 1

    @property
    def first_index(self) -> int | None:
        """1-based position of the first item on this page."""
        if not self.items:
            return None
        return (self.page - 1) * self.page_size + 1

    @property
    def last_index(self) -> int | None:
        """1-based position of the last item on this page."""
        if not self.items:
            return None
        return (self.page - 1) * self.page_size + len(self.items)


@dataclass
class CatalogListing:
    """Everything the product listing page renders."""

    products: PaginatedResult[Product]
    categories: list[CategorySummary]
    brands: list[str]
    colors: list[str]


@dataclass
class HomePage:
    """Everything the landing page renders."""

    featured_products: list[Product]
    latest_products: list[Product]
    categories: list[CategorySummary]


@dataclass
class ProductDetail:
    """A product and its same-category suggestions."""

    product: Product
    related_products: list[Product] = field(default_factory=list)


# ============================================================================
# Request parameter parsing
# ============================================================================


def _filled(value: str | None) -> str | None:
    """Return the value unless it is missing or blank."""
    if value is None or not value.strip():
        return None
    return value


def _parse_int(value: str | None) -> int | None:
    value = _filled(value)
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def _parse_decimal(value: str | None) -> Decimal | None:
    value = _filled(value)
    if value is None:
        return None
    try:
        number = Decimal(value.strip())
    except InvalidOperation:
        return None
    if not number.is_finite():
        return None
    return number


def parse_filters(params: Mapping[str, str | None]) -> ProductFilter:
    """Build a product filter from raw request parameters.

    Blank values are treated as not supplied. Values that cannot be
    parsed (a non-numeric category or price) are dropped.

    Args:
        params: Raw query parameters.

    Returns:
        Normalized filter.
    """
    return ProductFilter(
        search=_filled(params.get("search")),
        category_id=_parse_int(params.get("category")),
        brand=_filled(params.get("brand")),
        color=_filled(params.get("color")),
        min_price=_parse_decimal(params.get("min_price")),
        max_price=_parse_decimal(params.get("max_price")),
    )


def parse_pagination(
    params: Mapping[str, str | None],
    defaults: CatalogQueryDefaults,
) -> PaginationParams:
    """Build pagination parameters from raw request parameters.

    Unknown sort fields or orders and invalid page numbers fall back to
    the defaults.

    Args:
        params: Raw query parameters.
        defaults: Fallback values.

    Returns:
        Pagination parameters.
    """
    sort_by = (_filled(params.get("sort")) or defaults.sort).strip().lower()
    if sort_by not in SORT_FIELDS:
        sort_by = defaults.sort

    sort_order = (_filled(params.get("order")) or defaults.order).strip().lower()
    if sort_order not in SORT_ORDERS:
        sort_order = defaults.order

    page = _parse_int(params.get("page"))
    if page is None or page < 1:
        page = 1

    return PaginationParams(
        page=page,
        page_size=defaults.page_size,
        sort_by=sort_by,
        sort_order=sort_order,
    )


def echo_filters(params: Mapping[str, str | None]) -> dict[str, str]:
    """Get the supplied filter inputs, verbatim, for re-rendering controls.

    Args:
        params: Raw query parameters.

    Returns:
        Supplied values keyed by filter name.
    """
    return {key: params[key] for key in FILTER_KEYS if params.get(key) is not None}


# ============================================================================
# Catalog Service
# ============================================================================


class CatalogService:
    """Service for storefront catalog operations.

    Example usage:
        async with async_session_factory() as session:
            service = CatalogService(session)
            listing = await service.list_products({"brand": "Nike", "sort": "price"})
    """

    def __init__(
        self,
        session: AsyncSession,
        defaults: CatalogQueryDefaults | None = None,
    ) -> None:
        """Initialize service with database session.

        Args:
            session: Async SQLAlchemy session.
            defaults: Listing fallbacks. Taken from settings when omitted.
        """
        self.session = session
        self.defaults = defaults or CatalogQueryDefaults.from_settings()
        self.products = ProductRepository(session)
        self.categories = CategoryRepository(session)

    async def search_products(
        self,
        filters: ProductFilter,
        pagination: PaginationParams,
    ) -> PaginatedResult[Product]:
        """Search active products with filters and pagination.

        Args:
            filters: Filter parameters.
            pagination: Pagination parameters.

        Returns:
            Paginated product results. A page past the end has no items
            but still reports the full total.
        """
        total = await self.products.count(filters)

        items: list[Product] = []
        if pagination.offset < total:
            items = list(
                await self.products.find_all(
                    filters,
                    sort_by=pagination.sort_by,
                    sort_order=pagination.sort_order,
                    limit=pagination.limit,
                    offset=pagination.offset,
                )
            )

        logger.debug(
            "Catalog search",
            filters={k: str(v) for k, v in asdict(filters).items() if v is not None},
            sort_by=pagination.sort_by,
            sort_order=pagination.sort_order,
            page=pagination.page,
            total=total,
        )

        return PaginatedResult(
            items=items,
            total=total,
            page=pagination.page,
            page_size=pagination.page_size,
        )

    async def list_products(self, params: Mapping[str, str | None]) -> CatalogListing:
        """Build the product listing from raw request parameters.

        Args:
            params: Raw query parameters.

        Returns:
            Product page plus category, brand and color options.
        """
        page = await self.search_products(
            parse_filters(params),
            parse_pagination(params, self.defaults),
        )

        return CatalogListing(
            products=page,
            categories=await self.categories.list_with_counts(),
            brands=await self.products.get_brands(),
            colors=await self.products.get_colors(),
        )

    async def get_home(self) -> HomePage:
        """Get featured products, latest products, and categories.

        Returns:
            Landing page content.
        """
        limit = settings.home_section_limit
        return HomePage(
            featured_products=list(await self.products.find_featured(limit)),
            latest_products=list(await self.products.find_latest(limit)),
            categories=await self.categories.list_with_counts(),
        )

    async def get_product_detail(self, slug: str) -> ProductDetail:
        """Get a product by slug with related products.

        Args:
            slug: Product slug.

        Returns:
            Product detail.

        Raises:
            ProductNotFoundError: If no active product has this slug.
        """
        product = await self.products.get_by_slug(slug)
        if product is None:
            raise ProductNotFoundError(slug)

        related = await self.products.find_related(
            product, settings.related_products_limit
        )
        return ProductDetail(product=product, related_products=list(related))

    async def get_categories(self) -> list[CategorySummary]:
        """Get categories with active product counts.

        Returns:
            Category summaries ordered by name.
        """
        return await self.categories.list_with_counts()

    async def seed_catalog(
        self,
        config: GeneratorConfig | None = None,
        clear_existing: bool = True,
    ) -> dict[str, Any]:
        """Seed the catalog with generated categories and products.

        Args:
            config: Generator configuration. Small preset when omitted.
            clear_existing: Whether to delete existing data first.

        Returns:
            Seeding result with counts.
        """
        config = config or GeneratorConfig.small()

        deleted = 0
        if clear_existing:
            deleted = await self.categories.delete_all()

        generator = CatalogGenerator(config)
        categories, products = generator.generate()

        await self.categories.save_all(categories)
        await self.products.save_all(products)
        await self.session.commit()

        logger.info(
            "Catalog seeded",
            categories=len(categories),
            products=len(products),
            deleted_categories=deleted,
        )

        return {
            "seed": config.seed,
            "deleted_categories": deleted,
            "categories_created": len(categories),
            "products_created": len(products),
            "featured_products": sum(1 for p in products if p.is_featured),
            "brands_used": len({p.brand for p in products}),
        }
