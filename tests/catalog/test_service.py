"""Tests for the catalog service and request parameter parsing."""

from decimal import Decimal

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from shoestore.catalog.generator import GeneratorConfig
from shoestore.catalog.models import Category, Product
from shoestore.catalog.repository import ProductFilter
from shoestore.catalog.service import (
    CatalogQueryDefaults,
    CatalogService,
    PaginatedResult,
    echo_filters,
    parse_filters,
    parse_pagination,
)
from shoestore.domain.exceptions import ProductNotFoundError

from tests.conftest import SeededCatalog

DEFAULTS = CatalogQueryDefaults()


class TestParseFilters:
    """Tests for parse_filters."""

    def test_empty_params(self) -> None:
        """No parameters means no filters."""
        assert parse_filters({}) == ProductFilter()

    @pytest.mark.parametrize(
        "key",
        ["search", "category", "brand", "color", "min_price", "max_price"],
    )
    @pytest.mark.parametrize("blank", ["", "   ", None])
    def test_blank_values_are_not_supplied(self, key: str, blank: str | None) -> None:
        """Blank strings are treated exactly like missing parameters."""
        assert parse_filters({key: blank}) == ProductFilter()

    def test_parses_all_fields(self) -> None:
        """Every supported field is converted to its type."""
        filters = parse_filters(
            {
                "search": "runner",
                "category": "3",
                "brand": "New Balance",
                "color": "Black",
                "min_price": "49.99",
                "max_price": "150",
            }
        )

        assert filters == ProductFilter(
            search="runner",
            category_id=3,
            brand="New Balance",
            color="Black",
            min_price=Decimal("49.99"),
            max_price=Decimal("150"),
        )

    @pytest.mark.parametrize(
        ("key", "value"),
        [
            ("category", "running"),
            ("category", "3.5"),
            ("min_price", "cheap"),
            ("max_price", "NaN"),
            ("max_price", "Infinity"),
        ],
    )
    def test_malformed_numbers_are_dropped(self, key: str, value: str) -> None:
        """Unparseable numeric filters are ignored instead of failing."""
        assert parse_filters({key: value}) == ProductFilter()

    def test_search_keeps_inner_whitespace(self) -> None:
        """Only fully blank values are discarded."""
        assert parse_filters({"search": "air max"}).search == "air max"


class TestParsePagination:
    """Tests for parse_pagination."""

    def test_defaults(self) -> None:
        """Missing values use the configured defaults."""
        pagination = parse_pagination({}, DEFAULTS)

        assert pagination.page == 1
        assert pagination.page_size == 12
        assert pagination.sort_by == "created_at"
        assert pagination.sort_order == "desc"

    def test_valid_values(self) -> None:
        """Valid sort, order and page are kept."""
        pagination = parse_pagination(
            {"sort": "price", "order": "ASC", "page": "3"}, DEFAULTS
        )

        assert pagination.sort_by == "price"
        assert pagination.sort_order == "asc"
        assert pagination.page == 3
        assert pagination.offset == 24

    @pytest.mark.parametrize(
        "params",
        [
            {"sort": "stock_quantity", "order": "random", "page": "zero"},
            {"sort": "", "order": "", "page": ""},
            {"sort": "name; DROP TABLE products", "order": "desc desc", "page": "-4"},
            {"page": "0"},
        ],
    )
    def test_invalid_values_fall_back(self, params: dict[str, str]) -> None:
        """Anything outside the allowed values becomes the default."""
        pagination = parse_pagination(params, DEFAULTS)

        assert pagination.page == 1
        assert pagination.sort_by == DEFAULTS.sort
        assert pagination.sort_order == DEFAULTS.order

    def test_custom_defaults(self) -> None:
        """Injected defaults replace the built-in ones."""
        defaults = CatalogQueryDefaults(sort="name", order="asc", page_size=5)
        pagination = parse_pagination({"sort": "bogus"}, defaults)

        assert pagination.sort_by == "name"
        assert pagination.sort_order == "asc"
        assert pagination.page_size == 5


class TestEchoFilters:
    """Tests for echo_filters."""

    def test_echoes_supplied_filters_only(self) -> None:
        """Present keys are echoed verbatim, page and unknown keys are not."""
        echoed = echo_filters(
            {
                "search": "",
                "brand": "Nike",
                "min_price": "abc",
                "color": None,
                "page": "2",
                "utm_source": "mail",
            }
        )

        assert echoed == {"search": "", "brand": "Nike", "min_price": "abc"}


class TestPaginatedResult:
    """Tests for PaginatedResult."""

    def test_empty_result_has_one_page(self) -> None:
        """An empty listing still reports a single page."""
        result = PaginatedResult(items=[], total=0, page=1, page_size=12)

        assert result.total_pages == 1
        assert result.has_next is False
        assert result.first_index is None
        assert result.last_index is None

    def test_positions(self) -> None:
        """First and last positions are 1-based and page-relative."""
        result = PaginatedResult(items=["a", "b"], total=26, page=3, page_size=12)

        assert result.total_pages == 3
        assert result.has_prev is True
        assert result.has_next is False
        assert result.first_index == 25
        assert result.last_index == 26


class TestCatalogService:
    """Tests for CatalogService."""

    @pytest.mark.asyncio
    async def test_list_products(self, session: AsyncSession, catalog: SeededCatalog) -> None:
        """Listing combines the product page with facets and categories."""
        listing = await CatalogService(session, DEFAULTS).list_products({})

        assert listing.products.total == 8
        assert len(listing.products.items) == 8
        assert listing.brands == sorted({p.brand for p in catalog.products.values()})
        assert listing.colors == sorted({p.color for p in catalog.products.values()})
        assert [s.category.name for s in listing.categories] == [
            "Boots",
            "Running Shoes",
            "Sandals",
        ]

    @pytest.mark.asyncio
    async def test_facets_ignore_filters(
        self, session: AsyncSession, catalog: SeededCatalog
    ) -> None:
        """Brand and color options do not narrow with the filters."""
        listing = await CatalogService(session, DEFAULTS).list_products({"brand": "Vans"})

        assert listing.products.total == 1
        assert len(listing.brands) == 8
        assert len(listing.colors) == 8

    @pytest.mark.asyncio
    async def test_page_past_the_end(self, session: AsyncSession, catalog: SeededCatalog) -> None:
        """Pages past the end are empty but keep the total."""
        service = CatalogService(session, CatalogQueryDefaults(page_size=3))

        last = await service.list_products({"page": "3"})
        assert len(last.products.items) == 2
        assert last.products.total_pages == 3

        beyond = await service.list_products({"page": "4"})
        assert beyond.products.items == []
        assert beyond.products.total == 8

        far_beyond = await service.list_products({"page": str(10**30)})
        assert far_beyond.products.items == []
        assert far_beyond.products.total == 8

    @pytest.mark.asyncio
    async def test_inverted_price_range(
        self, session: AsyncSession, catalog: SeededCatalog
    ) -> None:
        """min_price above max_price yields an empty result, not an error."""
        listing = await CatalogService(session, DEFAULTS).list_products(
            {"min_price": "100", "max_price": "50"}
        )

        assert listing.products.total == 0
        assert listing.products.items == []

    @pytest.mark.asyncio
    async def test_get_home(self, session: AsyncSession, catalog: SeededCatalog) -> None:
        """Landing page sections only contain active products."""
        home = await CatalogService(session, DEFAULTS).get_home()

        assert [p.id for p in home.featured_products] == [
            catalog.products["velocity"].id,
            catalog.products["air_max"].id,
        ]
        assert len(home.latest_products) == 8
        assert all(p.is_active for p in home.latest_products)
        assert {s.category.slug: s.products_count for s in home.categories} == {
            "boots": 3,
            "running-shoes": 5,
            "sandals": 0,
        }

    @pytest.mark.asyncio
    async def test_get_product_detail(
        self, session: AsyncSession, catalog: SeededCatalog
    ) -> None:
        """Detail returns the product and at most four related products."""
        pegasus = catalog.products["pegasus"]
        detail = await CatalogService(session, DEFAULTS).get_product_detail(pegasus.slug)

        assert detail.product.id == pegasus.id
        assert len(detail.related_products) == 4
        assert pegasus.id not in {p.id for p in detail.related_products}
        assert all(p.category_id == pegasus.category_id for p in detail.related_products)
        assert all(p.is_active for p in detail.related_products)

    @pytest.mark.asyncio
    async def test_get_product_detail_not_found(
        self, session: AsyncSession, catalog: SeededCatalog
    ) -> None:
        """Unknown and inactive slugs raise ProductNotFoundError."""
        service = CatalogService(session, DEFAULTS)

        with pytest.raises(ProductNotFoundError) as exc_info:
            await service.get_product_detail("does-not-exist")
        assert exc_info.value.slug == "does-not-exist"

        with pytest.raises(ProductNotFoundError):
            await service.get_product_detail(catalog.products["retired_boot"].slug)

    @pytest.mark.asyncio
    async def test_seed_catalog(self, session: AsyncSession) -> None:
        """Seeding persists the generated catalog."""
        result = await CatalogService(session).seed_catalog(GeneratorConfig.small(seed=3))

        categories = (await session.execute(select(func.count(Category.id)))).scalar_one()
        products = (await session.execute(select(func.count(Product.id)))).scalar_one()

        assert result["categories_created"] == categories == 6
        assert result["products_created"] == products
        assert result["deleted_categories"] == 0

    @pytest.mark.asyncio
    async def test_seed_catalog_replaces_existing(self, session: AsyncSession) -> None:
        """Reseeding clears the previous catalog first."""
        service = CatalogService(session)
        first = await service.seed_catalog(GeneratorConfig.small(seed=3))
        second = await service.seed_catalog(GeneratorConfig.small(seed=3))

        products = (await session.execute(select(func.count(Product.id)))).scalar_one()

        assert second["deleted_categories"] == 6
        assert products == second["products_created"] == first["products_created"]
