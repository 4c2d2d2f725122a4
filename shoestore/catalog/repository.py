"""Catalog repositories for database operations.

Provides read operations for products and categories with filtering,
sorting, and pagination.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from sqlalchemy import and_, delete, false, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from shoestore.catalog.models import Category, Product

SORT_FIELDS = ("created_at", "price", "name")
SORT_ORDERS = ("asc", "desc")

# Primary keys are 32-bit integers; larger ids cannot exist
MAX_ID = 2**31 - 1


@dataclass(frozen=True)
class ProductFilter:
    """Normalized filter parameters for product search.

    ``None`` means the filter was not supplied. Blank strings never reach
    this object; see ``shoestore.catalog.service.parse_filters``.

    Attributes:
        search: Case-insensitive substring of name, brand or description.
        category_id: Exact category ID.
        brand: Exact brand.
        color: Exact color.
        min_price: Inclusive lower bound on list price.
        max_price: Inclusive upper bound on list price.
    """

    search: str | None = None
    category_id: int | None = None
    brand: str | None = None
    color: str | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None


class ProductRepository:
    """Repository for Product database operations.

    Every customer-facing query is scoped to active products.

    Example usage:
        async with async_session_factory() as session:
            repo = ProductRepository(session)
            products = await repo.find_all(
                ProductFilter(brand="Nike"),
                sort_by="price",
                sort_order="asc",
                limit=12,
            )
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def save_all(self, products: list[Product]) -> list[Product]:
        """Save multiple products to database.

        Args:
            products: Products to save.

        Returns:
            Saved products.
        """
        self.session.add_all(products)
        await self.session.flush()
        return products

    async def get_by_slug(self, slug: str) -> Product | None:
        """Get an active product by slug, with its category loaded.

        Args:
            slug: Product slug.

        Returns:
            Product if found and active, None otherwise.
        """
        query = (
            select(Product)
            .where(and_(Product.slug == slug, Product.is_active.is_(True)))
            .options(selectinload(Product.category))
        )
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def find_all(
        self,
        filters: ProductFilter,
        sort_by: str = "created_at",
        sort_order: str = "desc",
        limit: int = 12,
        offset: int = 0,
    ) -> Sequence[Product]:
        """Find active products with filtering, sorting, and pagination.

        Args:
            filters: Filter parameters.
            sort_by: Sort field (created_at, price, name).
            sort_order: Sort order (asc, desc).
            limit: Maximum results.
            offset: Result offset for pagination.

        Returns:
            Sequence of matching products.
        """
        query = (
            select(Product)
            .where(and_(*self._build_conditions(filters)))
            .order_by(*self._get_ordering(sort_by, sort_order))
            .limit(limit)
            .offset(offset)
            .options(selectinload(Product.category))
        )

        result = await self.session.execute(query)
        return result.scalars().all()

    async def count(self, filters: ProductFilter) -> int:
        """Count active products matching filters.

        Args:
            filters: Filter parameters.

        Returns:
            Count of matching products.
        """
        query = select(func.count(Product.id)).where(
            and_(*self._build_conditions(filters))
        )
        result = await self.session.execute(query)
        return result.scalar_one()

    async def find_featured(self, limit: int) -> Sequence[Product]:
        """Get the newest active featured products.

        Args:
            limit: Maximum results.

        Returns:
            Featured products, newest first.
        """
        query = (
            select(Product)
            .where(and_(Product.is_active.is_(True), Product.is_featured.is_(True)))
            .order_by(*self._get_ordering("created_at", "desc"))
            .limit(limit)
            .options(selectinload(Product.category))
        )
        result = await self.session.execute(query)
        return result.scalars().all()

    async def find_latest(self, limit: int) -> Sequence[Product]:
        """Get the newest active products.

        Args:
            limit: Maximum results.

        Returns:
            Products, newest first.
        """
        return await self.find_all(ProductFilter(), limit=limit)

    async def find_related(self, product: Product, limit: int) -> Sequence[Product]:
        """Get active products from the same category, excluding the product.

        Args:
            product: Product to find neighbours for.
            limit: Maximum results.

        Returns:
            Related products, newest first.
        """
        query = (
            select(Product)
            .where(
                and_(
                    Product.is_active.is_(True),
                    Product.category_id == product.category_id,
                    Product.id != product.id,
                )
            )
            .order_by(*self._get_ordering("created_at", "desc"))
            .limit(limit)
            .options(selectinload(Product.category))
        )
        result = await self.session.execute(query)
        return result.scalars().all()

    async def get_brands(self) -> list[str]:
        """Get distinct brands across the whole catalog.

        Inactive products are included.

        Returns:
            Brand names, ascending.
        """
        query = select(Product.brand).distinct().order_by(Product.brand)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_colors(self) -> list[str]:
        """Get distinct colors across the whole catalog.

        Inactive products are included.

        Returns:
            Color names, ascending.
        """
        query = select(Product.color).distinct().order_by(Product.color)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    def _build_conditions(self, filters: ProductFilter) -> list[Any]:
        """Build the WHERE conjunction for a filter set.

        Args:
            filters: Filter parameters.

        Returns:
            List of SQLAlchemy conditions, always starting with the
            active-product predicate.
        """
        conditions: list[Any] = [Product.is_active.is_(True)]

        if filters.search is not None:
            conditions.append(
                or_(
                    Product.name.icontains(filters.search, autoescape=True),
                    Product.brand.icontains(filters.search, autoescape=True),
                    Product.description.icontains(filters.search, autoescape=True),
                )
            )

        if filters.category_id is not None:
            if 1 <= filters.category_id <= MAX_ID:
                conditions.append(Product.category_id == filters.category_id)
            else:
                conditions.append(false())

        if filters.brand is not None:
            conditions.append(Product.brand == filters.brand)

        if filters.color is not None:
            conditions.append(Product.color == filters.color)

        # Price bounds compare the list price, not the sale price
        if filters.min_price is not None:
            conditions.append(Product.price >= filters.min_price)

        if filters.max_price is not None:
            conditions.append(Product.price <= filters.max_price)

        return conditions

    def _get_ordering(self, sort_by: str, sort_order: str) -> list[Any]:
        """Get ORDER BY clauses for a sort request.

        Args:
            sort_by: Sort field name. Unknown names sort by created_at.
            sort_order: "asc" or "desc". Anything else sorts descending.

        Returns:
            Primary sort expression followed by an ID tie-breaker.
        """
        columns = {
            "created_at": Product.created_at,
            "price": func.coalesce(Product.sale_price, Product.price),
            "name": Product.name,
        }
        column = columns.get(sort_by, Product.created_at)

        if sort_order == "asc":
            return [column.asc(), Product.id.asc()]
        return [column.desc(), Product.id.desc()]


@dataclass(frozen=True)
class CategorySummary:
    """Category paired with its number of active products."""

    category: Category
    products_count: int


class CategoryRepository:
    """Repository for Category database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def save_all(self, categories: list[Category]) -> list[Category]:
        """Save multiple categories to database.

        Args:
            categories: Categories to save.

        Returns:
            Saved categories.
        """
        self.session.add_all(categories)
        await self.session.flush()
        return categories

    async def list_with_counts(self) -> list[CategorySummary]:
        """Get all categories with their active product counts.

        Counts come from a single grouped query. Categories without
        active products report zero.

        Returns:
            Category summaries ordered by name.
        """
        product_count = func.count(Product.id).label("products_count")
        query = (
            select(Category, product_count)
            .outerjoin(
                Product,
                and_(
                    Product.category_id == Category.id,
                    Product.is_active.is_(True),
                ),
            )
            .group_by(Category.id)
            .order_by(Category.name, Category.id)
        )

        result = await self.session.execute(query)
        return [
            CategorySummary(category=row[0], products_count=row[1])
            for row in result.all()
        ]

    async def delete_all(self) -> int:
        """Delete every category and, through the cascade, every product.

        Returns:
            Number of deleted categories.
        """
        count = (await self.session.execute(select(func.count(Category.id)))).scalar_one()
        # Bulk deletes skip ORM cascades, so remove children first
        await self.session.execute(delete(Product))
        await self.session.execute(delete(Category))
        await self.session.flush()
        return count
