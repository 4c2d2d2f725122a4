"""Shared fixtures for Shoestore tests.

Tests run against an in-memory SQLite database. The application's
session dependency is overridden to use it.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from collections.abc import AsyncGenerator
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from shoestore.catalog.generator import CatalogGenerator, GeneratorConfig
from shoestore.catalog.models import Category, Product
from shoestore.infrastructure.database import Base, engine_options, get_session
from shoestore.main import app

BASE_TIME = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create an in-memory database with all tables."""
    url = "sqlite+aiosqlite://"
    engine = create_async_engine(url, poolclass=StaticPool, **engine_options(url))
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory bound to the test database."""
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncClient, None]:
    """Create an HTTP client for the app, backed by the test database."""

    async def override_get_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


# ============================================================================
# Catalog Fixtures
# ============================================================================


@pytest.fixture
def factory() -> CatalogGenerator:
    """Create a catalog generator used as a model factory."""
    return CatalogGenerator(GeneratorConfig(seed=1234))


@dataclass
class SeededCatalog:
    """Known catalog contents for assertions."""

    categories: dict[str, Category] = field(default_factory=dict)
    products: dict[str, Product] = field(default_factory=dict)

    @property
    def active(self) -> list[Product]:
        """Active products."""
        return [p for p in self.products.values() if p.is_active]


# key, category, name, brand, color, price, sale_price, featured, active
CATALOG_ROWS = [
    ("air_max", "running", "Nike Air Max Runner", "Nike", "Black", "120.00", None, True, True),
    ("ultraboost", "running", "Adidas Ultraboost Trail", "Adidas", "White", "180.00", "90.00", False, True),
    ("velocity", "running", "Puma Velocity Sprint", "Puma", "Red", "100.00", None, True, True),
    ("pegasus", "running", "Nike Pegasus Road", "Nike", "Blue", "140.00", "130.00", False, True),
    ("cumulus", "running", "ASICS Gel Cumulus", "ASICS", "Black", "95.00", "110.00", False, True),
    ("hidden_racer", "running", "Hidden Nike Racer", "Nike", "Green", "60.00", None, True, False),
    ("trail_boot", "boots", "Vans Trail Boot", "Vans", "Brown", "200.00", None, False, True),
    ("chelsea", "boots", "Converse Chelsea Boot", "Converse", "Black", "75.00", "50.00", False, True),
    ("hiker", "boots", "New Balance Hiker", "New Balance", "Gray", "160.00", None, False, True),
    ("retired_boot", "boots", "Retired Reebok Boot", "Reebok", "Purple", "50.00", None, False, False),
]


@pytest_asyncio.fixture
async def catalog(
    session_factory: async_sessionmaker[AsyncSession],
    factory: CatalogGenerator,
) -> SeededCatalog:
    """Seed three categories and ten products (eight active).

    "Sandals" is left empty. Products are created one minute apart in
    row order, so the last row is the newest.
    """
    seeded = SeededCatalog()
    seeded.categories = {
        "running": factory.build_category("Running Shoes"),
        "boots": factory.build_category("Boots"),
        "sandals": factory.build_category("Sandals"),
    }

    for index, row in enumerate(CATALOG_ROWS):
        key, category_key, name, brand, color, price, sale_price, featured, active = row
        seeded.products[key] = factory.build_product(
            seeded.categories[category_key],
            name=name,
            brand=brand,
            color=color,
            price=Decimal(price),
            sale_price=Decimal(sale_price) if sale_price else None,
            is_featured=featured,
            is_active=active,
            created_at=BASE_TIME + timedelta(minutes=index),
        )

    seeded.products["velocity"].description = "Lightweight racer with a carbon plate."

    async with session_factory() as session:
        session.add_all(seeded.categories.values())
        session.add_all(seeded.products.values())
        await session.commit()

    return seeded
