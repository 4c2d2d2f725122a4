"""Footwear catalog generator with deterministic seeding.

Generates categories and products for development databases and tests.
Uses a seeded random generator so the same seed always yields the same
catalog.
"""

import random
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from shoestore.catalog.models import Category, Product


# ============================================================================
# Constants
# ============================================================================

CATEGORIES: dict[str, str] = {
    "Running Shoes": "High-performance athletic footwear designed for running and jogging.",
    "Casual Sneakers": "Comfortable everyday shoes perfect for casual wear and lifestyle activities.",
    "Dress Shoes": "Elegant formal footwear suitable for business and special occasions.",
    "Boots": "Sturdy and durable footwear for various weather conditions and outdoor activities.",
    "Sandals": "Open-toe footwear perfect for warm weather and casual occasions.",
    "High Heels": "Stylish elevated footwear for formal events and fashion statements.",
}

BRANDS = [
    "Nike",
    "Adidas",
    "Puma",
    "Reebok",
    "New Balance",
    "Converse",
    "Vans",
    "ASICS",
]

COLORS = ["Black", "White", "Blue", "Red", "Gray", "Brown", "Navy", "Green"]

# Size runs use different labelling systems on purpose
SIZE_SETS = [
    ["6", "7", "8", "9", "10", "11"],
    ["5.5", "6.5", "7.5", "8.5", "9.5", "10.5"],
    ["UK 5", "UK 6", "UK 7", "UK 8", "UK 9", "UK 10"],
]

PRODUCT_NAMES = [
    "Air Max Runner",
    "Classic Comfort",
    "Urban Walker",
    "Sport Elite",
    "Street Style",
    "Performance Pro",
    "Casual Flex",
    "Dynamic Motion",
    "Premium Leather",
    "Lifestyle Essential",
]

DESCRIPTION_SENTENCES = [
    "Built with a breathable upper that keeps your feet cool all day.",
    "A cushioned midsole absorbs impact on every step.",
    "The durable rubber outsole grips on wet and dry surfaces.",
    "Designed for a secure, comfortable fit from morning to night.",
    "Lightweight construction makes it easy to wear for hours.",
    "A padded collar and tongue add extra comfort around the ankle.",
    "Finished with premium materials for a polished look.",
    "Pairs equally well with jeans, chinos or athletic wear.",
]

IMAGES = [
    "https://images.unsplash.com/photo-1549298916-b41d501d3772?w=400",
    "https://images.unsplash.com/photo-1560769629-975ec94e6a86?w=400",
    "https://images.unsplash.com/photo-1595950653106-6c9ebd614d3a?w=400",
]

PRICE_RANGE = (49.99, 299.99)
SALE_PRICE_FLOOR = 29.99
SALE_CHANCE = 0.3
FEATURED_CHANCE = 0.2
MAX_STOCK = 50

_SLUG_STRIP = re.compile(r"[^a-z0-9]+")


def slugify(value: str) -> str:
    """Convert a display name into a URL slug.

    Args:
        value: Text to convert.

    Returns:
        Lowercase, hyphen-separated slug.
    """
    return _SLUG_STRIP.sub("-", value.lower()).strip("-")


def _money(value: float) -> Decimal:
    return Decimal(str(round(value, 2))).quantize(Decimal("0.01"))


# ============================================================================
# Generator Configuration
# ============================================================================


@dataclass
class GeneratorConfig:
    """Configuration for catalog generation.

    Attributes:
        seed: Random seed for reproducibility.
        min_products_per_category: Lower bound of products per category.
        max_products_per_category: Upper bound of products per category.
        extra_featured: Additional featured products placed in one
            randomly chosen category.
    """

    seed: int = 42
    min_products_per_category: int = 8
    max_products_per_category: int = 12
    extra_featured: int = 6

    @classmethod
    def small(cls, seed: int = 42) -> "GeneratorConfig":
        """Create config for small catalog (~60 products).

        Args:
            seed: Random seed.

        Returns:
            Config for small catalog.
        """
        return cls(
            seed=seed,
            min_products_per_category=8,
            max_products_per_category=12,
            extra_featured=6,
        )

    @classmethod
    def full(cls, seed: int = 42) -> "GeneratorConfig":
        """Create config for full catalog (~200 products).

        Args:
            seed: Random seed.

        Returns:
            Config for full catalog.
        """
        return cls(
            seed=seed,
            min_products_per_category=25,
            max_products_per_category=40,
            extra_featured=12,
        )


# ============================================================================
# Catalog Generator
# ============================================================================


class CatalogGenerator:
    """Generates footwear categories and products.

    Instances double as factories: ``build_category`` and
    ``build_product`` accept keyword overrides for any column.

    Example usage:
        generator = CatalogGenerator(GeneratorConfig.small())
        categories, products = generator.generate()
    """

    def __init__(self, config: GeneratorConfig | None = None) -> None:
        """Initialize generator with configuration.

        Args:
            config: Generator configuration.
        """
        self.config = config or GeneratorConfig()
        self.rng = random.Random(self.config.seed)
        self._used_slug_numbers: set[int] = set()

    def _unique_number(self) -> int:
        while True:
            number = self.rng.randint(1000, 9999)
            if number not in self._used_slug_numbers:
                self._used_slug_numbers.add(number)
                return number

    def build_category(self, name: str | None = None, **overrides: Any) -> Category:
        """Build an unsaved category.

        Args:
            name: Category name. Random footwear category when omitted.
            **overrides: Column values to set explicitly.

        Returns:
            Category instance.
        """
        if name is None:
            name = self.rng.choice(list(CATEGORIES))

        values: dict[str, Any] = {
            "name": name,
            "slug": slugify(name),
            "description": CATEGORIES.get(name, f"{name} collection."),
            "image": None,
        }
        values.update(overrides)
        return Category(**values)

    def build_product(self, category: Category, **overrides: Any) -> Product:
        """Build an unsaved product in a category.

        Args:
            category: Owning category.
            **overrides: Column values to set explicitly.

        Returns:
            Product instance.
        """
        rng = self.rng
        brand = overrides.get("brand", rng.choice(BRANDS))
        name = f"{brand} {rng.choice(PRODUCT_NAMES)}"

        price = _money(rng.uniform(*PRICE_RANGE))
        sale_price = None
        if rng.random() < SALE_CHANCE:
            sale_price = _money(rng.uniform(SALE_PRICE_FLOOR, float(price) - 10))

        values: dict[str, Any] = {
            "name": name,
            "description": " ".join(rng.sample(DESCRIPTION_SENTENCES, 3)),
            "price": price,
            "sale_price": sale_price,
            "brand": brand,
            "color": rng.choice(COLORS),
            "sizes": list(rng.choice(SIZE_SETS)),
            "images": list(IMAGES),
            "is_featured": rng.random() < FEATURED_CHANCE,
            "is_active": True,
            "stock_quantity": rng.randint(0, MAX_STOCK),
        }
        values.update(overrides)
        if "slug" not in overrides:
            values["slug"] = slugify(f"{values['name']}-{self._unique_number()}")

        return Product(category=category, **values)

    def generate(self) -> tuple[list[Category], list[Product]]:
        """Generate the full catalog.

        Every category gets a random number of products within the
        configured range, then the extra featured products are added to
        one randomly chosen category.

        Returns:
            Tuple of (categories, products).
        """
        categories = [self.build_category(name) for name in CATEGORIES]
        products: list[Product] = []

        for category in categories:
            count = self.rng.randint(
                self.config.min_products_per_category,
                self.config.max_products_per_category,
            )
            products.extend(self.build_product(category) for _ in range(count))

        featured_category = self.rng.choice(categories)
        products.extend(
            self.build_product(featured_category, is_featured=True)
            for _ in range(self.config.extra_featured)
        )

        return categories, products
