#!/usr/bin/env python3
"""Seed product catalog script.

Generates the footwear catalog deterministically and writes it to the
configured database (``DATABASE_URL``).

Usage:
    python scripts/seed_catalog.py --mode small
    python scripts/seed_catalog.py --mode full --seed 7
    python scripts/seed_catalog.py --no-clear
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from shoestore.catalog.generator import GeneratorConfig
from shoestore.catalog.service import CatalogService
from shoestore.infrastructure.database import Base, async_session_factory, engine

PRESETS = {
    "small": GeneratorConfig.small,
    "full": GeneratorConfig.full,
}

SUMMARY_LINES = [
    ("deleted_categories", "Removed categories"),
    ("categories_created", "Categories"),
    ("products_created", "Products"),
    ("featured_products", "Featured"),
    ("brands_used", "Brands"),
]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Seed the footwear product catalog")
    parser.add_argument(
        "--mode",
        choices=sorted(PRESETS),
        default="small",
        help="Catalog size: small (8-12 products per category) or full (25-40)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed (default: 42)",
    )
    parser.add_argument(
        "--no-clear",
        action="store_true",
        help="Keep existing categories and products",
    )
    return parser


async def seed(config: GeneratorConfig, clear: bool) -> dict:
    """Create missing tables, then seed the catalog in one transaction."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session_factory() as session:
        return await CatalogService(session).seed_catalog(config, clear_existing=clear)


async def main() -> None:
    args = build_parser().parse_args()
    config = PRESETS[args.mode](seed=args.seed)

    print(f"Seeding {args.mode} catalog (seed={config.seed}, clear={not args.no_clear})")

    try:
        result = await seed(config, clear=not args.no_clear)
    finally:
        await engine.dispose()

    width = max(len(label) for _, label in SUMMARY_LINES)
    for key, label in SUMMARY_LINES:
        print(f"  {label:<{width}}  {result[key]}")
    print("Done.")


if __name__ == "__main__":
    asyncio.run(main())
