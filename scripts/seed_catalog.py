#!/usr/bin/env python3
"""Seed demo catalog script.

Creates a handful of categories and products through the catalog
services so the API has data to browse.

Usage:
    python scripts/seed_catalog.py
    python scripts/seed_catalog.py --clear
    python scripts/seed_catalog.py --database-url sqlite+aiosqlite:///./demo.db
"""

import argparse
import asyncio

from productdesk.catalog.models import Category, Product
from productdesk.catalog.schemas import CategoryCreate, ProductCreate
from productdesk.catalog.service import CategoryService, ProductService
from productdesk.infrastructure.config import settings
from productdesk.infrastructure.database import Database

DEMO_CATALOG: dict[str, list[dict]] = {
    "Electronics": [
        {"name": "Wireless Headphones", "description": "Over-ear, noise cancelling", "price": 79.99, "quantity": 25},
        {"name": "USB-C Charger", "description": "65W fast charger", "price": 29.5, "quantity": 120},
        {"name": "Mechanical Keyboard", "description": "Tenkeyless, brown switches", "price": 64.0, "quantity": 18},
    ],
    "Home & Garden": [
        {"name": "Desk Lamp", "description": "Dimmable LED desk lamp", "price": 24.9, "quantity": 40},
        {"name": "Ceramic Planter", "description": "Glazed 20cm planter", "price": 15.0, "quantity": 60},
    ],
    "Books": [
        {"name": "Python Cookbook", "description": "Recipes for mastering Python 3", "price": 39.99, "quantity": 12},
        {"name": "Field Guide to Birds", "description": None, "price": 18.25, "quantity": 7},
    ],
}


async def clear_catalog(database: Database) -> int:
    """Delete every product and category.

    Returns:
        Number of deleted rows.
    """
    deleted = 0
    async with database.session() as session:
        for model in (Product, Category):
            result = await session.execute(model.__table__.delete())
            deleted += result.rowcount or 0
    return deleted


async def seed(database: Database) -> dict[str, int]:
    """Create the demo categories and products.

    Returns:
        Counts of created categories and products.
    """
    categories_created = 0
    products_created = 0

    async with database.session() as session:
        category_service = CategoryService(session)
        product_service = ProductService(session)

        for category_name, products in DEMO_CATALOG.items():
            category = await category_service.create_category(
                CategoryCreate(name=category_name)
            )
            categories_created += 1

            for product in products:
                await product_service.create_product(
                    ProductCreate(category_id=category.id, **product)
                )
                products_created += 1

    return {"categories": categories_created, "products": products_created}


async def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Seed the demo product catalog")
    parser.add_argument(
        "--database-url",
        default=settings.database_url,
        help="Database URL (default: DATABASE_URL from the environment)",
    )
    parser.add_argument(
        "--clear",
        action="store_true",
        help="Delete existing categories and products first",
    )
    args = parser.parse_args()

    database = Database(args.database_url)
    try:
        print("Creating database tables...")
        await database.create_all()

        if args.clear:
            deleted = await clear_catalog(database)
            print(f"  ✓ Deleted: {deleted} existing rows")

        result = await seed(database)
        print(f"  ✓ Categories: {result['categories']}")
        print(f"  ✓ Products: {result['products']}")
    finally:
        await database.dispose()

    print("Seeding complete!")


if __name__ == "__main__":
    asyncio.run(main())
