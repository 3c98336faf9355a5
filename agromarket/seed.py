"""Seed the product catalog.

Writes a demo set of agricultural products into the JSON catalog file.

Usage:
    agromarket-seed --path data/agromarket.json
    agromarket-seed --path data/agromarket.json --no-clear
"""

import argparse
from typing import Any

from agromarket.catalog.persistence import JsonFilePersistence
from agromarket.catalog.store import CatalogStore
from agromarket.infrastructure.config import settings
from agromarket.infrastructure.logging import configure_logging

DEMO_PRODUCTS: list[dict[str, Any]] = [
    {
        "name": "Tomate chonto",
        "description": "Tomate fresco de invernadero",
        "category": "vegetable",
        "priority": "high",
        "price": 3200,
        "stock": 150,
        "unit": "kg",
    },
    {
        "name": "Mango Tommy",
        "description": "Mango maduro del Tolima",
        "category": "fruit",
        "priority": "high",
        "price": 4500,
        "stock": 80,
        "unit": "kg",
    },
    {
        "name": "Arroz blanco",
        "description": "Arroz del Meta, bulto de 50 kg",
        "category": "grain",
        "priority": "low",
        "price": 120000,
        "stock": 20,
        "unit": "bulto",
    },
    {
        "name": "Queso campesino",
        "description": "Queso fresco artesanal",
        "category": "dairy",
        "priority": "high",
        "price": 18000,
        "stock": 25,
        "unit": "libra",
    },
    {
        "name": "Papa pastusa",
        "description": "Papa de Boyacá para sopas y frituras",
        "category": "tuber",
        "priority": "medium",
        "price": 2100,
        "stock": 400,
        "unit": "kg",
    },
    {
        "name": "Maíz amarillo",
        "description": "Maíz seco del Valle del Cauca",
        "category": "grain",
        "priority": "low",
        "price": 1900,
        "stock": 600,
        "unit": "kg",
    },
]


def seed_catalog(store: CatalogStore, clear: bool = True) -> dict[str, int]:
    """Load demo products into a store.

    Args:
        store: Target catalog store.
        clear: Whether to delete existing products first.

    Returns:
        Seeding result with counts.
    """
    deleted = store.clear() if clear else 0

    created = [store.create(data) for data in DEMO_PRODUCTS]

    return {
        "deleted": deleted,
        "products_created": len(created),
        "categories_used": len({r.category for r in created}),
    }


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Seed the AgroMarket product catalog")
    parser.add_argument(
        "--path",
        default=settings.storage_path or "agromarket.json",
        help="JSON catalog file (default: AGROMARKET_STORAGE_PATH or agromarket.json)",
    )
    parser.add_argument(
        "--key",
        default=settings.storage_key,
        help="Key the catalog is stored under",
    )
    parser.add_argument(
        "--no-clear",
        action="store_true",
        help="Don't clear existing products before seeding",
    )
    args = parser.parse_args(argv)

    configure_logging(settings.log_level)
    store = CatalogStore(
        JsonFilePersistence(args.path, key=args.key),
        max_items=settings.max_items,
    )
    result = seed_catalog(store, clear=not args.no_clear)

    print(f"Seeded catalog at {args.path}")
    print(f"  Deleted: {result['deleted']} existing products")
    print(f"  Created: {result['products_created']} products")
    print(f"  Categories: {result['categories_used']}")


if __name__ == "__main__":
    main()
