#!/usr/bin/env python3
"""
Seed the sauce and topping catalog with the default menu.

A category is only seeded while it has no active ingredients, so running the
script again is harmless.

Usage:
    python -m scripts.seed_ingredients
    python -m scripts.seed_ingredients --database-url sqlite:///pizzeria.db
"""

import argparse
import logging
import sys
from typing import Dict, List

from sqlalchemy.orm import Session

from app.config import settings
from app.exceptions import PizzeriaError
from domain.enums import IngredientCategory
from domain.models import Database
from repositories.ingredient_repository import IngredientRepository

logger = logging.getLogger("pizzeria.scripts.seed")

DEFAULT_SAUCES = ["tomato", "bbq", "buffalo", "ranch"]
DEFAULT_TOPPINGS = [
    "cheese",
    "pepperoni",
    "mushrooms",
    "onions",
    "pineapple",
    "bell peppers",
    "jalapenos",
    "olives",
    "bacon",
]

DEFAULT_CATALOG: Dict[IngredientCategory, List[str]] = {
    IngredientCategory.SAUCE: DEFAULT_SAUCES,
    IngredientCategory.TOPPING: DEFAULT_TOPPINGS,
}


def seed_catalog(db: Session) -> Dict[str, int]:
    """
    Insert the default ingredients for each empty category.

    Returns:
        Dict of category label -> number of ingredients inserted
    """
    repo = IngredientRepository(db)
    stats: Dict[str, int] = {}

    for category, names in DEFAULT_CATALOG.items():
        if repo.count_active(category) > 0:
            logger.info(f"{category.label}s already present, skipping")
            stats[category.label] = 0
            continue
        repo.bulk_insert(names, category)
        logger.info(f"Seeded {len(names)} {category.label}s")
        stats[category.label] = len(names)

    return stats


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Seed the pizza ingredient catalog")
    parser.add_argument(
        "--database-url",
        default=settings.database_url,
        help="SQLAlchemy URL (defaults to DATABASE_URL / settings)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()), format=settings.log_format
    )

    database = Database(args.database_url, echo=settings.db_echo)
    try:
        database.connect()
        database.init_schema()
        with database.create_session() as db:
            stats = seed_catalog(db)
    except PizzeriaError as e:
        logger.error(f"Seeding failed: {e}")
        return 1
    finally:
        database.close()

    logger.info(f"Seeding complete: {stats}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
