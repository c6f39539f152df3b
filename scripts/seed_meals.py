"""
Reset the persisted checklist to the four seed meals, or load a custom list.

Usage
-----

    # default seed meals (all unchecked)
    python -m scripts.seed_meals

    # custom list (same schema as the stored value) in a JSON file
    python -m scripts.seed_meals --file path/to/meals.json

    # point at another database
    python -m scripts.seed_meals --database-url sqlite:///./other.db
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path

from core.meal_store import STORAGE_KEY, deserialize_meals, serialize_meals
from core.models.meal import SEED_MEALS, Meal
from services.db import dispose_engines
from services.kv_store import get_kv_store

_LOG = logging.getLogger(__name__)


def _load_json(path: Path) -> list[Meal]:
    meals = deserialize_meals(path.read_text(encoding="utf-8"))
    ids = [m.id for m in meals]
    if len(ids) != len(set(ids)):
        raise ValueError(f"{path}: meal ids must be unique")
    return meals


def seed(meals: list[Meal], database_url: str | None = None) -> int:
    kv = get_kv_store(database_url)
    kv.set(STORAGE_KEY, serialize_meals(meals))
    return len(meals)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument(
        "--file",
        type=Path,
        help="optional JSON file with meals to store (overrides the seed set)",
    )
    parser.add_argument("--database-url", help="defaults to DATABASE_URL / settings")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(message)s")
    meals = _load_json(args.file) if args.file else list(SEED_MEALS)
    try:
        count = seed(meals, args.database_url)
    finally:
        dispose_engines()
    _LOG.info("✓ stored %d meals under %r", count, STORAGE_KEY)


if __name__ == "__main__":
    main()
