#!/usr/bin/env python3
"""
seed_data.py

Generates a fake product catalog to a CSV under a local folder (default: sample_data).

Columns:
- id, name, description, price, category_id, stock, rating, created_at

Run:
  python -m shopcatalog.seed_data --count 200 --seed 42
"""

from __future__ import annotations
import argparse
import csv
import os
import random
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

from shopcatalog.config import get_config
from shopcatalog.logging import get_logger

logger = get_logger(__name__)

# -----------------------------
# Config & helper structures
# -----------------------------

CATEGORIES = {
    "electronics": ["Headphones", "Keyboard", "Monitor", "Webcam", "Charger"],
    "books": ["Cookbook", "Novel", "Atlas", "Field Guide"],
    "home": ["Lamp", "Kettle", "Blanket", "Vase", "Clock"],
    "sports": ["Yoga Mat", "Water Bottle", "Jump Rope", "Dumbbell"],
    "toys": ["Puzzle", "Building Set", "Plush Bear", "Kite"],
}

ADJECTIVES = ["Classic", "Compact", "Deluxe", "Eco", "Premium", "Smart", "Travel", "Vintage"]

CSV_HEADERS = ["id", "name", "description", "price", "category_id", "stock", "rating", "created_at"]

# share of products left without a category
UNCATEGORIZED_RATE = 0.05


# -----------------------------
# Utility functions
# -----------------------------

def ensure_dir(path: str) -> None:
    if not os.path.exists(path):
        os.makedirs(path, exist_ok=True)

def price_round(p: float) -> float:
    return round(max(p, 0.0), 2)


# -----------------------------
# Core generator
# -----------------------------

def gen_products(n: int, rnd: random.Random, now: datetime) -> List[Dict]:
    products = []
    category_ids = list(CATEGORIES.keys())
    for i in range(1, n + 1):
        category = rnd.choice(category_ids)
        noun = rnd.choice(CATEGORIES[category])
        adjective = rnd.choice(ADJECTIVES)
        # ~1 in 5 products has no reviews yet
        rating = 0.0 if rnd.random() < 0.2 else round(rnd.uniform(1.0, 5.0), 1)
        created = now - timedelta(days=rnd.randint(0, 365), minutes=rnd.randint(0, 24 * 60))
        products.append({
            "id": f"P{i:05d}",
            "name": f"{adjective} {noun}",
            "description": f"{adjective.lower()} {noun.lower()} for everyday use",
            "price": price_round(rnd.uniform(2.0, 250.0) * rnd.choice([0.99, 0.95, 1.0])),
            "category_id": "" if rnd.random() < UNCATEGORIZED_RATE else category,
            "stock": rnd.randint(0, 120),
            "rating": rating,
            "created_at": created.isoformat(timespec="seconds"),
        })
    return products


# -----------------------------
# CSV writer
# -----------------------------

def write_csv(path: str, rows: List[Dict], headers: List[str]) -> None:
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=headers)
        w.writeheader()
        for r in rows:
            w.writerow(r)


# -----------------------------
# Main
# -----------------------------

def main(argv: Optional[List[str]] = None) -> int:
    config = get_config()

    parser = argparse.ArgumentParser(description="Generate a fake product catalog CSV.")
    parser.add_argument("--count", type=int, default=config.default_seed_count, help="Number of products.")
    parser.add_argument("--output-dir", type=str, default=config.data_dir)
    parser.add_argument("--file-name", type=str, default=config.catalog_file)
    parser.add_argument("--seed", type=int, default=config.default_seed_value)
    parser.add_argument("--now", type=str, default=None, help="Reference time, ISO format (defaults to current UTC time)")
    parser.add_argument("--no-overwrite", action="store_true", help="Fail if the CSV already exists.")
    args = parser.parse_args(argv)

    if args.count < 0:
        parser.error("--count must not be negative")

    outdir = args.output_dir
    path = os.path.join(outdir, args.file_name)
    if args.no_overwrite and os.path.exists(path):
        logger.error(f"Refusing to overwrite existing file: {path}")
        return 2

    if args.now:
        now = datetime.fromisoformat(args.now)
    else:
        now = datetime.now(timezone.utc).replace(tzinfo=None, microsecond=0)

    ensure_dir(outdir)
    products = gen_products(args.count, random.Random(args.seed), now)
    write_csv(path, products, CSV_HEADERS)

    logger.info(f"Generated {len(products)} products in {path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
