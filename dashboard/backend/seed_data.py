#!/usr/bin/env python3
"""
seed_data.py

Generates a fake storefront's flattened orders and products as CSVs under a
local folder (default: sample_data), in the same row shape a storefront sync
writes (see dashboard.sync.transform).

Entities:
- orders, products

Run:
  python -m dashboard.backend.seed_data --days 400 --orders 1500
"""

from __future__ import annotations
import argparse
import os
import random
import string
from datetime import datetime, timedelta, timezone
from math import sin, pi
from typing import Dict, List, Optional

from dashboard.config import get_config
from dashboard.logging import get_logger
from dashboard.sync.transform import ORDER_HEADERS, PRODUCT_HEADERS, write_rows

logger = get_logger(__name__)

# -----------------------------
# Catalog building blocks
# -----------------------------

PRODUCT_TYPES = {
    "Snowboard": ["Hydrogen Vendor", "Multi-managed Vendor", "Snowboard Vendor"],
    "Accessories": ["Liquid Gold", "Backcountry Co"],
    "Apparel": ["Northwind Threads", "Alpine Basics", "Summit Supply"],
    "Gift Card": ["Snowboard Vendor"],
}

STATUSES = ["ACTIVE", "ACTIVE", "ACTIVE", "DRAFT", "ARCHIVED"]

CURRENCY = "CAD"


# -----------------------------
# Utility functions
# -----------------------------

def ensure_dir(path: str) -> None:
    if not os.path.exists(path):
        os.makedirs(path, exist_ok=True)

def rand_gid(kind: str, rnd: random.Random) -> str:
    return f"gid://shopify/{kind}/{rnd.randint(10**12, 10**13 - 1)}"

def rand_handle(rnd: random.Random) -> str:
    return "".join(rnd.choices(string.ascii_lowercase, k=6))

def price_round(x: float) -> float:
    return round(x + 1e-9, 2)

def diurnal_multiplier(ts: datetime) -> float:
    """Evening-heavy storefront traffic, roughly 0.4 to 1.6."""
    hour = ts.hour + ts.minute / 60.0
    return 1.0 + 0.6 * sin((hour - 14) / 24 * 2 * pi)

def weekend_multiplier(ts: datetime) -> float:
    return 1.3 if ts.weekday() >= 5 else 1.0


# -----------------------------
# Generators
# -----------------------------

def gen_products(n: int, rnd: random.Random, now: datetime) -> List[Dict]:
    products = []
    types = list(PRODUCT_TYPES)
    for i in range(n):
        product_type = types[i % len(types)]
        vendor = rnd.choice(PRODUCT_TYPES[product_type])
        min_price = price_round(rnd.uniform(10.0, 900.0))
        max_price = min_price if rnd.random() < 0.6 else price_round(min_price * rnd.uniform(1.1, 1.8))
        created = now - timedelta(days=rnd.randint(30, 900))
        handle = rand_handle(rnd)
        image_id = str(rnd.randint(10**10, 10**11 - 1))
        products.append({
            "shopify_id": rand_gid("Product", rnd),
            "product_name": f"The {handle.capitalize()} {product_type}",
            "handle": handle,
            "vendor": vendor,
            "variant_count": rnd.randint(1, 6),
            "total_inventory": max(0, int(rnd.gauss(40, 30))),
            "product_type": product_type,
            "max_price": max_price,
            "min_price": min_price,
            "currency": CURRENCY,
            "preview_url": f"https://example-store.myshopify.com/products/{handle}",
            "status": rnd.choice(STATUSES),
            "description": f"{vendor} {product_type.lower()} #{i + 1}",
            "created_at": created.isoformat(timespec="seconds").replace("+00:00", "Z"),
            "image_alt_text": f"{handle} product shot",
            "image_id": image_id,
            "image_url": f"https://cdn.example.com/files/{image_id}.png",
        })
    return products

def gen_orders(
    products: List[Dict],
    end_dt: datetime,
    days: int,
    orders_estimate: int,
    rnd: random.Random,
) -> List[Dict]:
    start_dt = end_dt - timedelta(days=days)
    total_hours = max(1, days * 24)
    base_per_hour = orders_estimate / total_hours

    orders: List[Dict] = []
    current = start_dt
    counter = 1000
    while current < end_dt:
        expected = base_per_hour * diurnal_multiplier(current) * weekend_multiplier(current)
        # small Poisson-like integer via a geometric draw
        n = 0
        p = expected / (1.0 + expected)
        while rnd.random() < p:
            n += 1

        for _ in range(n):
            counter += 1
            placed = current + timedelta(minutes=rnd.randint(0, 59), seconds=rnd.randint(0, 59))
            qty = 1 + int(abs(rnd.gauss(0.5, 1.2)))
            total = price_round(sum(float(rnd.choice(products)["min_price"]) for _ in range(qty)))
            fully_paid = rnd.random() < 0.85
            received = total if fully_paid else price_round(total * rnd.choice([0.0, 0.0, 0.5]))
            refunded = price_round(total * 0.2) if fully_paid and rnd.random() < 0.03 else 0.0
            orders.append({
                "shopify_id": rand_gid("Order", rnd),
                "order_name": f"#{counter}",
                "created_at": placed.isoformat(timespec="seconds").replace("+00:00", "Z"),
                "item_quantity": qty,
                "total_price": total,
                "total_price_currency": CURRENCY,
                "total_received": received,
                "total_received_currency": CURRENCY,
                "total_refunded": refunded,
                "total_refunded_currency": CURRENCY,
                "unpaid": received == 0.0,
                "confirmed": True,
                "currency_code": CURRENCY,
                "fully_paid": fully_paid,
                "refundable": fully_paid,
                "requires_shipping": rnd.random() < 0.9,
                "restockable": True,
                "email": f"customer{rnd.randint(1, 500)}@example.com",
            })

        current += timedelta(hours=1)

    return orders

def corrupt_timestamps(orders: List[Dict], count: int, rnd: random.Random) -> None:
    """Blank or garble ``count`` created_at values (exercises the excluded-record path)."""
    for order in rnd.sample(orders, min(count, len(orders))):
        order["created_at"] = rnd.choice(["", "not-a-date", "2024-13-45T99:00:00Z"])


# -----------------------------
# Main
# -----------------------------

def main(argv: Optional[List[str]] = None) -> int:
    config = get_config()

    parser = argparse.ArgumentParser(description="Generate fake storefront orders and products to CSVs.")
    parser.add_argument("--days", type=int, default=config.default_seed_days, help="Days of order history.")
    parser.add_argument("--orders", type=int, default=config.default_seed_orders, help="Rough order count target.")
    parser.add_argument("--products", type=int, default=config.default_seed_products)
    parser.add_argument("--output-dir", type=str, default=config.data_dir)
    parser.add_argument("--seed", type=int, default=config.default_seed_value)
    parser.add_argument("--bad-rows", type=int, default=0, help="Orders to write with an unreadable created_at.")
    parser.add_argument("--no-overwrite", action="store_true", help="Fail if CSVs already exist.")
    args = parser.parse_args(argv)
    if args.products < 1:
        parser.error("--products must be at least 1")

    rnd = random.Random(args.seed)
    outdir = args.output_dir
    ensure_dir(outdir)

    files = {
        "orders": os.path.join(outdir, "orders.csv"),
        "products": os.path.join(outdir, "products.csv"),
    }
    if args.no_overwrite:
        for p in files.values():
            if os.path.exists(p):
                logger.error(f"Refusing to overwrite existing file: {p}")
                return 2

    now = datetime.now(timezone.utc).replace(minute=0, second=0, microsecond=0)
    products = gen_products(args.products, rnd, now)
    orders = gen_orders(products, now, args.days, args.orders, rnd)
    if args.bad_rows:
        corrupt_timestamps(orders, args.bad_rows, rnd)

    write_rows(files["orders"], orders, ORDER_HEADERS)
    write_rows(files["products"], products, PRODUCT_HEADERS)

    logger.info(f"Generated data in {outdir}")
    logger.info(f" orders: {len(orders)} | products: {len(products)} | unreadable timestamps: {args.bad_rows}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
