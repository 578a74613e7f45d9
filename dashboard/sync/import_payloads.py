#!/usr/bin/env python3
"""
import_payloads.py

Loads saved storefront GraphQL responses (orders and/or products) from JSON
files, flattens them and writes the CSV store the dashboard reads.

Run:
  python -m dashboard.sync.import_payloads --orders-json orders.json --products-json products.json
"""

from __future__ import annotations
import argparse
import json
import os
from typing import Any, Dict, List, Optional

from dashboard.config import get_config
from dashboard.errors import SyncError
from dashboard.logging import get_logger
from dashboard.sync.transform import (
    ORDER_HEADERS,
    PRODUCT_HEADERS,
    flatten_orders,
    flatten_products,
    write_rows,
)

logger = get_logger(__name__)


def load_payload(path: str) -> Dict[str, Any]:
    """Read a saved response; a GraphQL ``{"data": {...}}`` envelope is unwrapped.

    Raises:
        SyncError: if the file cannot be read or is not a JSON object.
    """
    try:
        with open(path, encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise SyncError(f"Cannot read payload {path}: {e}") from e
    if not isinstance(payload, dict):
        raise SyncError(f"Payload {path} is not a JSON object")
    if isinstance(payload.get("data"), dict):
        payload = payload["data"]
    return payload


def main(argv: Optional[List[str]] = None) -> int:
    config = get_config()

    parser = argparse.ArgumentParser(description="Write saved storefront responses to the dashboard's CSV store.")
    parser.add_argument("--orders-json", type=str, help="Saved orders query response.")
    parser.add_argument("--products-json", type=str, help="Saved products query response.")
    parser.add_argument("--output-dir", type=str, default=config.data_dir)
    args = parser.parse_args(argv)
    if not args.orders_json and not args.products_json:
        parser.error("give --orders-json and/or --products-json")

    jobs = []
    if args.orders_json:
        jobs.append((args.orders_json, flatten_orders, "orders.csv", ORDER_HEADERS))
    if args.products_json:
        jobs.append((args.products_json, flatten_products, "products.csv", PRODUCT_HEADERS))

    # flatten everything before writing so a bad payload leaves the store untouched
    try:
        tables = [(name, flatten(load_payload(path)), headers) for path, flatten, name, headers in jobs]
    except SyncError as e:
        logger.error(f"Sync failed: {e}")
        return 1

    os.makedirs(args.output_dir, exist_ok=True)
    for name, rows, headers in tables:
        write_rows(os.path.join(args.output_dir, name), rows, headers)
        logger.info(f"Wrote {len(rows)} rows to {name}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
