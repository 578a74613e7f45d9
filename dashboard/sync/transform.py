"""Flatten storefront GraphQL order/product nodes into store rows.

The storefront returns nested money sets and media connections; the CSV store
(and the dashboard models) keep one flat row per order or product.
"""
from __future__ import annotations

import csv
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import pandas as pd

from dashboard.errors import SyncError
from dashboard.logging import get_logger

logger = get_logger(__name__)

IMAGE_ID_PREFIX = "gid://shopify/ImageSource/"
DEFAULT_PRODUCT_CURRENCY = "CAD"

ORDER_HEADERS = [
    "shopify_id", "order_name", "created_at", "item_quantity",
    "total_price", "total_price_currency", "total_received", "total_received_currency",
    "total_refunded", "total_refunded_currency", "unpaid", "confirmed", "currency_code",
    "fully_paid", "refundable", "requires_shipping", "restockable", "email",
]

PRODUCT_HEADERS = [
    "shopify_id", "product_name", "handle", "vendor", "variant_count", "total_inventory",
    "product_type", "max_price", "min_price", "currency", "preview_url", "status",
    "description", "created_at", "image_alt_text", "image_id", "image_url",
]


def _get(node: Optional[Mapping], *path: str) -> Any:
    for key in path:
        if not isinstance(node, Mapping):
            return None
        node = node.get(key)
    return node


def _money(node: Mapping, field: str) -> float:
    return float(_get(node, field, "shopMoney", "amount") or 0)


def _money_currency(node: Mapping, field: str) -> Optional[str]:
    return _get(node, field, "shopMoney", "currencyCode") or node.get("currencyCode")


def _iso(value: Optional[str]) -> Optional[str]:
    """Normalise a storefront timestamp to ISO 8601 UTC; unreadable values are kept as-is."""
    if not value:
        return None
    ts = pd.to_datetime(value, errors="coerce", utc=True)
    if pd.isna(ts):
        logger.warning(f"Keeping unreadable timestamp {value!r} unchanged")
        return value
    return ts.isoformat().replace("+00:00", "Z")


def _nodes(payload: Mapping, connection: str) -> List[Mapping]:
    nodes = _get(payload, connection, "nodes")
    if nodes is None:
        raise SyncError(f"No {connection} found in storefront response")
    return nodes


def flatten_order_node(node: Mapping) -> Dict[str, Any]:
    """One storefront order node -> one flat order row."""
    line_items = [
        {
            "name": item.get("name") or "",
            "id": item.get("id") or "",
            "quantity": item.get("quantity") or 0,
            "vendor": item.get("vendor") or "",
        }
        for item in (_get(node, "lineItems", "nodes") or [])
    ]
    return {
        "shopify_id": node.get("id"),
        "order_name": node.get("name"),
        "created_at": _iso(node.get("createdAt")),
        "item_quantity": node.get("currentSubtotalLineItemsQuantity") or 0,
        "total_price": _money(node, "totalPriceSet"),
        "total_price_currency": _money_currency(node, "totalPriceSet"),
        "total_received": _money(node, "totalReceivedSet"),
        "total_received_currency": _money_currency(node, "totalReceivedSet"),
        "total_refunded": _money(node, "totalRefundedSet"),
        "total_refunded_currency": _money_currency(node, "totalRefundedSet"),
        "unpaid": bool(node.get("unpaid")),
        "confirmed": bool(node.get("confirmed")),
        "currency_code": node.get("currencyCode"),
        "fully_paid": bool(node.get("fullyPaid")),
        "refundable": bool(node.get("refundable")),
        "requires_shipping": bool(node.get("requiresShipping")),
        "restockable": bool(node.get("restockable")),
        "email": node.get("email") or "",
        "line_items": line_items,
    }


def flatten_product_node(node: Mapping) -> Dict[str, Any]:
    """One storefront product node -> one flat product row (first image promoted)."""
    media = [
        {
            "alt": m.get("alt") or "",
            "image_id": (_get(m, "preview", "image", "id") or "").replace(IMAGE_ID_PREFIX, ""),
            "image_url": _get(m, "preview", "image", "url") or "",
        }
        for m in (_get(node, "media", "nodes") or [])
    ]
    first = media[0] if media else {"alt": "", "image_id": "", "image_url": ""}
    return {
        "shopify_id": node.get("id"),
        "product_name": node.get("title"),
        "handle": node.get("handle"),
        "vendor": node.get("vendor"),
        "variant_count": _get(node, "variantsCount", "count") or 0,
        "total_inventory": node.get("totalInventory"),
        "product_type": node.get("productType"),
        "max_price": float(_get(node, "priceRangeV2", "maxVariantPrice", "amount") or 0),
        "min_price": float(_get(node, "priceRangeV2", "minVariantPrice", "amount") or 0),
        "currency": _get(node, "priceRangeV2", "maxVariantPrice", "currencyCode") or DEFAULT_PRODUCT_CURRENCY,
        "preview_url": node.get("onlineStorePreviewUrl"),
        "status": node.get("status"),
        "description": node.get("description"),
        "created_at": _iso(node.get("createdAt")),
        "media": media,
        "image_alt_text": first["alt"],
        "image_id": first["image_id"],
        "image_url": first["image_url"],
    }


def flatten_orders(payload: Mapping) -> List[Dict[str, Any]]:
    """Flatten an ``{"orders": {"nodes": [...]}}`` response.

    Raises:
        SyncError: if the response has no order nodes list.
    """
    rows = [flatten_order_node(n) for n in _nodes(payload, "orders")]
    logger.info(f"Flattened {len(rows)} orders")
    return rows


def flatten_products(payload: Mapping) -> List[Dict[str, Any]]:
    """Flatten a ``{"products": {"nodes": [...]}}`` response.

    Raises:
        SyncError: if the response has no product nodes list.
    """
    rows = [flatten_product_node(n) for n in _nodes(payload, "products")]
    logger.info(f"Flattened {len(rows)} products")
    return rows


def write_rows(path: str | Path, rows: List[Dict], headers: List[str]) -> None:
    """Write flat rows to CSV; nested fields not named in ``headers`` are dropped."""
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=headers, extrasaction="ignore")
        w.writeheader()
        for r in rows:
            w.writerow(r)
