from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Type, TypeVar

import pandas as pd
from pydantic import BaseModel, ValidationError

from dashboard.config import get_config
from dashboard.errors import DataSourceError
from dashboard.logging import get_logger

from ..interface import OrderDataSource
from ..models import (
    PageRequest, OrderRecord, ProductRecord, OrderPage, ProductPage, total_pages_for,
)

ModelT = TypeVar("ModelT", bound=BaseModel)

ORDERS_FILE = "orders.csv"
PRODUCTS_FILE = "products.csv"

# Read as text so unreadable timestamps survive loading and get counted downstream
TEXT_COLUMNS = {
    "created_at": str,
    "shopify_id": str,
    "order_name": str,
    "email": str,
    "handle": str,
}


class CsvDataSource(OrderDataSource):
    """
    CSV-backed order/product store.
    - Reads ``orders.csv`` (required) and ``products.csv`` (optional) from `data_dir`.
    - Every method call re-reads the files (so each dashboard refresh sees the
      latest synced data, mirroring a DB query).
    """

    def __init__(self, data_dir: str | Path = None) -> None:
        if data_dir is None:
            data_dir = get_config().data_dir

        self.data_dir = Path(data_dir)
        self.logger = get_logger(__name__)

        # If the path is relative, make it relative to the repository root
        if not self.data_dir.is_absolute():
            current = Path.cwd()
            repo_root = next(
                (p for p in [current] + list(current.parents) if (p / "pyproject.toml").exists()),
                current,
            )
            self.data_dir = repo_root / self.data_dir

    # ---------- loading helpers ----------

    def _read_table(self, file_name: str, required: bool) -> pd.DataFrame:
        if not self.data_dir.exists():
            raise DataSourceError(
                f"Data directory not found: {self.data_dir}\n"
                f"Please either:\n"
                f"  1. Generate sample data: python -m dashboard.backend.seed_data\n"
                f"  2. Set DATA_DIR environment variable to point to your data directory"
            )

        path = self.data_dir / file_name
        if not path.exists():
            if required:
                raise DataSourceError(f"Required CSV file missing: {path}")
            return pd.DataFrame()

        try:
            df = pd.read_csv(path, dtype=TEXT_COLUMNS)
        except (OSError, ValueError) as e:
            self.logger.error(f"Failed to read {path}: {e}")
            raise DataSourceError(f"Error reading {path}: {e}") from e

        # NaN -> None so optional model fields fall back to their defaults
        return df.astype(object).where(df.notna(), None)

    def _to_models(self, df: pd.DataFrame, model: Type[ModelT]) -> List[ModelT]:
        items: List[ModelT] = []
        for i, row in enumerate(df.to_dict("records")):
            try:
                items.append(model.model_validate({k: v for k, v in row.items() if v is not None}))
            except ValidationError as e:
                self.logger.warning(f"Skipping invalid {model.__name__} row {i}: {e.error_count()} error(s)")
        return items

    def _load_orders(self) -> List[OrderRecord]:
        df = self._read_table(ORDERS_FILE, required=True)
        if df.empty:
            return []
        if "created_at" in df.columns:
            sort_ts = pd.to_datetime(df["created_at"], errors="coerce", utc=True, format="mixed")
            df = (
                df.assign(_sort_ts=sort_ts)
                  .sort_values("_sort_ts", ascending=False, na_position="last", kind="stable")
                  .drop(columns="_sort_ts")
            )
        return self._to_models(df, OrderRecord)

    def _load_products(self) -> List[ProductRecord]:
        df = self._read_table(PRODUCTS_FILE, required=False)
        if df.empty:
            return []
        if "product_name" in df.columns:
            df = df.sort_values("product_name", kind="stable")
        return self._to_models(df, ProductRecord)

    # ---------- interface implementation ----------

    def get_orders(self, request: PageRequest) -> OrderPage:
        orders = self._load_orders()
        page = orders[request.offset:request.offset + request.limit]
        self.logger.debug(f"Loaded {len(page)} of {len(orders)} orders (page {request.page})")
        return OrderPage(
            items=page,
            total_count=len(orders),
            page=request.page,
            limit=request.limit,
            total_pages=total_pages_for(len(orders), request.limit),
        )

    def get_order(self, shopify_id: str) -> Optional[OrderRecord]:
        return next((o for o in self._load_orders() if o.shopify_id == shopify_id), None)

    def get_products(self, request: PageRequest) -> ProductPage:
        products = self._load_products()
        page = products[request.offset:request.offset + request.limit]
        return ProductPage(
            items=page,
            total_count=len(products),
            page=request.page,
            limit=request.limit,
            total_pages=total_pages_for(len(products), request.limit),
        )

    def get_product(self, shopify_id: str) -> Optional[ProductRecord]:
        return next((p for p in self._load_products() if p.shopify_id == shopify_id), None)
