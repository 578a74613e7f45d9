from __future__ import annotations

from typing import Optional, Protocol

from .models import (
    PageRequest,
    OrderRecord,
    ProductRecord,
    OrderPage,
    ProductPage,
)


# ---- Data source protocol ----

class OrderDataSource(Protocol):
    """
    Backend-agnostic contract for the order/product store behind the dashboard.

    Implementations raise DataSourceError when the store cannot be read; the
    service layer decides whether to fall back to sample data.
    """

    def get_orders(self, request: PageRequest) -> OrderPage:
        """Get one page of orders, newest first."""
        ...

    def get_order(self, shopify_id: str) -> Optional[OrderRecord]:
        """Get a single order by storefront id."""
        ...

    def get_products(self, request: PageRequest) -> ProductPage:
        """Get one page of products."""
        ...

    def get_product(self, shopify_id: str) -> Optional[ProductRecord]:
        """Get a single product by storefront id."""
        ...
