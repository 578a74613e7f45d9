from __future__ import annotations

import math
from typing import List

from pydantic import BaseModel, Field

from .orders import OrderRecord
from .products import ProductRecord


def total_pages_for(total_count: int, limit: int) -> int:
    """Number of pages needed for ``total_count`` rows, never less than 1."""
    return max(1, math.ceil(total_count / limit))


class OrderPage(BaseModel):
    """One page of orders, newest first."""
    items: List[OrderRecord] = Field(description="Orders on this page")
    total_count: int = Field(description="Orders in the store")
    page: int = Field(description="1-based page number")
    limit: int = Field(description="Page size")
    total_pages: int = Field(description="Pages available at this page size")


class ProductPage(BaseModel):
    """One page of products."""
    items: List[ProductRecord] = Field(description="Products on this page")
    total_count: int = Field(description="Products in the store")
    page: int = Field(description="1-based page number")
    limit: int = Field(description="Page size")
    total_pages: int = Field(description="Pages available at this page size")
