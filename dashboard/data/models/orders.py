from __future__ import annotations

from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class OrderRecord(BaseModel):
    """Flattened order as stored after a storefront sync.

    ``created_at`` is kept raw; the analytics functions parse it and count the
    records they cannot read instead of failing the whole batch.
    """
    model_config = ConfigDict(extra="ignore")

    created_at: Optional[Union[datetime, str]] = Field(default=None, description="Order creation timestamp (raw)")
    total_price: Optional[float] = Field(default=None, ge=0, description="Order total; absent counts as 0")
    total_received: Optional[float] = Field(default=0.0, ge=0, description="Amount received so far")
    fully_paid: bool = Field(default=False, description="Whether the order is fully paid")

    shopify_id: Optional[str] = Field(default=None, description="Storefront order id")
    order_name: Optional[str] = Field(default=None, description="Human readable order name, e.g. #1001")
    currency_code: Optional[str] = Field(default=None, description="Order currency")
    item_quantity: Optional[int] = Field(default=None, ge=0, description="Line item quantity")
    total_refunded: Optional[float] = Field(default=None, ge=0, description="Amount refunded")
    email: Optional[str] = Field(default=None, description="Customer email")

    @field_validator("fully_paid", mode="before")
    @classmethod
    def _none_is_unpaid(cls, v):
        return False if v is None else v

    @property
    def revenue(self) -> float:
        return self.total_price or 0.0

    @property
    def received(self) -> float:
        return self.total_received or 0.0
