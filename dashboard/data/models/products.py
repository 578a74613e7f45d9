from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ProductRecord(BaseModel):
    """Flattened product as stored after a storefront sync."""
    model_config = ConfigDict(extra="ignore")

    shopify_id: str = Field(description="Storefront product id")
    product_name: str = Field(description="Product title")
    handle: Optional[str] = Field(default=None, description="URL handle")
    vendor: Optional[str] = Field(default=None, description="Vendor name")
    product_type: Optional[str] = Field(default=None, description="Product type")
    status: Optional[str] = Field(default=None, description="ACTIVE, DRAFT or ARCHIVED")
    description: Optional[str] = Field(default=None, description="Product description")
    min_price: float = Field(default=0.0, ge=0, description="Lowest variant price")
    max_price: float = Field(default=0.0, ge=0, description="Highest variant price")
    currency: str = Field(default="USD", description="Price currency")
    total_inventory: int = Field(default=0, description="Units on hand across variants")
    variant_count: int = Field(default=0, ge=0, description="Number of variants")
    image_url: Optional[str] = Field(default=None, description="Primary image URL")
    image_alt_text: Optional[str] = Field(default=None, description="Primary image alt text")
    preview_url: Optional[str] = Field(default=None, description="Online store preview URL")
    created_at: Optional[str] = Field(default=None, description="Creation timestamp (ISO 8601)")

    @property
    def in_stock(self) -> bool:
        return self.total_inventory > 0

    def price_label(self) -> str:
        """Single price, or a min - max range when variants differ."""
        if self.min_price == self.max_price:
            return f"{self.min_price:,.2f} {self.currency}"
        return f"{self.min_price:,.2f} - {self.max_price:,.2f} {self.currency}"
