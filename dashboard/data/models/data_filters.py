from __future__ import annotations

from pydantic import BaseModel, Field


class PageRequest(BaseModel):
    """Page selection for order and product listings."""
    page: int = Field(default=1, ge=1, description="1-based page number")
    limit: int = Field(default=20, ge=1, description="Page size")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit
