from __future__ import annotations

from datetime import datetime
from typing import List

import pandas as pd
from pydantic import BaseModel, Field

from .granularity import Granularity


class TimeSeriesPoint(BaseModel):
    """Aggregates for one time bucket."""
    bucket_key: str = Field(description="Sortable bucket key, e.g. 2024-01")
    order_count: int = Field(default=0, ge=0, description="Orders in the bucket")
    paid_order_count: int = Field(default=0, ge=0, description="Fully paid orders")
    unpaid_order_count: int = Field(default=0, ge=0, description="Orders not fully paid")
    revenue_sum: float = Field(default=0.0, description="SUM(total_price)")
    received_revenue_sum: float = Field(default=0.0, description="SUM(total_received)")
    average_order_value: float = Field(default=0.0, ge=0, description="revenue_sum / order_count, 0 when empty")


class TimeSeries(BaseModel):
    """Sparse, key-ordered series of bucket aggregates."""
    granularity: Granularity
    points: List[TimeSeriesPoint] = Field(default_factory=list)
    excluded_count: int = Field(default=0, ge=0, description="Records dropped for an unreadable created_at")
    is_sample: bool = Field(default=False, description="True for synthetic fallback data")

    def keys(self) -> List[str]:
        return [p.bucket_key for p in self.points]

    def to_frame(self) -> pd.DataFrame:
        """Points as a DataFrame with a display ``label`` column, for charting."""
        from dashboard.analytics.bucket_keys import format_bucket_label

        columns = list(TimeSeriesPoint.model_fields)
        df = pd.DataFrame([p.model_dump() for p in self.points], columns=columns)
        df["label"] = [format_bucket_label(k, self.granularity) for k in df["bucket_key"]]
        return df


class PeriodWindows(BaseModel):
    """Current and previous comparison windows, both of the same length."""
    now: datetime
    current_start: datetime
    previous_start: datetime
    previous_end: datetime


class PeriodStats(BaseModel):
    """Current-vs-previous period headline metrics."""
    granularity: Granularity
    current_revenue: float = 0.0
    previous_revenue: float = 0.0
    current_order_count: int = 0
    previous_order_count: int = 0
    current_avg_value: float = 0.0
    previous_avg_value: float = 0.0
    current_paid_rate: float = Field(default=0.0, ge=0, le=100)
    previous_paid_rate: float = Field(default=0.0, ge=0, le=100)
    excluded_count: int = Field(default=0, ge=0)
    is_sample: bool = False
