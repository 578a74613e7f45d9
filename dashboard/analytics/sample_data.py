"""Synthetic chart and KPI data shown when the order store cannot be read.

Nothing here is used by the aggregation functions; the service layer calls it
on fetch failure and everything it returns carries ``is_sample=True``.
"""
from __future__ import annotations

import math
import random
from datetime import datetime
from typing import Optional

import pandas as pd

from dashboard.data.models import Granularity, PeriodStats, TimeSeries, TimeSeriesPoint, WeekScheme

from .bucket_keys import format_bucket_key

# granularity -> (points, step unit, revenue divisor)
SERIES_SHAPES = {
    Granularity.HOURLY: (24, "hours", 24),
    Granularity.DAILY: (30, "days", 30),
    Granularity.WEEKLY: (12, "weeks", 4),
    Granularity.MONTHLY: (12, "months", 1),
    Granularity.YEARLY: (5, "years", 1 / 12),
}

# granularity -> (revenue, order count, average value, paid rate)
STATS_BASELINES = {
    Granularity.HOURLY: (1800.0, 7, 250.0, 85.0),
    Granularity.DAILY: (12500.0, 45, 270.0, 88.0),
    Granularity.WEEKLY: (28000.0, 95, 290.0, 90.0),
    Granularity.MONTHLY: (42500.0, 152, 279.0, 92.5),
    Granularity.YEARLY: (150000.0, 520, 310.0, 95.0),
}


def generate_sample_series(
    granularity: Granularity,
    now: Optional[datetime] = None,
    seed: Optional[int] = None,
) -> TimeSeries:
    """Dense, oldest-first synthetic series ending at the bucket containing ``now``.

    Weekly keys always use ISO weeks: Sunday-scheme numbers restart each month
    and would not give a dense, ordered run of keys.
    """
    granularity = Granularity.parse(granularity)
    rnd = random.Random(seed)
    now = pd.Timestamp(now if now is not None else datetime.now())
    count, unit, divisor = SERIES_SHAPES[granularity]

    points = []
    for i in range(count - 1, -1, -1):
        when = (now - pd.DateOffset(**{unit: i})).to_pydatetime()
        seasonal = 1 + math.sin(when.month / 12 * math.pi) * 0.3
        growth = 1 + i / 24
        revenue = (5000 + rnd.random() * 3000) * seasonal * growth / divisor
        received = revenue * (0.9 + rnd.random() * 0.1)
        order_count = max(1, round(revenue / 100))
        paid = min(order_count, round(order_count * (0.7 + rnd.random() * 0.2)))
        points.append(TimeSeriesPoint(
            bucket_key=format_bucket_key(when, granularity, WeekScheme.ISO),
            order_count=order_count,
            paid_order_count=paid,
            unpaid_order_count=order_count - paid,
            revenue_sum=round(revenue, 2),
            received_revenue_sum=round(received, 2),
            average_order_value=round(revenue / order_count, 2),
        ))

    return TimeSeries(granularity=granularity, points=points, is_sample=True)


def generate_sample_stats(granularity: Granularity, seed: Optional[int] = None) -> PeriodStats:
    """Synthetic KPI card values around a fixed baseline for the granularity."""
    granularity = Granularity.parse(granularity)
    rnd = random.Random(seed)
    revenue, orders, avg_value, paid_rate = STATS_BASELINES[granularity]
    variation = 0.9 + rnd.random() * 0.2

    return PeriodStats(
        granularity=granularity,
        current_revenue=revenue,
        previous_revenue=revenue * variation * 0.9,
        current_order_count=orders,
        previous_order_count=round(orders * variation * 0.9),
        current_avg_value=avg_value,
        previous_avg_value=avg_value * variation * 0.95,
        current_paid_rate=paid_rate,
        previous_paid_rate=min(100.0, paid_rate * variation * 0.97),
        is_sample=True,
    )
