from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable

from dashboard.data.models import Granularity, OrderRecord, TimeSeries, TimeSeriesPoint, WeekScheme
from dashboard.errors import MalformedRecord
from dashboard.logging import get_logger

from .bucket_keys import TzLike, format_bucket_key, parse_created_at, resolve_tz

logger = get_logger(__name__)


@dataclass
class _Bucket:
    order_count: int = 0
    paid_order_count: int = 0
    unpaid_order_count: int = 0
    revenue_sum: float = 0.0
    received_revenue_sum: float = 0.0

    def add(self, record: OrderRecord) -> None:
        self.order_count += 1
        if record.fully_paid:
            self.paid_order_count += 1
        else:
            self.unpaid_order_count += 1
        self.revenue_sum += record.revenue
        self.received_revenue_sum += record.received

    def to_point(self, key: str) -> TimeSeriesPoint:
        avg = self.revenue_sum / self.order_count if self.order_count > 0 else 0.0
        return TimeSeriesPoint(
            bucket_key=key,
            order_count=self.order_count,
            paid_order_count=self.paid_order_count,
            unpaid_order_count=self.unpaid_order_count,
            revenue_sum=round(self.revenue_sum, 2),
            received_revenue_sum=round(self.received_revenue_sum, 2),
            average_order_value=round(avg, 2),
        )


def aggregate(
    records: Iterable[OrderRecord],
    granularity: Granularity,
    week_scheme: WeekScheme = WeekScheme.ISO,
    tz: TzLike = None,
) -> TimeSeries:
    """Group orders into time buckets and sum their counts and revenue.

    Records whose ``created_at`` cannot be read are left out and counted in
    ``excluded_count``. Only buckets holding at least one order appear, ordered
    by key. An empty input gives an empty series.

    Raises:
        InvalidGranularity: if ``granularity`` is not a supported variant.
    """
    granularity = Granularity.parse(granularity)
    week_scheme = WeekScheme(week_scheme)
    tz = resolve_tz(tz)

    buckets: Dict[str, _Bucket] = {}
    excluded = 0
    for record in records:
        try:
            created = parse_created_at(record.created_at)
        except MalformedRecord as e:
            excluded += 1
            logger.debug(f"Excluding order {record.shopify_id or '<unknown>'}: {e}")
            continue
        key = format_bucket_key(created, granularity, week_scheme, tz)
        buckets.setdefault(key, _Bucket()).add(record)

    if excluded:
        logger.info(f"{excluded} order(s) excluded from {granularity.value} series (unreadable created_at)")

    points = [buckets[key].to_point(key) for key in sorted(buckets)]
    return TimeSeries(granularity=granularity, points=points, excluded_count=excluded)
