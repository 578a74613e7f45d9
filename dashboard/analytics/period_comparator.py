from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, List, Optional, Tuple

import pandas as pd

from dashboard.data.models import Granularity, OrderRecord, PeriodStats, PeriodWindows
from dashboard.errors import MalformedRecord
from dashboard.logging import get_logger

from .bucket_keys import parse_created_at

logger = get_logger(__name__)

# Length of the current window; the previous window has the same length.
WINDOW_LENGTHS = {
    Granularity.HOURLY: pd.DateOffset(hours=24),
    Granularity.DAILY: pd.DateOffset(days=7),
    Granularity.WEEKLY: pd.DateOffset(weeks=4),
    Granularity.MONTHLY: pd.DateOffset(months=3),
    Granularity.YEARLY: pd.DateOffset(years=1),
}


def as_utc(ts: datetime) -> datetime:
    """Aware UTC view of ``ts``; naive values are read as UTC."""
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def period_windows(granularity: Granularity, now: Optional[datetime] = None) -> PeriodWindows:
    """Current window ends at ``now``, previous window ends where the current one starts."""
    granularity = Granularity.parse(granularity)
    now = as_utc(now) if now is not None else datetime.now(timezone.utc)
    length = WINDOW_LENGTHS[granularity]
    current_start = (pd.Timestamp(now) - length).to_pydatetime()
    previous_start = (pd.Timestamp(current_start) - length).to_pydatetime()
    return PeriodWindows(
        now=now,
        current_start=current_start,
        previous_start=previous_start,
        previous_end=current_start,
    )


def percent_change(current: float, previous: float) -> float:
    """Relative change from ``previous`` to ``current`` in percent, 0 when previous is 0."""
    if not previous:
        return 0.0
    return (current - previous) / previous * 100


def _summarise(orders: List[OrderRecord]) -> Tuple[float, int, float, float]:
    revenue = sum(o.revenue for o in orders)
    count = len(orders)
    paid = sum(1 for o in orders if o.fully_paid)
    avg = revenue / count if count > 0 else 0.0
    paid_rate = paid / count * 100 if count > 0 else 0.0
    return revenue, count, avg, paid_rate


def compare(
    records: Iterable[OrderRecord],
    granularity: Granularity,
    now: Optional[datetime] = None,
) -> PeriodStats:
    """Revenue, order count, average value and paid rate for the current vs previous window.

    Current window is ``[current_start, now]``, previous window is
    ``[previous_start, previous_end)``, so an order placed exactly at
    ``current_start`` counts once, in the current window.

    Raises:
        InvalidGranularity: if ``granularity`` is not a supported variant.
    """
    granularity = Granularity.parse(granularity)
    windows = period_windows(granularity, now)

    parsed: List[Tuple[datetime, OrderRecord]] = []
    excluded = 0
    for record in records:
        try:
            parsed.append((as_utc(parse_created_at(record.created_at)), record))
        except MalformedRecord as e:
            excluded += 1
            logger.debug(f"Excluding order {record.shopify_id or '<unknown>'}: {e}")

    current = [r for ts, r in parsed if windows.current_start <= ts <= windows.now]
    previous = [r for ts, r in parsed if windows.previous_start <= ts < windows.previous_end]

    cur_revenue, cur_count, cur_avg, cur_rate = _summarise(current)
    prev_revenue, prev_count, prev_avg, prev_rate = _summarise(previous)

    return PeriodStats(
        granularity=granularity,
        current_revenue=cur_revenue,
        previous_revenue=prev_revenue,
        current_order_count=cur_count,
        previous_order_count=prev_count,
        current_avg_value=cur_avg,
        previous_avg_value=prev_avg,
        current_paid_rate=cur_rate,
        previous_paid_rate=prev_rate,
        excluded_count=excluded,
    )
