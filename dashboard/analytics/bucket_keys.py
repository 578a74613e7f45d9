"""Bucket keys and their display labels.

Every key is built from fixed-width, zero-padded fields so that plain string
ordering matches chronological ordering for a given granularity:

    hourly   2024-01-05 14:00
    daily    2024-01-05
    weekly   2024-W01
    monthly  2024-01
    yearly   2024
"""
from __future__ import annotations

import calendar
import math
import re
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Optional, Union
from zoneinfo import ZoneInfo

import pandas as pd

from dashboard.data.models import Granularity, WeekScheme
from dashboard.errors import MalformedRecord

TzLike = Optional[Union[str, tzinfo]]

ISO_DATE_PREFIX = re.compile(r"^\s*\d{4}-\d{2}-\d{2}")


def resolve_tz(tz: TzLike) -> Optional[tzinfo]:
    if isinstance(tz, str):
        return ZoneInfo(tz)
    return tz


def parse_created_at(value) -> datetime:
    """Read an order's created_at into a datetime.

    Raises:
        MalformedRecord: if the value is missing or not a readable timestamp.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise MalformedRecord("created_at is missing")
    # pandas also reads words like "now" and "today"; stored values must be ISO dates
    if isinstance(value, str) and not ISO_DATE_PREFIX.match(value):
        raise MalformedRecord(f"created_at {value!r} is not an ISO-8601 timestamp")
    try:
        ts = pd.Timestamp(value)
    except (ValueError, TypeError, OverflowError) as e:
        raise MalformedRecord(f"created_at {value!r} is not a timestamp") from e
    if pd.isna(ts):
        raise MalformedRecord(f"created_at {value!r} is not a timestamp")
    return ts.to_pydatetime()


def to_local(ts: datetime, tz: TzLike = None) -> datetime:
    """Wall-clock view of ``ts``.

    Aware values move into ``tz``, or into UTC when no display timezone is
    given, so keys from mixed offsets still sort in time order. Naive values
    are taken as wall-clock time already.
    """
    if ts.tzinfo is None:
        return ts
    return ts.astimezone(resolve_tz(tz) or timezone.utc)


def _days_in_previous_month(d: date) -> int:
    year, month = (d.year - 1, 12) if d.month == 1 else (d.year, d.month - 1)
    return calendar.monthrange(year, month)[1]


def _week_key(ts: datetime, scheme: WeekScheme) -> str:
    if scheme is WeekScheme.ISO:
        iso_year, iso_week, _ = ts.isocalendar()
        return f"{iso_year:04d}-W{iso_week:02d}"
    # Sunday scheme: number the week by the date its Sunday falls on
    start = ts.date() - timedelta(days=(ts.weekday() + 1) % 7)
    n = math.ceil((start.day + 1 + _days_in_previous_month(start)) / 7)
    return f"{start.year:04d}-W{n:02d}"


def format_bucket_key(
    timestamp: datetime,
    granularity: Granularity,
    week_scheme: WeekScheme = WeekScheme.ISO,
    tz: TzLike = None,
) -> str:
    """Map a timestamp to the key of the bucket it belongs to."""
    granularity = Granularity.parse(granularity)
    ts = to_local(timestamp, tz)

    if granularity is Granularity.HOURLY:
        return f"{ts.year:04d}-{ts.month:02d}-{ts.day:02d} {ts.hour:02d}:00"
    if granularity is Granularity.DAILY:
        return f"{ts.year:04d}-{ts.month:02d}-{ts.day:02d}"
    if granularity is Granularity.WEEKLY:
        return _week_key(ts, WeekScheme(week_scheme))
    if granularity is Granularity.MONTHLY:
        return f"{ts.year:04d}-{ts.month:02d}"
    return f"{ts.year:04d}"


def format_bucket_label(key: str, granularity: Granularity) -> str:
    """Human readable label for a bucket key (chart axis / tooltip text).

    Raises:
        ValueError: if ``key`` is not shaped like a key of ``granularity``.
    """
    granularity = Granularity.parse(granularity)

    if granularity is Granularity.HOURLY:
        _, _, time_part = key.partition(" ")
        if not time_part:
            raise ValueError(f"Not an hourly bucket key: {key!r}")
        return time_part
    if granularity is Granularity.DAILY:
        d = datetime.strptime(key, "%Y-%m-%d")
        return f"{d:%b} {d.day}"
    if granularity is Granularity.WEEKLY:
        _, sep, week = key.partition("-W")
        if not sep:
            raise ValueError(f"Not a weekly bucket key: {key!r}")
        return f"Week {int(week)}"
    if granularity is Granularity.MONTHLY:
        d = datetime.strptime(key, "%Y-%m")
        return f"{d:%b %Y}"
    return key
