from datetime import datetime

import pytest

from dashboard.analytics.bucket_keys import format_bucket_key
from dashboard.analytics.sample_data import STATS_BASELINES, generate_sample_series, generate_sample_stats
from dashboard.data.models import Granularity
from dashboard.errors import InvalidGranularity

NOW = datetime(2024, 6, 15, 12, 30)


@pytest.mark.parametrize("granularity,count", [
    (Granularity.HOURLY, 24),
    (Granularity.DAILY, 30),
    (Granularity.WEEKLY, 12),
    (Granularity.MONTHLY, 12),
    (Granularity.YEARLY, 5),
])
def test_series_is_dense_and_ends_at_now(granularity, count):
    series = generate_sample_series(granularity, now=NOW, seed=1)
    keys = series.keys()
    assert series.is_sample is True
    assert len(keys) == count
    assert keys == sorted(set(keys))
    assert keys[-1] == format_bucket_key(NOW, granularity)


@pytest.mark.parametrize("granularity", list(Granularity))
def test_series_points_are_consistent(granularity):
    for p in generate_sample_series(granularity, now=NOW, seed=3).points:
        assert p.order_count >= 1
        assert p.paid_order_count + p.unpaid_order_count == p.order_count
        assert p.unpaid_order_count >= 0
        assert p.revenue_sum > 0
        assert p.received_revenue_sum <= p.revenue_sum
        assert p.average_order_value >= 0


def test_series_is_reproducible_with_a_seed():
    a = generate_sample_series(Granularity.DAILY, now=NOW, seed=42)
    b = generate_sample_series(Granularity.DAILY, now=NOW, seed=42)
    assert a == b


def test_sample_series_rejects_unknown_granularity():
    with pytest.raises(InvalidGranularity):
        generate_sample_series("minutely", now=NOW)


@pytest.mark.parametrize("granularity", list(Granularity))
def test_stats_around_baseline(granularity):
    revenue, orders, avg_value, paid_rate = STATS_BASELINES[granularity]
    stats = generate_sample_stats(granularity, seed=5)
    assert stats.is_sample is True
    assert stats.current_revenue == revenue
    assert stats.current_order_count == orders
    assert stats.current_avg_value == avg_value
    assert stats.current_paid_rate == paid_rate
    assert 0.9 * 0.9 * revenue <= stats.previous_revenue <= 1.1 * 0.9 * revenue
    assert 0 <= stats.previous_paid_rate <= 100


def test_stats_are_reproducible_with_a_seed():
    assert generate_sample_stats("monthly", seed=9) == generate_sample_stats("monthly", seed=9)
