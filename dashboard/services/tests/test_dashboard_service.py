from datetime import datetime, timezone
from typing import List, Optional

import pytest

from dashboard.config import AppConfig
from dashboard.data.models import (
    OrderPage, OrderRecord, PageRequest, ProductPage, ProductRecord, total_pages_for,
)
from dashboard.errors import DataSourceError, InvalidGranularity
from dashboard.services import DashboardService
from dashboard.sync.transform import ORDER_HEADERS, write_rows

NOW = datetime(2024, 6, 8, tzinfo=timezone.utc)


class InMemorySource:
    """Minimal OrderDataSource over Python lists; records the requests it receives."""

    def __init__(self, orders: List[OrderRecord], products: Optional[List[ProductRecord]] = None):
        self.orders = orders
        self.products = products or []
        self.requests: List[PageRequest] = []

    def _page(self, items, request):
        return dict(
            items=items[request.offset:request.offset + request.limit],
            total_count=len(items),
            page=request.page,
            limit=request.limit,
            total_pages=total_pages_for(len(items), request.limit),
        )

    def get_orders(self, request: PageRequest) -> OrderPage:
        self.requests.append(request)
        return OrderPage(**self._page(self.orders, request))

    def get_order(self, shopify_id):
        return next((o for o in self.orders if o.shopify_id == shopify_id), None)

    def get_products(self, request: PageRequest) -> ProductPage:
        self.requests.append(request)
        return ProductPage(**self._page(self.products, request))

    def get_product(self, shopify_id):
        return next((p for p in self.products if p.shopify_id == shopify_id), None)


class BrokenSource(InMemorySource):
    def __init__(self):
        super().__init__([])

    def get_orders(self, request):
        raise DataSourceError("database connection timeout")


@pytest.fixture
def config():
    return AppConfig(order_fetch_limit=3, sample_data_seed=11, max_page_limit=50, default_page_size=2)


@pytest.fixture
def orders():
    return [
        OrderRecord(shopify_id="a", created_at="2024-06-07T10:00:00Z", total_price=100, fully_paid=True),
        OrderRecord(shopify_id="b", created_at="2024-06-06T10:00:00Z", total_price=50, fully_paid=False),
        OrderRecord(shopify_id="c", created_at="garbage", total_price=10),
        OrderRecord(shopify_id="d", created_at="2024-05-30T10:00:00Z", total_price=30, fully_paid=True),
    ]


def test_fetch_orders_uses_configured_limit(orders, config):
    source = InMemorySource(orders)
    fetched = DashboardService(source, config).fetch_orders()
    assert [o.shopify_id for o in fetched] == ["a", "b", "c"]
    assert source.requests[0].limit == 3
    assert source.requests[0].page == 1


def test_revenue_series_from_real_orders(orders, config):
    series = DashboardService(InMemorySource(orders), config).revenue_series("daily")
    assert series.is_sample is False
    assert series.keys() == ["2024-06-06", "2024-06-07"]
    assert series.excluded_count == 1


def test_period_stats_from_real_orders(orders):
    service = DashboardService(InMemorySource(orders), AppConfig(order_fetch_limit=100))
    stats = service.period_stats("daily", now=NOW)
    assert stats.is_sample is False
    assert stats.current_order_count == 2
    assert stats.previous_order_count == 1
    assert stats.excluded_count == 1


def test_empty_store_is_not_sample_data(config):
    service = DashboardService(InMemorySource([]), config)
    assert service.revenue_series("monthly").points == []
    assert service.revenue_series("monthly").is_sample is False
    assert service.period_stats("monthly", now=NOW).is_sample is False


def test_failure_falls_back_to_labelled_sample_data(config):
    service = DashboardService(BrokenSource(), config)
    series = service.revenue_series("weekly", now=datetime(2024, 6, 8))
    stats = service.period_stats("weekly")
    assert series.is_sample is True
    assert len(series.points) == 12
    assert stats.is_sample is True


def test_fallback_can_be_disabled():
    service = DashboardService(BrokenSource(), AppConfig(sample_data_on_failure=False))
    with pytest.raises(DataSourceError):
        service.revenue_series("daily")
    with pytest.raises(DataSourceError):
        service.period_stats("daily")


def test_invalid_granularity_is_rejected_before_fetching(config):
    source = InMemorySource([])
    service = DashboardService(source, config)
    with pytest.raises(InvalidGranularity):
        service.revenue_series("biweekly")
    with pytest.raises(InvalidGranularity):
        DashboardService(BrokenSource(), config).period_stats("")
    assert source.requests == []


def test_week_scheme_from_config(orders):
    service = DashboardService(InMemorySource(orders), AppConfig(week_scheme="sunday"))
    # week of Sun 2024-06-02: ceil((2 + 1 + 31) / 7) = 5
    # week of Sun 2024-05-26: ceil((26 + 1 + 30) / 7) = 9, numbered after the later week
    assert service.revenue_series("weekly").keys() == ["2024-W05", "2024-W09"]


def test_list_products_caps_page_size(config):
    products = [ProductRecord(shopify_id=f"p{i}", product_name=f"Board {i}") for i in range(5)]
    source = InMemorySource([], products)
    service = DashboardService(source, config)

    default_page = service.list_products(page=2)
    assert [p.shopify_id for p in default_page.items] == ["p2", "p3"]
    assert default_page.total_pages == 3

    service.list_products(page=1, limit=1000)
    assert source.requests[-1].limit == 50

    assert service.get_product("p4").product_name == "Board 4"


def test_sample_weekly_series_stays_ordered_under_sunday_scheme():
    service = DashboardService(BrokenSource(), AppConfig(week_scheme="sunday", sample_data_seed=2))
    keys = service.revenue_series("weekly", now=datetime(2024, 6, 8)).keys()
    assert len(keys) == 12
    assert keys == sorted(set(keys))
    assert keys[-1] == "2024-W23"


def test_default_source_reads_the_given_config_data_dir(tmp_path):
    write_rows(tmp_path / "orders.csv", [
        {"shopify_id": "x", "created_at": "2024-06-07T10:00:00Z", "total_price": 40.0, "fully_paid": True},
    ], ORDER_HEADERS)
    service = DashboardService(config=AppConfig(data_dir=str(tmp_path)))
    series = service.revenue_series("daily")
    assert series.is_sample is False
    assert series.keys() == ["2024-06-07"]
    assert series.points[0].revenue_sum == 40
