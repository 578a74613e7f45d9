from datetime import datetime

import pytest
from pydantic import ValidationError

from dashboard.data.models import Granularity, OrderRecord, PageRequest, ProductRecord, total_pages_for
from dashboard.errors import InvalidGranularity


@pytest.mark.parametrize("value,expected", [
    ("hourly", Granularity.HOURLY),
    (" Daily ", Granularity.DAILY),
    ("WEEKLY", Granularity.WEEKLY),
    (Granularity.MONTHLY, Granularity.MONTHLY),
    ("yearly", Granularity.YEARLY),
])
def test_granularity_parse(value, expected):
    assert Granularity.parse(value) is expected


@pytest.mark.parametrize("value", ["", "quarterly", None, 3])
def test_granularity_parse_rejects_unknown_values(value):
    with pytest.raises(InvalidGranularity) as exc:
        Granularity.parse(value)
    assert isinstance(exc.value, ValueError)


def test_order_record_keeps_raw_created_at():
    assert OrderRecord(created_at="not-a-date").created_at == "not-a-date"
    assert OrderRecord(created_at=datetime(2024, 1, 5)).created_at == datetime(2024, 1, 5)


def test_order_record_defaults():
    record = OrderRecord(created_at="2024-01-05", fully_paid=None, unknown_column="x")
    assert record.fully_paid is False
    assert record.total_price is None
    assert record.revenue == 0
    assert record.received == 0


def test_order_record_rejects_negative_amounts():
    with pytest.raises(ValidationError):
        OrderRecord(created_at="2024-01-05", total_price=-1)


def test_page_request():
    assert PageRequest(page=3, limit=20).offset == 40
    with pytest.raises(ValidationError):
        PageRequest(page=0)


@pytest.mark.parametrize("total,limit,pages", [(0, 20, 1), (20, 20, 1), (21, 20, 2), (1000, 250, 4)])
def test_total_pages(total, limit, pages):
    assert total_pages_for(total, limit) == pages


def test_product_stock_flag():
    assert ProductRecord(shopify_id="p", product_name="Board", total_inventory=2).in_stock
    assert not ProductRecord(shopify_id="p", product_name="Board", total_inventory=-1).in_stock
