from .data_filters import PageRequest
from .granularity import Granularity, WeekScheme

from .orders import OrderRecord
from .products import ProductRecord
from .timeseries import (
    TimeSeriesPoint,
    TimeSeries,
    PeriodWindows,
    PeriodStats,
)
from .list_response import (
    OrderPage,
    ProductPage,
    total_pages_for,
)

__all__ = [
    # Request / selector types
    "PageRequest",
    "Granularity",
    "WeekScheme",
    # Records
    "OrderRecord",
    "ProductRecord",
    # Analytics results
    "TimeSeriesPoint",
    "TimeSeries",
    "PeriodWindows",
    "PeriodStats",
    # Paged responses
    "OrderPage",
    "ProductPage",
    "total_pages_for",
]
