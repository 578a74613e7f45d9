"""Dashboard service: fetches orders and turns them into chart series and KPI stats."""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Union

from dashboard.analytics import aggregate, compare, generate_sample_series, generate_sample_stats
from dashboard.config import AppConfig, get_config
from dashboard.data.interface import OrderDataSource
from dashboard.data.models import (
    Granularity,
    OrderRecord,
    PageRequest,
    PeriodStats,
    ProductPage,
    ProductRecord,
    TimeSeries,
    WeekScheme,
)
from dashboard.data.util import get_data_source
from dashboard.errors import DataSourceError
from dashboard.logging import get_logger


class DashboardService:
    """Service for the dashboard's charts, KPI cards and product listing."""

    def __init__(self, source: OrderDataSource | None = None, config: AppConfig | None = None):
        """Initialize the service with a data source (CSV store by default)."""
        self.config = config or get_config()
        self.source = source or get_data_source(data_dir=self.config.data_dir)
        self.logger = get_logger(__name__)

    @property
    def week_scheme(self) -> WeekScheme:
        return WeekScheme(self.config.week_scheme)

    def fetch_orders(self) -> List[OrderRecord]:
        """Fetch the most recent orders the charts are computed from."""
        page = self.source.get_orders(PageRequest(page=1, limit=self.config.order_fetch_limit))
        self.logger.debug(f"Fetched {len(page.items)} of {page.total_count} orders")
        return page.items

    def _fallback(self, what: str, error: DataSourceError) -> None:
        if not self.config.sample_data_on_failure:
            raise error
        self.logger.warning(f"Order data unavailable, showing sample {what}: {error}")

    def revenue_series(
        self,
        granularity: Union[Granularity, str],
        now: Optional[datetime] = None,
    ) -> TimeSeries:
        """Time-bucketed order counts and revenue for the charts.

        Falls back to a sample series (``is_sample=True``) if the store cannot be read.
        """
        granularity = Granularity.parse(granularity)
        try:
            orders = self.fetch_orders()
        except DataSourceError as e:
            self.logger.error(f"Failed to load orders: {e}")
            self._fallback("series", e)
            return generate_sample_series(granularity, now=now, seed=self.config.sample_data_seed)
        return aggregate(orders, granularity, self.week_scheme, tz=self.config.display_timezone)

    def period_stats(
        self,
        granularity: Union[Granularity, str],
        now: Optional[datetime] = None,
    ) -> PeriodStats:
        """Current-vs-previous KPI stats.

        Falls back to sample stats (``is_sample=True``) if the store cannot be read.
        """
        granularity = Granularity.parse(granularity)
        try:
            orders = self.fetch_orders()
        except DataSourceError as e:
            self.logger.error(f"Failed to load orders: {e}")
            self._fallback("stats", e)
            return generate_sample_stats(granularity, seed=self.config.sample_data_seed)
        return compare(orders, granularity, now)

    def list_products(self, page: int = 1, limit: Optional[int] = None) -> ProductPage:
        """Get one page of products; the page size is capped at ``max_page_limit``."""
        limit = min(limit or self.config.default_page_size, self.config.max_page_limit)
        return self.source.get_products(PageRequest(page=page, limit=limit))

    def get_product(self, shopify_id: str) -> Optional[ProductRecord]:
        return self.source.get_product(shopify_id)
