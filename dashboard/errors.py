"""Error types raised across the dashboard."""


class DashboardError(Exception):
    """Base class for dashboard errors."""


class InvalidGranularity(DashboardError, ValueError):
    """Raised when a granularity selector is not one of the supported variants."""

    def __init__(self, value) -> None:
        self.value = value
        super().__init__(
            f"Unsupported granularity {value!r}; expected one of hourly, daily, weekly, monthly, yearly"
        )


class MalformedRecord(DashboardError):
    """Raised when an order record's created_at cannot be read as a timestamp.

    The aggregation functions catch this, drop the record and report it through
    ``excluded_count``.
    """


class DataSourceError(DashboardError):
    """Raised when the order/product store cannot be read."""


class SyncError(DashboardError):
    """Raised when a storefront payload does not have the expected shape."""
