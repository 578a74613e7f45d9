from .bucket_keys import format_bucket_key, format_bucket_label, parse_created_at
from .bucketer import aggregate
from .period_comparator import compare, percent_change, period_windows
from .sample_data import generate_sample_series, generate_sample_stats

__all__ = [
    "format_bucket_key",
    "format_bucket_label",
    "parse_created_at",
    "aggregate",
    "compare",
    "percent_change",
    "period_windows",
    "generate_sample_series",
    "generate_sample_stats",
]
