from __future__ import annotations

from typing import Literal, Optional

from dashboard.config import get_config

from .backends.csv_backend import CsvDataSource
from .interface import OrderDataSource


def get_data_source(kind: Literal["csv"] = "csv", data_dir: Optional[str] = None) -> OrderDataSource:
    if kind == "csv":
        # Reads from the given folder, else the configured CSV folder
        return CsvDataSource(data_dir=data_dir or get_config().data_dir)
    raise ValueError(f"Unknown data source kind: {kind}")
