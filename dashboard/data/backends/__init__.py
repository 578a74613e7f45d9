from .csv_backend import CsvDataSource

__all__ = ["CsvDataSource"]
