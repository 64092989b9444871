from .base import DataProvider
from .csv import CSVProvider
from .records import RecordsProvider

__all__ = [
    "DataProvider",
    "CSVProvider",
    "RecordsProvider",
]
