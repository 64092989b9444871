"""CSV and Parquet data provider."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, Optional

import pandas as pd

from ..series import PriceSeries
from ..types import Bar
from .base import DataProvider


class CSVProvider(DataProvider):
    """Load OHLCV data from CSV or Parquet files.

    Expected columns: timestamp (or date), open, high, low, close, and
    optionally volume and adj_close. Rows with a missing OHLC value are
    dropped.

    Args:
        path: Path to CSV or Parquet file.
        symbol_name: Symbol name for results (e.g. 'TCS.NS').
        start: Optional start date filter (inclusive).
        end: Optional end date filter (inclusive).
        timestamp_col: Name of the timestamp column.
    """

    def __init__(
        self,
        path: str | Path,
        symbol_name: str = "",
        start: Optional[str] = None,
        end: Optional[str] = None,
        timestamp_col: str = "timestamp",
    ):
        self._path = Path(path)
        self._symbol = symbol_name or self._infer_symbol()
        self._start = start
        self._end = end
        self._timestamp_col = timestamp_col
        self._series: Optional[PriceSeries] = None

    def _infer_symbol(self) -> str:
        """Try to extract symbol from filename like 'TCS.NS_1d.csv'."""
        name = self._path.stem
        parts = name.split("_")
        return parts[0] if parts else name

    def _load(self) -> PriceSeries:
        """Load and cache the series."""
        if self._series is not None:
            return self._series

        if self._path.suffix == ".parquet":
            df = pd.read_parquet(self._path)
        else:
            df = pd.read_csv(self._path)

        # Normalize timestamp
        if self._timestamp_col in df.columns:
            df["timestamp"] = pd.to_datetime(df[self._timestamp_col])
        elif "date" in df.columns:
            df["timestamp"] = pd.to_datetime(df["date"])
        else:
            # Assume first column is timestamp
            df["timestamp"] = pd.to_datetime(df.iloc[:, 0])

        df = df.sort_values("timestamp").reset_index(drop=True)

        # Filter date range
        if self._start:
            df = df[df["timestamp"] >= self._start]
        if self._end:
            df = df[df["timestamp"] <= self._end]

        self._series = PriceSeries.from_dataframe(df, symbol=self._symbol)
        return self._series

    def __iter__(self) -> Iterator[Bar]:
        return iter(self._load())

    def symbol(self) -> str:
        return self._symbol

    def to_series(self) -> PriceSeries:
        return self._load()

    def __len__(self) -> int:
        return len(self._load())
