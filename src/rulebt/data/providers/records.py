"""RecordsProvider: adapts market-data API records to Bars."""

from __future__ import annotations

from typing import Any, Iterator, Mapping, Optional, Sequence

from ..series import PriceSeries
from ..types import Bar
from .base import DataProvider


class RecordsProvider(DataProvider):
    """Wrap a list of provider records as a DataProvider.

    Each record is a mapping shaped like
    ``{date, open, high, low, close, adjClose?, volume?}``. Records with
    any of open/high/low/close missing are excluded.

    Args:
        records: Records in chronological order.
        symbol_name: Symbol the records belong to.
        timestamp_key: Key holding the bar date.
    """

    def __init__(
        self,
        records: Sequence[Mapping[str, Any]],
        symbol_name: str = "",
        timestamp_key: str = "date",
    ):
        self._records = list(records)
        self._symbol = symbol_name
        self._timestamp_key = timestamp_key
        self._series: Optional[PriceSeries] = None

    def _load(self) -> PriceSeries:
        if self._series is None:
            self._series = PriceSeries.from_records(
                self._records, symbol=self._symbol, timestamp_key=self._timestamp_key,
            )
        return self._series

    def __iter__(self) -> Iterator[Bar]:
        return iter(self._load())

    def symbol(self) -> str:
        return self._symbol

    def to_series(self) -> PriceSeries:
        return self._load()

    def __len__(self) -> int:
        return len(self._load())
