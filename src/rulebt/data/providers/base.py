"""Base data provider interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterator

from ..types import Bar


class DataProvider(ABC):
    """Abstract base for all data providers.

    A DataProvider yields Bar objects in chronological order. Rows that
    lack any of open/high/low/close must never be yielded.
    """

    @abstractmethod
    def __iter__(self) -> Iterator[Bar]:
        """Yield bars in chronological order."""
        ...

    @abstractmethod
    def symbol(self) -> str:
        """Return the symbol this provider serves."""
        ...

    def to_series(self):
        """Drain the provider into a PriceSeries."""
        from ..series import PriceSeries
        return PriceSeries.from_provider(self)
