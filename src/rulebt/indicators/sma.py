"""Simple Moving Average: incremental with rolling window."""

from __future__ import annotations

from collections import deque
from typing import Optional

from .base import Indicator


class SMA(Indicator):
    """Simple Moving Average over any source indicator.

    Undefined source values are skipped, so an SMA of a warming-up
    indicator starts once ``period`` defined values have arrived.

    Args:
        source: Input indicator (usually ClosePrice).
        period: Window size.
    """

    def __init__(self, source: Indicator, period: int = 20):
        super().__init__(source.series, f"SMA({source.name},{period})", period)
        self.source = source
        self._window: deque = deque(maxlen=period)
        self._sum: float = 0.0

    def _next(self, i: int) -> Optional[float]:
        price = self.source.value(i)
        if price is None:
            return None

        # If window is full, subtract the oldest value
        if len(self._window) == self.period:
            self._sum -= self._window[0]

        self._window.append(price)
        self._sum += price

        if len(self._window) >= self.period:
            return self._sum / self.period
        return None
