"""Weighted and Hull moving averages."""

from __future__ import annotations

from collections import deque
from math import sqrt
from typing import Optional

from .base import Indicator


class WMA(Indicator):
    """Linearly weighted moving average (newest value has weight ``period``).

    Keeps a running plain sum and weighted sum, so each step is O(1):
    when the window slides, every weight drops by one, which removes
    the plain sum from the weighted sum.
    """

    def __init__(self, source: Indicator, period: int = 20):
        super().__init__(source.series, f"WMA({source.name},{period})", period)
        self.source = source
        self._window: deque = deque(maxlen=period)
        self._sum = 0.0
        self._wsum = 0.0
        self._divisor = period * (period + 1) / 2

    def _next(self, i: int) -> Optional[float]:
        price = self.source.value(i)
        if price is None:
            return None

        n = self.period
        if len(self._window) == n:
            self._wsum += n * price - self._sum
            self._sum += price - self._window[0]
        else:
            self._wsum += (len(self._window) + 1) * price
            self._sum += price
        self._window.append(price)

        if len(self._window) < n:
            return None
        return self._wsum / self._divisor


class HullRaw(Indicator):
    """2 * WMA(n/2) - WMA(n), the input to the Hull smoothing pass."""

    def __init__(self, half: WMA, full: WMA):
        super().__init__(full.series, f"HULLRAW({half.period},{full.period})", full.period)
        self.half = half
        self.full = full

    def _next(self, i: int) -> Optional[float]:
        h = self.half.value(i)
        f = self.full.value(i)
        if h is None or f is None:
            return None
        return 2 * h - f


class HMA(Indicator):
    """Hull Moving Average: WMA(2*WMA(n/2) - WMA(n), sqrt(n))."""

    def __init__(self, raw: HullRaw, period: int = 20):
        super().__init__(raw.series, f"HMA({period})", period)
        self.raw = raw
        self._smooth = WMA(raw, max(1, int(sqrt(period))))

    @staticmethod
    def components(period: int):
        """Return (half, full) periods for the two inner WMAs."""
        return max(1, period // 2), period

    def _next(self, i: int) -> Optional[float]:
        return self._smooth.value(i)
