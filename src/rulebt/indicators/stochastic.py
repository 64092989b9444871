"""Stochastic Oscillator: %K and %D."""

from __future__ import annotations

from typing import Optional

from .base import Indicator
from .statistics import HighestValue, LowestValue


class StochasticK(Indicator):
    """Fast %K = (Close - Lowest Low) / (Highest High - Lowest Low) * 100.

    A flat window (highest == lowest) reads 50.
    """

    def __init__(self, highest: HighestValue, lowest: LowestValue):
        super().__init__(highest.series, f"STOCHK({highest.period})", highest.period)
        self.highest = highest
        self.lowest = lowest

    def _next(self, i: int) -> Optional[float]:
        hh = self.highest.value(i)
        ll = self.lowest.value(i)
        if hh is None or ll is None:
            return None
        if hh == ll:
            return 50.0
        return (self.series[i].close - ll) / (hh - ll) * 100
