"""Donchian channel and Ichimoku midpoint lines."""

from __future__ import annotations

from typing import Optional

from .base import Indicator
from .statistics import HighestValue, LowestValue


class Midpoint(Indicator):
    """(highest high + lowest low) / 2 over a window.

    Serves as the Donchian middle line and as the Ichimoku
    Tenkan-sen / Kijun-sen, which differ only in period.
    """

    def __init__(self, upper: HighestValue, lower: LowestValue, label: str = "MIDPOINT"):
        super().__init__(upper.series, f"{label}({upper.period})", upper.period)
        self.upper = upper
        self.lower = lower

    def _next(self, i: int) -> Optional[float]:
        hh = self.upper.value(i)
        ll = self.lower.value(i)
        if hh is None or ll is None:
            return None
        return (hh + ll) / 2
