"""Ehlers Fisher Transform."""

from __future__ import annotations

from math import log
from typing import Optional

from .base import Indicator
from .statistics import HighestValue, LowestValue

_CLAMP = 0.999


class Fisher(Indicator):
    """Fisher Transform of a price source, normally the close.

    HH and LL are the highest and lowest of the same source over the
    period. v = 0.66 * ((x - LL) / (HH - LL) - 0.5) + 0.67 * v_prev, clamped to
    ±0.999; fisher = 0.5 * ln((1 + v) / (1 - v)) + 0.5 * fisher_prev.
    """

    def __init__(self, source: Indicator, highest: HighestValue, lowest: LowestValue):
        super().__init__(source.series, f"FISHER({highest.period})", highest.period)
        self.source = source
        self.highest = highest
        self.lowest = lowest
        self._v = 0.0
        self._fisher = 0.0

    def _next(self, i: int) -> Optional[float]:
        hh = self.highest.value(i)
        ll = self.lowest.value(i)
        if hh is None or ll is None:
            return None

        x = self.source.value(i)
        pos = 0.0 if hh == ll else (x - ll) / (hh - ll) - 0.5
        v = 0.66 * pos + 0.67 * self._v
        v = max(-_CLAMP, min(_CLAMP, v))
        self._v = v
        self._fisher = 0.5 * log((1 + v) / (1 - v)) + 0.5 * self._fisher
        return self._fisher
