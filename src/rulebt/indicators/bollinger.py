"""Bollinger Bands: SMA ± k standard deviations."""

from __future__ import annotations

from typing import Optional

from .base import Indicator
from .sma import SMA
from .statistics import StandardDeviation


class _Band(Indicator):
    """Shared plumbing for the two outer bands: a middle, a deviation and k."""

    label = "BAND"

    def __init__(self, middle: SMA, deviation: StandardDeviation, k: float = 2.0):
        super().__init__(middle.series, f"{self.label}({middle.period},{k:g})", middle.period)
        self.middle = middle
        self.deviation = deviation
        self.k = k

    def _parts(self, i: int):
        m = self.middle.value(i)
        d = self.deviation.value(i)
        if m is None or d is None:
            return None
        return m, d


class BollingerUpper(_Band):
    """Upper band = middle + k * stddev."""

    label = "BBUPPER"

    def _next(self, i: int) -> Optional[float]:
        parts = self._parts(i)
        if parts is None:
            return None
        m, d = parts
        return m + self.k * d


class BollingerLower(_Band):
    """Lower band = middle - k * stddev."""

    label = "BBLOWER"

    def _next(self, i: int) -> Optional[float]:
        parts = self._parts(i)
        if parts is None:
            return None
        m, d = parts
        return m - self.k * d
