"""Momentum oscillators: ROC, CCI, Williams %R, Awesome Oscillator."""

from __future__ import annotations

from collections import deque
from typing import Optional

from .base import Indicator
from .sma import SMA
from .statistics import HighestValue, LowestValue


class ROC(Indicator):
    """Rate of change in percent: (x[i] - x[i-n]) / x[i-n] * 100."""

    def __init__(self, source: Indicator, period: int = 12):
        super().__init__(source.series, f"ROC({source.name},{period})", period)
        self.source = source

    def _next(self, i: int) -> Optional[float]:
        if i < self.period:
            return None
        now = self.source.value(i)
        then = self.source.value(i - self.period)
        if now is None or then is None or then == 0:
            return None
        return (now - then) / then * 100


class CCI(Indicator):
    """Commodity Channel Index.

    CCI = (TP - SMA(TP)) / (0.015 * mean deviation), TP = typical price.
    A zero mean deviation reads 0.
    """

    def __init__(self, typical: Indicator, sma: SMA):
        super().__init__(typical.series, f"CCI({sma.period})", sma.period)
        self.typical = typical
        self.sma = sma
        self._window: deque = deque(maxlen=sma.period)

    def _next(self, i: int) -> Optional[float]:
        tp = self.typical.value(i)
        self._window.append(tp)
        mean = self.sma.value(i)
        if mean is None:
            return None
        mean_dev = sum(abs(x - mean) for x in self._window) / self.period
        if mean_dev == 0:
            return 0.0
        return (tp - mean) / (0.015 * mean_dev)


class WilliamsR(Indicator):
    """Williams %R = (HH - Close) / (HH - LL) * -100, in [-100, 0].

    A flat window reads -50.
    """

    def __init__(self, highest: HighestValue, lowest: LowestValue):
        super().__init__(highest.series, f"WILLR({highest.period})", highest.period)
        self.highest = highest
        self.lowest = lowest

    def _next(self, i: int) -> Optional[float]:
        hh = self.highest.value(i)
        ll = self.lowest.value(i)
        if hh is None or ll is None:
            return None
        if hh == ll:
            return -50.0
        return (hh - self.series[i].close) / (hh - ll) * -100


class Difference(Indicator):
    """left - right. Awesome Oscillator is SMA5 - SMA34 of the median price."""

    def __init__(self, left: Indicator, right: Indicator, label: str = "DIFF"):
        super().__init__(left.series, f"{label}({left.name},{right.name})", max(left.period, right.period))
        self.left = left
        self.right = right

    def _next(self, i: int) -> Optional[float]:
        a = self.left.value(i)
        b = self.right.value(i)
        if a is None or b is None:
            return None
        return a - b
