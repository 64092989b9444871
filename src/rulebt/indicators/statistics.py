"""Rolling window statistics: standard deviation, highest and lowest value.

All three update in O(1) amortized time per bar.
"""

from __future__ import annotations

from collections import deque
from math import sqrt
from typing import Optional

from .base import Indicator


class _Window(Indicator):
    """Base for indicators computed over the last ``period`` defined source values."""

    label = "WINDOW"

    def __init__(self, source: Indicator, period: int = 20):
        super().__init__(source.series, f"{self.label}({source.name},{period})", period)
        self.source = source
        self._count = 0

    def _next(self, i: int) -> Optional[float]:
        x = self.source.value(i)
        if x is None:
            return None
        self._count += 1
        self._push(x)
        if self._count < self.period:
            return None
        return self._reduce()

    def _push(self, x: float) -> None:
        raise NotImplementedError

    def _reduce(self) -> float:
        raise NotImplementedError


class StandardDeviation(_Window):
    """Population standard deviation (divides by N).

    Keeps running sums of the window's offsets from its first input, so
    adding and evicting a value is O(1) and cancellation stays small.
    """

    label = "STDDEV"

    def __init__(self, source: Indicator, period: int = 20):
        super().__init__(source, period)
        self._window: deque = deque()
        self._shift: Optional[float] = None
        self._sum = 0.0
        self._sumsq = 0.0

    def _push(self, x: float) -> None:
        if self._shift is None:
            self._shift = x
        d = x - self._shift
        if len(self._window) == self.period:
            old = self._window.popleft()
            self._sum -= old
            self._sumsq -= old * old
        self._window.append(d)
        self._sum += d
        self._sumsq += d * d

    def _reduce(self) -> float:
        n = self.period
        mean = self._sum / n
        # Rounding can leave a tiny negative variance on flat windows
        return sqrt(max(self._sumsq / n - mean * mean, 0.0))


class _Extreme(_Window):
    """Monotonic deque of (position, value); the front is the window extreme."""

    def __init__(self, source: Indicator, period: int = 20):
        super().__init__(source, period)
        self._candidates: deque = deque()

    def _dominates(self, new: float, old: float) -> bool:
        raise NotImplementedError

    def _push(self, x: float) -> None:
        candidates = self._candidates
        while candidates and self._dominates(x, candidates[-1][1]):
            candidates.pop()
        candidates.append((self._count, x))
        if candidates[0][0] <= self._count - self.period:
            candidates.popleft()

    def _reduce(self) -> float:
        return self._candidates[0][1]


class HighestValue(_Extreme):
    """Highest source value over the window, current bar included."""

    label = "HIGHEST"

    def _dominates(self, new: float, old: float) -> bool:
        return new >= old


class LowestValue(_Extreme):
    """Lowest source value over the window, current bar included."""

    label = "LOWEST"

    def _dominates(self, new: float, old: float) -> bool:
        return new <= old
