"""Parabolic SAR (Wilder)."""

from __future__ import annotations

from typing import Optional

from .base import Indicator


class ParabolicSAR(Indicator):
    """Parabolic Stop-And-Reverse.

    The initial trend comes from the first two closes. Each bar the SAR
    moves ``af`` of the way to the extreme point; ``af`` grows by
    ``increment`` on every new extreme up to ``max_af``. The SAR never
    penetrates the previous two bars' range; touching it reverses the
    trend.
    """

    def __init__(self, series, start: float = 0.02, increment: float = 0.02, max_af: float = 0.2):
        super().__init__(series, f"SAR({start:g},{increment:g},{max_af:g})", 2)
        self.start = start
        self.increment = increment
        self.max_af = max_af
        self._sar: Optional[float] = None
        self._ep = 0.0
        self._af = start
        self._uptrend = True

    def _next(self, i: int) -> Optional[float]:
        if i == 0:
            return None

        bar = self.series[i]
        prev = self.series[i - 1]

        if self._sar is None:
            self._uptrend = bar.close >= prev.close
            if self._uptrend:
                self._sar = min(prev.low, bar.low)
                self._ep = max(prev.high, bar.high)
            else:
                self._sar = max(prev.high, bar.high)
                self._ep = min(prev.low, bar.low)
            return self._sar

        sar = self._sar + self._af * (self._ep - self._sar)
        prev2 = self.series[i - 2] if i >= 2 else prev

        if self._uptrend:
            sar = min(sar, prev.low, prev2.low)
            if bar.low < sar:
                self._uptrend = False
                sar = self._ep
                self._ep = bar.low
                self._af = self.start
            elif bar.high > self._ep:
                self._ep = bar.high
                self._af = min(self._af + self.increment, self.max_af)
        else:
            sar = max(sar, prev.high, prev2.high)
            if bar.high > sar:
                self._uptrend = True
                sar = self._ep
                self._ep = bar.high
                self._af = self.start
            elif bar.low < self._ep:
                self._ep = bar.low
                self._af = min(self._af + self.increment, self.max_af)

        self._sar = sar
        return sar
