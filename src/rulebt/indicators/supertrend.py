"""SuperTrend: ATR trailing band that flips with the trend."""

from __future__ import annotations

from typing import Optional

from .atr import ATR
from .base import Indicator


class SuperTrend(Indicator):
    """SuperTrend line.

    Basic bands are hl2 ± multiplier * ATR. Final bands only tighten
    while price stays inside them. The line follows the final lower band
    in an uptrend and the final upper band in a downtrend; the trend
    flips when the close crosses the active band.
    """

    def __init__(self, atr: ATR, multiplier: float = 3.0):
        super().__init__(atr.series, f"SUPERTREND({atr.period},{multiplier:g})", atr.period)
        self.atr = atr
        self.multiplier = multiplier
        self._upper: Optional[float] = None
        self._lower: Optional[float] = None
        self._uptrend = False

    def _next(self, i: int) -> Optional[float]:
        atr = self.atr.value(i)
        if atr is None:
            return None

        bar = self.series[i]
        hl2 = (bar.high + bar.low) / 2
        basic_upper = hl2 + self.multiplier * atr
        basic_lower = hl2 - self.multiplier * atr

        if self._upper is None:
            self._upper, self._lower = basic_upper, basic_lower
            self._uptrend = bar.close > basic_upper
        else:
            prev_close = self.series[i - 1].close
            if basic_upper < self._upper or prev_close > self._upper:
                upper = basic_upper
            else:
                upper = self._upper
            if basic_lower > self._lower or prev_close < self._lower:
                lower = basic_lower
            else:
                lower = self._lower

            if self._uptrend and bar.close < lower:
                self._uptrend = False
            elif not self._uptrend and bar.close > upper:
                self._uptrend = True
            self._upper, self._lower = upper, lower

        return self._lower if self._uptrend else self._upper

    @property
    def uptrend(self) -> bool:
        return self._uptrend
