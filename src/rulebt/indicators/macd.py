"""MACD: Moving Average Convergence Divergence."""

from __future__ import annotations

from typing import Optional

from .base import EMASmoother, Indicator
from .ema import EMA


class MACD(Indicator):
    """MACD line = fast EMA - slow EMA.

    Both EMAs are shared components, so an ``EMA(12)`` referenced
    elsewhere in a rule tree is the same instance.
    """

    def __init__(self, fast: EMA, slow: EMA):
        super().__init__(fast.series, f"MACD({fast.period},{slow.period})", slow.period)
        self.fast = fast
        self.slow = slow

    def _next(self, i: int) -> Optional[float]:
        f = self.fast.value(i)
        s = self.slow.value(i)
        if f is None or s is None:
            return None
        return f - s


class MACDSignal(Indicator):
    """Signal line = EMA of the MACD line (default 9)."""

    def __init__(self, macd: MACD, signal_period: int = 9):
        super().__init__(macd.series, f"MACDSIGNAL({macd.fast.period},{macd.slow.period},{signal_period})", signal_period)
        self.macd = macd
        self._ema = EMASmoother(signal_period)

    def _next(self, i: int) -> Optional[float]:
        line = self.macd.value(i)
        if line is None:
            return None
        return self._ema.update(line)


class MACDHistogram(Indicator):
    """Histogram = MACD - Signal."""

    def __init__(self, macd: MACD, signal: MACDSignal):
        super().__init__(macd.series, f"MACDHIST({macd.fast.period},{macd.slow.period},{signal.period})", signal.period)
        self.macd = macd
        self.signal = signal

    def _next(self, i: int) -> Optional[float]:
        line = self.macd.value(i)
        sig = self.signal.value(i)
        if line is None or sig is None:
            return None
        return line - sig
