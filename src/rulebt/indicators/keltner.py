"""Keltner Channels: EMA of typical price ± multiplier * ATR."""

from __future__ import annotations

from typing import Optional

from .atr import ATR
from .base import Indicator
from .ema import EMA


class KeltnerUpper(Indicator):
    """Upper channel = middle + multiplier * ATR."""

    def __init__(self, middle: EMA, atr: ATR, multiplier: float = 2.0):
        super().__init__(middle.series, f"KCUPPER({middle.period},{atr.period},{multiplier:g})", middle.period)
        self.middle = middle
        self.atr = atr
        self.multiplier = multiplier

    def _next(self, i: int) -> Optional[float]:
        m = self.middle.value(i)
        a = self.atr.value(i)
        if m is None or a is None:
            return None
        return m + self.multiplier * a


class KeltnerLower(Indicator):
    """Lower channel = middle - multiplier * ATR."""

    def __init__(self, middle: EMA, atr: ATR, multiplier: float = 2.0):
        super().__init__(middle.series, f"KCLOWER({middle.period},{atr.period},{multiplier:g})", middle.period)
        self.middle = middle
        self.atr = atr
        self.multiplier = multiplier

    def _next(self, i: int) -> Optional[float]:
        m = self.middle.value(i)
        a = self.atr.value(i)
        if m is None or a is None:
            return None
        return m - self.multiplier * a
