"""Wilder's directional movement system: +DI, -DI and ADX."""

from __future__ import annotations

from typing import Optional

from .atr import ATR
from .base import Indicator, WilderSmoother


class _DirectionalIndicator(Indicator):
    """Smoothed directional movement as a percentage of ATR.

    +DM = up move if it exceeds the down move and is positive, else 0
    (mirrored for -DM). Both DM and ATR use Wilder's smoothing over the
    same period, so DI = 100 * smoothed DM / ATR.
    """

    label = "DI"
    plus = True

    def __init__(self, atr: ATR):
        super().__init__(atr.series, f"{self.label}({atr.period})", atr.period)
        self.atr = atr
        self._dm = WilderSmoother(atr.period)

    def _movement(self, i: int) -> float:
        if i == 0:
            return 0.0
        bar, prev = self.series[i], self.series[i - 1]
        up = bar.high - prev.high
        down = prev.low - bar.low
        if self.plus:
            return up if up > down and up > 0 else 0.0
        return down if down > up and down > 0 else 0.0

    def _next(self, i: int) -> Optional[float]:
        dm = self._dm.update(self._movement(i))
        atr = self.atr.value(i)
        if dm is None or atr is None:
            return None
        if atr == 0:
            return 0.0
        return 100 * dm / atr


class PlusDI(_DirectionalIndicator):
    label = "PLUSDI"
    plus = True


class MinusDI(_DirectionalIndicator):
    label = "MINUSDI"
    plus = False


class ADX(Indicator):
    """Average Directional Index: Wilder average of DX.

    DX = 100 * |+DI - -DI| / (+DI + -DI); 0 when both are 0.
    """

    def __init__(self, plus_di: PlusDI, minus_di: MinusDI):
        super().__init__(plus_di.series, f"ADX({plus_di.period})", plus_di.period)
        self.plus_di = plus_di
        self.minus_di = minus_di
        self._dx = WilderSmoother(plus_di.period)

    def _next(self, i: int) -> Optional[float]:
        p = self.plus_di.value(i)
        m = self.minus_di.value(i)
        if p is None or m is None:
            return None
        total = p + m
        dx = 0.0 if total == 0 else 100 * abs(p - m) / total
        return self._dx.update(dx)
