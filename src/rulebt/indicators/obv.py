"""Cumulative volume indicators: On-Balance Volume and Accumulation/Distribution."""

from __future__ import annotations

from typing import Optional

from .base import Indicator


class OBV(Indicator):
    """On-Balance Volume.

    Starts at 0 on the first bar; adds volume on up closes, subtracts on
    down closes, unchanged on equal closes.
    """

    def __init__(self, volume: Indicator):
        super().__init__(volume.series, "OBV")
        self.volume = volume
        self._obv = 0.0

    def _next(self, i: int) -> Optional[float]:
        if i == 0:
            return self._obv
        close = self.series[i].close
        prev_close = self.series[i - 1].close
        if close > prev_close:
            self._obv += self.volume.value(i)
        elif close < prev_close:
            self._obv -= self.volume.value(i)
        return self._obv


class ADL(Indicator):
    """Accumulation/Distribution Line.

    Money flow multiplier = ((C - L) - (H - C)) / (H - L), 0 on a
    zero-range bar; ADL accumulates multiplier * volume.
    """

    def __init__(self, volume: Indicator):
        super().__init__(volume.series, "ADL")
        self.volume = volume
        self._adl = 0.0

    def _next(self, i: int) -> Optional[float]:
        bar = self.series[i]
        rng = bar.high - bar.low
        if rng != 0:
            mfm = ((bar.close - bar.low) - (bar.high - bar.close)) / rng
            self._adl += mfm * self.volume.value(i)
        return self._adl
