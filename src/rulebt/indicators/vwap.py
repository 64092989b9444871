"""Rolling Volume-Weighted Average Price."""

from __future__ import annotations

from collections import deque
from typing import Optional

from .base import Indicator


class VWAP(Indicator):
    """VWAP over the last ``period`` bars using typical price.

    VWAP = sum(TP * volume) / sum(volume). Undefined when the window
    holds no volume.
    """

    def __init__(self, typical: Indicator, volume: Indicator, period: int = 14):
        super().__init__(typical.series, f"VWAP({period})", period)
        self.typical = typical
        self.volume = volume
        self._pv: deque = deque(maxlen=period)
        self._vol: deque = deque(maxlen=period)
        self._sum_pv = 0.0
        self._sum_vol = 0.0

    def _next(self, i: int) -> Optional[float]:
        vol = self.volume.value(i)
        pv = self.typical.value(i) * vol

        if len(self._vol) == self.period:
            self._sum_pv -= self._pv[0]
            self._sum_vol -= self._vol[0]

        self._pv.append(pv)
        self._vol.append(vol)
        self._sum_pv += pv
        self._sum_vol += vol

        if len(self._vol) < self.period or self._sum_vol <= 0:
            return None
        return self._sum_pv / self._sum_vol
