"""True Range and Average True Range: incremental."""

from __future__ import annotations

from typing import Optional

from .base import Indicator, WilderSmoother


class TrueRange(Indicator):
    """True Range = max(H-L, |H-prev_close|, |L-prev_close|).

    The first bar has no previous close, so TR = H - L there.
    """

    def __init__(self, series):
        super().__init__(series, "TR")

    def _next(self, i: int) -> Optional[float]:
        bar = self.series[i]
        if i == 0:
            return bar.high - bar.low
        prev_close = self.series[i - 1].close
        return max(
            bar.high - bar.low,
            abs(bar.high - prev_close),
            abs(bar.low - prev_close),
        )


class ATR(Indicator):
    """Average True Range with Wilder's smoothing.

    ATR = ((period-1)*prev_ATR + TR) / period, seeded with the mean of
    the first ``period`` true ranges (first value at index period-1).
    """

    def __init__(self, tr: TrueRange, period: int = 14):
        super().__init__(tr.series, f"ATR({period})", period)
        self.tr = tr
        self._wilder = WilderSmoother(period)

    def _next(self, i: int) -> Optional[float]:
        return self._wilder.update(self.tr.value(i))
