"""RSI: Wilder's smoothed Relative Strength Index."""

from __future__ import annotations

from typing import Optional

from .base import Indicator, WilderSmoother


class RSI(Indicator):
    """Relative Strength Index.

    Gains and losses of consecutive source values are smoothed with
    Wilder's average (seeded with the simple mean of the first ``period``
    changes), so the first value appears at index ``period``.

    RSI = 100 - 100 / (1 + avg_gain / avg_loss); 100 when avg_loss is 0.
    """

    def __init__(self, source: Indicator, period: int = 14):
        super().__init__(source.series, f"RSI({source.name},{period})", period)
        self.source = source
        self._prev: Optional[float] = None
        self._gain = WilderSmoother(period)
        self._loss = WilderSmoother(period)

    def _next(self, i: int) -> Optional[float]:
        price = self.source.value(i)
        if price is None:
            return None

        if self._prev is None:
            self._prev = price
            return None

        delta = price - self._prev
        self._prev = price
        avg_gain = self._gain.update(max(delta, 0.0))
        avg_loss = self._loss.update(max(-delta, 0.0))

        if avg_gain is None or avg_loss is None:
            return None
        if avg_loss == 0:
            return 100.0
        rs = avg_gain / avg_loss
        return 100 - (100 / (1 + rs))

    @property
    def avg_gain(self) -> Optional[float]:
        return self._gain.value

    @property
    def avg_loss(self) -> Optional[float]:
        return self._loss.value
