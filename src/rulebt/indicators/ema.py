"""Exponential Moving Average: incremental."""

from __future__ import annotations

from typing import Optional

from .base import EMASmoother, Indicator


class EMA(Indicator):
    """Exponential Moving Average.

    Seeded with the first source value (matches pandas ewm adjust=False),
    multiplier 2 / (period + 1). Reported once ``period`` values were seen.

    Args:
        source: Input indicator (usually ClosePrice).
        period: EMA period (e.g. 20).
    """

    def __init__(self, source: Indicator, period: int = 20):
        super().__init__(source.series, f"EMA({source.name},{period})", period)
        self.source = source
        self._ema = EMASmoother(period)

    def _next(self, i: int) -> Optional[float]:
        price = self.source.value(i)
        if price is None:
            return None
        return self._ema.update(price)
