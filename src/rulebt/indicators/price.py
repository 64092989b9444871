"""Price helper indicators: raw bar fields and derived prices."""

from __future__ import annotations

from typing import Optional

from .base import Indicator


class PriceField(Indicator):
    """Raw bar field (open/high/low/close). Defined at every index."""

    field = "close"

    def __init__(self, series):
        super().__init__(series, self.field.upper())

    def _next(self, i: int) -> Optional[float]:
        return getattr(self.series[i], self.field)


class ClosePrice(PriceField):
    field = "close"


class OpenPrice(PriceField):
    field = "open"


class HighPrice(PriceField):
    field = "high"


class LowPrice(PriceField):
    field = "low"


class Volume(Indicator):
    """Bar volume. A bar without volume counts as 0."""

    def __init__(self, series):
        super().__init__(series, "VOLUME")

    def _next(self, i: int) -> Optional[float]:
        vol = self.series[i].volume
        return 0.0 if vol is None else vol


class MedianPrice(Indicator):
    """(high + low) / 2"""

    def __init__(self, series):
        super().__init__(series, "MEDIAN")

    def _next(self, i: int) -> Optional[float]:
        bar = self.series[i]
        return (bar.high + bar.low) / 2


class TypicalPrice(Indicator):
    """(high + low + close) / 3"""

    def __init__(self, series):
        super().__init__(series, "TYPICAL")

    def _next(self, i: int) -> Optional[float]:
        bar = self.series[i]
        return (bar.high + bar.low + bar.close) / 3


class Constant(Indicator):
    """The same number at every index. Used for value comparisons."""

    def __init__(self, series, constant: float):
        super().__init__(series, f"{constant:g}")
        self.constant = constant

    def _next(self, i: int) -> Optional[float]:
        return self.constant
