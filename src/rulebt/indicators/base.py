"""Indicator base class and shared smoothing helpers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    import pandas as pd

    from ..data.series import PriceSeries


class Indicator(ABC):
    """Abstract indicator evaluated over a PriceSeries by bar index.

    Subclasses implement ``_next(i)``, which is called exactly once per
    index in increasing order (0, 1, 2, ...). Internal state therefore
    carries forward from i to i+1 and a full sweep is a single pass.
    ``value(i)`` memoises outputs, so random access after the sweep is
    O(1) and components shared by several composites are computed once.

    ``None`` means "not yet computable" (warm-up).
    """

    def __init__(self, series: "PriceSeries", name: str, period: int = 1):
        self.series = series
        self.name = name
        self.period = period
        self._values: List[Optional[float]] = []

    @abstractmethod
    def _next(self, i: int) -> Optional[float]:
        """Compute the value at index i. Called once per index, in order."""
        ...

    def value(self, i: int) -> Optional[float]:
        """Return the value at bar index i (None during warm-up)."""
        if i < 0 or i >= len(self.series):
            raise IndexError(f"{self.name}: index {i} out of range 0..{len(self.series) - 1}")
        values = self._values
        while len(values) <= i:
            values.append(self._next(len(values)))
        return values[i]

    def __getitem__(self, i: int) -> Optional[float]:
        return self.value(i)

    def __len__(self) -> int:
        return len(self.series)

    def values(self) -> List[Optional[float]]:
        """Return the full value sequence, aligned to the series."""
        if len(self.series):
            self.value(len(self.series) - 1)
        return list(self._values)

    def to_pandas(self) -> "pd.Series":
        """Return values as a float Series indexed by bar timestamp (NaN = undefined)."""
        import pandas as pd
        vals = [float("nan") if v is None else v for v in self.values()]
        return pd.Series(vals, index=pd.DatetimeIndex(self.series.timestamps()), name=self.name, dtype=float)

    @property
    def ready(self) -> bool:
        """True once the last computed index produced a value."""
        return bool(self._values) and self._values[-1] is not None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class WilderSmoother:
    """Wilder's moving average (MMA): seeded with the SMA of the first
    ``period`` inputs, then ``avg = ((period - 1) * avg + x) / period``.
    """

    __slots__ = ("period", "_count", "_sum", "_avg")

    def __init__(self, period: int):
        self.period = period
        self._count = 0
        self._sum = 0.0
        self._avg: Optional[float] = None

    def update(self, x: float) -> Optional[float]:
        if self._avg is None:
            self._count += 1
            self._sum += x
            if self._count >= self.period:
                self._avg = self._sum / self.period
            return self._avg
        self._avg = ((self.period - 1) * self._avg + x) / self.period
        return self._avg

    @property
    def value(self) -> Optional[float]:
        return self._avg


class EMASmoother:
    """Exponential smoothing seeded with the first input (pandas adjust=False)."""

    __slots__ = ("period", "multiplier", "_count", "_value")

    def __init__(self, period: int):
        self.period = period
        self.multiplier = 2.0 / (period + 1)
        self._count = 0
        self._value: Optional[float] = None

    def update(self, x: float) -> Optional[float]:
        """Feed one input. Returns the EMA once ``period`` inputs were seen."""
        self._count += 1
        if self._value is None:
            self._value = x
        else:
            self._value = (x - self._value) * self.multiplier + self._value
        return self._value if self._count >= self.period else None
