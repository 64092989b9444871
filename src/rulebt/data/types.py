"""Core data types used throughout rulebt."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class TradeType(str, Enum):
    BUY = "BUY"
    SELL = "SELL"


@dataclass(frozen=True, slots=True)
class Bar:
    """Universal OHLCV data unit. Volume may be missing."""
    timestamp: datetime
    open: float
    high: float
    low: float
    close: float
    volume: Optional[float] = None
    adj_close: Optional[float] = None


@dataclass(slots=True)
class Position:
    """A long position opened at one bar's close and closed at a later one.

    Only the exit fields are ever written after creation, exactly once,
    by ``TradingRecord.exit``.
    """
    entry_index: int
    entry_price: float
    exit_index: Optional[int] = None
    exit_price: Optional[float] = None

    @property
    def is_open(self) -> bool:
        return self.exit_index is None

    @property
    def is_closed(self) -> bool:
        return self.exit_index is not None

    @property
    def profit(self) -> float:
        """Per-unit profit of a closed long position."""
        if self.exit_price is None:
            raise ValueError("Position is still open")
        return self.exit_price - self.entry_price
