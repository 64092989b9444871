"""TradingRecord: the positions one simulation run has opened."""

from __future__ import annotations

from typing import List, Optional

from ..data.types import Position


class TradingRecord:
    """Closed positions plus at most one open position.

    Each run owns its record; nothing else mutates it.
    """

    def __init__(self):
        self._closed: List[Position] = []
        self._current: Optional[Position] = None

    @property
    def is_flat(self) -> bool:
        return self._current is None

    @property
    def current(self) -> Optional[Position]:
        """The open position, if any."""
        return self._current

    @property
    def positions(self) -> List[Position]:
        """Closed positions in the order they were opened."""
        return list(self._closed)

    def enter(self, index: int, price: float) -> Position:
        if self._current is not None:
            raise RuntimeError(f"Cannot enter at bar {index}: already in a position")
        self._current = Position(entry_index=index, entry_price=price)
        return self._current

    def exit(self, index: int, price: float) -> Position:
        pos = self._current
        if pos is None:
            raise RuntimeError(f"Cannot exit at bar {index}: no open position")
        if index <= pos.entry_index:
            raise RuntimeError(
                f"Exit bar {index} must come after entry bar {pos.entry_index}"
            )
        pos.exit_index = index
        pos.exit_price = price
        self._closed.append(pos)
        self._current = None
        return pos

    def __len__(self) -> int:
        return len(self._closed)

    def __repr__(self) -> str:
        state = "flat" if self.is_flat else f"open@{self._current.entry_index}"
        return f"TradingRecord(closed={len(self._closed)}, {state})"
