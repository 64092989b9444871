"""PriceSeries: the ordered bar container every backtest runs over."""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence

import pandas as pd

from .types import Bar

logger = logging.getLogger(__name__)

_REQUIRED = ("open", "high", "low", "close")


def _to_float(raw: Any) -> Optional[float]:
    """Coerce a provider value to float. None, NaN and junk become None."""
    if raw is None:
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    if math.isnan(value):
        return None
    return value


def _to_datetime(raw: Any) -> datetime:
    if isinstance(raw, datetime):
        return raw
    if isinstance(raw, (int, float)):
        # Unix seconds, as most chart APIs return
        return pd.Timestamp(raw, unit="s").to_pydatetime()
    return pd.Timestamp(raw).to_pydatetime()


class PriceSeries:
    """Ordered, immutable sequence of Bars with strictly increasing timestamps.

    Bars are indexed 0..N-1. An empty series is allowed here; the engine
    refuses to run on it.

    Args:
        bars: Bars in chronological order.
        symbol: Instrument name, used in results and error messages.
    """

    def __init__(self, bars: Iterable[Bar], symbol: str = ""):
        self._bars: tuple = tuple(bars)
        self.symbol = symbol

        for i in range(1, len(self._bars)):
            if self._bars[i].timestamp <= self._bars[i - 1].timestamp:
                raise ValueError(
                    f"Timestamps not strictly increasing (first violation at index {i}: "
                    f"{self._bars[i].timestamp} <= {self._bars[i - 1].timestamp})"
                )

    # ── Construction ─────────────────────────────────────────────────

    @classmethod
    def from_records(
        cls,
        records: Iterable[Mapping[str, Any]],
        symbol: str = "",
        timestamp_key: str = "date",
    ) -> "PriceSeries":
        """Build a series from provider records.

        Records look like ``{date, open, high, low, close, adjClose?, volume?}``.
        Records missing any of open/high/low/close are dropped.
        """
        bars: List[Bar] = []
        dropped = 0
        for rec in records:
            ohlc = [_to_float(rec.get(k)) for k in _REQUIRED]
            if any(v is None for v in ohlc):
                dropped += 1
                continue
            ts = rec.get(timestamp_key, rec.get("timestamp"))
            if ts is None:
                dropped += 1
                continue
            o, h, l, c = ohlc
            bars.append(Bar(
                timestamp=_to_datetime(ts),
                open=o,
                high=h,
                low=l,
                close=c,
                volume=_to_float(rec.get("volume")),
                adj_close=_to_float(rec.get("adjClose", rec.get("adj_close"))),
            ))

        if dropped:
            logger.warning(
                "Dropped %d of %d records with missing OHLC values%s",
                dropped, dropped + len(bars), f" for {symbol}" if symbol else "",
            )
        return cls(bars, symbol=symbol)

    @classmethod
    def from_dataframe(
        cls,
        df: pd.DataFrame,
        symbol: str = "",
        timestamp_col: str = "timestamp",
    ) -> "PriceSeries":
        """Build a series from a DataFrame with OHLC(V) columns.

        The timestamp comes from ``timestamp_col``, a ``date`` column, or
        the index, in that order. Rows with NaN OHLC are dropped.
        """
        for col in _REQUIRED:
            if col not in df.columns:
                raise ValueError(f"Missing required column: {col}")

        if timestamp_col in df.columns:
            timestamps = pd.to_datetime(df[timestamp_col])
        elif "date" in df.columns:
            timestamps = pd.to_datetime(df["date"])
        else:
            timestamps = pd.to_datetime(df.index.to_series())

        frame = pd.DataFrame({
            "timestamp": timestamps.to_numpy(),
            "open": pd.to_numeric(df["open"], errors="coerce").to_numpy(),
            "high": pd.to_numeric(df["high"], errors="coerce").to_numpy(),
            "low": pd.to_numeric(df["low"], errors="coerce").to_numpy(),
            "close": pd.to_numeric(df["close"], errors="coerce").to_numpy(),
        })
        if "volume" in df.columns:
            frame["volume"] = pd.to_numeric(df["volume"], errors="coerce").to_numpy()
        adj_col = "adj_close" if "adj_close" in df.columns else "adjClose"
        if adj_col in df.columns:
            frame["adj_close"] = pd.to_numeric(df[adj_col], errors="coerce").to_numpy()

        clean = frame.dropna(subset=list(_REQUIRED))
        dropped = len(frame) - len(clean)
        if dropped:
            logger.warning(
                "Dropped %d of %d rows with missing OHLC values%s",
                dropped, len(frame), f" for {symbol}" if symbol else "",
            )

        bars = []
        for row in clean.itertuples(index=False):
            volume = getattr(row, "volume", None)
            adj = getattr(row, "adj_close", None)
            bars.append(Bar(
                timestamp=pd.Timestamp(row.timestamp).to_pydatetime(),
                open=float(row.open),
                high=float(row.high),
                low=float(row.low),
                close=float(row.close),
                volume=_to_float(volume),
                adj_close=_to_float(adj),
            ))
        return cls(bars, symbol=symbol)

    @classmethod
    def from_provider(cls, provider) -> "PriceSeries":
        """Drain a DataProvider into a series."""
        return cls(iter(provider), symbol=provider.symbol())

    # ── Access ───────────────────────────────────────────────────────

    def __len__(self) -> int:
        return len(self._bars)

    def __getitem__(self, index: int) -> Bar:
        return self._bars[index]

    def __iter__(self) -> Iterator[Bar]:
        return iter(self._bars)

    def __bool__(self) -> bool:
        return bool(self._bars)

    @property
    def bars(self) -> Sequence[Bar]:
        return self._bars

    @property
    def is_empty(self) -> bool:
        return not self._bars

    def closes(self) -> List[float]:
        return [b.close for b in self._bars]

    def timestamps(self) -> List[datetime]:
        return [b.timestamp for b in self._bars]

    def to_dataframe(self) -> pd.DataFrame:
        """Return the bars as a DataFrame indexed by timestamp."""
        rows: List[Dict[str, Any]] = [
            {
                "timestamp": b.timestamp,
                "open": b.open,
                "high": b.high,
                "low": b.low,
                "close": b.close,
                "volume": b.volume,
            }
            for b in self._bars
        ]
        df = pd.DataFrame(rows, columns=["timestamp", "open", "high", "low", "close", "volume"])
        return df.set_index("timestamp")

    def __repr__(self) -> str:
        if not self._bars:
            return f"PriceSeries(symbol={self.symbol!r}, bars=0)"
        return (
            f"PriceSeries(symbol={self.symbol!r}, bars={len(self._bars)}, "
            f"start={self._bars[0].timestamp}, end={self._bars[-1].timestamp})"
        )
