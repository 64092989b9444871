"""Backtest results and metrics."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..data.series import PriceSeries
from ..data.types import Position, TradeType
from .equity import MARK_TO_MARKET, build_equity_curve, max_drawdown_pct, sharpe_ratio

_MONTHS = ("JAN", "FEB", "MAR", "APR", "MAY", "JUN", "JUL", "AUG", "SEP", "OCT", "NOV", "DEC")


def format_day(ts: datetime) -> str:
    """'MON D' label, e.g. ``JAN 5``. Independent of the process locale."""
    return f"{_MONTHS[ts.month - 1]} {ts.day}"


def _iso(ts: datetime) -> str:
    return ts.isoformat()


@dataclass(frozen=True)
class TradeResult:
    """One closed long trade."""
    entry_index: int
    entry_date: datetime
    entry_price: float
    exit_index: int
    exit_date: datetime
    exit_price: float
    profit: float
    return_pct: float
    type: TradeType = TradeType.BUY

    @property
    def is_winner(self) -> bool:
        return self.profit > 0

    @classmethod
    def from_position(cls, pos: Position, series: PriceSeries) -> "TradeResult":
        profit = pos.profit
        return cls(
            entry_index=pos.entry_index,
            entry_date=series[pos.entry_index].timestamp,
            entry_price=pos.entry_price,
            exit_index=pos.exit_index,
            exit_date=series[pos.exit_index].timestamp,
            exit_price=pos.exit_price,
            profit=profit,
            return_pct=profit / pos.entry_price * 100 if pos.entry_price != 0 else 0.0,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "entryDate": _iso(self.entry_date),
            "entryPrice": self.entry_price,
            "exitDate": _iso(self.exit_date),
            "exitPrice": self.exit_price,
            "profit": self.profit,
            "return": f"{self.return_pct:.2f}",
        }


@dataclass(frozen=True)
class EquityPoint:
    day: int
    value: float
    timestamp: datetime

    @property
    def date(self) -> str:
        return format_day(self.timestamp)

    def to_dict(self) -> Dict[str, Any]:
        return {"day": self.day, "value": self.value, "date": self.date}


@dataclass(frozen=True)
class BacktestResult:
    """Complete backtest results. Immutable once built.

    Statistics cover closed trades only. A position still open at the
    end of the series is kept in ``open_position`` for reference.
    """
    symbol: str = ""
    initial_capital: float = 100_000.0
    final_capital: float = 100_000.0
    profit_loss: float = 0.0
    total_trades: int = 0
    winning_trades: int = 0
    losing_trades: int = 0
    win_rate: float = 0.0
    max_drawdown: float = 0.0
    sharpe_ratio: float = 0.0
    trades: List[TradeResult] = field(default_factory=list)
    equity_curve: List[EquityPoint] = field(default_factory=list)
    open_position: Optional[Position] = None

    @classmethod
    def from_record(
        cls,
        record,
        series: PriceSeries,
        config: Optional[Dict] = None,
        symbol: Optional[str] = None,
    ) -> "BacktestResult":
        """Build results from a TradingRecord.

        ``symbol`` overrides the series symbol when given.

        Reads ``initial_capital``, ``periods_per_year``, ``risk_free_rate``,
        ``equity_mode``, ``equity_noise`` and ``seed`` from ``config``.
        """
        config = config or {}
        capital = float(config.get("initial_capital", 100_000.0))

        positions = record.positions
        trades = [TradeResult.from_position(p, series) for p in positions]
        total = len(trades)
        n_win = sum(1 for t in trades if t.is_winner)
        profit_loss = sum(t.profit for t in trades)

        curve = build_equity_curve(
            series.closes(),
            positions,
            initial_capital=capital,
            mode=config.get("equity_mode", MARK_TO_MARKET),
            noise=float(config.get("equity_noise", 0.0)),
            seed=config.get("seed"),
        )
        timestamps = series.timestamps()
        equity = [
            EquityPoint(day=i + 1, value=float(v), timestamp=timestamps[i])
            for i, v in enumerate(curve)
        ]

        return cls(
            symbol=symbol or series.symbol,
            initial_capital=capital,
            final_capital=capital + profit_loss,
            profit_loss=profit_loss,
            total_trades=total,
            winning_trades=n_win,
            losing_trades=total - n_win,
            win_rate=n_win / total * 100 if total else 0.0,
            max_drawdown=max_drawdown_pct(curve),
            sharpe_ratio=sharpe_ratio(
                curve,
                periods_per_year=config.get("periods_per_year", 252),
                risk_free_rate=config.get("risk_free_rate", 0.0),
            ),
            trades=trades,
            equity_curve=equity,
            open_position=record.current,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Wire shape with camelCase keys."""
        return {
            "profitLoss": self.profit_loss,
            "totalTrades": self.total_trades,
            "winningTrades": self.winning_trades,
            "losingTrades": self.losing_trades,
            "winRate": self.win_rate,
            "maxDrawdown": self.max_drawdown,
            "sharpeRatio": self.sharpe_ratio,
            "equityCurve": [p.to_dict() for p in self.equity_curve],
            "trades": [t.to_dict() for t in self.trades],
        }

    def summary(self) -> str:
        """Return formatted summary string."""
        lines = [
            f"{'='*60}",
            f"  Backtest Results: {self.symbol or 'N/A'}",
            f"{'='*60}",
            f"  Profit/Loss:      {self.profit_loss:,.2f} per unit",
            f"  Total Trades:     {self.total_trades}",
            f"  Winning / Losing: {self.winning_trades} / {self.losing_trades}",
            f"  Win Rate:         {self.win_rate:.1f}%",
            f"  Max Drawdown:     {self.max_drawdown:.2f}%",
            f"  Sharpe Ratio:     {self.sharpe_ratio:.2f}",
            f"  Initial Capital:  {self.initial_capital:,.2f}",
            f"  Final Capital:    {self.final_capital:,.2f}",
        ]

        if self.open_position is not None:
            lines.append(f"  {'─'*56}")
            lines.append(
                f"  Open position:    entered bar {self.open_position.entry_index} "
                f"@ {self.open_position.entry_price:,.2f} (not counted)"
            )

        if self.trades:
            lines.append(f"  {'─'*56}")
            lines.append(f"  {'Entry':<12}{'Exit':<12}{'Entry $':>10}{'Exit $':>10}{'Return':>10}")
            for t in self.trades:
                lines.append(
                    f"  {format_day(t.entry_date):<12}{format_day(t.exit_date):<12}"
                    f"{t.entry_price:>10.2f}{t.exit_price:>10.2f}{t.return_pct:>9.2f}%"
                )

        lines.append(f"{'='*60}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"BacktestResult(trades={self.total_trades}, "
            f"pl={self.profit_loss:+.2f}, "
            f"wr={self.win_rate:.0f}%, "
            f"dd={self.max_drawdown:.1f}%)"
        )
