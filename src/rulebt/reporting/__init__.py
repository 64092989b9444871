from .metrics import BacktestResult, EquityPoint, TradeResult, format_day
from .equity import build_equity_curve, max_drawdown_pct, sharpe_ratio

__all__ = [
    "BacktestResult",
    "EquityPoint",
    "TradeResult",
    "format_day",
    "build_equity_curve",
    "max_drawdown_pct",
    "sharpe_ratio",
]
