from .loop import BacktestEngine, run_backtest
from .record import TradingRecord

__all__ = [
    "BacktestEngine",
    "run_backtest",
    "TradingRecord",
]
