"""Backtest a batch of saved strategies against one symbol.

A failing strategy never stops the batch: its exception is logged with
a traceback and recorded in ``BatchResult.failures``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from multiprocessing import Pool
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from ..data.series import PriceSeries
from ..engine.loop import BacktestEngine
from ..errors import NoData
from ..strategy.base import Strategy
from ..strategy.parser import parse_saved_strategy

logger = logging.getLogger(__name__)

# loader(symbol, range, interval) -> PriceSeries
SeriesLoader = Callable[[str, str, str], PriceSeries]


@dataclass(frozen=True)
class SavedStrategy:
    """A stored strategy; ``strategy_json`` is the saved rule shape (text or dict)."""
    id: Any
    name: str
    strategy_json: Union[str, Mapping[str, Any]]


@dataclass(frozen=True)
class RunSummary:
    strategy_id: Any
    strategy_name: str
    symbol: str
    range: str
    interval: str
    profit_loss: float
    total_trades: int
    win_rate: float
    ran_at: datetime


@dataclass
class BatchResult:
    summaries: List[RunSummary] = field(default_factory=list)
    failures: Dict[Any, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failures

    def __len__(self) -> int:
        return len(self.summaries) + len(self.failures)

    def summary(self) -> str:
        lines = [
            f"{'='*60}",
            f"  Batch: {len(self.summaries)} ran, {len(self.failures)} failed",
            f"{'='*60}",
        ]
        for s in self.summaries:
            lines.append(
                f"  {s.strategy_name:<24} P/L {s.profit_loss:>10.2f}  "
                f"trades {s.total_trades:>3}  win {s.win_rate:5.1f}%"
            )
        for sid, err in self.failures.items():
            lines.append(f"  FAILED {sid}: {err}")
        lines.append(f"{'='*60}")
        return "\n".join(lines)


def _run_single_strategy(args) -> Tuple[Any, Optional[RunSummary], Optional[str]]:
    """Run one saved strategy. Module-level for multiprocessing pickling."""
    saved, loader, symbol, range_, interval, config = args
    try:
        entry, exit_ = parse_saved_strategy(saved.strategy_json)
        series = loader(symbol, range_, interval)
        if series.is_empty:
            raise NoData(symbol, range_, interval)
        strategy = Strategy.compile(entry, exit_, series, name=saved.name)
        result = BacktestEngine(series, strategy, config=config).run()
    except Exception as exc:
        logger.exception("Backtest failed for strategy %s (%s)", saved.id, saved.name)
        return saved.id, None, f"{type(exc).__name__}: {exc}"

    return saved.id, RunSummary(
        strategy_id=saved.id,
        strategy_name=saved.name,
        symbol=symbol,
        range=range_,
        interval=interval,
        profit_loss=result.profit_loss,
        total_trades=result.total_trades,
        win_rate=result.win_rate,
        ran_at=datetime.now(timezone.utc),
    ), None


class BatchRunner:
    """Backtest every saved strategy and collect one summary per strategy.

    Usage:
        runner = BatchRunner(load_series, symbol="TCS.NS", range="1y", interval="1d")
        batch = runner.run(saved_strategies)
        print(batch.summary())

    Args:
        loader: ``loader(symbol, range, interval) -> PriceSeries``. Must be
            a module-level function when ``n_workers > 1``.
        symbol: Symbol every strategy runs against.
        range: Data range passed to the loader (e.g. "1y").
        interval: Bar interval passed to the loader (e.g. "1d").
        config: Engine config dict shared by all runs.
        n_workers: Parallel worker processes (default 1, sequential).
    """

    def __init__(
        self,
        loader: SeriesLoader,
        symbol: str = "TCS.NS",
        range: str = "1y",
        interval: str = "1d",
        config: Optional[Dict] = None,
        n_workers: int = 1,
    ):
        self.loader = loader
        self.symbol = symbol
        self.range = range
        self.interval = interval
        self.config = config or {}
        self.n_workers = max(1, n_workers)

    def run(self, strategies: Sequence[SavedStrategy]) -> BatchResult:
        logger.info(
            "Running %d strategies on %s (%s, %s)",
            len(strategies), self.symbol, self.range, self.interval,
        )
        worker_args = [
            (s, self.loader, self.symbol, self.range, self.interval, self.config)
            for s in strategies
        ]

        if self.n_workers == 1 or len(worker_args) < 2:
            raw_results = [_run_single_strategy(a) for a in worker_args]
        else:
            with Pool(self.n_workers) as pool:
                raw_results = pool.map(_run_single_strategy, worker_args)

        batch = BatchResult()
        for sid, summary, error in raw_results:
            if summary is not None:
                batch.summaries.append(summary)
            else:
                batch.failures[sid] = error

        logger.info(
            "Batch finished: %d succeeded, %d failed",
            len(batch.summaries), len(batch.failures),
        )
        return batch
