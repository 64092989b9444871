"""BacktestEngine: the bar-by-bar simulation loop.

Two states, FLAT and IN_POSITION, starting FLAT. Per bar i:

  FLAT and entry(i)        -> open one unit at close(i)
  IN_POSITION and exit(i)  -> close at close(i)

Only one branch runs per bar, so a bar never both opens and closes a
position and a close never re-tests entry on the same bar. A position
still open after the last bar is not force-closed: it is reported as
``open_position`` and left out of the statistics.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional

from ..data.series import PriceSeries
from ..errors import NoData
from ..indicators.registry import IndicatorEngine
from ..reporting.equity import check_equity_mode
from ..reporting.metrics import BacktestResult
from ..strategy.base import Strategy
from ..strategy.parser import BacktestRequest
from .record import TradingRecord

logger = logging.getLogger(__name__)


class BacktestEngine:
    """Run a compiled Strategy over a PriceSeries.

    Args:
        series: Price bars, oldest first.
        strategy: Strategy with compiled entry/exit rules.
        config: Engine configuration dict.
        symbol: Symbol reported in the result (defaults to the series symbol).

    Config keys:
        initial_capital: Starting capital for the equity curve (default 100000).
        periods_per_year: Bars per year for the Sharpe ratio (default 252).
        risk_free_rate: Annual risk-free rate for the Sharpe ratio (default 0.0).
        equity_mode: "mark_to_market" (default) or "linear".
        equity_noise: Width of uniform noise added to the equity curve
            (default 0.0, i.e. none).
        seed: Seed for the noise generator (default None).
    """

    def __init__(
        self,
        series: PriceSeries,
        strategy: Strategy,
        config: Optional[Dict] = None,
        symbol: Optional[str] = None,
    ):
        self.series = series
        self.strategy = strategy
        self.config = config or {}
        self.symbol = symbol or series.symbol
        check_equity_mode(self.config.get("equity_mode", "mark_to_market"))

        self.record = TradingRecord()

        # Event callbacks
        self._callbacks: Dict[str, List[Callable]] = {
            "bar": [],
            "entry": [],
            "exit": [],
        }

    def on(self, event: str, callback: Callable) -> "BacktestEngine":
        """Register an event callback.

        Events:
            'bar': callback(index, bar) after each bar is processed.
            'entry': callback(position) when a position opens.
            'exit': callback(position) when a position closes.
        """
        if event in self._callbacks:
            self._callbacks[event].append(callback)
        return self

    def _emit(self, event: str, *args) -> None:
        for cb in self._callbacks.get(event, []):
            cb(*args)

    def run(self) -> BacktestResult:
        """Execute the backtest. Returns results with all metrics.

        Raises:
            NoData: if the series is empty.
        """
        if self.series.is_empty:
            raise NoData(self.symbol)

        self.record = TradingRecord()
        for i, bar in enumerate(self.series):
            self._process_bar(i, bar)

        if not self.record.is_flat:
            logger.debug(
                "Position opened at bar %d still open at end of series",
                self.record.current.entry_index,
            )

        return BacktestResult.from_record(
            self.record,
            self.series,
            config=self.config,
            symbol=self.symbol,
        )

    def _process_bar(self, i: int, bar) -> None:
        if self.record.is_flat:
            if self.strategy.should_enter(i):
                pos = self.record.enter(i, bar.close)
                logger.debug("Entry at bar %d @ %.4f", i, bar.close)
                self._emit("entry", pos)
        elif self.strategy.should_exit(i):
            pos = self.record.exit(i, bar.close)
            logger.debug("Exit at bar %d @ %.4f (profit %.4f)", i, bar.close, pos.profit)
            self._emit("exit", pos)

        self._emit("bar", i, bar)


def run_backtest(
    request: BacktestRequest,
    series: PriceSeries,
    config: Optional[Dict] = None,
) -> BacktestResult:
    """Compile ``request`` against ``series`` and simulate it.

    The empty-series check happens before compilation, so a request for
    a symbol with no data fails with NoData even if its rules are bad.
    """
    if series.is_empty:
        raise NoData(request.symbol, request.range, request.interval)

    indicators = IndicatorEngine(series)
    strategy = Strategy.compile(request.entry, request.exit, series, engine=indicators)
    logger.debug("Compiled strategy with %d indicator instances", len(indicators))
    engine = BacktestEngine(
        series, strategy, config=config, symbol=series.symbol or request.symbol,
    )
    return engine.run()
