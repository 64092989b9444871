"""Equity curve, drawdown and Sharpe ratio.

All functions are pure numpy and deterministic unless noise is
requested, in which case the caller supplies the seed.
"""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from ..data.types import Position

MARK_TO_MARKET = "mark_to_market"
LINEAR = "linear"
EQUITY_MODES = (MARK_TO_MARKET, LINEAR)


def check_equity_mode(mode: str) -> str:
    if mode not in EQUITY_MODES:
        raise ValueError(f"Unknown equity_mode {mode!r}; expected one of {EQUITY_MODES}")
    return mode


def build_equity_curve(
    closes: Sequence[float],
    positions: Sequence[Position],
    initial_capital: float = 100_000.0,
    mode: str = MARK_TO_MARKET,
    noise: float = 0.0,
    seed: Optional[int] = None,
) -> np.ndarray:
    """One equity value per bar.

    mark_to_market: capital plus realised P&L, with each closed trade
        marked to the close on every bar it was held (entry+1 .. exit).
    linear: capital plus total P&L spread evenly, ``pl * (i+1) / N``.

    Without noise the last value is ``initial_capital + sum(profits)`` in
    both modes. ``noise`` adds uniform noise in ``[-noise/2, noise/2)``
    drawn from ``numpy.random.default_rng(seed)``.
    """
    check_equity_mode(mode)
    closes = np.asarray(closes, dtype=float)
    n = len(closes)
    if n == 0:
        return np.empty(0)

    closed = [p for p in positions if p.is_closed]

    if mode == LINEAR:
        total = sum(p.profit for p in closed)
        curve = initial_capital + total * np.arange(1, n + 1) / n
    else:
        held = np.zeros(n, dtype=bool)
        for p in closed:
            held[p.entry_index + 1:p.exit_index + 1] = True
        step = np.zeros(n)
        step[1:] = np.diff(closes)
        curve = initial_capital + np.cumsum(np.where(held, step, 0.0))

    if noise > 0:
        rng = np.random.default_rng(seed)
        curve = curve + rng.uniform(-noise / 2, noise / 2, size=n)
    return curve


def max_drawdown_pct(curve: Sequence[float]) -> float:
    """Largest peak-to-trough decline, in percent (0-100 scale)."""
    curve = np.asarray(curve, dtype=float)
    if curve.size == 0:
        return 0.0
    running_peak = np.maximum.accumulate(curve)
    drawdowns = (running_peak - curve) / np.where(running_peak > 0, running_peak, 1.0)
    return float(np.max(drawdowns) * 100)


def sharpe_ratio(
    curve: Sequence[float],
    periods_per_year: float = 252,
    risk_free_rate: float = 0.0,
) -> float:
    """Annualised Sharpe ratio of per-bar simple returns.

    ``(mean - rf / ppy) / std * sqrt(ppy)`` with sample std (ddof=1).
    Returns 0.0 with fewer than two returns or zero volatility.
    """
    curve = np.asarray(curve, dtype=float)
    if curve.size < 3:
        return 0.0

    prev = curve[:-1]
    valid = prev > 0
    returns = np.diff(curve)[valid] / prev[valid]
    if returns.size < 2:
        return 0.0

    std = float(np.std(returns, ddof=1))
    if std == 0 or not np.isfinite(std):
        return 0.0

    excess = float(np.mean(returns)) - risk_free_rate / periods_per_year
    return excess / std * float(np.sqrt(periods_per_year))
