"""Tests for RSI indicator."""

import pytest
import numpy as np
from datetime import datetime, timedelta

from rulebt.data.series import PriceSeries
from rulebt.data.types import Bar
from rulebt.indicators.price import ClosePrice
from rulebt.indicators.rsi import RSI


def make_series(prices):
    return PriceSeries([
        Bar(datetime(2024, 1, 1) + timedelta(days=i),
            p, p + 0.5, p - 0.5, p, 1000)
        for i, p in enumerate(prices)
    ])


def wilder_rsi(prices, period):
    """Reference Wilder RSI computed in one batch."""
    deltas = np.diff(prices)
    gains = np.clip(deltas, 0, None)
    losses = np.clip(-deltas, 0, None)
    out = [None] * len(prices)
    avg_gain = gains[:period].mean()
    avg_loss = losses[:period].mean()
    for i in range(period, len(prices)):
        if i > period:
            avg_gain = (avg_gain * (period - 1) + gains[i - 1]) / period
            avg_loss = (avg_loss * (period - 1) + losses[i - 1]) / period
        out[i] = 100.0 if avg_loss == 0 else 100 - 100 / (1 + avg_gain / avg_loss)
    return out


class TestRSI:
    def test_warmup(self):
        rsi = RSI(ClosePrice(make_series(list(range(100, 114)))), period=14)
        assert all(v is None for v in rsi.values())

    def test_first_value_at_period(self):
        rsi = RSI(ClosePrice(make_series(list(range(100, 116)))), period=14)
        assert rsi.value(13) is None
        assert rsi.value(14) is not None

    def test_all_gains_is_100(self):
        rsi = RSI(ClosePrice(make_series([float(p) for p in range(100, 130)])), period=14)
        assert rsi.value(29) == pytest.approx(100.0)

    def test_all_losses_is_0(self):
        rsi = RSI(ClosePrice(make_series([float(p) for p in range(130, 100, -1)])), period=14)
        assert rsi.value(29) == pytest.approx(0.0)

    def test_flat_reads_100(self):
        rsi = RSI(ClosePrice(make_series([100.0] * 20)), period=14)
        assert rsi.value(19) == pytest.approx(100.0)

    def test_matches_reference(self):
        np.random.seed(3)
        prices = np.cumsum(np.random.randn(80)) + 100
        expected = wilder_rsi(prices, 14)
        rsi = RSI(ClosePrice(make_series(prices.tolist())), period=14)
        for i, v in enumerate(rsi.values()):
            if expected[i] is None:
                assert v is None
            else:
                assert v == pytest.approx(expected[i], abs=1e-8)

    def test_bounded(self):
        np.random.seed(11)
        prices = np.cumsum(np.random.randn(200)) + 100
        rsi = RSI(ClosePrice(make_series(prices.tolist())), period=14)
        for v in rsi.values():
            if v is not None:
                assert 0 <= v <= 100
