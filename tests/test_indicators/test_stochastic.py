"""Tests for Stochastic %K."""

import pytest
from datetime import datetime, timedelta

from rulebt.data.series import PriceSeries
from rulebt.data.types import Bar
from rulebt.indicators.price import HighPrice, LowPrice
from rulebt.indicators.statistics import HighestValue, LowestValue
from rulebt.indicators.stochastic import StochasticK


def make_series(prices):
    return PriceSeries([
        Bar(datetime(2024, 1, 1) + timedelta(days=i),
            p, p + 0.5, p - 0.5, p, 1000)
        for i, p in enumerate(prices)
    ])


def make_k(series, period=14):
    return StochasticK(
        HighestValue(HighPrice(series), period),
        LowestValue(LowPrice(series), period),
    )


class TestStochasticK:
    def test_warmup(self):
        k = make_k(make_series([float(p) for p in range(1, 14)]))
        assert all(v is None for v in k.values())

    def test_known_value(self):
        # Closes 1..14: HH = 14.5, LL = 0.5, close = 14
        k = make_k(make_series([float(p) for p in range(1, 15)]))
        assert k.value(13) == pytest.approx((14 - 0.5) / 14 * 100)

    def test_close_at_low(self):
        k = make_k(make_series([float(p) for p in range(20, 0, -1)]), period=5)
        # Close 1, LL 0.5, HH 5.5
        assert k.value(19) == pytest.approx(0.5 / 5.0 * 100)

    def test_bounded(self):
        prices = [100, 103, 99, 104, 98, 105, 97, 106, 96, 107, 95, 108, 94, 109, 93, 110]
        k = make_k(make_series([float(p) for p in prices]), period=5)
        for v in k.values():
            if v is not None:
                assert 0 <= v <= 100
