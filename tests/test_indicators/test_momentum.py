"""Tests for ROC, CCI, Williams %R and Difference."""

import pytest
from datetime import datetime, timedelta

from rulebt.data.series import PriceSeries
from rulebt.data.types import Bar
from rulebt.indicators.momentum import CCI, ROC, Difference, WilliamsR
from rulebt.indicators.price import ClosePrice, HighPrice, LowPrice, TypicalPrice
from rulebt.indicators.sma import SMA
from rulebt.indicators.statistics import HighestValue, LowestValue


def make_series(prices):
    return PriceSeries([
        Bar(datetime(2024, 1, 1) + timedelta(days=i),
            p, p + 0.5, p - 0.5, p, 1000)
        for i, p in enumerate(prices)
    ])


class TestROC:
    def test_known_value(self):
        roc = ROC(ClosePrice(make_series([100.0, 105.0, 110.0])), period=2)
        assert roc.value(1) is None
        assert roc.value(2) == pytest.approx(10.0)

    def test_negative(self):
        roc = ROC(ClosePrice(make_series([100.0, 90.0])), period=1)
        assert roc.value(1) == pytest.approx(-10.0)


class TestCCI:
    def make(self, prices, period):
        series = make_series(prices)
        tp = TypicalPrice(series)
        return CCI(tp, SMA(tp, period))

    def test_flat_is_zero(self):
        cci = self.make([50.0] * 25, 20)
        assert cci.value(24) == pytest.approx(0.0)

    def test_known_value(self):
        # TP equals close here: window 1, 2, 3 → mean 2, mean dev 2/3
        cci = self.make([1.0, 2.0, 3.0], 3)
        assert cci.value(2) == pytest.approx((3 - 2) / (0.015 * (2 / 3)))


class TestWilliamsR:
    def make(self, prices, period):
        series = make_series(prices)
        return WilliamsR(HighestValue(HighPrice(series), period), LowestValue(LowPrice(series), period))

    def test_close_near_high(self):
        wr = self.make([1.0, 2.0, 3.0], 3)
        # HH 3.5, LL 0.5, close 3
        assert wr.value(2) == pytest.approx((3.5 - 3.0) / 3.0 * -100)

    def test_range(self):
        wr = self.make([5.0, 3.0, 8.0, 1.0, 6.0, 2.0, 9.0], 3)
        for v in wr.values():
            if v is not None:
                assert -100 <= v <= 0


class TestDifference:
    def test_undefined_until_both_sides(self):
        series = make_series([1.0, 2.0, 3.0, 4.0])
        close = ClosePrice(series)
        diff = Difference(SMA(close, 1), SMA(close, 3), "AO")
        assert diff.value(1) is None
        assert diff.value(3) == pytest.approx(4.0 - 3.0)
        assert diff.name.startswith("AO(")
