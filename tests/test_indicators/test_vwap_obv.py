"""Tests for VWAP, OBV and ADL."""

import pytest
from datetime import datetime, timedelta

from rulebt.data.series import PriceSeries
from rulebt.data.types import Bar
from rulebt.indicators.obv import ADL, OBV
from rulebt.indicators.price import TypicalPrice, Volume
from rulebt.indicators.vwap import VWAP


def make_series(prices, volumes=None):
    volumes = volumes or [1000] * len(prices)
    return PriceSeries([
        Bar(datetime(2024, 1, 1) + timedelta(days=i),
            p, p + 0.5, p - 0.5, p, v)
        for i, (p, v) in enumerate(zip(prices, volumes))
    ])


class TestVWAP:
    def test_equal_volume_is_mean_typical(self):
        series = make_series([10.0, 11.0, 12.0, 13.0])
        vwap = VWAP(TypicalPrice(series), Volume(series), period=3)
        assert vwap.value(1) is None
        assert vwap.value(2) == pytest.approx(11.0)
        assert vwap.value(3) == pytest.approx(12.0)

    def test_volume_weighting(self):
        series = make_series([10.0, 20.0], volumes=[3000, 1000])
        vwap = VWAP(TypicalPrice(series), Volume(series), period=2)
        assert vwap.value(1) == pytest.approx((10 * 3000 + 20 * 1000) / 4000)

    def test_no_volume_is_undefined(self):
        series = make_series([10.0, 11.0, 12.0], volumes=[None, None, None])
        vwap = VWAP(TypicalPrice(series), Volume(series), period=2)
        assert vwap.values() == [None, None, None]


class TestOBV:
    def test_accumulates_by_direction(self):
        series = make_series([10.0, 11.0, 10.5, 10.5, 12.0])
        obv = OBV(Volume(series))
        assert obv.values() == [0.0, 1000.0, 0.0, 0.0, 1000.0]

    def test_missing_volume_counts_as_zero(self):
        series = make_series([10.0, 11.0, 12.0], volumes=[1000, None, 500])
        obv = OBV(Volume(series))
        assert obv.value(2) == pytest.approx(500.0)


class TestADL:
    def test_close_at_high_adds_full_volume(self):
        bars = [
            Bar(datetime(2024, 1, 1), 10, 12, 10, 12, 1000),
            Bar(datetime(2024, 1, 2), 12, 13, 11, 11, 500),
        ]
        adl = ADL(Volume(PriceSeries(bars)))
        assert adl.value(0) == pytest.approx(1000.0)
        assert adl.value(1) == pytest.approx(500.0)
