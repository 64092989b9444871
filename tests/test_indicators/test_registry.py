"""Tests for the indicator registry, parameter lookup and engine cache."""

import math

import pytest
import numpy as np
from datetime import datetime, timedelta

from rulebt.data.series import PriceSeries
from rulebt.data.types import Bar
from rulebt.errors import UnknownIndicator
from rulebt.indicators import (
    ATR,
    EMA,
    HighestValue,
    Midpoint,
    ROC,
    RSI,
    SMA,
    BollingerLower,
    BollingerUpper,
    ClosePrice,
)
from rulebt.indicators.params import IndicatorParams, IndicatorSpec, normalize_params
from rulebt.indicators.registry import (
    REGISTRY,
    IndicatorEngine,
    available_indicators,
    normalize_name,
)


def make_series(n=60, seed=1):
    rng = np.random.default_rng(seed)
    prices = np.cumsum(rng.normal(0, 1, n)) + 100
    return PriceSeries([
        Bar(datetime(2024, 1, 1) + timedelta(days=i),
            float(p), float(p) + 1.0, float(p) - 1.0, float(p) + 0.2, 1000.0 + 10 * i)
        for i, p in enumerate(prices)
    ], symbol="TEST")


def resolve(engine, name, **params):
    return engine.resolve(IndicatorSpec.of(name, **params))


class TestNames:
    def test_normalize_name(self):
        assert normalize_name(" Bollinger  Bands ") == "BOLLINGERBANDS"
        assert normalize_name("sma") == "SMA"

    def test_whitespace_and_case_insensitive(self):
        engine = IndicatorEngine(make_series())
        ind = resolve(engine, " sma ", period=5)
        assert isinstance(ind, SMA)
        assert ind.period == 5

    def test_unknown_indicator_carries_raw_name(self):
        engine = IndicatorEngine(make_series())
        with pytest.raises(UnknownIndicator) as exc:
            resolve(engine, "Foo Bar")
        assert exc.value.name == "Foo Bar"

    def test_unknown_indicator_is_value_error(self):
        engine = IndicatorEngine(make_series())
        with pytest.raises(ValueError):
            resolve(engine, "NOPE")

    def test_registry_is_immutable(self):
        with pytest.raises(TypeError):
            REGISTRY["NEW"] = REGISTRY["SMA"]

    def test_available_indicators_sorted(self):
        names = available_indicators()
        assert list(names) == sorted(names)
        assert "BOLLINGERBANDS" in names
        assert "ICHIMOKUKIJUNSEN" in names


class TestAliases:
    def test_price_is_close(self):
        engine = IndicatorEngine(make_series())
        assert resolve(engine, "PRICE") is resolve(engine, "close")
        assert isinstance(resolve(engine, "PRICE"), ClosePrice)

    def test_bollinger_aliases_share_instance(self):
        engine = IndicatorEngine(make_series())
        upper = resolve(engine, "BOLLINGERUPPER", period=10, stdDev=2)
        assert resolve(engine, "BOLLINGERBANDS", period=10, stdDev=2) is upper
        assert resolve(engine, "BOLLINGER", period=10, stdDev=2) is upper
        assert resolve(engine, "Bollinger Bands Upper", period=10, stdDev=2) is upper
        assert isinstance(upper, BollingerUpper)

    def test_bollinger_aliases_numerically_identical(self):
        series = make_series()
        values = [
            resolve(IndicatorEngine(series), name, period=20, stdDev=2).values()
            for name in ("BOLLINGERBANDS", "BOLLINGER", "BOLLINGERUPPER")
        ]
        assert values[0] == values[1] == values[2]

    def test_bollinger_lower(self):
        engine = IndicatorEngine(make_series())
        assert isinstance(resolve(engine, "BOLLINGERBANDSLOWER"), BollingerLower)
        assert resolve(engine, "BOLLINGERLOWER") is resolve(engine, "bollingerbandslower")

    def test_bollinger_middle_is_sma(self):
        engine = IndicatorEngine(make_series())
        middle = resolve(engine, "BOLLINGERMIDDLE", period=20)
        assert middle is resolve(engine, "SMA", period=20)

    def test_donchian_upper_is_highest_high(self):
        engine = IndicatorEngine(make_series())
        upper = resolve(engine, "DONCHIAN")
        assert upper is resolve(engine, "HIGHESTHIGH")
        assert isinstance(upper, HighestValue)
        assert upper.period == 20

    def test_ichimoku_lines(self):
        engine = IndicatorEngine(make_series())
        tenkan = resolve(engine, "ICHIMOKU")
        kijun = resolve(engine, "ICHIMOKUKIJUNSEN")
        assert isinstance(tenkan, Midpoint) and tenkan.period == 9
        assert isinstance(kijun, Midpoint) and kijun.period == 26
        assert resolve(engine, "ICHIMOKUTENKANSEN") is tenkan

    def test_momentum_is_roc_14(self):
        engine = IndicatorEngine(make_series())
        mom = resolve(engine, "MOMENTUM")
        assert isinstance(mom, ROC)
        assert mom.period == 14
        assert resolve(engine, "ROC").period == 12


class TestDefaults:
    @pytest.mark.parametrize("name,cls,period", [
        ("SMA", SMA, 50),
        ("SMA50", SMA, 50),
        ("EMA", EMA, 20),
        ("EMA20", EMA, 20),
        ("RSI", RSI, 14),
        ("ATR", ATR, 14),
        ("AVERAGETRUERANGE", ATR, 14),
    ])
    def test_default_periods(self, name, cls, period):
        engine = IndicatorEngine(make_series())
        ind = resolve(engine, name)
        assert isinstance(ind, cls)
        assert ind.period == period


class TestParams:
    def test_case_insensitive_lookup(self):
        engine = IndicatorEngine(make_series())
        assert resolve(engine, "SMA", PERIOD="7").period == 7

    @pytest.mark.parametrize("raw", ["abc", "0", "-5", "3.5", ""])
    def test_bad_int_falls_back(self, raw):
        engine = IndicatorEngine(make_series())
        assert resolve(engine, "SMA", period=raw).period == 50

    @pytest.mark.parametrize("raw", ["nan", "inf", "x", "-1"])
    def test_bad_float_falls_back(self, raw):
        params = IndicatorParams(normalize_params({"stdDev": raw}))
        assert params.get_float("stddev", 2.0) == 2.0

    def test_first_occurrence_wins(self):
        params = IndicatorParams(normalize_params([
            {"name": "period", "value": "7"},
            {"name": "Period", "value": "9"},
        ]))
        assert params.get_int("period", 14) == 7

    def test_list_and_mapping_params_equivalent(self):
        a = IndicatorSpec.of("RSI", [{"name": "period", "value": 10}])
        b = IndicatorSpec.of("RSI", {"period": 10})
        assert a == b
        assert a.params == (("period", "10"),)

    def test_nameless_entries_skipped(self):
        assert normalize_params([{"value": "3"}, {"name": "period", "value": None}]) == (("period", ""),)

    def test_malformed_entries_skipped(self):
        raw = [None, "period", 7, ("a", "b", "c"), ("period", 9)]
        assert normalize_params(raw) == (("period", "9"),)
        assert normalize_params("period") == ()
        assert normalize_params(5) == ()

    def test_malformed_entries_fall_back_to_defaults(self):
        series = make_series()
        engine = IndicatorEngine(series)
        sma = engine.resolve(IndicatorSpec("SMA", normalize_params([None, "period"])))
        assert sma.period == 50

    def test_spec_str(self):
        assert str(IndicatorSpec.of("SMA", period=5)) == "SMA(period=5)"
        assert str(IndicatorSpec("CLOSE")) == "CLOSE"


class TestEngineCache:
    def test_same_spec_same_instance(self):
        engine = IndicatorEngine(make_series())
        a = resolve(engine, "RSI", period=9)
        size = len(engine)
        b = resolve(engine, "rsi", period="9")
        assert a is b
        assert len(engine) == size

    def test_components_are_shared(self):
        engine = IndicatorEngine(make_series())
        macd = resolve(engine, "MACD", fast=12, slow=26)
        assert macd.fast is resolve(engine, "EMA", period=12)
        assert macd.slow is resolve(engine, "EMA", period=26)

    def test_macd_signal_reuses_macd(self):
        engine = IndicatorEngine(make_series())
        macd = resolve(engine, "MACD")
        signal = resolve(engine, "MACDSIGNAL")
        hist = resolve(engine, "MACDHISTOGRAM")
        assert signal.macd is macd
        assert hist.signal is signal

    def test_stochastic_d_smooths_k(self):
        engine = IndicatorEngine(make_series())
        k = resolve(engine, "STOCHASTICK")
        d = resolve(engine, "STOCHASTICD")
        assert d.source is k
        assert d.period == 3
        assert resolve(engine, "STOCHASTICOSCILLATOR") is k

    def test_separate_engines_do_not_share(self):
        series = make_series()
        a = resolve(IndicatorEngine(series), "SMA", period=5)
        b = resolve(IndicatorEngine(series), "SMA", period=5)
        assert a is not b
        assert a.values() == b.values()


class TestEveryIndicator:
    @pytest.mark.parametrize("name", sorted(REGISTRY))
    def test_resolves_and_computes(self, name):
        series = make_series(n=80)
        ind = IndicatorEngine(series).resolve(IndicatorSpec(name))
        values = ind.values()
        assert len(values) == len(series)
        defined = [v for v in values if v is not None]
        assert defined, f"{name} never produced a value"
        assert all(math.isfinite(v) for v in defined)
