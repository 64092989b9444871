"""Indicator registry and the per-series IndicatorEngine.

The registry is a table from normalised name to a factory. It is built
once at import and never mutated; aliases are extra keys pointing at the
same factory. Factories build indicators through ``IndicatorEngine.shared``
so every (class, arguments) identity exists once per series, whether it is
referenced directly in a rule tree or as a component of a composite.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Tuple, Type, TypeVar

from ..data.series import PriceSeries
from ..errors import UnknownIndicator
from .adx import ADX, MinusDI, PlusDI
from .atr import ATR, TrueRange
from .base import Indicator
from .bollinger import BollingerLower, BollingerUpper
from .donchian import Midpoint
from .ema import EMA
from .fisher import Fisher
from .keltner import KeltnerLower, KeltnerUpper
from .macd import MACD, MACDHistogram, MACDSignal
from .momentum import CCI, ROC, Difference, WilliamsR
from .obv import ADL, OBV
from .params import IndicatorParams, IndicatorSpec
from .price import ClosePrice, HighPrice, LowPrice, MedianPrice, OpenPrice, TypicalPrice, Volume
from .rsi import RSI
from .sar import ParabolicSAR
from .sma import SMA
from .statistics import HighestValue, LowestValue, StandardDeviation
from .stochastic import StochasticK
from .supertrend import SuperTrend
from .vwap import VWAP
from .wma import HMA, WMA, HullRaw

logger = logging.getLogger(__name__)

I = TypeVar("I", bound=Indicator)

Factory = Callable[["IndicatorEngine", IndicatorParams], Indicator]


def normalize_name(name: str) -> str:
    """Strip all whitespace and upper-case: ' Bollinger Bands ' -> 'BOLLINGERBANDS'."""
    return "".join(name.split()).upper()


class IndicatorEngine:
    """Resolves indicator specs against one PriceSeries, caching instances.

    One engine per series and compilation pass; never share an engine
    across runs over different series.

    Usage:
        engine = IndicatorEngine(series)
        sma = engine.resolve(IndicatorSpec.of("SMA", period=20))
        sma.value(25)
    """

    def __init__(self, series: PriceSeries, registry: Mapping[str, Factory] = None):
        self.series = series
        self._registry = registry if registry is not None else REGISTRY
        self._cache: Dict[Tuple[Any, ...], Indicator] = {}

    def resolve(self, spec: IndicatorSpec) -> Indicator:
        """Return the indicator for ``spec`` (cached per identity).

        Raises:
            UnknownIndicator: if the name is not registered.
        """
        if spec.name is None:
            raise UnknownIndicator(spec.name)
        factory = self._registry.get(normalize_name(spec.name))
        if factory is None:
            raise UnknownIndicator(spec.name)
        return factory(self, IndicatorParams(spec.params))

    def shared(self, cls: Type[I], *args: Any) -> I:
        """Return the cached ``cls(*args)`` or build and cache it."""
        key = (cls,) + args
        ind = self._cache.get(key)
        if ind is None:
            ind = cls(*args)
            self._cache[key] = ind
        return ind

    def __len__(self) -> int:
        return len(self._cache)

    # ── Building blocks used by the factories ──────────────────────

    def close(self) -> ClosePrice:
        return self.shared(ClosePrice, self.series)

    def high(self) -> HighPrice:
        return self.shared(HighPrice, self.series)

    def low(self) -> LowPrice:
        return self.shared(LowPrice, self.series)

    def volume(self) -> Volume:
        return self.shared(Volume, self.series)

    def median(self) -> MedianPrice:
        return self.shared(MedianPrice, self.series)

    def typical(self) -> TypicalPrice:
        return self.shared(TypicalPrice, self.series)

    def sma(self, source: Indicator, period: int) -> SMA:
        return self.shared(SMA, source, period)

    def ema(self, source: Indicator, period: int) -> EMA:
        return self.shared(EMA, source, period)

    def wma(self, source: Indicator, period: int) -> WMA:
        return self.shared(WMA, source, period)

    def atr(self, period: int) -> ATR:
        return self.shared(ATR, self.shared(TrueRange, self.series), period)

    def highest(self, source: Indicator, period: int) -> HighestValue:
        return self.shared(HighestValue, source, period)

    def lowest(self, source: Indicator, period: int) -> LowestValue:
        return self.shared(LowestValue, source, period)

    def stddev(self, source: Indicator, period: int) -> StandardDeviation:
        return self.shared(StandardDeviation, source, period)

    def macd(self, fast: int, slow: int) -> MACD:
        close = self.close()
        return self.shared(MACD, self.ema(close, fast), self.ema(close, slow))


# ── Factories ───────────────────────────────────────────────────────────


def _close(e: IndicatorEngine, p: IndicatorParams) -> Indicator:
    return e.close()


def _open(e: IndicatorEngine, p: IndicatorParams) -> Indicator:
    return e.shared(OpenPrice, e.series)


def _high(e: IndicatorEngine, p: IndicatorParams) -> Indicator:
    return e.high()


def _low(e: IndicatorEngine, p: IndicatorParams) -> Indicator:
    return e.low()


def _volume(e: IndicatorEngine, p: IndicatorParams) -> Indicator:
    return e.volume()


def _sma(e: IndicatorEngine, p: IndicatorParams) -> Indicator:
    return e.sma(e.close(), p.get_int("period", 50))


def _ema(e: IndicatorEngine, p: IndicatorParams) -> Indicator:
    return e.ema(e.close(), p.get_int("period", 20))


def _wma(e: IndicatorEngine, p: IndicatorParams) -> Indicator:
    return e.wma(e.close(), p.get_int("period", 20))


def _hma(e: IndicatorEngine, p: IndicatorParams) -> Indicator:
    period = p.get_int("period", 20)
    half, full = HMA.components(period)
    raw = e.shared(HullRaw, e.wma(e.close(), half), e.wma(e.close(), full))
    return e.shared(HMA, raw, period)


def _rsi(e: IndicatorEngine, p: IndicatorParams) -> Indicator:
    return e.shared(RSI, e.close(), p.get_int("period", 14))


def _macd(e: IndicatorEngine, p: IndicatorParams) -> Indicator:
    return e.macd(p.get_int("fast", 12), p.get_int("slow", 26))


def _macd_signal(e: IndicatorEngine, p: IndicatorParams) -> MACDSignal:
    return e.shared(MACDSignal, _macd(e, p), p.get_int("signal", 9))


def _macd_histogram(e: IndicatorEngine, p: IndicatorParams) -> Indicator:
    signal = _macd_signal(e, p)
    return e.shared(MACDHistogram, signal.macd, signal)


def _stochastic_k(e: IndicatorEngine, p: IndicatorParams) -> Indicator:
    k = p.get_int("kPeriod", 14)
    return e.shared(StochasticK, e.highest(e.high(), k), e.lowest(e.low(), k))


def _stochastic_d(e: IndicatorEngine, p: IndicatorParams) -> Indicator:
    return e.sma(_stochastic_k(e, p), p.get_int("dPeriod", 3))


def _roc(e: IndicatorEngine, p: IndicatorParams) -> Indicator:
    return e.shared(ROC, e.close(), p.get_int("period", 12))


def _momentum(e: IndicatorEngine, p: IndicatorParams) -> Indicator:
    return e.shared(ROC, e.close(), p.get_int("period", 14))


def _cci(e: IndicatorEngine, p: IndicatorParams) -> Indicator:
    period = p.get_int("period", 20)
    return e.shared(CCI, e.typical(), e.sma(e.typical(), period))


def _williams_r(e: IndicatorEngine, p: IndicatorParams) -> Indicator:
    period = p.get_int("period", 14)
    return e.shared(WilliamsR, e.highest(e.high(), period), e.lowest(e.low(), period))


def _awesome(e: IndicatorEngine, p: IndicatorParams) -> Indicator:
    return e.shared(Difference, e.sma(e.median(), 5), e.sma(e.median(), 34), "AO")


def _plus_di(e: IndicatorEngine, p: IndicatorParams) -> PlusDI:
    return e.shared(PlusDI, e.atr(p.get_int("period", 14)))


def _minus_di(e: IndicatorEngine, p: IndicatorParams) -> MinusDI:
    return e.shared(MinusDI, e.atr(p.get_int("period", 14)))


def _adx(e: IndicatorEngine, p: IndicatorParams) -> Indicator:
    return e.shared(ADX, _plus_di(e, p), _minus_di(e, p))


def _atr(e: IndicatorEngine, p: IndicatorParams) -> Indicator:
    return e.atr(p.get_int("period", 14))


def _tr(e: IndicatorEngine, p: IndicatorParams) -> Indicator:
    return e.shared(TrueRange, e.series)


def _stddev(e: IndicatorEngine, p: IndicatorParams) -> Indicator:
    return e.stddev(e.close(), p.get_int("period", 20))


def _obv(e: IndicatorEngine, p: IndicatorParams) -> Indicator:
    return e.shared(OBV, e.volume())


def _vwap(e: IndicatorEngine, p: IndicatorParams) -> Indicator:
    return e.shared(VWAP, e.typical(), e.volume(), p.get_int("period", 14))


def _adl(e: IndicatorEngine, p: IndicatorParams) -> Indicator:
    return e.shared(ADL, e.volume())


def _bollinger_parts(e: IndicatorEngine, p: IndicatorParams):
    period = p.get_int("period", 20)
    k = p.get_float("stdDev", 2.0)
    return e.sma(e.close(), period), e.stddev(e.close(), period), k


def _bollinger_upper(e: IndicatorEngine, p: IndicatorParams) -> Indicator:
    return e.shared(BollingerUpper, *_bollinger_parts(e, p))


def _bollinger_lower(e: IndicatorEngine, p: IndicatorParams) -> Indicator:
    return e.shared(BollingerLower, *_bollinger_parts(e, p))


def _bollinger_middle(e: IndicatorEngine, p: IndicatorParams) -> Indicator:
    return e.sma(e.close(), p.get_int("period", 20))


def _keltner_middle(e: IndicatorEngine, p: IndicatorParams) -> EMA:
    return e.ema(e.typical(), p.get_int("period", 20))


def _keltner_upper(e: IndicatorEngine, p: IndicatorParams) -> Indicator:
    return e.shared(
        KeltnerUpper, _keltner_middle(e, p), e.atr(p.get_int("atr", 10)), p.get_float("multiplier", 2.0),
    )


def _keltner_lower(e: IndicatorEngine, p: IndicatorParams) -> Indicator:
    return e.shared(
        KeltnerLower, _keltner_middle(e, p), e.atr(p.get_int("atr", 10)), p.get_float("multiplier", 2.0),
    )


def _highest_high(e: IndicatorEngine, p: IndicatorParams) -> Indicator:
    return e.highest(e.high(), p.get_int("period", 20))


def _lowest_low(e: IndicatorEngine, p: IndicatorParams) -> Indicator:
    return e.lowest(e.low(), p.get_int("period", 20))


def _donchian_middle(e: IndicatorEngine, p: IndicatorParams) -> Indicator:
    period = p.get_int("period", 20)
    return e.shared(Midpoint, e.highest(e.high(), period), e.lowest(e.low(), period), "DONCHIAN")


def _ichimoku_line(period: int, e: IndicatorEngine) -> Indicator:
    return e.shared(Midpoint, e.highest(e.high(), period), e.lowest(e.low(), period), "ICHIMOKU")


def _ichimoku_tenkan(e: IndicatorEngine, p: IndicatorParams) -> Indicator:
    return _ichimoku_line(p.get_int("tenkan", 9), e)


def _ichimoku_kijun(e: IndicatorEngine, p: IndicatorParams) -> Indicator:
    return _ichimoku_line(p.get_int("kijun", 26), e)


def _supertrend(e: IndicatorEngine, p: IndicatorParams) -> Indicator:
    return e.shared(SuperTrend, e.atr(p.get_int("period", 10)), p.get_float("multiplier", 3.0))


def _parabolic_sar(e: IndicatorEngine, p: IndicatorParams) -> Indicator:
    return e.shared(
        ParabolicSAR,
        e.series,
        p.get_float("start", 0.02),
        p.get_float("increment", 0.02),
        p.get_float("max", 0.2),
    )


def _fisher(e: IndicatorEngine, p: IndicatorParams) -> Indicator:
    period = p.get_int("period", 10)
    close = e.close()
    return e.shared(Fisher, close, e.highest(close, period), e.lowest(close, period))


_FACTORIES: Dict[str, Factory] = {
    # Price helpers
    "CLOSE": _close,
    "OPEN": _open,
    "HIGH": _high,
    "LOW": _low,
    "VOLUME": _volume,
    # Moving averages
    "SMA": _sma,
    "EMA": _ema,
    "WMA": _wma,
    "HMA": _hma,
    # Momentum & oscillators
    "RSI": _rsi,
    "MACD": _macd,
    "MACDSIGNAL": _macd_signal,
    "MACDHISTOGRAM": _macd_histogram,
    "STOCHASTIC": _stochastic_k,
    "STOCHASTICD": _stochastic_d,
    "ROC": _roc,
    "MOMENTUM": _momentum,
    "CCI": _cci,
    "WILLIAMSR": _williams_r,
    "AWESOMEOSCILLATOR": _awesome,
    # Trend strength
    "ADX": _adx,
    "PLUSDI": _plus_di,
    "MINUSDI": _minus_di,
    # Volatility
    "ATR": _atr,
    "TR": _tr,
    "STANDARDDEVIATION": _stddev,
    # Volume
    "OBV": _obv,
    "VWAP": _vwap,
    "ADL": _adl,
    # Channels & bands
    "BOLLINGERUPPER": _bollinger_upper,
    "BOLLINGERLOWER": _bollinger_lower,
    "BOLLINGERMIDDLE": _bollinger_middle,
    "KELTNERUPPER": _keltner_upper,
    "KELTNERLOWER": _keltner_lower,
    "KELTNERMIDDLE": _keltner_middle,
    "DONCHIANUPPER": _highest_high,
    "DONCHIANLOWER": _lowest_low,
    "DONCHIANMIDDLE": _donchian_middle,
    "HIGHESTHIGH": _highest_high,
    "LOWESTLOW": _lowest_low,
    # Trend
    "ICHIMOKU": _ichimoku_tenkan,
    "ICHIMOKUKIJUN": _ichimoku_kijun,
    "SUPERTREND": _supertrend,
    "PARABOLICSAR": _parabolic_sar,
    "FISHER": _fisher,
}

_ALIASES: Dict[str, str] = {
    "PRICE": "CLOSE",
    "SMA50": "SMA",
    "EMA20": "EMA",
    "STOCHASTICOSCILLATOR": "STOCHASTIC",
    "STOCHASTICK": "STOCHASTIC",
    "AVERAGETRUERANGE": "ATR",
    "BOLLINGER": "BOLLINGERUPPER",
    "BOLLINGERBANDS": "BOLLINGERUPPER",
    "BOLLINGERBANDSUPPER": "BOLLINGERUPPER",
    "BOLLINGERBANDSLOWER": "BOLLINGERLOWER",
    "BOLLINGERBANDSMIDDLE": "BOLLINGERMIDDLE",
    "KELTNER": "KELTNERUPPER",
    "KELTNERCHANNELS": "KELTNERUPPER",
    "KELTNERCHANNELUPPER": "KELTNERUPPER",
    "KELTNERCHANNELLOWER": "KELTNERLOWER",
    "KELTNERCHANNELMIDDLE": "KELTNERMIDDLE",
    "DONCHIAN": "DONCHIANUPPER",
    "DONCHIANCHANNELS": "DONCHIANUPPER",
    "DONCHIANCHANNELUPPER": "DONCHIANUPPER",
    "DONCHIANCHANNELLOWER": "DONCHIANLOWER",
    "DONCHIANCHANNELMIDDLE": "DONCHIANMIDDLE",
    "ICHIMOKUCLOUD": "ICHIMOKU",
    "ICHIMOKUTENKAN": "ICHIMOKU",
    "ICHIMOKUTENKANSEN": "ICHIMOKU",
    "ICHIMOKUKIJUNSEN": "ICHIMOKUKIJUN",
}

REGISTRY: Mapping[str, Factory] = MappingProxyType({
    **_FACTORIES,
    **{alias: _FACTORIES[target] for alias, target in _ALIASES.items()},
})


def available_indicators() -> Tuple[str, ...]:
    """Sorted registry keys, aliases included."""
    return tuple(sorted(REGISTRY))
