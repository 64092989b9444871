from .base import Indicator, WilderSmoother, EMASmoother
from .price import ClosePrice, OpenPrice, HighPrice, LowPrice, Volume, MedianPrice, TypicalPrice, Constant
from .sma import SMA
from .ema import EMA
from .wma import WMA, HMA
from .rsi import RSI
from .macd import MACD, MACDSignal, MACDHistogram
from .atr import ATR, TrueRange
from .statistics import StandardDeviation, HighestValue, LowestValue
from .bollinger import BollingerUpper, BollingerLower
from .keltner import KeltnerUpper, KeltnerLower
from .donchian import Midpoint
from .stochastic import StochasticK
from .momentum import ROC, CCI, WilliamsR, Difference
from .adx import ADX, PlusDI, MinusDI
from .obv import OBV, ADL
from .vwap import VWAP
from .supertrend import SuperTrend
from .sar import ParabolicSAR
from .fisher import Fisher
from .params import IndicatorSpec, IndicatorParams
from .registry import IndicatorEngine, REGISTRY, available_indicators, normalize_name

__all__ = [
    "Indicator",
    "WilderSmoother",
    "EMASmoother",
    "ClosePrice",
    "OpenPrice",
    "HighPrice",
    "LowPrice",
    "Volume",
    "MedianPrice",
    "TypicalPrice",
    "Constant",
    "SMA",
    "EMA",
    "WMA",
    "HMA",
    "RSI",
    "MACD",
    "MACDSignal",
    "MACDHistogram",
    "ATR",
    "TrueRange",
    "StandardDeviation",
    "HighestValue",
    "LowestValue",
    "BollingerUpper",
    "BollingerLower",
    "KeltnerUpper",
    "KeltnerLower",
    "Midpoint",
    "StochasticK",
    "ROC",
    "CCI",
    "WilliamsR",
    "Difference",
    "ADX",
    "PlusDI",
    "MinusDI",
    "OBV",
    "ADL",
    "VWAP",
    "SuperTrend",
    "ParabolicSAR",
    "Fisher",
    "IndicatorSpec",
    "IndicatorParams",
    "IndicatorEngine",
    "REGISTRY",
    "available_indicators",
    "normalize_name",
]
