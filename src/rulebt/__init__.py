"""rulebt: rule-based strategy backtesting for price series.

A strategy is a pair of JSON rule trees (entry and exit). Each tree is
compiled against a price series into predicates over bar indices, then
simulated long-only with entries and exits at the bar close.

Quick start:
    from rulebt import BacktestRequest, PriceSeries, run_backtest

    request = BacktestRequest.from_dict({
        "stockSymbol": "TCS.NS", "range": "1y", "interval": "1d",
        "entry": {"condition": "AND", "rules": [
            {"indicator": "RSI", "operator": "<", "compareType": "value", "value": "30"},
        ]},
        "exit": {"condition": "AND", "rules": [
            {"indicator": "RSI", "operator": ">", "compareType": "value", "value": "70"},
        ]},
    })
    series = PriceSeries.from_records(records, symbol="TCS.NS")
    result = run_backtest(request, series)
    print(result.summary())
"""

from .version import __version__

# Errors
from .errors import (
    RuleBTError,
    RuleError,
    UnknownIndicator,
    UnknownOperator,
    InvalidRuleValue,
    MalformedRule,
    NoData,
)

# Data
from .data.types import Bar, Position, TradeType
from .data.series import PriceSeries
from .data.providers.base import DataProvider
from .data.providers.csv import CSVProvider
from .data.providers.records import RecordsProvider

# Indicators
from .indicators.base import Indicator
from .indicators.params import IndicatorSpec
from .indicators.registry import IndicatorEngine, REGISTRY, available_indicators

# Strategy
from .strategy.model import Combinator, CompareKind, Comparison, Group
from .strategy.parser import BacktestRequest, parse_rule_tree, parse_saved_strategy
from .strategy.rules import Rule
from .strategy.compiler import RuleCompiler, compile_rule
from .strategy.base import Strategy

# Engine
from .engine.loop import BacktestEngine, run_backtest
from .engine.record import TradingRecord

# Reporting
from .reporting.metrics import BacktestResult, EquityPoint, TradeResult

# Batch
from .batch.runner import BatchRunner, BatchResult, RunSummary, SavedStrategy

__all__ = [
    # Errors
    "RuleBTError",
    "RuleError",
    "UnknownIndicator",
    "UnknownOperator",
    "InvalidRuleValue",
    "MalformedRule",
    "NoData",
    # Data
    "Bar",
    "Position",
    "TradeType",
    "PriceSeries",
    "DataProvider",
    "CSVProvider",
    "RecordsProvider",
    # Indicators
    "Indicator",
    "IndicatorSpec",
    "IndicatorEngine",
    "REGISTRY",
    "available_indicators",
    # Strategy
    "Combinator",
    "CompareKind",
    "Comparison",
    "Group",
    "BacktestRequest",
    "parse_rule_tree",
    "parse_saved_strategy",
    "Rule",
    "RuleCompiler",
    "compile_rule",
    "Strategy",
    # Engine
    "BacktestEngine",
    "run_backtest",
    "TradingRecord",
    # Reporting
    "BacktestResult",
    "EquityPoint",
    "TradeResult",
    # Batch
    "BatchRunner",
    "BatchResult",
    "RunSummary",
    "SavedStrategy",
]
