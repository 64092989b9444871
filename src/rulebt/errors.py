"""Exception types raised by rulebt.

Everything derives from ``RuleBTError``. Rule and data errors also derive
from ``ValueError`` so callers that already catch ``ValueError`` keep
working.
"""

from __future__ import annotations

from typing import Optional


class RuleBTError(Exception):
    """Base class for all rulebt errors."""


class RuleError(RuleBTError, ValueError):
    """A rule tree could not be compiled. Aborts compilation."""


class UnknownIndicator(RuleError):
    """Indicator name not found in the registry after normalisation."""

    def __init__(self, name: Optional[str]):
        self.name = name
        super().__init__(f"Unknown indicator: {name!r}")


class UnknownOperator(RuleError):
    """Comparison operator is not one of <, >, <=, >=, =, ==, crossesUp, crossesDown."""

    def __init__(self, operator: Optional[str]):
        self.operator = operator
        super().__init__(f"Unknown operator: {operator!r}")


class InvalidRuleValue(RuleError):
    """Literal comparison value is not a finite number."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Rule value is not a number: {value!r}")


class MalformedRule(RuleError):
    """A rule node is structurally invalid (missing indicator, wrong type, ...)."""


class NoData(RuleBTError, ValueError):
    """The price series is empty. A backtest cannot run."""

    def __init__(
        self,
        symbol: str = "",
        range: str = "",
        interval: str = "",
    ):
        self.symbol = symbol
        self.range = range
        self.interval = interval
        if symbol:
            msg = (
                f"No trade data found for {symbol} in the selected range "
                f"({range or 'n/a'}) and interval ({interval or 'n/a'}). "
                f"Please try a different combination."
            )
        else:
            msg = "Price series is empty"
        super().__init__(msg)
