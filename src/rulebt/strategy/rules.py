"""Compiled rules: predicates over a bar index.

Every rule reads indicator values by index. A comparison whose operands
are not yet defined (``None``) is false.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ..indicators.base import Indicator


class Rule(ABC):
    """Callable predicate ``rule(i) -> bool``. Combine with ``&`` and ``|``."""

    @abstractmethod
    def is_satisfied(self, index: int) -> bool:
        ...

    def __call__(self, index: int) -> bool:
        return self.is_satisfied(index)

    def __and__(self, other: "Rule") -> "Rule":
        return AndRule(self, other)

    def __or__(self, other: "Rule") -> "Rule":
        return OrRule(self, other)


@dataclass(frozen=True)
class BooleanRule(Rule):
    """Constant answer; an empty rule tree compiles to ``BooleanRule(False)``."""
    satisfied: bool = False

    def is_satisfied(self, index: int) -> bool:
        return self.satisfied


@dataclass(frozen=True)
class AndRule(Rule):
    left: Rule
    right: Rule

    def is_satisfied(self, index: int) -> bool:
        return self.left.is_satisfied(index) and self.right.is_satisfied(index)


@dataclass(frozen=True)
class OrRule(Rule):
    left: Rule
    right: Rule

    def is_satisfied(self, index: int) -> bool:
        return self.left.is_satisfied(index) or self.right.is_satisfied(index)


@dataclass(frozen=True)
class _Comparison(Rule):
    first: Indicator
    second: Indicator

    def _pair(self, index: int):
        return self.first.value(index), self.second.value(index)


class OverRule(_Comparison):
    def is_satisfied(self, index: int) -> bool:
        a, b = self._pair(index)
        return a is not None and b is not None and a > b


class UnderRule(_Comparison):
    def is_satisfied(self, index: int) -> bool:
        a, b = self._pair(index)
        return a is not None and b is not None and a < b


class EqualRule(_Comparison):
    """Exact floating-point equality."""

    def is_satisfied(self, index: int) -> bool:
        a, b = self._pair(index)
        return a is not None and b is not None and a == b


class CrossedUpRule(_Comparison):
    """first(i-1) <= second(i-1) and first(i) > second(i)."""

    def is_satisfied(self, index: int) -> bool:
        if index < 1:
            return False
        prev_a, prev_b = self._pair(index - 1)
        a, b = self._pair(index)
        if None in (prev_a, prev_b, a, b):
            return False
        return prev_a <= prev_b and a > b


class CrossedDownRule(_Comparison):
    """first(i-1) >= second(i-1) and first(i) < second(i)."""

    def is_satisfied(self, index: int) -> bool:
        if index < 1:
            return False
        prev_a, prev_b = self._pair(index - 1)
        a, b = self._pair(index)
        if None in (prev_a, prev_b, a, b):
            return False
        return prev_a >= prev_b and a < b
