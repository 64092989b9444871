"""Compile rule trees into Rule predicates over one price series."""

from __future__ import annotations

import logging
import math
from types import MappingProxyType
from typing import Callable, Mapping, Optional

from ..data.series import PriceSeries
from ..errors import InvalidRuleValue, MalformedRule, UnknownOperator
from ..indicators.base import Indicator
from ..indicators.price import Constant
from ..indicators.registry import IndicatorEngine
from .model import Combinator, CompareKind, Comparison, Group, RuleNode
from .rules import (
    BooleanRule,
    CrossedDownRule,
    CrossedUpRule,
    EqualRule,
    OrRule,
    OverRule,
    Rule,
    UnderRule,
)

logger = logging.getLogger(__name__)

RuleFactory = Callable[[Indicator, Indicator], Rule]

# Symbol operators match exactly.
_SYMBOL_OPERATORS: Mapping[str, RuleFactory] = MappingProxyType({
    "<": UnderRule,
    ">": OverRule,
    "=": EqualRule,
    "==": EqualRule,
    "<=": lambda a, b: OrRule(UnderRule(a, b), EqualRule(a, b)),
    ">=": lambda a, b: OrRule(OverRule(a, b), EqualRule(a, b)),
})

# Word operators match case-insensitively; keys are lower-case.
_WORD_OPERATORS: Mapping[str, RuleFactory] = MappingProxyType({
    "crossesup": CrossedUpRule,
    "crossesdown": CrossedDownRule,
})


def operator_factory(operator: str) -> RuleFactory:
    """Look up the rule constructor for ``operator``.

    Raises:
        UnknownOperator: for anything outside the supported set.
    """
    factory = _SYMBOL_OPERATORS.get(operator)
    if factory is None and isinstance(operator, str):
        factory = _WORD_OPERATORS.get(operator.strip().lower())
    if factory is None:
        raise UnknownOperator(operator)
    return factory


def parse_value(raw: Optional[str]) -> float:
    if raw is None:
        raise InvalidRuleValue(raw)
    try:
        value = float(str(raw).strip())
    except ValueError as exc:
        raise InvalidRuleValue(raw) from exc
    if not math.isfinite(value):
        raise InvalidRuleValue(raw)
    return value


class RuleCompiler:
    """Turns a RuleNode tree into a Rule bound to one IndicatorEngine.

    Groups fold their children left to right with no precedence. A
    child's ``join`` is the connector between it and the next sibling;
    where it is unset the group's combinator connects them. An OR group
    of ``A, B(join=AND), C`` therefore reads ``A OR B AND C`` and means
    ``(A OR B) AND C``.
    """

    def __init__(self, engine: IndicatorEngine):
        self.engine = engine

    def compile(self, node: Optional[RuleNode]) -> Rule:
        if node is None:
            return BooleanRule(False)
        if isinstance(node, Group):
            return self._compile_group(node)
        if isinstance(node, Comparison):
            return self._compile_comparison(node)
        raise MalformedRule(f"Not a rule node: {node!r}")

    def _compile_group(self, group: Group) -> Rule:
        if group.is_empty:
            return BooleanRule(False)

        children = group.children
        combined = self.compile(children[0])
        for prev, child in zip(children, children[1:]):
            rule = self.compile(child)
            combinator = prev.join or group.combinator
            if combinator is Combinator.OR:
                combined = combined | rule
            else:
                combined = combined & rule
        return combined

    def _compile_comparison(self, node: Comparison) -> Rule:
        factory = operator_factory(node.operator)
        left = self.engine.resolve(node.left)

        if node.kind is CompareKind.VALUE:
            value = parse_value(node.value)
            right = self.engine.shared(Constant, self.engine.series, value)
        else:
            if node.right is None:
                raise MalformedRule(f"Comparison on {node.left.name!r} has no right-hand indicator")
            right = self.engine.resolve(node.right)

        logger.debug("Compiled %s %s %s", left.name, node.operator, right.name)
        return factory(left, right)


def compile_rule(
    node: Optional[RuleNode],
    series: PriceSeries,
    engine: Optional[IndicatorEngine] = None,
) -> Rule:
    """One-shot helper: compile ``node`` against ``series``."""
    if engine is None:
        engine = IndicatorEngine(series)
    return RuleCompiler(engine).compile(node)
