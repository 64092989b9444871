from .base import Strategy
from .compiler import RuleCompiler, compile_rule
from .model import Combinator, CompareKind, Comparison, Group, RuleNode
from .parser import BacktestRequest, parse_node, parse_rule_tree, parse_saved_strategy
from .rules import (
    Rule,
    BooleanRule,
    AndRule,
    OrRule,
    OverRule,
    UnderRule,
    EqualRule,
    CrossedUpRule,
    CrossedDownRule,
)

__all__ = [
    "Strategy",
    "RuleCompiler",
    "compile_rule",
    "Combinator",
    "CompareKind",
    "Comparison",
    "Group",
    "RuleNode",
    "BacktestRequest",
    "parse_node",
    "parse_rule_tree",
    "parse_saved_strategy",
    "Rule",
    "BooleanRule",
    "AndRule",
    "OrRule",
    "OverRule",
    "UnderRule",
    "EqualRule",
    "CrossedUpRule",
    "CrossedDownRule",
]
