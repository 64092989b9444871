"""Strategy: a named pair of compiled entry and exit rules."""

from __future__ import annotations

from typing import Optional

from ..data.series import PriceSeries
from ..indicators.registry import IndicatorEngine
from .compiler import RuleCompiler
from .model import RuleNode
from .rules import Rule


class Strategy:
    """Entry and exit predicates over bar indices.

    The engine asks ``should_enter(i)`` only while flat and
    ``should_exit(i)`` only while holding a position. A strategy never
    sees fills or prices directly; everything it knows comes from the
    indicators its rules were compiled against.
    """

    def __init__(self, entry_rule: Rule, exit_rule: Rule, name: str = "GeneratedStrategy"):
        self.entry_rule = entry_rule
        self.exit_rule = exit_rule
        self.name = name

    def should_enter(self, index: int) -> bool:
        return self.entry_rule.is_satisfied(index)

    def should_exit(self, index: int) -> bool:
        return self.exit_rule.is_satisfied(index)

    @classmethod
    def compile(
        cls,
        entry: Optional[RuleNode],
        exit: Optional[RuleNode],
        series: PriceSeries,
        engine: Optional[IndicatorEngine] = None,
        name: str = "GeneratedStrategy",
    ) -> "Strategy":
        """Compile both trees against one shared engine.

        Entry and exit rules that reference the same indicator share one
        instance.
        """
        compiler = RuleCompiler(engine or IndicatorEngine(series))
        return cls(compiler.compile(entry), compiler.compile(exit), name=name)

    def __repr__(self) -> str:
        return f"Strategy({self.name!r})"
