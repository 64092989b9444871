"""Rule-tree model: the typed form of a strategy's entry/exit conditions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

from ..indicators.params import IndicatorSpec


class Combinator(str, Enum):
    AND = "AND"
    OR = "OR"

    @classmethod
    def parse(cls, raw: Optional[str]) -> "Combinator":
        """'OR' in any case is OR; anything else (None included) is AND."""
        if isinstance(raw, str) and raw.strip().upper() == "OR":
            return cls.OR
        return cls.AND


class CompareKind(str, Enum):
    VALUE = "VALUE"
    INDICATOR = "INDICATOR"

    @classmethod
    def parse(cls, raw: Optional[str]) -> "CompareKind":
        if isinstance(raw, str) and raw.strip().lower() == "value":
            return cls.VALUE
        return cls.INDICATOR


# ── Nodes ────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Comparison:
    """Leaf: ``left <operator> (value | right)``.

    ``join`` overrides the parent group's combinator for the connector
    between this node and its next sibling.
    """
    left: IndicatorSpec
    operator: str
    kind: CompareKind = CompareKind.VALUE
    value: Optional[str] = None
    right: Optional[IndicatorSpec] = None
    join: Optional[Combinator] = None


@dataclass(frozen=True)
class Group:
    """Interior node: children folded left to right with ``combinator``."""
    combinator: Combinator = Combinator.AND
    children: Tuple["RuleNode", ...] = ()
    join: Optional[Combinator] = None

    @property
    def is_empty(self) -> bool:
        return not self.children


RuleNode = Union[Comparison, Group]

__all__ = [
    "Combinator",
    "CompareKind",
    "Comparison",
    "Group",
    "RuleNode",
    "IndicatorSpec",
]
