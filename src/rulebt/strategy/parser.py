"""Parse JSON rule trees into the typed model.

Two input shapes are accepted:

Request shape (what a client sends with a backtest request)::

    {"condition": "AND", "rules": [
        {"indicator": "RSI", "params": [{"name": "period", "value": "14"}],
         "operator": "<", "compareType": "value", "value": "30"},
        {"condition": "OR", "rules": [...]},
    ]}

Saved shape (how strategies are stored)::

    {"entryRules": {"type": "group", "condition": "AND", "rules": [
        {"type": "rule", "condition": "OR", "rule": {"indicator": "SMA", ...}},
    ]}, "exitRules": {...}}

Usage:
    entry = parse_rule_tree(payload["entry"])
    entry, exit = parse_saved_strategy(saved.strategy_json)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple, Union

from ..errors import MalformedRule
from ..indicators.params import IndicatorSpec, normalize_params
from .model import Combinator, CompareKind, Comparison, Group, RuleNode

logger = logging.getLogger(__name__)


def _require_mapping(raw: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(raw, Mapping):
        raise MalformedRule(f"{what} must be an object, got {type(raw).__name__}")
    return raw


def _optional_join(raw: Any) -> Optional[Combinator]:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return None
    return Combinator.parse(raw)


def _parse_comparison(raw: Mapping[str, Any], join: Optional[Combinator]) -> Comparison:
    name = raw.get("indicator")
    if not isinstance(name, str) or not name.strip():
        raise MalformedRule("Rule is missing an indicator name")

    operator = raw.get("operator")
    if not isinstance(operator, str):
        operator = "" if operator is None else str(operator)

    kind = CompareKind.parse(raw.get("compareType"))
    left = IndicatorSpec(name, normalize_params(raw.get("params")))

    if kind is CompareKind.VALUE:
        value = raw.get("value")
        return Comparison(
            left=left,
            operator=operator,
            kind=kind,
            value=None if value is None else str(value),
            join=join,
        )

    right_name = raw.get("compareIndicator")
    if not isinstance(right_name, str) or not right_name.strip():
        raise MalformedRule(f"Rule on {name!r} compares to an indicator but names none")
    return Comparison(
        left=left,
        operator=operator,
        kind=kind,
        right=IndicatorSpec(right_name, normalize_params(raw.get("compareParams"))),
        join=join,
    )


# ── Request shape ────────────────────────────────────────────────────────


def parse_node(raw: Any) -> RuleNode:
    """Parse one request-shape node (group or leaf)."""
    raw = _require_mapping(raw, "Rule node")
    children = raw.get("rules")

    if children:
        if not isinstance(children, list):
            raise MalformedRule("'rules' must be a list")
        return Group(
            combinator=Combinator.parse(raw.get("condition")),
            children=tuple(parse_node(child) for child in children),
        )

    if children is not None and not raw.get("indicator"):
        return Group(combinator=Combinator.parse(raw.get("condition")))

    return _parse_comparison(raw, _optional_join(raw.get("condition")))


def parse_rule_tree(raw: Any) -> Optional[Group]:
    """Parse a request-shape root ``{condition, rules}``.

    None stays None (it compiles to a never-satisfied rule).
    """
    if raw is None:
        return None
    raw = _require_mapping(raw, "Rule group")
    children = raw.get("rules") or []
    if not isinstance(children, list):
        raise MalformedRule("'rules' must be a list")
    return Group(
        combinator=Combinator.parse(raw.get("condition")),
        children=tuple(parse_node(child) for child in children),
    )


# ── Saved shape ──────────────────────────────────────────────────────────


def _parse_saved_children(raw: Mapping[str, Any]) -> Group:
    children = raw.get("rules") or []
    if not isinstance(children, list):
        raise MalformedRule("'rules' must be a list")
    return Group(
        combinator=Combinator.parse(raw.get("condition")),
        children=tuple(_parse_saved_node(child) for child in children),
    )


def _parse_saved_node(raw: Any) -> RuleNode:
    raw = _require_mapping(raw, "Saved rule node")
    node_type = str(raw.get("type", "")).strip().lower()

    if node_type == "group":
        return _parse_saved_children(raw)

    if node_type == "rule":
        rule = _require_mapping(raw.get("rule"), "'rule'")
        return _parse_comparison(rule, _optional_join(raw.get("condition")))

    raise MalformedRule(f"Unknown saved node type: {raw.get('type')!r}")


def parse_saved_group(raw: Any) -> Optional[Group]:
    """Parse a saved ``entryRules``/``exitRules`` root.

    The root is always read as ``{condition, rules}``; its ``type`` is
    not checked.
    """
    if raw is None:
        return None
    return _parse_saved_children(_require_mapping(raw, "Saved rule group"))


def parse_saved_strategy(
    payload: Union[str, bytes, Mapping[str, Any]],
) -> Tuple[Optional[RuleNode], Optional[RuleNode]]:
    """Parse a saved strategy into ``(entry, exit)`` trees.

    ``payload`` may be the JSON text or the already-decoded object.
    """
    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise MalformedRule(f"Saved strategy is not valid JSON: {exc}") from exc
    payload = _require_mapping(payload, "Saved strategy")
    return (
        parse_saved_group(payload.get("entryRules")),
        parse_saved_group(payload.get("exitRules")),
    )


# ── Backtest request ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class BacktestRequest:
    """``{stockSymbol, range, interval, entry, exit}`` from a client."""
    symbol: str = ""
    range: str = ""
    interval: str = ""
    entry: Optional[Group] = None
    exit: Optional[Group] = None

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "BacktestRequest":
        raw = _require_mapping(raw, "Backtest request")
        request = cls(
            symbol=raw.get("stockSymbol") or "",
            range=raw.get("range") or "",
            interval=raw.get("interval") or "",
            entry=parse_rule_tree(raw.get("entry")),
            exit=parse_rule_tree(raw.get("exit")),
        )
        logger.debug("Parsed backtest request for %s (%s, %s)", request.symbol, request.range, request.interval)
        return request

    @classmethod
    def from_json(cls, text: Union[str, bytes]) -> "BacktestRequest":
        return cls.from_dict(json.loads(text))
