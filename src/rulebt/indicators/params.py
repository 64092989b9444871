"""Indicator specs and forgiving parameter lookup."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

logger = logging.getLogger(__name__)

ParamsInput = Union[None, Mapping[str, Any], Iterable[Any]]


def normalize_params(raw: ParamsInput) -> Tuple[Tuple[str, str], ...]:
    """Turn ``[{name, value}, ...]``, ``{name: value}`` or pairs into ordered string pairs.

    Entries without a name, and entries that are neither a mapping nor a
    (name, value) pair, are skipped. Values are stringified; None
    stays None-ish ("") so it later falls back to the default.
    """
    if raw is None:
        return ()
    if isinstance(raw, Mapping):
        items = list(raw.items())
    elif isinstance(raw, (str, bytes)) or not isinstance(raw, Iterable):
        logger.debug("Ignoring indicator parameters of type %s", type(raw).__name__)
        return ()
    else:
        items = []
        for entry in raw:
            if isinstance(entry, Mapping):
                items.append((entry.get("name"), entry.get("value")))
            elif isinstance(entry, (list, tuple)) and len(entry) == 2:
                items.append((entry[0], entry[1]))
            else:
                logger.debug("Skipping malformed indicator parameter %r", entry)

    pairs = []
    for name, value in items:
        if name is None:
            continue
        pairs.append((str(name), "" if value is None else str(value)))
    return tuple(pairs)


@dataclass(frozen=True)
class IndicatorSpec:
    """A reference to an indicator by name with string-valued parameters."""
    name: str
    params: Tuple[Tuple[str, str], ...] = ()

    @classmethod
    def of(cls, name: str, params: ParamsInput = None, **kwargs: Any) -> "IndicatorSpec":
        """Convenience: ``IndicatorSpec.of("SMA", period=5)``."""
        pairs = normalize_params(params) + normalize_params(kwargs)
        return cls(name=name, params=pairs)

    def __str__(self) -> str:
        if not self.params:
            return self.name
        inner = ",".join(f"{k}={v}" for k, v in self.params)
        return f"{self.name}({inner})"


class IndicatorParams:
    """Case-insensitive parameter lookup with silent fallback to defaults.

    The first occurrence of a name wins. Missing, unparsable, non-finite
    or non-positive values fall back to the caller's default; parameter
    problems are never an error.
    """

    def __init__(self, pairs: Iterable[Tuple[str, str]] = ()):
        self._values: Dict[str, str] = {}
        for name, value in pairs:
            self._values.setdefault(name.lower(), value)

    def _raw(self, name: str) -> Optional[str]:
        return self._values.get(name.lower())

    def get_int(self, name: str, default: int) -> int:
        raw = self._raw(name)
        if raw is None:
            return default
        try:
            value = int(raw.strip())
        except ValueError:
            logger.debug("Parameter %s=%r is not an integer, using default %s", name, raw, default)
            return default
        if value <= 0:
            logger.debug("Parameter %s=%r is not positive, using default %s", name, raw, default)
            return default
        return value

    def get_float(self, name: str, default: float) -> float:
        raw = self._raw(name)
        if raw is None:
            return default
        try:
            value = float(raw.strip())
        except ValueError:
            logger.debug("Parameter %s=%r is not a number, using default %s", name, raw, default)
            return default
        if not math.isfinite(value) or value <= 0:
            logger.debug("Parameter %s=%r is out of range, using default %s", name, raw, default)
            return default
        return value

    def __contains__(self, name: str) -> bool:
        return name.lower() in self._values

    def __repr__(self) -> str:
        return f"IndicatorParams({self._values})"
