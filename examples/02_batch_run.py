"""Run several saved strategies against one symbol in parallel.

The loader is a module-level function so worker processes can pickle it.
A strategy that fails to compile is reported, not fatal.
"""

import json
import logging

import numpy as np
import pandas as pd

from rulebt import BatchRunner, PriceSeries, SavedStrategy


def load_series(symbol, range_, interval):
    rng = np.random.default_rng(7)
    n = 250
    closes = 200 + np.cumsum(rng.normal(0, 2.0, n))
    df = pd.DataFrame({
        "timestamp": pd.date_range("2024-01-01", periods=n, freq="D"),
        "open": closes,
        "high": closes + 1.5,
        "low": closes - 1.5,
        "close": closes,
        "volume": rng.integers(1_000, 9_000, n),
    })
    return PriceSeries.from_dataframe(df, symbol=symbol)


def saved(entry_rule, exit_rule):
    def group(rule):
        return {"type": "group", "condition": "AND", "rules": [{"type": "rule", "rule": rule}]}
    return json.dumps({"entryRules": group(entry_rule), "exitRules": group(exit_rule)})


STRATEGIES = [
    SavedStrategy(1, "EMA trend", saved(
        {"indicator": "EMA", "params": [{"name": "period", "value": "10"}],
         "operator": "crossesUp", "compareType": "indicator",
         "compareIndicator": "EMA", "compareParams": [{"name": "period", "value": "30"}]},
        {"indicator": "EMA", "params": [{"name": "period", "value": "10"}],
         "operator": "crossesDown", "compareType": "indicator",
         "compareIndicator": "EMA", "compareParams": [{"name": "period", "value": "30"}]},
    )),
    SavedStrategy(2, "Stochastic swing", saved(
        {"indicator": "Stochastic", "operator": "<", "compareType": "value", "value": "20"},
        {"indicator": "Stochastic", "operator": ">", "compareType": "value", "value": "80"},
    )),
    SavedStrategy(3, "Misspelled", saved(
        {"indicator": "RSX", "operator": "<", "compareType": "value", "value": "30"},
        {"indicator": "RSI", "operator": ">", "compareType": "value", "value": "70"},
    )),
]


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    runner = BatchRunner(load_series, symbol="TCS.NS", range="1y", interval="1d", n_workers=2)
    print(runner.run(STRATEGIES).summary())


if __name__ == "__main__":
    main()
