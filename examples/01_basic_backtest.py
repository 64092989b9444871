"""Basic RSI mean-reversion backtest.

Builds a synthetic daily series, then buys when RSI(14) drops below 35
while price is above its 50-day SMA, and sells when RSI rises above 65
or price crosses down through the lower Bollinger band.
"""

import logging

import numpy as np
import pandas as pd

from rulebt import BacktestRequest, RecordsProvider, run_backtest


def synthetic_records(n=300, seed=42):
    rng = np.random.default_rng(seed)
    closes = 100 + np.cumsum(rng.normal(0.05, 1.2, n))
    dates = pd.date_range("2023-01-02", periods=n, freq="B")
    records = []
    for date, close in zip(dates, closes):
        spread = abs(rng.normal(0, 0.6))
        records.append({
            "date": date.isoformat(),
            "open": close - rng.normal(0, 0.3),
            "high": close + spread,
            "low": close - spread,
            "close": close,
            "volume": int(rng.integers(10_000, 50_000)),
        })
    return records


REQUEST = {
    "stockSymbol": "DEMO",
    "range": "1y",
    "interval": "1d",
    "entry": {"condition": "AND", "rules": [
        {"indicator": "RSI", "params": [{"name": "period", "value": "14"}],
         "operator": "<", "compareType": "value", "value": "35"},
        {"indicator": "CLOSE", "operator": ">", "compareType": "indicator",
         "compareIndicator": "SMA", "compareParams": [{"name": "period", "value": "50"}]},
    ]},
    "exit": {"condition": "OR", "rules": [
        {"indicator": "RSI", "operator": ">", "compareType": "value", "value": "65"},
        {"indicator": "CLOSE", "operator": "crossesDown", "compareType": "indicator",
         "compareIndicator": "Bollinger Lower"},
    ]},
}


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    series = RecordsProvider(synthetic_records(), symbol_name="DEMO").to_series()
    request = BacktestRequest.from_dict(REQUEST)
    result = run_backtest(request, series, config={"initial_capital": 10_000})
    print(result.summary())


if __name__ == "__main__":
    main()
