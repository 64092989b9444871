"""Tests for PriceSeries construction and access."""

import logging
from datetime import datetime

import pytest
import pandas as pd

from rulebt.data.series import PriceSeries
from rulebt.data.types import Bar


def record(day, close=10.0, **overrides):
    rec = {
        "date": f"2024-01-{day:02d}",
        "open": close,
        "high": close + 1,
        "low": close - 1,
        "close": close,
        "volume": 500,
    }
    rec.update(overrides)
    return rec


class TestConstruction:
    def test_empty_allowed(self):
        series = PriceSeries([])
        assert series.is_empty
        assert len(series) == 0
        assert not series

    def test_rejects_unordered_timestamps(self):
        bars = [
            Bar(datetime(2024, 1, 2), 1, 1, 1, 1),
            Bar(datetime(2024, 1, 1), 1, 1, 1, 1),
        ]
        with pytest.raises(ValueError):
            PriceSeries(bars)

    def test_rejects_duplicate_timestamps(self):
        bars = [
            Bar(datetime(2024, 1, 1), 1, 1, 1, 1),
            Bar(datetime(2024, 1, 1), 1, 1, 1, 1),
        ]
        with pytest.raises(ValueError):
            PriceSeries(bars)


class TestFromRecords:
    def test_basic(self):
        series = PriceSeries.from_records([record(1, 10.0), record(2, 11.0)], symbol="TCS.NS")
        assert len(series) == 2
        assert series.closes() == [10.0, 11.0]
        assert series[0].timestamp == datetime(2024, 1, 1)
        assert series.symbol == "TCS.NS"

    def test_drops_incomplete_records(self, caplog):
        records = [
            record(1),
            record(2, open=None),
            record(3, close=float("nan")),
            record(4, high="n/a"),
            record(5),
        ]
        with caplog.at_level(logging.WARNING, logger="rulebt.data.series"):
            series = PriceSeries.from_records(records)
        assert len(series) == 2
        assert "Dropped 3 of 5" in caplog.text

    def test_missing_volume_is_none(self):
        rec = record(1)
        del rec["volume"]
        series = PriceSeries.from_records([rec])
        assert series[0].volume is None

    def test_adj_close(self):
        series = PriceSeries.from_records([record(1, adjClose=9.5)])
        assert series[0].adj_close == 9.5

    def test_unix_seconds(self):
        series = PriceSeries.from_records([{
            "date": 1704067200, "open": 1, "high": 1, "low": 1, "close": 1,
        }])
        assert series[0].timestamp == datetime(2024, 1, 1)


class TestDataFrame:
    def test_round_trip_columns(self):
        series = PriceSeries.from_records([record(1, 10.0), record(2, 12.0)])
        df = series.to_dataframe()
        assert list(df.columns) == ["open", "high", "low", "close", "volume"]
        assert df["close"].tolist() == [10.0, 12.0]

    def test_from_dataframe_with_index(self):
        df = pd.DataFrame(
            {"open": [1.0, 2.0], "high": [1.5, 2.5], "low": [0.5, 1.5], "close": [1.2, 2.2]},
            index=pd.date_range("2024-03-01", periods=2, freq="D"),
        )
        series = PriceSeries.from_dataframe(df, symbol="X")
        assert len(series) == 2
        assert series[1].timestamp == datetime(2024, 3, 2)
        assert series[0].volume is None

    def test_from_dataframe_missing_column(self):
        df = pd.DataFrame({"open": [1.0], "high": [1.0], "low": [1.0]})
        with pytest.raises(ValueError, match="close"):
            PriceSeries.from_dataframe(df)

    def test_from_dataframe_drops_nan(self):
        df = pd.DataFrame({
            "timestamp": pd.date_range("2024-01-01", periods=3, freq="D"),
            "open": [1.0, None, 3.0],
            "high": [1.0, 2.0, 3.0],
            "low": [1.0, 2.0, 3.0],
            "close": [1.0, 2.0, 3.0],
        })
        assert len(PriceSeries.from_dataframe(df)) == 2
