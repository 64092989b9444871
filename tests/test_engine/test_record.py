"""Tests for TradingRecord."""

import pytest

from rulebt.engine.record import TradingRecord


class TestTradingRecord:
    def test_starts_flat(self):
        record = TradingRecord()
        assert record.is_flat
        assert record.current is None
        assert record.positions == []

    def test_enter_exit(self):
        record = TradingRecord()
        record.enter(2, 100.0)
        assert not record.is_flat
        pos = record.exit(5, 110.0)
        assert pos.profit == pytest.approx(10.0)
        assert record.is_flat
        assert len(record) == 1

    def test_double_entry_rejected(self):
        record = TradingRecord()
        record.enter(0, 1.0)
        with pytest.raises(RuntimeError):
            record.enter(1, 1.0)

    def test_exit_when_flat_rejected(self):
        with pytest.raises(RuntimeError):
            TradingRecord().exit(1, 1.0)

    def test_same_bar_exit_rejected(self):
        record = TradingRecord()
        record.enter(3, 1.0)
        with pytest.raises(RuntimeError):
            record.exit(3, 1.0)

    def test_positions_is_a_copy(self):
        record = TradingRecord()
        record.enter(0, 1.0)
        record.exit(1, 2.0)
        record.positions.clear()
        assert len(record.positions) == 1

    def test_open_position_profit_raises(self):
        record = TradingRecord()
        pos = record.enter(0, 1.0)
        with pytest.raises(ValueError):
            pos.profit
