"""
Tests for the execution simulator state machine.
"""
import pytest
from adaptive_trader.shared.types import Direction
from adaptive_trader.evaluation.simulator import ExecutionSimulator, drawdown
from adaptive_trader.signals.config import StrategyConfig

L, F, S = Direction.LONG, Direction.FLAT, Direction.SHORT


class TestTransitions:
    """Opening, closing and flipping positions."""

    def test_empty_input(self):
        result = ExecutionSimulator(0.5).run([], [])
        assert result.trades == 0
        assert result.equity_curve == (1.0,)
        assert result.max_drawdown == 0.0

    def test_single_bar_opens_but_no_trade(self):
        result = ExecutionSimulator(0.5).run([100.0], [L])
        assert result.trades == 0
        assert result.equity_curve == (1.0,)
        assert result.open_direction == Direction.LONG

    def test_long_round_trip(self):
        result = ExecutionSimulator(0.1).run([100.0, 110.0, 111.0], [F, L, F])
        assert result.trades == 1
        assert result.wins == 1
        trade = result.trade_log[0]
        assert (trade.entry_price, trade.exit_price) == (110.0, 111.0)
        assert (trade.entry_index, trade.exit_index) == (1, 2)
        assert trade.pnl == pytest.approx(0.1 * (111.0 / 110.0 - 1))
        assert result.equity_curve[-1] == pytest.approx(1.0 + trade.pnl)

    def test_flip_closes_and_reopens_same_bar(self):
        result = ExecutionSimulator(0.5).run([100.0, 100.0, 110.0, 99.0], [F, L, S, F])
        assert result.trades == 2
        assert result.wins == 2
        first, second = result.trade_log
        assert first.direction == Direction.LONG
        assert first.pnl == pytest.approx(0.05)
        assert second.direction == Direction.SHORT
        assert second.entry_price == 110.0
        # reopened at half of the equity after the first close
        assert second.size == pytest.approx(0.525)
        assert second.pnl == pytest.approx(0.0525)
        assert result.equity_curve == pytest.approx((1.0, 1.0, 1.05, 1.1025))

    def test_short_loses_when_price_rises(self):
        result = ExecutionSimulator(1.0).run([100.0, 120.0], [S, F])
        assert result.losses == 1
        assert result.wins == 0
        assert result.equity_curve[-1] == pytest.approx(0.8)

    def test_zero_pnl_is_trade_but_neither_win_nor_loss(self):
        result = ExecutionSimulator(0.5).run([100.0, 100.0, 100.0], [L, F, F])
        assert result.trades == 1
        assert result.wins == 0
        assert result.losses == 0

    def test_repeated_state_does_nothing(self):
        result = ExecutionSimulator(0.5).run([100.0, 101.0, 102.0, 103.0], [L, L, L, L])
        assert result.trades == 0
        assert result.realized_equity == 1.0

    def test_open_position_marked_to_market(self):
        result = ExecutionSimulator(1.0).run([100.0, 100.0, 80.0, 120.0], [F, L, L, L])
        assert result.trades == 0
        assert result.equity_curve == pytest.approx((1.0, 1.0, 0.8, 1.2))
        assert result.final_equity == pytest.approx(1.2)
        assert result.max_drawdown == pytest.approx(0.2)

    def test_zero_entry_price_gives_zero_pnl(self):
        result = ExecutionSimulator(0.5).run([0.0, 5.0], [L, F])
        assert result.trades == 1
        assert result.trade_log[0].pnl == 0.0

    def test_length_mismatch_raises(self):
        with pytest.raises(ValueError, match="equal length"):
            ExecutionSimulator(0.5).run([1.0, 2.0], [F])

    def test_trades_bounded_by_bars_minus_one(self):
        prices = [100.0, 101.0, 99.0, 102.0, 98.0, 103.0]
        directions = [L, S, L, S, L, S]
        result = ExecutionSimulator(0.5).run(prices, directions)
        assert result.trades == len(prices) - 1
        assert result.wins + result.losses <= result.trades


class TestFromConfig:
    """Sizing from configuration."""

    def test_uses_min_of_risk_and_cap(self):
        simulator = ExecutionSimulator.from_config(StrategyConfig(risk_per_trade=0.8, max_position=0.5))
        assert simulator.position_fraction == 0.5


class TestDrawdown:
    """Running drawdown helper."""

    def test_below_peak(self):
        assert drawdown(2.0, 1.5) == pytest.approx(0.25)

    def test_at_or_above_peak(self):
        assert drawdown(1.0, 1.0) == 0.0
        assert drawdown(1.0, 1.2) == 0.0

    def test_non_positive_peak(self):
        assert drawdown(0.0, -1.0) == 0.0
