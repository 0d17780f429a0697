"""
Tests for the cycle orchestrator: contract-level properties.
"""
import numpy as np
import pytest
from adaptive_trader.orchestration.cycle import run_cycle, evaluate
from adaptive_trader.evaluation.metrics import EMPTY_METRICS
from adaptive_trader.shared.types import Candle
from adaptive_trader.signals.config import StrategyConfig, ConfigError, validate_config


FIFTEEN_MINUTES_MS = 15 * 60 * 1000


def make_candles(prices):
    return [
        Candle(timestamp=1_700_000_000_000 + i * FIFTEEN_MINUTES_MS, mid_price=float(p), spread=0.5)
        for i, p in enumerate(prices)
    ]


@pytest.fixture
def random_walk_candles():
    """Deterministic 200-bar random walk around 30k."""
    rng = np.random.RandomState(42)
    prices = 30000 * np.exp(np.cumsum(rng.randn(200) * 0.004))
    return make_candles(prices)


class TestEdgeCases:
    """Empty and single-candle windows."""

    def test_empty_input(self):
        config = StrategyConfig()
        metrics, updated = run_cycle([], config)
        assert metrics == EMPTY_METRICS
        assert metrics.equity_curve == (1.0,)
        assert updated == config

    def test_single_candle(self):
        metrics, updated = run_cycle(make_candles([30000.0]), StrategyConfig())
        assert metrics.trades == 0
        assert metrics.equity_curve == (1.0,)
        assert metrics.cumulative_return == 0.0
        validate_config(updated)

    def test_single_candle_negative_threshold(self):
        metrics, _ = run_cycle(make_candles([30000.0]), StrategyConfig(threshold=-2.0))
        assert metrics.trades == 0
        assert metrics.equity_curve == (1.0,)

    def test_flat_prices(self):
        metrics, _ = run_cycle(make_candles([100.0] * 50), StrategyConfig())
        assert metrics.trades == 0
        assert metrics.cumulative_return == 0
        assert metrics.max_drawdown == 0


class TestScenario:
    """Three rising candles crossing the threshold once."""

    def test_single_winning_trade(self):
        config = StrategyConfig(short_window=2, long_window=3, threshold=1.5)
        metrics, _ = run_cycle(make_candles([100.0, 110.0, 111.0]), config)
        assert metrics.trades == 1
        assert metrics.wins == 1
        assert metrics.losses == 0
        expected_pnl = config.position_fraction * (111.0 / 110.0 - 1)
        assert metrics.cumulative_return == pytest.approx(expected_pnl)
        assert metrics.equity_curve == pytest.approx((1.0, 1.0, 1.0 + expected_pnl))


class TestContract:
    """Determinism, bounds and trade accounting."""

    def test_deterministic(self, random_walk_candles):
        config = StrategyConfig(short_window=5, long_window=20, threshold=0.05)
        first = run_cycle(random_walk_candles, config)
        second = run_cycle(random_walk_candles, config)
        assert first == second

    def test_trade_accounting(self, random_walk_candles):
        config = StrategyConfig(short_window=3, long_window=12, threshold=0.0)
        metrics, _ = run_cycle(random_walk_candles, config)
        assert metrics.trades > 0
        assert metrics.wins + metrics.losses <= metrics.trades
        assert metrics.trades <= len(random_walk_candles) - 1
        assert len(metrics.equity_curve) == len(random_walk_candles)
        assert metrics.max_drawdown >= 0

    def test_updated_config_in_bounds(self, random_walk_candles):
        configs = [
            StrategyConfig(short_window=2, long_window=3, threshold=-5.0, risk_per_trade=1.0,
                           max_position=5.0, learning_rate=1.0),
            StrategyConfig(short_window=63, long_window=64, threshold=5.0, risk_per_trade=0.01,
                           max_position=0.25, learning_rate=0.05),
        ]
        for config in configs:
            _, updated = run_cycle(random_walk_candles, config)
            validate_config(updated)

    def test_chained_cycles_stay_valid(self, random_walk_candles):
        """Feeding each updated config back keeps every config valid."""
        config = StrategyConfig(threshold=-1.0, risk_per_trade=1.0, learning_rate=1.0)
        for start in range(0, 150, 10):
            _, config = run_cycle(random_walk_candles[start:start + 50], config)
            validate_config(config)

    def test_input_candles_untouched(self, random_walk_candles):
        before = list(random_walk_candles)
        run_cycle(random_walk_candles, StrategyConfig())
        assert random_walk_candles == before

    def test_evaluate_matches_cycle_metrics(self, random_walk_candles):
        config = StrategyConfig()
        metrics, _ = run_cycle(random_walk_candles, config)
        assert evaluate(random_walk_candles, config) == metrics


class TestConfigErrors:
    """Invalid configuration is reported, not repaired."""

    def test_tampered_config_raises(self):
        config = StrategyConfig()
        object.__setattr__(config, 'long_window', config.short_window)
        with pytest.raises(ConfigError, match="must be less than long_window"):
            run_cycle(make_candles([1.0, 2.0]), config)

    def test_tampered_config_raises_on_empty_input(self):
        config = StrategyConfig()
        object.__setattr__(config, 'threshold', 50.0)
        with pytest.raises(ConfigError):
            run_cycle([], config)

    def test_non_config_raises(self):
        with pytest.raises(ConfigError):
            run_cycle([], {'short_window': 8, 'long_window': 21})
