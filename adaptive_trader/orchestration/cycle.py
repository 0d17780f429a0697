"""
One evaluation cycle: indicators -> signals -> simulation -> metrics -> learning.

run_cycle is pure and re-entrant. Nothing is retained between calls; the
caller persists the returned configuration and passes it back next time.
"""
import logging
from typing import Sequence, Tuple

from ..shared.types import Candle
from ..signals.config import StrategyConfig, validate_config
from ..signals.generator import SignalGenerator
from ..evaluation.simulator import ExecutionSimulator
from ..evaluation.metrics import Metrics, EMPTY_METRICS, aggregate_metrics
from ..learning.learner import adapt_config


logger = logging.getLogger(__name__)


def evaluate(candles: Sequence[Candle], config: StrategyConfig) -> Metrics:
    """Signal, simulate and measure one candle window without learning."""
    if len(candles) == 0:
        return EMPTY_METRICS

    prices = [candle.mid_price for candle in candles]
    directions = SignalGenerator(config).directions(prices)
    result = ExecutionSimulator.from_config(config).run(prices, directions)
    return aggregate_metrics(result)


def run_cycle(
    candles: Sequence[Candle],
    config: StrategyConfig,
) -> Tuple[Metrics, StrategyConfig]:
    """
    Run the full signal -> simulate -> learn pipeline once.

    Args:
        candles: Reconciled candles in strictly increasing timestamp order
        config: Current configuration (must already be valid)

    Returns:
        Tuple of (metrics, updated config). An empty window returns the
        default metrics and the unchanged config.

    Raises:
        ConfigError: If config violates its own invariants
    """
    validate_config(config)

    if len(candles) == 0:
        logger.debug("Empty candle window, configuration unchanged")
        return EMPTY_METRICS, config

    metrics = evaluate(candles, config)
    updated = adapt_config(config, metrics)

    logger.debug(
        f"Cycle over {len(candles)} candles: return {metrics.cumulative_return:.4f}, "
        f"{metrics.trades} trades, max drawdown {metrics.max_drawdown:.4f}"
    )
    return metrics, updated
