"""
Adaptive trading-signal engine.

Provides a closed loop that runs once per evaluation cycle:
- Indicator calculation (fast/slow EMA over reconciled mid-prices)
- Signal generation (long / flat / short with a deadband threshold)
- Execution simulation and performance metrics
- Bounded parameter adaptation for the next cycle

The whole loop is exposed as a single pure call, see
``adaptive_trader.orchestration.run_cycle``.
"""
from .orchestration.cycle import run_cycle
from .signals.config import StrategyConfig, ConfigError
from .evaluation.metrics import Metrics
from .shared.types import Candle, PriceBar, Direction

__all__ = [
    'run_cycle',
    'StrategyConfig',
    'ConfigError',
    'Metrics',
    'Candle',
    'PriceBar',
    'Direction',
]
