"""
Execution simulation and performance metrics.

The simulator walks one window of bars with a single long/short position;
metrics reduce its counters and equity curve.
"""
from .simulator import ExecutionSimulator, drawdown
from .simulation_types import SimulatedPosition, TradeRecord, SimulationResult, price_return
from .metrics import (
    Metrics,
    EMPTY_METRICS,
    aggregate_metrics,
    calculate_max_drawdown,
    format_metrics,
)

__all__ = [
    'ExecutionSimulator',
    'drawdown',
    'SimulatedPosition',
    'TradeRecord',
    'SimulationResult',
    'price_return',
    'Metrics',
    'EMPTY_METRICS',
    'aggregate_metrics',
    'calculate_max_drawdown',
    'format_metrics',
]
