"""
Performance metrics for one cycle.

Metrics are a pure reduction of a SimulationResult and are recomputed in full
every cycle.
"""
from dataclasses import dataclass
from typing import Any, Dict, Sequence, Tuple

import numpy as np

from ..shared.defaults import INITIAL_EQUITY
from .simulation_types import SimulationResult


@dataclass(frozen=True)
class Metrics:
    """Summary statistics of one simulated cycle."""
    trades: int = 0
    wins: int = 0
    losses: int = 0
    cumulative_return: float = 0.0  # Fractional change of equity over the window
    max_drawdown: float = 0.0  # Non-negative fraction
    equity_curve: Tuple[float, ...] = (INITIAL_EQUITY,)

    @property
    def win_rate(self) -> float:
        """wins / trades, 0.0 with no trades."""
        if self.trades == 0:
            return 0.0
        return self.wins / self.trades

    def to_dict(self) -> Dict[str, Any]:
        return {
            'trades': self.trades,
            'wins': self.wins,
            'losses': self.losses,
            'win_rate': self.win_rate,
            'cumulative_return': self.cumulative_return,
            'max_drawdown': self.max_drawdown,
            'equity_curve': list(self.equity_curve),
        }


EMPTY_METRICS = Metrics()


def aggregate_metrics(result: SimulationResult) -> Metrics:
    """
    Reduce a simulation result to Metrics.

    Counters and max drawdown come straight from the simulator;
    cumulative_return is the last equity value minus the starting 1.0.
    """
    curve = tuple(result.equity_curve) or (INITIAL_EQUITY,)
    return Metrics(
        trades=result.trades,
        wins=result.wins,
        losses=result.losses,
        cumulative_return=curve[-1] - INITIAL_EQUITY,
        max_drawdown=result.max_drawdown,
        equity_curve=curve,
    )


def calculate_max_drawdown(equity_curve: Sequence[float]) -> float:
    """
    Largest peak-to-trough decline of an equity curve, as a fraction.

    Points where the running peak is not positive contribute 0.
    """
    if len(equity_curve) == 0:
        return 0.0
    values = np.asarray(equity_curve, dtype=float)
    peaks = np.maximum.accumulate(values)
    drawdowns = np.divide(
        peaks - values,
        peaks,
        out=np.zeros_like(values),
        where=peaks > 0,
    )
    return float(max(drawdowns.max(), 0.0))


def format_metrics(metrics: Metrics) -> str:
    """Multi-line performance summary for terminal output."""
    def pct(value: float) -> str:
        return f"{value * 100:.2f}%"

    lines = [
        f"Cumulative return: {pct(metrics.cumulative_return)}",
        f"Trades:            {metrics.trades}",
        f"Win rate:          {pct(metrics.win_rate)}",
        f"Max drawdown:      {pct(metrics.max_drawdown)}",
        f"Wins / Losses:     {metrics.wins} / {metrics.losses}",
        f"Final equity:      {metrics.equity_curve[-1]:.4f}",
    ]
    return "\n".join(lines)
