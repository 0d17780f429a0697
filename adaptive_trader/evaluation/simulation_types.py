"""
Simulation types: open position, closed trade record, simulation result.

Kept apart from simulator.py so the metrics aggregator can import the result
type without pulling in the walk itself.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from ..shared.types import Direction


def price_return(entry_price: float, exit_price: float) -> float:
    """exit / entry - 1, or 0.0 when the entry price is not positive."""
    if entry_price <= 0:
        return 0.0
    return exit_price / entry_price - 1.0


@dataclass
class SimulatedPosition:
    """Position held during the walk. Never leaves the simulator."""
    direction: Direction
    entry_price: float
    size: float  # Capital committed, in equity units
    entry_index: int

    def pnl_at(self, price: float) -> float:
        """Profit/loss if the position were closed at price."""
        return self.size * self.direction.value * price_return(self.entry_price, price)


@dataclass(frozen=True)
class TradeRecord:
    """A closed position."""
    direction: Direction
    entry_index: int
    exit_index: int
    entry_price: float
    exit_price: float
    size: float
    pnl: float

    @property
    def is_win(self) -> bool:
        return self.pnl > 0

    @property
    def is_loss(self) -> bool:
        return self.pnl < 0


@dataclass(frozen=True)
class SimulationResult:
    """Counters and equity trace from one walk over the candle window."""
    trades: int
    wins: int
    losses: int
    equity_curve: Tuple[float, ...]
    max_drawdown: float
    final_equity: float  # Mark-to-market equity after the last bar
    realized_equity: float
    trade_log: Tuple[TradeRecord, ...] = ()
    open_direction: Direction = Direction.FLAT  # Direction still held at the end
    open_entry_price: Optional[float] = None
