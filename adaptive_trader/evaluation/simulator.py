"""
Execution simulator over directional states.

Walks the bars in order with a Flat / Long / Short state machine:
- Flat -> Long/Short opens a position of position_fraction * equity at the mid-price
- a change away from the held direction closes the position at the mid-price,
  realizes size * direction * (exit / entry - 1) and, if the new state is not
  flat, reopens in the new direction on the same bar
- a repeated state does nothing

After every bar the mark-to-market equity is appended to the curve and the
running peak / max drawdown are updated. An open position at the end is
marked to the last price but not counted as a trade.
"""
import logging
from typing import List, Optional, Sequence

from ..shared.defaults import INITIAL_EQUITY
from ..shared.types import Direction
from ..signals.config import StrategyConfig
from .simulation_types import SimulatedPosition, TradeRecord, SimulationResult


logger = logging.getLogger(__name__)


def drawdown(peak: float, equity: float) -> float:
    """(peak - equity) / peak, 0 when equity is at or above peak or peak <= 0."""
    if peak <= 0 or equity >= peak:
        return 0.0
    return (peak - equity) / peak


class ExecutionSimulator:
    """
    Simulates trading one signal sequence against its own price path.

    Features:
    - Single position at a time, long or short
    - Position size is a fraction of realized equity at entry
    - Flips close and reopen on the same bar
    """

    def __init__(
        self,
        position_fraction: float,
        initial_equity: float = INITIAL_EQUITY,
    ):
        """
        Initialize the simulator.

        Args:
            position_fraction: Fraction of current equity committed per position
                (min(risk_per_trade, max_position) of the active config)
            initial_equity: Starting equity (default: 1.0)
        """
        self.position_fraction = position_fraction
        self.initial_equity = initial_equity

    @classmethod
    def from_config(cls, config: StrategyConfig) -> "ExecutionSimulator":
        return cls(position_fraction=config.position_fraction)

    def _open(self, direction: Direction, price: float, equity: float, index: int) -> SimulatedPosition:
        size = self.position_fraction * max(equity, 0.0)
        return SimulatedPosition(
            direction=direction,
            entry_price=price,
            size=size,
            entry_index=index,
        )

    def run(
        self,
        prices: Sequence[float],
        directions: Sequence[Direction],
    ) -> SimulationResult:
        """
        Walk prices and directional states in order.

        Args:
            prices: Mid-price per bar
            directions: Direction per bar (same length as prices)

        Returns:
            SimulationResult with counters, equity curve and trade log.
            For empty input the curve is [initial_equity].
        """
        if len(prices) != len(directions):
            raise ValueError(
                f"prices ({len(prices)}) and directions ({len(directions)}) must have equal length"
            )

        equity = self.initial_equity
        position: Optional[SimulatedPosition] = None
        trade_log: List[TradeRecord] = []
        wins = 0
        losses = 0

        equity_curve: List[float] = []
        peak = self.initial_equity
        max_drawdown = 0.0

        for index, (price, direction) in enumerate(zip(prices, directions)):
            price = float(price)
            held = position.direction if position is not None else Direction.FLAT

            if direction != held:
                if position is not None:
                    pnl = position.pnl_at(price)
                    equity += pnl
                    trade_log.append(TradeRecord(
                        direction=position.direction,
                        entry_index=position.entry_index,
                        exit_index=index,
                        entry_price=position.entry_price,
                        exit_price=price,
                        size=position.size,
                        pnl=pnl,
                    ))
                    if pnl > 0:
                        wins += 1
                    elif pnl < 0:
                        losses += 1
                    position = None

                if direction != Direction.FLAT:
                    position = self._open(direction, price, equity, index)

            mark = equity + (position.pnl_at(price) if position is not None else 0.0)
            equity_curve.append(mark)

            if mark > peak:
                peak = mark
            current_drawdown = drawdown(peak, mark)
            if current_drawdown > max_drawdown:
                max_drawdown = current_drawdown

        if not equity_curve:
            equity_curve.append(self.initial_equity)

        logger.debug(
            f"Simulated {len(prices)} bars: {len(trade_log)} trades, "
            f"{wins} wins, {losses} losses, max drawdown {max_drawdown:.4f}"
        )

        return SimulationResult(
            trades=len(trade_log),
            wins=wins,
            losses=losses,
            equity_curve=tuple(equity_curve),
            max_drawdown=max_drawdown,
            final_equity=equity_curve[-1],
            realized_equity=equity,
            trade_log=tuple(trade_log),
            open_direction=position.direction if position is not None else Direction.FLAT,
            open_entry_price=position.entry_price if position is not None else None,
        )
