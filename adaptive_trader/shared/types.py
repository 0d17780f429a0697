"""
Shared record types for the engine.

Candles arrive already reconciled from two upstream sources; the engine only
reads their mid-price. Direction doubles as the P&L sign of a position.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Direction(Enum):
    """Directional state of a signal or simulated position."""
    SHORT = -1
    FLAT = 0
    LONG = 1


@dataclass(frozen=True)
class PriceBar:
    """OHLCV reading from one upstream source."""
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0


@dataclass(frozen=True)
class Candle:
    """
    One reconciled observation.

    Either source bar may be missing for a timestamp. mid_price and spread are
    derived from whichever closes are available (see from_bars).
    """
    timestamp: int  # epoch milliseconds, strictly increasing within a window
    mid_price: float
    spread: float = 0.0
    primary: Optional[PriceBar] = None
    secondary: Optional[PriceBar] = None

    @classmethod
    def from_bars(
        cls,
        timestamp: int,
        primary: Optional[PriceBar] = None,
        secondary: Optional[PriceBar] = None,
    ) -> "Candle":
        """
        Build a candle from the source bars present at this timestamp.

        Mid-price is the mean of the available closes, spread the absolute
        difference between them (0 when only one source reported).

        Raises:
            ValueError: If neither source bar is given
        """
        if primary is None and secondary is None:
            raise ValueError(f"Candle at {timestamp} has no source bar")
        if primary is not None and secondary is not None:
            mid_price = (primary.close + secondary.close) / 2
            spread = abs(primary.close - secondary.close)
        else:
            bar = primary if primary is not None else secondary
            mid_price = bar.close
            spread = 0.0
        return cls(
            timestamp=int(timestamp),
            mid_price=float(mid_price),
            spread=float(spread),
            primary=primary,
            secondary=secondary,
        )
