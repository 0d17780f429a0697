"""
Directional signal generation from the fast/slow EMA spread.

spread_pct = (ema_short - ema_long) / ema_long * 100
    spread_pct >  threshold -> LONG
    spread_pct < -threshold -> SHORT
    otherwise               -> FLAT

The long test is applied first, so with a negative threshold a spread inside
(threshold, -threshold) is LONG. No warm-up suppression is applied: both EMAs
are defined from the first bar, so every index is classified. The first bar is
always FLAT since it has no history to cross from, whatever the threshold.
"""
from typing import List

import numpy as np
import pandas as pd

from ..indicators.ema import TrendIndicators, PriceInput, to_price_series
from ..shared.types import Direction
from .config import StrategyConfig


SIGNAL_COLUMNS = ['price', 'ema_short', 'ema_long', 'spread_pct', 'direction']


def calculate_spread_pct(ema_short: pd.Series, ema_long: pd.Series) -> pd.Series:
    """Percentage gap of the fast EMA over the slow EMA (0 where the slow EMA is 0)."""
    short = ema_short.to_numpy(dtype=float)
    long = ema_long.to_numpy(dtype=float)
    spread = np.divide(
        (short - long) * 100.0,
        long,
        out=np.zeros_like(long),
        where=long != 0,
    )
    return pd.Series(spread, index=ema_long.index)


def classify_spreads(spread_pct: pd.Series, threshold: float) -> List[Direction]:
    """Map each spread value to a Direction using the deadband threshold."""
    values = spread_pct.to_numpy(dtype=float)
    codes = np.where(
        values > threshold,
        Direction.LONG.value,
        np.where(values < -threshold, Direction.SHORT.value, Direction.FLAT.value),
    )
    return [Direction(int(code)) for code in codes]


class SignalGenerator:
    """Turns a price sequence into per-bar directional states for one config."""

    def __init__(self, config: StrategyConfig):
        self.config = config
        self.indicators = TrendIndicators(
            short_window=config.short_window,
            long_window=config.long_window,
        )

    def generate(self, prices: PriceInput) -> pd.DataFrame:
        """
        Calculate indicators and classify every bar.

        Args:
            prices: Ordered mid-prices

        Returns:
            DataFrame with columns price, ema_short, ema_long, spread_pct and
            direction (Direction members), one row per input price
        """
        series = to_price_series(prices)
        if series.empty:
            return pd.DataFrame(columns=SIGNAL_COLUMNS)

        ema_short, ema_long = self.indicators.calculate(series)
        spread_pct = calculate_spread_pct(ema_short, ema_long)
        directions = classify_spreads(spread_pct, self.config.threshold)
        directions[0] = Direction.FLAT

        return pd.DataFrame({
            'price': series,
            'ema_short': ema_short,
            'ema_long': ema_long,
            'spread_pct': spread_pct,
            'direction': directions,
        })

    def directions(self, prices: PriceInput) -> List[Direction]:
        """Directional state per bar (empty for empty input)."""
        frame = self.generate(prices)
        return list(frame['direction'])
