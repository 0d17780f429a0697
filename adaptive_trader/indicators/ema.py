"""
Exponential moving averages over the mid-price sequence.

Uses smoothing factor alpha = 2 / (window + 1) seeded with the first price
(pandas ``ewm(span=window, adjust=False)``), so there is no NaN warm-up.
"""
from typing import Sequence, Tuple, Union

import numpy as np
import pandas as pd

from ..shared.defaults import DEFAULT_SHORT_WINDOW, DEFAULT_LONG_WINDOW


PriceInput = Union[pd.Series, Sequence[float], np.ndarray]


def to_price_series(prices: PriceInput) -> pd.Series:
    """Coerce a price sequence to a float Series with a positional index."""
    if isinstance(prices, pd.Series):
        return prices.astype(float).reset_index(drop=True)
    return pd.Series(np.asarray(prices, dtype=float))


def calculate_ema(prices: PriceInput, window: int) -> pd.Series:
    """
    Calculate an exponential moving average seeded with the first price.

    Args:
        prices: Ordered prices
        window: EMA window in bars (>= 1)

    Returns:
        Series aligned to the input index (empty for empty input)
    """
    series = to_price_series(prices)
    if series.empty:
        return series
    return series.ewm(span=window, adjust=False).mean()


class TrendIndicators:
    """Calculates the fast and slow trend estimates for one configuration."""

    def __init__(
        self,
        short_window: int = DEFAULT_SHORT_WINDOW,
        long_window: int = DEFAULT_LONG_WINDOW,
    ):
        """
        Initialize indicator calculator.

        Args:
            short_window: Fast EMA window (default: from shared.defaults.DEFAULT_SHORT_WINDOW)
            long_window: Slow EMA window (default: from shared.defaults.DEFAULT_LONG_WINDOW)
        """
        self.short_window = short_window
        self.long_window = long_window

    def calculate(self, prices: PriceInput) -> Tuple[pd.Series, pd.Series]:
        """
        Calculate both EMAs.

        Returns:
            Tuple of (short EMA, long EMA), equal length and index-aligned
        """
        series = to_price_series(prices)
        return (
            calculate_ema(series, self.short_window),
            calculate_ema(series, self.long_window),
        )
