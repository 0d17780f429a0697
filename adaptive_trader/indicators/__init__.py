"""
Indicator calculation module.

Provides the fast/slow exponential moving averages the signal generator
reads. Both series are defined from the first observation onward.
"""
from .ema import TrendIndicators, calculate_ema, to_price_series

__all__ = [
    'TrendIndicators',
    'calculate_ema',
    'to_price_series',
]
