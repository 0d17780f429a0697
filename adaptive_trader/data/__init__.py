"""
Candle data module.

Loads windows of already reconciled candles for a cycle.
"""
from .loader import load_candles, candles_from_frame

__all__ = [
    'load_candles',
    'candles_from_frame',
]
