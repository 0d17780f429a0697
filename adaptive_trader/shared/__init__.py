"""
Shared types and defaults for the engine.

This module provides:
- Candle / PriceBar records and the Direction enum
- Centralized default values and valid ranges for every control parameter
"""
from .types import Candle, PriceBar, Direction
from .defaults import (
    DEFAULT_SHORT_WINDOW, DEFAULT_LONG_WINDOW, DEFAULT_THRESHOLD,
    DEFAULT_RISK_PER_TRADE, DEFAULT_MAX_POSITION, DEFAULT_LEARNING_RATE,
    RISK_BUDGET, WIN_RATE_TARGET, INITIAL_EQUITY, CANDLE_WINDOW,
)

__all__ = [
    'Candle',
    'PriceBar',
    'Direction',
    'DEFAULT_SHORT_WINDOW', 'DEFAULT_LONG_WINDOW', 'DEFAULT_THRESHOLD',
    'DEFAULT_RISK_PER_TRADE', 'DEFAULT_MAX_POSITION', 'DEFAULT_LEARNING_RATE',
    'RISK_BUDGET', 'WIN_RATE_TARGET', 'INITIAL_EQUITY', 'CANDLE_WINDOW',
]
