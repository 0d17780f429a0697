"""
Parameter learning module.

Adapts the strategy configuration between cycles from the latest metrics,
always returning a configuration inside the valid ranges.
"""
from .learner import (
    LearnerRules,
    DEFAULT_RULES,
    adapt_config,
    threshold_adjustment,
    drawdown_scale,
)

__all__ = [
    'LearnerRules',
    'DEFAULT_RULES',
    'adapt_config',
    'threshold_adjustment',
    'drawdown_scale',
]
