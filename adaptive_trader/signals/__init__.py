"""
Signal generation module.

Holds the strategy configuration (validation, clamping, per-field loading)
and the generator that turns EMA spreads into long / flat / short states.
"""
from .config import (
    StrategyConfig,
    ConfigError,
    DEFAULT_CONFIG,
    CONFIG_FIELDS,
    validate_config,
    clamp_config,
    config_from_dict,
)
from .generator import SignalGenerator, calculate_spread_pct, classify_spreads

__all__ = [
    'StrategyConfig',
    'ConfigError',
    'DEFAULT_CONFIG',
    'CONFIG_FIELDS',
    'validate_config',
    'clamp_config',
    'config_from_dict',
    'SignalGenerator',
    'calculate_spread_pct',
    'classify_spreads',
]
