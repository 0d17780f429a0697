"""
Strategy configuration for the adaptive engine.

Six scalar control parameters, each independently bounded. Validation runs at
construction time (fail fast with clear errors). Helpers build valid configs
from untrusted values: clamp_config for numeric inputs that should be pulled
into range, config_from_dict for stored records where each broken field falls
back to its own default.
"""
import logging
import math
from dataclasses import dataclass, asdict, fields
from typing import Any, Dict, Mapping, Optional

from ..shared.defaults import (
    DEFAULT_SHORT_WINDOW, DEFAULT_LONG_WINDOW, MIN_SHORT_WINDOW, MAX_LONG_WINDOW,
    DEFAULT_THRESHOLD, MIN_THRESHOLD, MAX_THRESHOLD,
    DEFAULT_RISK_PER_TRADE, MIN_RISK_PER_TRADE, MAX_RISK_PER_TRADE,
    DEFAULT_MAX_POSITION, MIN_MAX_POSITION, MAX_MAX_POSITION,
    DEFAULT_LEARNING_RATE, MIN_LEARNING_RATE, MAX_LEARNING_RATE,
)


logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """A configuration violates its own range or ordering constraints."""


# field -> (min, max) for the scalar fields; windows are checked as a pair
FLOAT_BOUNDS = {
    'threshold': (MIN_THRESHOLD, MAX_THRESHOLD),
    'risk_per_trade': (MIN_RISK_PER_TRADE, MAX_RISK_PER_TRADE),
    'max_position': (MIN_MAX_POSITION, MAX_MAX_POSITION),
    'learning_rate': (MIN_LEARNING_RATE, MAX_LEARNING_RATE),
}

FIELD_DEFAULTS = {
    'short_window': DEFAULT_SHORT_WINDOW,
    'long_window': DEFAULT_LONG_WINDOW,
    'threshold': DEFAULT_THRESHOLD,
    'risk_per_trade': DEFAULT_RISK_PER_TRADE,
    'max_position': DEFAULT_MAX_POSITION,
    'learning_rate': DEFAULT_LEARNING_RATE,
}

# Key names used by older stores
FIELD_ALIASES = {
    'shortWindow': 'short_window',
    'longWindow': 'long_window',
    'riskPerTrade': 'risk_per_trade',
    'maxPosition': 'max_position',
    'learningRate': 'learning_rate',
}


def _validate_config(
    *,
    short_window: Any,
    long_window: Any,
    threshold: Any,
    risk_per_trade: Any,
    max_position: Any,
    learning_rate: Any,
) -> None:
    """Validate all six parameters. Raises ConfigError with clear message on failure."""
    for name, value in (('short_window', short_window), ('long_window', long_window)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"{name} must be an integer, got {value!r}")
    if short_window < MIN_SHORT_WINDOW:
        raise ConfigError(
            f"short_window must be >= {MIN_SHORT_WINDOW}, got {short_window}"
        )
    if long_window > MAX_LONG_WINDOW:
        raise ConfigError(
            f"long_window must be <= {MAX_LONG_WINDOW}, got {long_window}"
        )
    if short_window >= long_window:
        raise ConfigError(
            f"short_window ({short_window}) must be less than long_window ({long_window})"
        )
    values = {
        'threshold': threshold,
        'risk_per_trade': risk_per_trade,
        'max_position': max_position,
        'learning_rate': learning_rate,
    }
    for name, value in values.items():
        low, high = FLOAT_BOUNDS[name]
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigError(f"{name} must be a number, got {value!r}")
        # NaN fails this comparison too
        if not (low <= value <= high):
            raise ConfigError(f"{name} must be in [{low}, {high}], got {value}")


@dataclass(frozen=True)
class StrategyConfig:
    """Control parameters threaded from one cycle into the next."""
    short_window: int = DEFAULT_SHORT_WINDOW  # Fast EMA window (bars)
    long_window: int = DEFAULT_LONG_WINDOW  # Slow EMA window (bars)
    threshold: float = DEFAULT_THRESHOLD  # Signal deadband, percent of long EMA
    risk_per_trade: float = DEFAULT_RISK_PER_TRADE  # Fraction of equity per position
    max_position: float = DEFAULT_MAX_POSITION  # Position cap, multiple of equity
    learning_rate: float = DEFAULT_LEARNING_RATE  # Adaptation step size

    def __post_init__(self) -> None:
        _validate_config(**self.to_dict())

    @property
    def position_fraction(self) -> float:
        """Fraction of current equity committed when a position opens."""
        return min(self.risk_per_trade, self.max_position)

    def to_dict(self) -> Dict[str, Any]:
        """Flat record of the six fields."""
        return asdict(self)


def validate_config(config: Any) -> StrategyConfig:
    """
    Check a configuration argument without repairing it.

    Returns:
        The same config when valid

    Raises:
        ConfigError: If config is not a StrategyConfig or violates its invariants
    """
    if not isinstance(config, StrategyConfig):
        raise ConfigError(
            f"Expected StrategyConfig, got {type(config).__name__}"
        )
    _validate_config(**config.to_dict())
    return config


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def clamp_config(
    *,
    short_window: float,
    long_window: float,
    threshold: float,
    risk_per_trade: float,
    max_position: float,
    learning_rate: float,
) -> StrategyConfig:
    """
    Build a valid StrategyConfig by pulling every value into its range.

    Windows are rounded to whole bars; short_window is clamped first and
    long_window is then kept strictly above it. A NaN value falls back to the
    field default since it has no position within a range.
    """
    raw = {
        'short_window': short_window,
        'long_window': long_window,
        'threshold': threshold,
        'risk_per_trade': risk_per_trade,
        'max_position': max_position,
        'learning_rate': learning_rate,
    }
    for name, value in raw.items():
        if value is None or math.isnan(value):
            raw[name] = FIELD_DEFAULTS[name]

    short = int(round(_clamp(raw['short_window'], MIN_SHORT_WINDOW, MAX_LONG_WINDOW - 1)))
    long = int(round(_clamp(raw['long_window'], short + 1, MAX_LONG_WINDOW)))

    clamped = {
        name: float(_clamp(raw[name], low, high))
        for name, (low, high) in FLOAT_BOUNDS.items()
    }
    return StrategyConfig(short_window=short, long_window=long, **clamped)


def _parse_number(value: Any) -> Optional[float]:
    """Finite float from a stored value, or None if it cannot be used."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def _parse_window(value: Any, low: int, high: int) -> Optional[int]:
    number = _parse_number(value)
    if number is None or not number.is_integer():
        return None
    window = int(number)
    if not (low <= window <= high):
        return None
    return window


def config_from_dict(data: Optional[Mapping[str, Any]]) -> StrategyConfig:
    """
    Load a configuration from a flat stored record.

    Each missing or invalid field is replaced by its own default, so a
    partially corrupt record keeps its valid fields. Unknown keys are ignored.
    If both windows are individually valid but out of order, the window pair
    falls back to the default pair.

    Args:
        data: Mapping with snake_case (or legacy camelCase) field names

    Returns:
        A valid StrategyConfig
    """
    record: Dict[str, Any] = {}
    for key, value in (data or {}).items():
        name = FIELD_ALIASES.get(key, key)
        if name in FIELD_DEFAULTS:
            record[name] = value

    values: Dict[str, Any] = {}

    short = _parse_window(record.get('short_window'), MIN_SHORT_WINDOW, MAX_LONG_WINDOW - 1)
    long = _parse_window(record.get('long_window'), MIN_SHORT_WINDOW + 1, MAX_LONG_WINDOW)
    if short is None:
        if 'short_window' in record:
            logger.warning(f"Invalid short_window {record['short_window']!r}, using default")
        short = DEFAULT_SHORT_WINDOW
    if long is None:
        if 'long_window' in record:
            logger.warning(f"Invalid long_window {record['long_window']!r}, using default")
        long = DEFAULT_LONG_WINDOW
    if short >= long:
        logger.warning(
            f"short_window ({short}) not below long_window ({long}), using default windows"
        )
        short, long = DEFAULT_SHORT_WINDOW, DEFAULT_LONG_WINDOW
    values['short_window'] = short
    values['long_window'] = long

    for name, (low, high) in FLOAT_BOUNDS.items():
        number = _parse_number(record.get(name))
        if number is None or not (low <= number <= high):
            if name in record:
                logger.warning(f"Invalid {name} {record[name]!r}, using default")
            number = FIELD_DEFAULTS[name]
        values[name] = float(number)

    return StrategyConfig(**values)


CONFIG_FIELDS = tuple(f.name for f in fields(StrategyConfig))

DEFAULT_CONFIG = StrategyConfig()
