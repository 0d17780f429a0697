"""
Centralized default values and valid ranges for the control parameters.

This is the SINGLE SOURCE OF TRUTH for configuration defaults and bounds.
The config module, the learner and the persistence layer all import from here.
"""

# EMA windows (bars). MIN_SHORT_WINDOW <= short < long <= MAX_LONG_WINDOW
DEFAULT_SHORT_WINDOW = 8
DEFAULT_LONG_WINDOW = 21
MIN_SHORT_WINDOW = 2
MAX_LONG_WINDOW = 64

# Signal deadband in price-percentage units
DEFAULT_THRESHOLD = 0.1
MIN_THRESHOLD = -5.0
MAX_THRESHOLD = 5.0

# Fraction of capital committed per position
DEFAULT_RISK_PER_TRADE = 0.1
MIN_RISK_PER_TRADE = 0.01
MAX_RISK_PER_TRADE = 1.0

# Position cap (multiple of capital)
DEFAULT_MAX_POSITION = 1.0
MIN_MAX_POSITION = 0.25
MAX_MAX_POSITION = 5.0

# Adaptation step size
DEFAULT_LEARNING_RATE = 0.2
MIN_LEARNING_RATE = 0.05
MAX_LEARNING_RATE = 1.0

# Learner rule constants
RISK_BUDGET = 0.2  # Max drawdown tolerated before position sizes shrink
WIN_RATE_TARGET = 0.5  # Below this win rate the entry threshold gets stricter
RISK_REWARD_STEP = 0.05  # risk_per_trade += learning_rate * step on profitable, low-drawdown cycles

# Simulation
INITIAL_EQUITY = 1.0

# Number of most recent candles a host hands to one cycle (15m bars)
CANDLE_WINDOW = 200
