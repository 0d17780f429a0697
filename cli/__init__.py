"""
Command-line entry points for the adaptive engine.

Provides:
- Single cycle evaluation and adaptation over a candle CSV
"""
