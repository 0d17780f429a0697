"""
Cycle orchestration.

Composes indicator calculation, signal generation, simulation, metrics and
learning into the single entry point run_cycle.
"""
from .cycle import run_cycle, evaluate

__all__ = [
    'run_cycle',
    'evaluate',
]
