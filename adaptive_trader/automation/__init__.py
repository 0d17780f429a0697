"""
Host-side automation.

Configuration persistence and the runner that publishes cycle results.
"""
from .config_store import ConfigStore
from .runner import CycleRunner, CycleTicket

__all__ = [
    'ConfigStore',
    'CycleRunner',
    'CycleTicket',
]
