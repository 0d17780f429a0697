"""
Host-side cycle runner.

The engine is synchronous and stateless; hosts that trigger cycles on a timer
and on demand need a single place that holds the visible configuration and
metrics. CycleRunner issues a ticket when a cycle starts and only publishes a
finished cycle if no cycle that started later has published already, so a
slow, stale cycle never overwrites a newer result. Store writes happen under
the same lock, so the stored record always matches the visible configuration.
"""
import logging
import threading
from dataclasses import dataclass
from typing import Optional, Sequence

from ..shared.types import Candle
from ..signals.config import StrategyConfig, DEFAULT_CONFIG, validate_config
from ..evaluation.metrics import Metrics
from ..orchestration.cycle import run_cycle
from .config_store import ConfigStore


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CycleTicket:
    """Start-order token for one cycle."""
    sequence: int
    config: StrategyConfig  # Configuration the cycle runs with


class CycleRunner:
    """
    Runs cycles and publishes their results in start order.

    Responsibilities:
    - Hand each cycle the configuration visible when it started
    - Drop results from cycles that started before the last published one
    - Adopt the adapted configuration only while auto_learn is on
    - Persist every adopted configuration when a store is attached
    """

    def __init__(
        self,
        config: Optional[StrategyConfig] = None,
        auto_learn: bool = True,
        store: Optional[ConfigStore] = None,
    ):
        """
        Initialize runner.

        Args:
            config: Starting configuration (default: loaded from store, else defaults)
            auto_learn: Adopt the learner's configuration after each cycle
            store: Optional ConfigStore to persist adopted configurations
        """
        if config is None:
            config = store.load() if store is not None else DEFAULT_CONFIG
        self._config = validate_config(config)
        self.auto_learn = auto_learn
        self.store = store
        self._metrics: Optional[Metrics] = None
        self._lock = threading.Lock()
        self._next_sequence = 0
        self._published_sequence = -1

    @property
    def config(self) -> StrategyConfig:
        with self._lock:
            return self._config

    @property
    def metrics(self) -> Optional[Metrics]:
        with self._lock:
            return self._metrics

    def set_config(self, config: StrategyConfig) -> None:
        """Replace the visible configuration (manual override)."""
        validate_config(config)
        with self._lock:
            self._config = config
            if self.store is not None:
                self.store.save(config)

    def begin(self) -> CycleTicket:
        """Register a cycle start and snapshot the configuration it runs with."""
        with self._lock:
            ticket = CycleTicket(sequence=self._next_sequence, config=self._config)
            self._next_sequence += 1
        return ticket

    def complete(self, ticket: CycleTicket, candles: Sequence[Candle]) -> bool:
        """
        Run the cycle for ticket and publish its result unless it is stale.

        Returns:
            True if the result was published
        """
        metrics, updated = run_cycle(candles, ticket.config)
        return self.publish(ticket, metrics, updated)

    def publish(self, ticket: CycleTicket, metrics: Metrics, updated: StrategyConfig) -> bool:
        """Publish a finished cycle's result if no later-started cycle has."""
        with self._lock:
            if ticket.sequence <= self._published_sequence:
                logger.info(
                    f"Discarding stale cycle {ticket.sequence} "
                    f"(cycle {self._published_sequence} already published)"
                )
                return False
            self._published_sequence = ticket.sequence
            self._metrics = metrics
            if not self.auto_learn:
                return True
            changed = updated != self._config
            self._config = updated
            # Written under the lock so a stale save cannot land after a newer one
            if self.store is not None:
                self.store.save(updated)

        if changed:
            logger.info(f"Cycle {ticket.sequence} adopted config {updated}")
        return True

    def run_once(self, candles: Sequence[Candle]) -> bool:
        """Begin and complete one cycle."""
        return self.complete(self.begin(), candles)
