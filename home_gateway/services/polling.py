"""Fixed-interval background refresh of the entity registry.

Every tick re-runs full discovery and copies the discovered states into
the state cache. Failures are counted, logged and suppressed; the loop
keeps its interval regardless (no backoff, no circuit breaking).
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any

from home_gateway.services.entity_registry import EntityRegistry
from home_gateway.services.state_cache import StateCache

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 60.0


@dataclass
class PollingMetrics:
    """Counters for the refresh loop."""

    total_runs: int = 0
    successful_runs: int = 0
    failed_runs: int = 0
    consecutive_failures: int = 0
    last_error: str | None = None
    last_success_time: float | None = None
    last_run_time: float | None = None

    def record_success(self) -> None:
        now = time.time()
        self.total_runs += 1
        self.successful_runs += 1
        self.consecutive_failures = 0
        self.last_success_time = now
        self.last_run_time = now

    def record_failure(self, error: Exception) -> None:
        self.total_runs += 1
        self.failed_runs += 1
        self.consecutive_failures += 1
        self.last_error = f"{type(error).__name__}: {error}"
        self.last_run_time = time.time()

    def to_dict(self) -> dict[str, Any]:
        """Convert metrics to dictionary for JSON serialization."""
        return {
            "total_runs": self.total_runs,
            "successful_runs": self.successful_runs,
            "failed_runs": self.failed_runs,
            "consecutive_failures": self.consecutive_failures,
            "last_error": self.last_error,
            "last_success_time": self.last_success_time,
            "last_run_time": self.last_run_time,
        }


class PollingLoop:
    """Background task refreshing devices on a fixed interval.

    Usage:
        loop = PollingLoop(registry, cache, interval=60)
        loop.start()
        ...
        await loop.stop()
    """

    def __init__(
        self,
        entity_registry: EntityRegistry,
        state_cache: StateCache,
        interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        """Initialize polling loop.

        Args:
            entity_registry: Registry to rediscover on each tick
            state_cache: Cache to fill with discovered states
            interval: Seconds between the starts of consecutive refreshes
        """
        if interval <= 0:
            raise ValueError("Polling interval must be positive")
        self.entity_registry = entity_registry
        self.state_cache = state_cache
        self.interval = interval
        self.metrics = PollingMetrics()
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def refresh(self) -> None:
        """Rediscover entities and copy their states into the cache.

        Raises:
            DiscoveryFailed: If discovery fails (cache left untouched)
        """
        entities = await self.entity_registry.discover_entities()
        for entity in entities:
            self.state_cache.update_state(entity.entity_id, entity.state, name=entity.name)

    async def run_once(self) -> bool:
        """Perform one guarded refresh.

        Returns:
            True if the refresh succeeded
        """
        try:
            await self.refresh()
        except Exception as e:
            self.metrics.record_failure(e)
            logger.error(
                f"Failed to update device states "
                f"({self.metrics.consecutive_failures} consecutive failures): {e}"
            )
            return False

        self.metrics.record_success()
        logger.debug("Updated device states")
        return True

    def start(self, run_immediately: bool = False) -> None:
        """Start the background task (no-op if already running).

        Args:
            run_immediately: Refresh once before the first interval elapses
        """
        if self.running:
            logger.warning("Polling loop already running")
            return
        self._task = asyncio.create_task(self._run(run_immediately), name="device-state-polling")
        logger.info(f"Device state polling started (interval={self.interval}s)")

    async def stop(self) -> None:
        """Cancel the background task and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Device state polling stopped")

    async def _run(self, run_immediately: bool) -> None:
        loop = asyncio.get_running_loop()
        next_run = loop.time() if run_immediately else loop.time() + self.interval
        while True:
            await asyncio.sleep(max(0.0, next_run - loop.time()))
            next_run += self.interval
            await self.run_once()
