"""Periodic scanning for config hot-reload.

Runs ``ConfigWatcher.scan_once`` on an asyncio task and hands every
non-empty diff to an apply callback. A single task owns the watcher, so
scans never overlap.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable

from configwatch.config.schema import DEFAULT_POLL_INTERVAL
from configwatch.logging import get_logger
from configwatch.watcher.diff import ConfigDiff
from configwatch.watcher.engine import ConfigWatcher

log = get_logger("poller")


class ReloadPoller:
    """Scans a watcher at a fixed interval and applies the diffs.

    Example:
        registry = ActiveRegistry()
        watcher = ConfigWatcher(ConfigPolicy.for_registry(registry), ["/etc/agent/conf"])

        async with ReloadPoller(watcher, registry.apply, poll_interval=5.0):
            await stop_event.wait()
    """

    def __init__(
        self,
        watcher: ConfigWatcher,
        apply: Callable[[ConfigDiff], None],
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        """Initialize the poller.

        Args:
            watcher: The watcher to scan.
            apply: Called with each non-empty diff.
            poll_interval: Seconds between scans.
        """
        self._watcher = watcher
        self._apply = apply
        self._poll_interval = poll_interval
        self._running = False
        self._task: asyncio.Task[None] | None = None
        self.scans = 0

    @property
    def poll_interval(self) -> float:
        return self._poll_interval

    @poll_interval.setter
    def poll_interval(self, value: float) -> None:
        self._poll_interval = max(0.01, value)

    def is_running(self) -> bool:
        return self._running

    def run_once(self) -> ConfigDiff:
        """Scan once and apply the result if it is not empty."""
        diff = self._watcher.scan_once()
        self.scans += 1
        if not diff.is_empty():
            try:
                self._apply(diff)
            except Exception as e:
                log.error("Error applying config diff: %s", e)
        return diff

    async def _poll_loop(self) -> None:
        """Main polling loop; the first scan runs immediately.

        Scans are synchronous and run on the event loop thread, one at a
        time. A failed scan is logged and retried on the next tick.
        """
        try:
            while self._running:
                try:
                    self.run_once()
                except Exception as e:
                    log.error("Error scanning config sources: %s", e)
                await asyncio.sleep(self._poll_interval)
        except asyncio.CancelledError:
            log.debug("Reload poller cancelled")
            raise
        finally:
            self._running = False

    def start(self) -> None:
        """Start polling. Must be called from within a running event loop."""
        if self._running:
            return

        self._running = True
        self._task = asyncio.create_task(self._poll_loop())
        log.info("Reload poller started (interval=%.1fs)", self._poll_interval)

    def stop(self) -> None:
        """Stop polling."""
        self._running = False
        if self._task:
            self._task.cancel()
            self._task = None
        log.info("Reload poller stopped")

    async def __aenter__(self) -> ReloadPoller:
        self.start()
        return self

    async def __aexit__(self, *args: object) -> None:
        self.stop()
