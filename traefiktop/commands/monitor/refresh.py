"""Background refresh of the router snapshot, applied from the control loop."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Protocol

from ...exceptions import TraefikTopError
from ...models import Snapshot
from .view_model import RouterListView

logger = logging.getLogger("traefiktop")


class SnapshotSource(Protocol):
    """Anything that can fetch a snapshot (normally ``TraefikClient``)."""

    def fetch_snapshot(self) -> Snapshot: ...


class RefreshScheduler:
    """Owns the refresh timer and the single in-flight fetch.

    The fetch runs on a worker thread; its outcome is only applied to the
    view when the control loop calls ``poll()``, so the view is never touched
    from two threads.
    """

    def __init__(
        self,
        source: SnapshotSource,
        view: RouterListView,
        *,
        interval_s: float,
        clock: Callable[[], float] = time.monotonic,
        executor: ThreadPoolExecutor | None = None,
    ) -> None:
        self.source = source
        self.view = view
        self.interval_s = interval_s
        self._clock = clock
        self._executor = executor or ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="traefiktop-refresh"
        )
        self._future: Future[Snapshot] | None = None
        self._last_attempt: float | None = None

    @property
    def in_flight(self) -> bool:
        return self._future is not None

    def due(self) -> bool:
        """True when no fetch is pending and the refresh interval has elapsed."""
        if self._future is not None:
            return False
        if self._last_attempt is None:
            return True
        return self._clock() - self._last_attempt >= self.interval_s

    def request(self) -> bool:
        """Start a fetch unless one is already running. Returns True if started."""
        if self._future is not None:
            return False
        self.view.begin_refresh()
        self._future = self._executor.submit(self.source.fetch_snapshot)
        logger.debug("Refresh started")
        return True

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the pending fetch finishes. Returns True if it finished."""
        if self._future is None:
            return True
        done, _ = wait([self._future], timeout=timeout)
        return bool(done)

    def poll(self) -> bool:
        """Apply a finished fetch to the view. Returns True if the view changed."""
        future = self._future
        if future is None or not future.done():
            return False
        self._future = None
        self._last_attempt = self._clock()
        try:
            snapshot = future.result()
        except TraefikTopError as e:
            logger.warning("Refresh failed: %s", e)
            self.view.apply_refresh_error(f"Failed to fetch data: {e}")
            return True
        self.view.apply_snapshot(snapshot)
        logger.debug("Refresh applied: %r", snapshot)
        return True

    def tick(self) -> bool:
        """Apply finished work and start the next fetch when due."""
        changed = self.poll()
        if self.due():
            self.request()
            changed = True
        return changed

    def shutdown(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)
