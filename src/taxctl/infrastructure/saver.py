"""Fire-and-forget snapshot saves on a single background worker.

Snapshots coalesce: ``submit()`` only records the newest snapshot and
schedules a flush, and each flush writes whatever is newest at that
moment.  A slow save therefore delays the next write instead of
queueing every intermediate state, and callers never block.

INVARIANT: Save failures are warnings, never errors.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from taxctl.domain.state import Snapshot
    from taxctl.infrastructure.store import SnapshotStore

logger = logging.getLogger(__name__)


class BackgroundSaver:
    """Write snapshots to a :class:`SnapshotStore` off the caller's path.

    Parameters:
        store: Destination for snapshots.
        sync: Save inline instead of on the worker (tests / ``--sync``).
    """

    def __init__(self, store: SnapshotStore, *, sync: bool = False) -> None:
        self._store = store
        self._sync = sync
        self._lock = threading.Lock()
        self._pending: Snapshot | None = None
        self._futures: list[Future[None]] = []
        self._executor: ThreadPoolExecutor | None = (
            None if sync else ThreadPoolExecutor(max_workers=1, thread_name_prefix="taxctl-save")
        )
        self.saves = 0
        self.failures = 0
        self.last_ok = True

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def submit(self, snapshot: Snapshot) -> None:
        """Schedule *snapshot* for saving and return immediately."""
        with self._lock:
            self._pending = snapshot
        if self._executor is None:
            self._flush()
            return
        future = self._executor.submit(self._flush)
        self._futures = [f for f in self._futures if not f.done()]
        self._futures.append(future)

    @property
    def pending(self) -> int:
        """Scheduled flushes not yet finished."""
        return sum(1 for f in self._futures if not f.done())

    def wait(self) -> bool:
        """Block until every scheduled save finished. Returns ``last_ok``."""
        futures, self._futures = self._futures, []
        for future in futures:
            future.result()
        return self.last_ok

    def shutdown(self) -> None:
        """Drain pending saves and stop the worker."""
        self.wait()
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _flush(self) -> None:
        with self._lock:
            snapshot, self._pending = self._pending, None
        if snapshot is None:
            return

        try:
            ok = self._store.save(snapshot)
        except Exception:
            logger.warning("Snapshot save raised unexpectedly", exc_info=True)
            ok = False

        self.last_ok = ok
        if ok:
            self.saves += 1
        else:
            self.failures += 1
            logger.warning("Failed to save domain state; in-memory state is unchanged")
