"""Tests for BackgroundSaver — coalescing fire-and-forget saves."""

from __future__ import annotations

import threading
import time

from taxctl.domain.state import Snapshot, TreeConfig
from taxctl.domain.tree import DomainTree
from taxctl.infrastructure.saver import BackgroundSaver


class RecordingStore:
    """SnapshotStore stand-in that records saves and can block or fail."""

    def __init__(self, *, ok: bool = True) -> None:
        self.ok = ok
        self.saved: list[Snapshot] = []
        self.gate = threading.Event()
        self.gate.set()
        self.started = threading.Event()

    def save(self, snapshot: Snapshot) -> bool:
        self.started.set()
        self.gate.wait(timeout=5)
        self.saved.append(snapshot)
        return self.ok


def _snap(depth: int) -> Snapshot:
    return Snapshot(config=TreeConfig(max_depth=depth))


class TestSyncMode:
    def test_saves_inline(self) -> None:
        store = RecordingStore()
        saver = BackgroundSaver(store, sync=True)  # type: ignore[arg-type]
        saver.submit(_snap(3))
        assert store.saved == [_snap(3)]
        assert saver.saves == 1

    def test_failure_is_counted_not_raised(self) -> None:
        store = RecordingStore(ok=False)
        saver = BackgroundSaver(store, sync=True)  # type: ignore[arg-type]
        saver.submit(_snap(3))
        assert saver.failures == 1
        assert saver.last_ok is False

    def test_exception_is_counted_not_raised(self) -> None:
        class Exploding:
            def save(self, snapshot: Snapshot) -> bool:
                raise RuntimeError("boom")

        saver = BackgroundSaver(Exploding(), sync=True)  # type: ignore[arg-type]
        saver.submit(_snap(3))
        assert saver.failures == 1


class TestBackgroundMode:
    def test_wait_drains(self) -> None:
        store = RecordingStore()
        saver = BackgroundSaver(store)  # type: ignore[arg-type]
        saver.submit(_snap(3))
        assert saver.wait() is True
        assert store.saved == [_snap(3)]
        saver.shutdown()

    def test_coalesces_to_newest(self) -> None:
        store = RecordingStore()
        store.gate.clear()
        saver = BackgroundSaver(store)  # type: ignore[arg-type]

        saver.submit(_snap(1))
        assert store.started.wait(timeout=5)
        # The worker is busy with the first snapshot; these pile up.
        saver.submit(_snap(2))
        saver.submit(_snap(3))
        store.gate.set()
        saver.wait()

        assert store.saved[0] == _snap(1)
        assert store.saved[-1] == _snap(3)
        assert _snap(2) not in store.saved
        saver.shutdown()

    def test_submit_does_not_block(self) -> None:
        store = RecordingStore()
        store.gate.clear()
        saver = BackgroundSaver(store)  # type: ignore[arg-type]
        saver.submit(_snap(1))
        saver.submit(_snap(2))
        assert store.saved == []
        store.gate.set()
        saver.shutdown()
        assert store.saved[-1] == _snap(2)

    def test_shutdown_is_idempotent(self) -> None:
        saver = BackgroundSaver(RecordingStore())  # type: ignore[arg-type]
        saver.shutdown()
        saver.shutdown()

    def test_failure_reported_by_wait(self) -> None:
        saver = BackgroundSaver(RecordingStore(ok=False))  # type: ignore[arg-type]
        saver.submit(Snapshot(tree=DomainTree(items=("A", "B", "C"))))
        assert saver.wait() is False
        assert saver.failures == 1
        saver.shutdown()

    def test_finished_flushes_are_released(self) -> None:
        store = RecordingStore()
        saver = BackgroundSaver(store)  # type: ignore[arg-type]
        for depth in range(1, 21):
            saver.submit(_snap(depth))
            deadline = time.monotonic() + 5
            while saver.pending and time.monotonic() < deadline:
                time.sleep(0.01)
            assert saver.pending == 0
        assert len(saver._futures) <= 1
        saver.shutdown()
        assert store.saved[-1] == _snap(20)
