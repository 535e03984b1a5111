"""Workspace — owner of the current AppState and its persistence.

The Workspace is the single dependency injected into every service.  It
holds the current immutable :class:`AppState`, routes every change
through the reducer, notifies subscribers of snapshot replacement, and
hands persisted changes to the :class:`BackgroundSaver`.

Lifecycle:

1. ``open()`` loads the saved snapshot (the only blocking step before
   the taxonomy is usable).  Missing or too-small snapshots, corrupt
   rows, and unreadable database files all end in an initialized
   workspace.
2. ``dispatch()`` applies actions one at a time.
3. ``close()`` drains outstanding saves.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from sqlalchemy.exc import SQLAlchemyError

from taxctl.domain import state as st
from taxctl.domain.errors import MalformedKeyError
from taxctl.domain.paths import ROOT
from taxctl.domain.tree import MIN_ROOT_DOMAINS, is_reachable
from taxctl.infrastructure.database.engine import init_database
from taxctl.infrastructure.saver import BackgroundSaver
from taxctl.infrastructure.store import PersistenceError, SnapshotStore

if TYPE_CHECKING:
    from pathlib import Path

    from sqlalchemy.engine import Engine

    from taxctl.config.settings import TaxSettings

logger = logging.getLogger(__name__)

LOAD_FAILED_MESSAGE = "Failed to load saved data. Starting with default settings."

Listener = Callable[[st.AppState], None]


class Workspace:
    """Taxonomy state plus the storage it round-trips through."""

    def __init__(self, settings: TaxSettings) -> None:
        self._settings = settings
        self._recovered = False
        self._engine: Engine = self._open_database(settings.db_path)
        self._store = SnapshotStore(self._engine)
        self._saver = BackgroundSaver(self._store, sync=settings.sync)
        self._state = st.initial_state(
            st.TreeConfig(max_depth=settings.taxonomy.default_max_depth)
        )
        self._listeners: list[Listener] = []
        self._initialized = False

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def root(self) -> Path:
        return self._settings.workspace_root

    @property
    def settings(self) -> TaxSettings:
        return self._settings

    @property
    def state(self) -> st.AppState:
        return self._state

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def needs_setup(self) -> bool:
        """True until root domains exist (the setup flow has not run)."""
        return not self._state.tree.items

    @property
    def saver(self) -> BackgroundSaver:
        return self._saver

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def open(self) -> st.AppState:
        """Load persisted state. Idempotent."""
        if self._initialized:
            return self._state

        if self._recovered:
            self._replace(st.apply(self._state, st.SetError(LOAD_FAILED_MESSAGE)))

        try:
            snapshot = self._store.load()
        except (MalformedKeyError, PersistenceError) as exc:
            logger.error("Error loading saved taxonomy: %s", exc)
            self._discard_saved_state()
            self._replace(st.apply(self._state, st.SetError(LOAD_FAILED_MESSAGE)))
        else:
            if snapshot is None or len(snapshot.tree.items) < MIN_ROOT_DOMAINS:
                logger.info("No valid saved state found; setup required")
                if snapshot is not None:
                    # A reset workspace keeps its limits.
                    kept = st.SetConfig(snapshot.config.model_dump())
                    self._replace(st.apply(self._state, kept))
                    if snapshot != self._state.snapshot():
                        self._drop_stale_rows()
            else:
                self._replace(_restore(self._state, snapshot))
                logger.debug("Restored taxonomy with %d root domains", len(snapshot.tree.items))

        self._initialized = True
        return self._state

    def close(self) -> None:
        """Drain outstanding saves and release the database."""
        self._saver.shutdown()
        self._engine.dispose()

    # ------------------------------------------------------------------
    # State changes
    # ------------------------------------------------------------------

    def dispatch(self, action: st.Action) -> st.AppState:
        """Apply *action* and schedule a save if persisted data changed."""
        previous = self._state
        current = st.apply(previous, action)
        if current is previous:
            return current
        self._replace(current)
        if self._initialized and current.snapshot() != previous.snapshot():
            self._saver.submit(current.snapshot())
        return current

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* with every new state. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def save_now(self) -> bool:
        """Save synchronously, after any background saves already queued."""
        self._saver.wait()
        return self._store.save(self._state.snapshot())

    def reset(self) -> st.AppState:
        """Clear persisted storage, then reset in-memory state.

        Only the config is written back, so limits survive the reset.

        Raises:
            PersistenceError: Storage could not be cleared; state is untouched.
        """
        self._saver.wait()
        self._store.clear()
        current = st.apply(self._state, st.Reset())
        self._replace(current)
        if not self._store.save(current.snapshot()):
            logger.warning("Reset succeeded but the preserved config was not saved")
        return current

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _replace(self, new_state: st.AppState) -> None:
        self._state = new_state
        for listener in list(self._listeners):
            try:
                listener(new_state)
            except Exception:
                logger.warning("State listener failed", exc_info=True)

    def _open_database(self, db_path: Path) -> Engine:
        """Create the engine, moving an unreadable database file aside."""
        try:
            return init_database(db_path)
        except SQLAlchemyError as exc:
            logger.error("Unreadable database at %s: %s", db_path, exc)
        for suffix in ("", "-wal", "-shm"):
            damaged = db_path.with_name(db_path.name + suffix)
            if damaged.exists():
                damaged.replace(damaged.with_name(damaged.name + ".corrupt"))
        self._recovered = True
        return init_database(db_path)

    def _drop_stale_rows(self) -> None:
        """Rewrite storage as the config-only snapshot now in memory."""
        if not self._store.save(self._state.snapshot()):
            logger.warning("Could not drop stale rows from an incomplete snapshot")

    def _discard_saved_state(self) -> None:
        try:
            self._store.clear()
        except PersistenceError:
            logger.warning("Could not clear invalid saved state", exc_info=True)


def _restore(base: st.AppState, snapshot: st.Snapshot) -> st.AppState:
    """Swap the loaded snapshot in as one value; never partially applied.

    The saved cursor is kept only if it still points into the tree.
    """
    state = base.model_copy(
        update={
            "tree": snapshot.tree,
            "documents": snapshot.documents,
            "config": snapshot.config,
        }
    )
    cursor = snapshot.current_path if is_reachable(state.tree, snapshot.current_path) else ROOT
    return st.apply(state, st.SetPath(cursor))
