"""SnapshotStore — load, save, and clear the persisted taxonomy.

The store is the persistence gateway for :class:`~taxctl.domain.state.Snapshot`.
``save()`` rewrites every row inside one transaction so a reader never
sees a half-written snapshot.

INVARIANT: ``save()`` never raises; failures are logged and reported
through its return value so in-memory state is never rolled back.
"""

from __future__ import annotations

import json
import logging
from collections import defaultdict
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError
from sqlalchemy import delete, insert, select
from sqlalchemy.exc import SQLAlchemyError

from taxctl.domain.documents import Document, DocumentStore
from taxctl.domain.paths import ROOT_KEY, decode_path
from taxctl.domain.state import Snapshot, TreeConfig
from taxctl.domain.tree import DomainTree
from taxctl.infrastructure.database.schema import documents, domains, workspace_meta

if TYPE_CHECKING:
    from sqlalchemy import Connection
    from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

_TABLES = (domains, documents, workspace_meta)


class PersistenceError(Exception):
    """Stored data could not be read or written."""


class SnapshotStore:
    """Persist one :class:`Snapshot` per workspace database."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def load(self) -> Snapshot | None:
        """Read the saved snapshot, or None if nothing was ever saved.

        Raises:
            MalformedKeyError: A stored path key does not decode.
            PersistenceError: Anything else about the stored data is unusable.
        """
        try:
            with self._engine.connect() as conn:
                meta = {row.key: row.value for row in conn.execute(select(workspace_meta))}
                if "saved_at" not in meta:
                    return None
                tree = self._load_tree(conn)
                store = self._load_documents(conn)
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to read snapshot: {exc}") from exc

        try:
            config = TreeConfig.model_validate_json(meta.get("config", "{}"))
            current_path = _parse_cursor(meta.get("current_path", "[]"))
        except (ValidationError, ValueError) as exc:
            raise PersistenceError(f"Invalid workspace metadata: {exc}") from exc

        logger.debug(
            "Loaded snapshot saved at %s (%d roots, %d child lists)",
            meta["saved_at"],
            len(tree.items),
            len(tree.children),
        )
        return Snapshot(tree=tree, documents=store, config=config, current_path=current_path)

    def save(self, snapshot: Snapshot) -> bool:
        """Replace the stored snapshot. Returns False on failure."""
        domain_rows = [
            {"parent_key": ROOT_KEY, "position": i, "name": name}
            for i, name in enumerate(snapshot.tree.items)
        ]
        for key, names in snapshot.tree.children.items():
            domain_rows.extend(
                {"parent_key": key, "position": i, "name": name} for i, name in enumerate(names)
            )
        document_rows = [
            {"path_key": key, "position": i, "name": doc.name, "content": doc.content}
            for key, docs in snapshot.documents.entries.items()
            for i, doc in enumerate(docs)
        ]
        meta_rows = [
            {"key": "config", "value": snapshot.config.model_dump_json()},
            {"key": "current_path", "value": json.dumps(list(snapshot.current_path))},
            {"key": "saved_at", "value": datetime.now(UTC).isoformat()},
        ]

        try:
            with self._engine.begin() as conn:
                _delete_all(conn)
                for table, rows in (
                    (domains, domain_rows),
                    (documents, document_rows),
                    (workspace_meta, meta_rows),
                ):
                    if rows:
                        conn.execute(insert(table), rows)
        except SQLAlchemyError:
            logger.warning("Failed to save taxonomy snapshot", exc_info=True)
            return False
        return True

    def clear(self) -> None:
        """Delete the stored snapshot."""
        try:
            with self._engine.begin() as conn:
                _delete_all(conn)
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to clear snapshot: {exc}") from exc

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _load_tree(self, conn: Connection) -> DomainTree:
        items: list[str] = []
        children: dict[str, list[str]] = defaultdict(list)
        rows = conn.execute(
            select(domains.c.parent_key, domains.c.name).order_by(
                domains.c.parent_key, domains.c.position
            )
        )
        for row in rows:
            if row.parent_key == ROOT_KEY:
                items.append(row.name)
            else:
                decode_path(row.parent_key)
                children[row.parent_key].append(row.name)
        return DomainTree(
            items=tuple(items),
            children={key: tuple(names) for key, names in children.items()},
        )

    def _load_documents(self, conn: Connection) -> DocumentStore:
        entries: dict[str, list[Document]] = defaultdict(list)
        rows = conn.execute(
            select(documents.c.path_key, documents.c.name, documents.c.content).order_by(
                documents.c.path_key, documents.c.position
            )
        )
        for row in rows:
            decode_path(row.path_key)
            entries[row.path_key].append(Document(name=row.name, content=row.content))
        return DocumentStore(entries={key: tuple(docs) for key, docs in entries.items()})


def _delete_all(conn: Connection) -> None:
    for table in _TABLES:
        conn.execute(delete(table))


def _parse_cursor(raw: str) -> tuple[str, ...]:
    value: Any = json.loads(raw)
    if not isinstance(value, list) or not all(isinstance(seg, str) for seg in value):
        raise ValueError(f"current_path must be a list of strings, got {raw!r}")
    return tuple(value)
