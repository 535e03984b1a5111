"""DomainService — initial setup and growth of the domain tree.

Validation happens here, before dispatch, so that the user sees why an
action was refused; the reducer itself only degrades to a no-op.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from taxctl.domain.documents import list_at
from taxctl.domain.errors import InvalidSetupError
from taxctl.domain.navigation import can_descend
from taxctl.domain.paths import ROOT, Path, format_path
from taxctl.domain.state import AddDomain, AddSubdomain, SetInitialDomains
from taxctl.domain.tree import DomainTree, children_of, has_child, replace_roots, walk
from taxctl.infrastructure.store import PersistenceError
from taxctl.services.base import BaseService
from taxctl.services.result import ServiceResult

logger = logging.getLogger(__name__)


class DomainService(BaseService):
    """Create root domains and subdomains, and list what exists."""

    def setup(self, names: Sequence[str], *, force: bool = False) -> ServiceResult:
        """Seed the taxonomy with its root domains.

        The new roots are saved synchronously; if that save fails the
        workspace is reset so no half-initialized taxonomy survives.
        """
        op = "setup"
        cleaned = [name.strip() for name in names if name.strip()]

        if not self._workspace.needs_setup and not force:
            return self._fail(
                op,
                "ALREADY_INITIALIZED",
                "Root domains already exist. Use --force to start over.",
                domains=list(self._state.tree.items),
            )

        try:
            replace_roots(DomainTree(), cleaned)
        except InvalidSetupError as exc:
            return self._fail(op, exc.code, str(exc), received=cleaned)

        if force and not self._workspace.needs_setup:
            try:
                self._workspace.reset()
            except PersistenceError as exc:
                return self._fail(op, "PERSISTENCE_FAILED", str(exc))

        state = self._workspace.dispatch(SetInitialDomains(tuple(cleaned)))
        if not self._workspace.save_now():
            logger.error("Failed to save initial domains; resetting workspace")
            try:
                self._workspace.reset()
            except PersistenceError:
                logger.warning("Reset after failed setup also failed", exc_info=True)
            return self._fail(op, "PERSISTENCE_FAILED", "Failed to save initial domains.")

        return ServiceResult(
            ok=True,
            op=op,
            data={"domains": list(state.tree.items), "count": len(state.tree.items)},
            warnings=self._warnings(),
        )

    def add(self, name: str, *, at: Sequence[str] | None = None) -> ServiceResult:
        """Add *name* below *at* (default: the current path).

        At the root this adds a root domain, anywhere else a subdomain.
        """
        op = "add_domain"
        if (failure := self._require_setup(op)) is not None:
            return failure

        name = name.strip()
        if not name:
            return self._fail(op, "INVALID_NAME", "Domain name must not be empty.")

        parent = self._resolve(at)
        if (failure := self._require_reachable(op, parent)) is not None:
            return failure

        if has_child(self._state.tree, parent, name):
            return self._fail(
                op,
                "DUPLICATE_DOMAIN",
                f"Domain {name!r} already exists at {format_path(parent)}",
                name=name,
                parent=format_path(parent),
            )

        if parent == ROOT:
            self._workspace.dispatch(AddDomain(name))
        else:
            if not can_descend(parent, self._state.config):
                return self._fail(
                    op,
                    "MAX_DEPTH_REACHED",
                    f"Maximum depth of {self._state.config.max_depth} reached at "
                    f"{format_path(parent)}",
                    max_depth=self._state.config.max_depth,
                )
            self._workspace.dispatch(AddSubdomain(parent, name))

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "name": name,
                "parent": format_path(parent),
                "path": format_path((*parent, name)),
                "level": len(parent) + 1,
            },
            warnings=self._warnings(),
        )

    def list_domains(self, *, at: Sequence[str] | None = None) -> ServiceResult:
        """List the domains directly below *at* (default: the current path)."""
        op = "list_domains"
        path = self._resolve(at)
        if (failure := self._require_reachable(op, path)) is not None:
            return failure

        items = [self._summary(path, name) for name in children_of(self._state.tree, path)]
        return ServiceResult(
            ok=True,
            op=op,
            data={"path": format_path(path), "items": items, "count": len(items)},
            warnings=self._warnings(),
        )

    def tree(self) -> ServiceResult:
        """The whole reachable taxonomy as nested nodes."""
        tree = self._state.tree
        total = sum(1 for _ in walk(tree))
        return ServiceResult(
            ok=True,
            op="domain_tree",
            data={
                "nodes": [self._node(ROOT, name) for name in tree.items],
                "count": total,
                "max_depth": self._state.config.max_depth,
            },
            warnings=self._warnings(),
        )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _summary(self, parent: Path, name: str) -> dict[str, Any]:
        path = (*parent, name)
        return {
            "name": name,
            "path": format_path(path),
            "children": len(children_of(self._state.tree, path)),
            "documents": len(list_at(self._state.documents, path)),
        }

    def _node(self, parent: Path, name: str) -> dict[str, Any]:
        path = (*parent, name)
        return {
            "name": name,
            "documents": len(list_at(self._state.documents, path)),
            "children": [self._node(path, child) for child in children_of(self._state.tree, path)],
        }
