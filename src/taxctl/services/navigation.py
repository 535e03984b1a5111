"""NavigationService — move the current path through the tree."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from taxctl.domain.navigation import (
    breadcrumbs,
    can_descend,
    current_domain,
    navigate_to,
    select_domain,
    visible_documents,
    visible_domains,
)
from taxctl.domain.paths import format_path
from taxctl.domain.state import SetPath
from taxctl.services.base import BaseService
from taxctl.services.result import ServiceResult


class NavigationService(BaseService):
    """Breadcrumb-style navigation; every result describes the new location."""

    def show(self) -> ServiceResult:
        return self._location("location")

    def select(self, name: str) -> ServiceResult:
        """Descend into the visible domain *name*."""
        op = "navigate"
        if (failure := self._require_setup(op)) is not None:
            return failure

        state = self._state
        if name not in visible_domains(state):
            return self._fail(
                op,
                "NOT_FOUND",
                f"No domain {name!r} at {format_path(state.current_path)}",
                available=list(visible_domains(state)),
            )
        if not can_descend(state.current_path, state.config):
            return self._fail(
                op,
                "MAX_DEPTH_REACHED",
                f"Maximum depth of {state.config.max_depth} reached",
                max_depth=state.config.max_depth,
            )

        self._workspace.dispatch(SetPath(select_domain(state.current_path, name)))
        return self._location(op)

    def up(self, level: int = 0) -> ServiceResult:
        """Jump to breadcrumb *level* (0 is Home). Levels past the end clamp."""
        self._workspace.dispatch(SetPath(navigate_to(self._state.current_path, level)))
        return self._location("navigate")

    def go(self, path: Sequence[str]) -> ServiceResult:
        """Jump straight to *path*, which must exist."""
        op = "navigate"
        target = tuple(path)
        if (failure := self._require_reachable(op, target)) is not None:
            return failure
        self._workspace.dispatch(SetPath(target))
        return self._location(op)

    def _location(self, op: str) -> ServiceResult:
        state = self._state
        data: dict[str, Any] = {
            "path": format_path(state.current_path),
            "current": current_domain(state.current_path),
            "breadcrumbs": [
                {"level": level, "label": label}
                for level, label in breadcrumbs(state.current_path)
            ],
            "domains": list(visible_domains(state)),
            "documents": [doc.name for doc in visible_documents(state)],
            "can_descend": can_descend(state.current_path, state.config),
            "max_depth": state.config.max_depth,
        }
        return ServiceResult(ok=True, op=op, data=data, warnings=self._warnings())
