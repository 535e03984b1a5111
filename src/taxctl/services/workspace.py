"""WorkspaceService — status, tree limits, and full reset."""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from taxctl.domain.documents import count
from taxctl.domain.paths import format_path
from taxctl.domain.state import SetConfig, TreeConfig
from taxctl.domain.tree import walk
from taxctl.infrastructure.store import PersistenceError
from taxctl.services.base import BaseService
from taxctl.services.result import ServiceResult


class WorkspaceService(BaseService):
    """Workspace-wide operations."""

    def status(self) -> ServiceResult:
        state = self._state
        domains = sum(1 for _ in walk(state.tree))
        return ServiceResult(
            ok=True,
            op="status",
            data={
                "workspace": str(self._workspace.root),
                "database": str(self._workspace.settings.db_path),
                "needs_setup": self._workspace.needs_setup,
                "root_domains": len(state.tree.items),
                "domains": domains,
                "documents": count(state.documents),
                "path": format_path(state.current_path),
                "max_depth": state.config.max_depth,
            },
            warnings=self._warnings(),
        )

    def show_config(self) -> ServiceResult:
        """The active tree config, plus the default new workspaces start from."""
        return ServiceResult(
            ok=True,
            op="config",
            data={
                **self._state.config.model_dump(),
                "default_max_depth": self._workspace.settings.taxonomy.default_max_depth,
                "config_file": str(self._workspace.settings.config_path or "(none)"),
            },
            warnings=self._warnings(),
        )

    def configure(self, **changes: Any) -> ServiceResult:
        """Shallow-merge *changes* into the tree config.

        Lowering ``max_depth`` never removes domains; existing deeper
        domains are reported as a warning.
        """
        op = "configure"
        merged = {**self._state.config.model_dump(), **changes}
        try:
            config = TreeConfig.model_validate(merged)
        except ValidationError as exc:
            return self._fail(
                op,
                "INVALID_CONFIG",
                "; ".join(f"{'.'.join(map(str, e['loc']))}: {e['msg']}" for e in exc.errors()),
                changes=changes,
            )

        state = self._workspace.dispatch(SetConfig(changes))
        warnings = self._warnings()
        too_deep = sum(
            1 for parent, _ in walk(state.tree) if len(parent) + 1 > config.max_depth
        )
        if too_deep:
            warnings.append(f"{too_deep} existing domain(s) sit deeper than max_depth")

        return ServiceResult(
            ok=True,
            op=op,
            data=state.config.model_dump(),
            warnings=warnings,
        )

    def reset(self) -> ServiceResult:
        """Delete all domains and documents; keep the config."""
        op = "reset"
        try:
            state = self._workspace.reset()
        except PersistenceError as exc:
            return self._fail(op, "PERSISTENCE_FAILED", str(exc))
        return ServiceResult(ok=True, op=op, data={"max_depth": state.config.max_depth})
