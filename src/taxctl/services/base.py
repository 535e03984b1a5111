"""BaseService — shared foundation for taxctl services.

Every service receives an opened :class:`Workspace`.  Services validate
input, dispatch reducer actions through the workspace, and translate the
outcome into a :class:`ServiceResult`.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from taxctl.domain.paths import format_path
from taxctl.domain.tree import is_reachable
from taxctl.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from taxctl.domain.paths import Path
    from taxctl.domain.state import AppState
    from taxctl.infrastructure.workspace import Workspace


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class DomainService(BaseService):
            def add(self, name: str) -> ServiceResult:
                self._workspace.dispatch(AddDomain(name))
                ...
    """

    def __init__(self, workspace: Workspace) -> None:
        self._workspace = workspace

    @property
    def _state(self) -> AppState:
        return self._workspace.state

    def _resolve(self, at: Sequence[str] | None) -> Path:
        """Explicit *at* path, or the current navigation path."""
        return self._state.current_path if at is None else tuple(at)

    def _warnings(self) -> list[str]:
        """Non-fatal notes every result carries (load errors, failed saves)."""
        warnings: list[str] = []
        if self._state.error:
            warnings.append(self._state.error)
        if self._workspace.saver.failures:
            warnings.append(f"{self._workspace.saver.failures} background save(s) failed")
        return warnings

    @staticmethod
    def _fail(op: str, code: str, message: str, **detail: Any) -> ServiceResult:
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(code=code, message=message, detail=detail),
        )

    def _require_setup(self, op: str) -> ServiceResult | None:
        if self._workspace.needs_setup:
            return self._fail(
                op,
                "SETUP_REQUIRED",
                "No root domains yet. Run 'taxctl init NAME NAME NAME ...' first.",
            )
        return None

    def _require_reachable(self, op: str, path: Path) -> ServiceResult | None:
        if not is_reachable(self._state.tree, path):
            return self._fail(
                op,
                "NOT_FOUND",
                f"No domain at path: {format_path(path)}",
                path=list(path),
            )
        return None
