"""CheckService — report stored data the taxonomy can no longer reach.

Orphaned child lists and documents are left in place: navigation never
shows them, and nothing here deletes them.
"""

from __future__ import annotations

from typing import Any

from taxctl.domain.errors import MalformedKeyError
from taxctl.domain.paths import decode_path, format_path
from taxctl.domain.tree import is_reachable, orphan_keys
from taxctl.services.base import BaseService
from taxctl.services.result import ServiceResult


class CheckService(BaseService):
    def check(self) -> ServiceResult:
        state = self._state
        issues: list[dict[str, Any]] = []

        for key in orphan_keys(state.tree):
            issues.append(
                {
                    "kind": "orphan_subtree",
                    "path": _display(key),
                    "names": list(state.tree.children[key]),
                }
            )

        for key, docs in state.documents.entries.items():
            try:
                reachable = is_reachable(state.tree, decode_path(key))
            except MalformedKeyError:
                reachable = False
            if not reachable:
                issues.append(
                    {
                        "kind": "orphan_documents",
                        "path": _display(key),
                        "names": [doc.name for doc in docs],
                    }
                )

        return ServiceResult(
            ok=True,
            op="check",
            data={"issues": issues, "count": len(issues)},
            warnings=self._warnings(),
        )


def _display(key: str) -> str:
    try:
        return format_path(decode_path(key))
    except MalformedKeyError:
        return key
