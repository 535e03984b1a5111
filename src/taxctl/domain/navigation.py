"""Navigation over the domain tree.

The current path is a prefix into the tree.  These helpers derive new
paths and the views the UI shows at a path; they never touch state.

Out-of-range levels clamp: ``navigate_to(p, level)`` with
``level > len(p)`` returns *p* unchanged and negative levels return the
root.
"""

from __future__ import annotations

from collections.abc import Sequence

from taxctl.domain.documents import Document, list_at
from taxctl.domain.paths import ROOT, Path
from taxctl.domain.state import AppState, TreeConfig
from taxctl.domain.tree import children_of

HOME_LABEL = "Home"


def navigate_to(current_path: Sequence[str], level: int) -> Path:
    """Truncate *current_path* to its first *level* segments (clamped)."""
    if level <= 0:
        return ROOT
    return tuple(current_path[:level])


def select_domain(current_path: Sequence[str], name: str) -> Path:
    return (*current_path, name)


def can_descend(current_path: Sequence[str], config: TreeConfig) -> bool:
    return len(current_path) < config.max_depth


def current_domain(current_path: Sequence[str]) -> str | None:
    return current_path[-1] if current_path else None


def visible_domains(state: AppState) -> tuple[str, ...]:
    return children_of(state.tree, state.current_path)


def visible_documents(state: AppState) -> tuple[Document, ...]:
    return list_at(state.documents, state.current_path)


def breadcrumbs(current_path: Sequence[str]) -> list[tuple[int, str]]:
    """``(level, label)`` pairs; passing a level to :func:`navigate_to`
    returns to that crumb.

    Examples:
        >>> breadcrumbs(("Physics", "Optics"))
        [(0, 'Home'), (1, 'Physics'), (2, 'Optics')]
    """
    crumbs = [(0, HOME_LABEL)]
    crumbs.extend((level, name) for level, name in enumerate(current_path, start=1))
    return crumbs
