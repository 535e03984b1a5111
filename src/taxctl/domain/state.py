"""Domain state machine — one pure reducer over immutable snapshots.

``apply(state, action)`` never raises and never mutates its input.  An
action whose precondition fails returns the *same* state object, so
callers can detect no-ops with an identity check.  Validation that the
user should see (duplicate names, depth limits, setup size) belongs to
the calling layer; the reducer only guards the tree invariants.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from taxctl.domain.documents import Document, DocumentStore, attach, clear_all, find
from taxctl.domain.errors import InvalidSetupError
from taxctl.domain.paths import ROOT, Path
from taxctl.domain.tree import (
    DomainTree,
    add_root_domain,
    add_subdomain,
    has_child,
    is_reachable,
    replace_roots,
)

DEFAULT_MAX_DEPTH = 10


class TreeConfig(BaseModel):
    """User-adjustable limits, preserved across resets."""

    model_config = {"frozen": True}

    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, gt=0)


class Snapshot(BaseModel):
    """The persisted part of :class:`AppState`."""

    model_config = {"frozen": True}

    tree: DomainTree = Field(default_factory=DomainTree)
    documents: DocumentStore = Field(default_factory=DocumentStore)
    config: TreeConfig = Field(default_factory=TreeConfig)
    current_path: Path = ROOT


class AppState(BaseModel):
    """Complete application state; replaced wholesale on every action."""

    model_config = {"frozen": True}

    tree: DomainTree = Field(default_factory=DomainTree)
    documents: DocumentStore = Field(default_factory=DocumentStore)
    current_path: Path = ROOT
    config: TreeConfig = Field(default_factory=TreeConfig)
    loading: bool = False
    error: str | None = None

    def snapshot(self) -> Snapshot:
        return Snapshot(
            tree=self.tree,
            documents=self.documents,
            config=self.config,
            current_path=self.current_path,
        )


def initial_state(config: TreeConfig | None = None) -> AppState:
    return AppState(config=config or TreeConfig())


# --- Actions ---


@dataclass(frozen=True)
class SetInitialDomains:
    names: tuple[str, ...]


@dataclass(frozen=True)
class AddDomain:
    name: str


@dataclass(frozen=True)
class AddSubdomain:
    parent_path: Path
    name: str


@dataclass(frozen=True)
class AddDocument:
    path: Path
    document: Document


@dataclass(frozen=True)
class SetPath:
    path: Path


@dataclass(frozen=True)
class SetConfig:
    changes: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ClearDocuments:
    pass


@dataclass(frozen=True)
class Reset:
    pass


@dataclass(frozen=True)
class SetLoading:
    loading: bool


@dataclass(frozen=True)
class SetError:
    message: str | None


Action = (
    SetInitialDomains
    | AddDomain
    | AddSubdomain
    | AddDocument
    | SetPath
    | SetConfig
    | ClearDocuments
    | Reset
    | SetLoading
    | SetError
)


# --- Transitions ---


def _set_initial_domains(state: AppState, action: SetInitialDomains) -> AppState:
    try:
        tree = replace_roots(state.tree, action.names)
    except InvalidSetupError as exc:
        return state.model_copy(update={"error": str(exc)})
    return state.model_copy(update={"tree": tree})


def _add_domain(state: AppState, action: AddDomain) -> AppState:
    if not action.name or action.name in state.tree.items:
        return state
    return state.model_copy(update={"tree": add_root_domain(state.tree, action.name)})


def _add_subdomain(state: AppState, action: AddSubdomain) -> AppState:
    parent = action.parent_path
    if not parent or len(parent) >= state.config.max_depth:
        return state
    if not is_reachable(state.tree, parent):
        return state
    if not action.name or has_child(state.tree, parent, action.name):
        return state
    return state.model_copy(update={"tree": add_subdomain(state.tree, parent, action.name)})


def _add_document(state: AppState, action: AddDocument) -> AppState:
    if find(state.documents, action.path, action.document.name) is not None:
        return state
    documents = attach(state.documents, action.path, action.document)
    return state.model_copy(update={"documents": documents})


def _set_path(state: AppState, action: SetPath) -> AppState:
    return state.model_copy(update={"current_path": tuple(action.path)})


def _set_config(state: AppState, action: SetConfig) -> AppState:
    merged = {**state.config.model_dump(), **action.changes}
    try:
        config = TreeConfig.model_validate(merged)
    except ValidationError as exc:
        message = "; ".join(err["msg"] for err in exc.errors())
        return state.model_copy(update={"error": f"Invalid configuration: {message}"})
    return state.model_copy(update={"config": config})


def _clear_documents(state: AppState, action: ClearDocuments) -> AppState:
    return state.model_copy(update={"documents": clear_all(state.documents)})


def _reset(state: AppState, action: Reset) -> AppState:
    return initial_state(state.config)


def _set_loading(state: AppState, action: SetLoading) -> AppState:
    return state.model_copy(update={"loading": action.loading})


def _set_error(state: AppState, action: SetError) -> AppState:
    return state.model_copy(update={"error": action.message})


_TRANSITIONS: dict[type, Callable[[AppState, Any], AppState]] = {
    SetInitialDomains: _set_initial_domains,
    AddDomain: _add_domain,
    AddSubdomain: _add_subdomain,
    AddDocument: _add_document,
    SetPath: _set_path,
    SetConfig: _set_config,
    ClearDocuments: _clear_documents,
    Reset: _reset,
    SetLoading: _set_loading,
    SetError: _set_error,
}


def apply(state: AppState, action: Action) -> AppState:
    """Return the state that results from *action*.

    Unknown action types leave the state unchanged.
    """
    transition = _TRANSITIONS.get(type(action))
    if transition is None:
        return state
    return transition(state, action)
