"""Domain tree — root domains plus child lists keyed by parent path.

Every operation returns a new :class:`DomainTree` (or the same instance
when nothing changes); trees are never mutated in place.

INVARIANT: A name appears at most once among ``items`` and at most once
within any single ``children`` list.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from pydantic import BaseModel, Field

from taxctl.domain.errors import InvalidSetupError, MalformedKeyError
from taxctl.domain.paths import ROOT, Path, decode_path, encode_path

MIN_ROOT_DOMAINS = 3


class DomainTree(BaseModel):
    """Root domain names plus ``{parent_key: child names}``."""

    model_config = {"frozen": True}

    items: tuple[str, ...] = ()
    children: dict[str, tuple[str, ...]] = Field(default_factory=dict)


def children_of(tree: DomainTree, path: Sequence[str]) -> tuple[str, ...]:
    """Domains directly below *path* (the roots for ``()``)."""
    if not path:
        return tree.items
    return tree.children.get(encode_path(path), ())


def has_child(tree: DomainTree, path: Sequence[str], name: str) -> bool:
    return name in children_of(tree, path)


def add_root_domain(tree: DomainTree, name: str) -> DomainTree:
    if name in tree.items:
        return tree
    return tree.model_copy(update={"items": (*tree.items, name)})


def add_subdomain(tree: DomainTree, parent_path: Sequence[str], name: str) -> DomainTree:
    """Append *name* below *parent_path*.

    Performs no depth or reachability check; the reducer validates both
    before calling.
    """
    key = encode_path(parent_path)
    siblings = tree.children.get(key, ())
    if name in siblings:
        return tree
    children = {**tree.children, key: (*siblings, name)}
    return tree.model_copy(update={"children": children})


def replace_roots(tree: DomainTree, names: Sequence[str]) -> DomainTree:
    """Replace the root domains wholesale (initial setup only).

    Duplicate names collapse to their first occurrence; existing
    ``children`` entries are kept.

    Raises:
        InvalidSetupError: Fewer than ``MIN_ROOT_DOMAINS`` distinct names.
    """
    unique = tuple(dict.fromkeys(names))
    if len(unique) < MIN_ROOT_DOMAINS:
        raise InvalidSetupError(
            f"Invalid domains. Please provide at least {MIN_ROOT_DOMAINS} domains "
            f"(got {len(unique)})."
        )
    return tree.model_copy(update={"items": unique})


def is_reachable(tree: DomainTree, path: Sequence[str]) -> bool:
    """True if every segment of *path* is a listed child of its prefix."""
    return all(has_child(tree, path[:depth], name) for depth, name in enumerate(path))


def walk(tree: DomainTree) -> Iterator[tuple[Path, str]]:
    """Depth-first ``(parent_path, name)`` pairs over reachable domains."""
    stack: list[tuple[Path, str]] = [(ROOT, name) for name in reversed(tree.items)]
    while stack:
        parent, name = stack.pop()
        yield parent, name
        path = (*parent, name)
        stack.extend((path, child) for child in reversed(children_of(tree, path)))


def orphan_keys(tree: DomainTree) -> list[str]:
    """Child-list keys whose parent path is unreachable or undecodable."""
    orphans: list[str] = []
    for key in tree.children:
        try:
            path = decode_path(key)
        except MalformedKeyError:
            orphans.append(key)
            continue
        if not path or not is_reachable(tree, path):
            orphans.append(key)
    return orphans
