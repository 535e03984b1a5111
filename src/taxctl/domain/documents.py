"""Documents attached to taxonomy paths."""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import BaseModel, Field

from taxctl.domain.paths import encode_path


class Document(BaseModel):
    """A named text document attached at one path."""

    model_config = {"frozen": True}

    name: str
    content: str = ""


class DocumentStore(BaseModel):
    """``{path_key: documents}`` in insertion order.

    INVARIANT: Document names are unique within one path's list.
    """

    model_config = {"frozen": True}

    entries: dict[str, tuple[Document, ...]] = Field(default_factory=dict)


def list_at(store: DocumentStore, path: Sequence[str]) -> tuple[Document, ...]:
    return store.entries.get(encode_path(path), ())


def find(store: DocumentStore, path: Sequence[str], name: str) -> Document | None:
    for doc in list_at(store, path):
        if doc.name == name:
            return doc
    return None


def attach(store: DocumentStore, path: Sequence[str], document: Document) -> DocumentStore:
    """Append *document* at *path* unless its name is already taken there."""
    if find(store, path, document.name) is not None:
        return store
    key = encode_path(path)
    entries = {**store.entries, key: (*store.entries.get(key, ()), document)}
    return store.model_copy(update={"entries": entries})


def clear_all(store: DocumentStore) -> DocumentStore:
    return DocumentStore()


def count(store: DocumentStore) -> int:
    return sum(len(docs) for docs in store.entries.values())
