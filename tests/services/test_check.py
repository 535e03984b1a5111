"""Tests for CheckService — unreachable stored data."""

from taxctl.domain.documents import Document, DocumentStore
from taxctl.domain.tree import DomainTree
from taxctl.infrastructure.workspace import Workspace
from taxctl.services.check import CheckService
from taxctl.services.domains import DomainService


def _inject(ws: Workspace, **update: object) -> None:
    """Swap raw data into the workspace state, bypassing validation."""
    ws._replace(ws.state.model_copy(update=update))


class TestCheck:
    def test_clean(self, seeded: Workspace) -> None:
        DomainService(seeded).add("Optics", at=("Physics",))
        result = CheckService(seeded).check()
        assert result.ok
        assert result.data == {"issues": [], "count": 0}

    def test_orphan_subtree(self, seeded: Workspace) -> None:
        tree = seeded.state.tree
        _inject(
            seeded,
            tree=DomainTree(items=tree.items, children={"/Ghost": ("Lost",)}),
        )
        issues = CheckService(seeded).check().data["issues"]
        assert issues == [{"kind": "orphan_subtree", "path": "Ghost", "names": ["Lost"]}]

    def test_orphan_documents(self, seeded: Workspace) -> None:
        _inject(
            seeded,
            documents=DocumentStore(entries={"/Ghost": (Document(name="n"),)}),
        )
        issues = CheckService(seeded).check().data["issues"]
        assert issues == [{"kind": "orphan_documents", "path": "Ghost", "names": ["n"]}]

    def test_root_documents_are_fine(self, seeded: Workspace) -> None:
        _inject(seeded, documents=DocumentStore(entries={"": (Document(name="n"),)}))
        assert CheckService(seeded).check().data["count"] == 0

    def test_never_deletes(self, seeded: Workspace) -> None:
        _inject(
            seeded,
            tree=DomainTree(items=seeded.state.tree.items, children={"/Ghost": ("Lost",)}),
        )
        CheckService(seeded).check()
        assert "/Ghost" in seeded.state.tree.children
