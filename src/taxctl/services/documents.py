"""DocumentService — attach and inspect documents at taxonomy paths."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from taxctl.domain.documents import Document, count, find, list_at
from taxctl.domain.paths import format_path
from taxctl.domain.state import AddDocument, ClearDocuments, SetLoading
from taxctl.services.base import BaseService
from taxctl.services.result import ServiceResult

if TYPE_CHECKING:
    from pathlib import Path as FilePath


class DocumentService(BaseService):
    """Documents live at a path; names are unique per path."""

    def add(
        self,
        name: str,
        content: str,
        *,
        at: Sequence[str] | None = None,
    ) -> ServiceResult:
        """Attach a document at *at* (default: the current path)."""
        op = "add_document"
        if (failure := self._require_setup(op)) is not None:
            return failure

        name = name.strip()
        if not name:
            return self._fail(op, "INVALID_NAME", "Document name must not be empty.")

        path = self._resolve(at)
        if (failure := self._require_reachable(op, path)) is not None:
            return failure

        if find(self._state.documents, path, name) is not None:
            return self._fail(
                op,
                "DUPLICATE_DOCUMENT",
                f"Document {name!r} already exists at {format_path(path)}",
                name=name,
                path=format_path(path),
            )

        self._workspace.dispatch(AddDocument(path, Document(name=name, content=content)))
        return ServiceResult(
            ok=True,
            op=op,
            data={"name": name, "path": format_path(path), "size": len(content)},
            warnings=self._warnings(),
        )

    def add_file(
        self,
        file: FilePath,
        *,
        name: str | None = None,
        at: Sequence[str] | None = None,
    ) -> ServiceResult:
        """Read a UTF-8 text file and attach it, named after the file by default."""
        self._workspace.dispatch(SetLoading(True))
        try:
            content = file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            return self._fail(
                "add_document",
                "READ_FAILED",
                f"Could not read {file}: {exc}",
                file=str(file),
            )
        finally:
            self._workspace.dispatch(SetLoading(False))
        return self.add(name or file.name, content, at=at)

    def list_documents(self, *, at: Sequence[str] | None = None) -> ServiceResult:
        op = "list_documents"
        path = self._resolve(at)
        if (failure := self._require_reachable(op, path)) is not None:
            return failure

        items = [
            {"name": doc.name, "size": len(doc.content)}
            for doc in list_at(self._state.documents, path)
        ]
        return ServiceResult(
            ok=True,
            op=op,
            data={"path": format_path(path), "items": items, "count": len(items)},
            warnings=self._warnings(),
        )

    def show(self, name: str, *, at: Sequence[str] | None = None) -> ServiceResult:
        op = "show_document"
        path = self._resolve(at)
        doc = find(self._state.documents, path, name)
        if doc is None:
            return self._fail(
                op,
                "NOT_FOUND",
                f"No document {name!r} at {format_path(path)}",
                path=format_path(path),
            )
        return ServiceResult(
            ok=True,
            op=op,
            data={"name": doc.name, "path": format_path(path), "content": doc.content},
            warnings=self._warnings(),
        )

    def clear(self) -> ServiceResult:
        """Remove every document at every path; domains are untouched."""
        removed = count(self._state.documents)
        self._workspace.dispatch(ClearDocuments())
        return ServiceResult(
            ok=True,
            op="clear_documents",
            data={"cleared": removed},
            warnings=self._warnings(),
        )
