"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from taxctl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from taxctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode: one name per line."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    items = result.data.get("items")
    if isinstance(items, list):
        return "\n".join(str(item.get("name", "")) for item in items if isinstance(item, dict))
    if "content" in result.data:
        return str(result.data["content"])
    domains = result.data.get("domains")
    if isinstance(domains, list):
        return "\n".join(str(name) for name in domains)
    if "path" in result.data:
        return str(result.data["path"])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="tax.ok"), Text(f"  {result.op}", style="tax.op"))


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    style = "tax.path" if key in ("path", "parent") else ""
    text = Text(f"  {key}: ", style="tax.key")
    text.append(str(value), style=style)
    console.print(text)


def _breadcrumb_text(crumbs: list[dict[str, Any]]) -> Text:
    text = Text("  ")
    for i, crumb in enumerate(crumbs):
        if i:
            text.append(" / ", style="tax.separator")
        text.append(str(crumb["label"]), style="tax.crumb")
        text.append(f"[{crumb['level']}]", style="tax.key")
    return text


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(Text("ERROR", style="tax.error"), Text(f"  {result.op}", style="tax.op"), "—", Text(msg))

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Mutation renderers ────────────────────────────────────────────────


def _render_mutation(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render add_domain / add_document / configure / reset / clear results."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


def _render_setup(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for name in result.data.get("domains", []):
        console.print(Text(f"  • {name}", style="tax.domain"))


# ── Listing renderers ─────────────────────────────────────────────────


def _render_domain_list(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    console.print(Text(str(result.data.get("path", "/")), style="tax.path"))
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Domain", style="tax.domain")
    table.add_column("Subdomains", justify="right")
    table.add_column("Documents", justify="right")
    if verbose:
        table.add_column("Path", style="dim")
    for item in items:
        row: list[Any] = [
            Text(str(item.get("name", ""))),
            str(item.get("children", 0)),
            str(item.get("documents", 0)),
        ]
        if verbose:
            row.append(Text(str(item.get("path", ""))))
        table.add_row(*row)
    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} domains")


def _render_document_list(
    result: ServiceResult, console: Console, *, verbose: bool = False
) -> None:
    items = result.data.get("items", [])
    console.print(Text(str(result.data.get("path", "/")), style="tax.path"))
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Document", style="tax.document")
    table.add_column("Size", justify="right")
    for item in items:
        table.add_row(Text(str(item.get("name", ""))), str(item.get("size", 0)))
    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} documents")


def _render_document(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    title = f"{d.get('path', '/')} — {d.get('name', '?')}"
    body = Text(str(d.get("content", "")))
    console.print(Panel(body, title=Text(title), border_style="dim", expand=False))


def _add_nodes(branch: Tree, nodes: list[dict[str, Any]]) -> None:
    for node in nodes:
        label = Text(str(node["name"]), style="tax.domain")
        if node.get("documents"):
            label.append(f"  ({node['documents']} docs)", style="tax.document")
        _add_nodes(branch.add(label), node.get("children", []))


def _render_tree(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    root = Tree(Text("Home", style="tax.crumb"))
    _add_nodes(root, result.data.get("nodes", []))
    console.print(root)
    console.print(
        f"\n{result.data.get('count', 0)} domains (max depth {result.data.get('max_depth')})"
    )


def _render_location(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Breadcrumbs, then the domains and documents visible at the current path."""
    d = result.data
    console.print(_breadcrumb_text(d.get("breadcrumbs", [])))
    console.print()

    domains = d.get("domains", [])
    console.print(Text("  domains:", style="tax.key"))
    if domains:
        for name in domains:
            console.print(Text(f"    {name}", style="tax.domain"))
    else:
        console.print(Text("    (none)", style="dim"))

    documents = d.get("documents", [])
    if documents:
        console.print(Text("  documents:", style="tax.key"))
        for name in documents:
            console.print(Text(f"    {name}", style="tax.document"))

    if not d.get("can_descend", True):
        console.print(Text(f"  max depth {d.get('max_depth')} reached", style="tax.warning"))


def _render_check(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    issues = result.data.get("issues", [])
    if not issues:
        _status_line(console, result)
        console.print("  no issues found")
        return
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Kind", style="tax.warning")
    table.add_column("Path", style="tax.path")
    table.add_column("Names")
    for issue in issues:
        table.add_row(
            str(issue["kind"]),
            Text(str(issue["path"])),
            Text(", ".join(issue.get("names", []))),
        )
    console.print(table)
    console.print(f"\n{len(issues)} issues")


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose and result.meta:
        console.print(Text("  meta:", style="dim"))
        for k, v in result.meta.items():
            console.print(f"    {k}: {v}")


_OP_RENDERERS = {
    "setup": _render_setup,
    "add_domain": _render_mutation,
    "add_document": _render_mutation,
    "clear_documents": _render_mutation,
    "configure": _render_mutation,
    "reset": _render_mutation,
    "list_domains": _render_domain_list,
    "list_documents": _render_document_list,
    "show_document": _render_document,
    "domain_tree": _render_tree,
    "location": _render_location,
    "navigate": _render_location,
    "check": _render_check,
}
