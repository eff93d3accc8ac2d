"""Export utilities — JSON-ready dicts and a Markdown report."""

from __future__ import annotations

import os

from nestscan.models import BoundaryNode, Cancelled, ScanResult


def node_to_dict(node: BoundaryNode) -> dict:
    return {
        "directory": node.directory,
        "url": node.url,
        "repository_root_url": node.repository_root_url,
        "error": str(node.error) if node.error else None,
        "error_code": node.error.code if node.error else None,
        "placeholder": node.is_placeholder,
    }


def result_to_dict(result: ScanResult) -> dict:
    """Serializable view of a scan result. Cancelled scans carry no entries."""
    if isinstance(result, Cancelled):
        return {"root": result.root, "status": "cancelled", "working_copies": []}
    return {
        "root": result.root,
        "status": "completed",
        "working_copies": [node_to_dict(n) for n in result.nodes],
    }


def _rel(path: str, root: str) -> str:
    try:
        rel = os.path.relpath(path, root)
    except ValueError:
        return path
    return "." if rel == os.curdir else rel


def _cell(value: str) -> str:
    return value.replace("|", "\\|")


def generate_markdown(result: ScanResult) -> str:
    """Generate a Markdown report of discovered working copies."""
    lines = [f"# Working copies under `{result.root}`", ""]

    if isinstance(result, Cancelled):
        lines.append("_Scan cancelled; no results._")
        return "\n".join(lines) + "\n"

    if not result.nodes:
        lines.append("_No working copies found._")
        return "\n".join(lines) + "\n"

    failed = len(result.errors)
    lines.append(f"**{len(result.nodes)}** working copies, **{failed}** with errors.")
    lines.append("")
    lines.append("| Directory | URL | Repository root | Status |")
    lines.append("|-----------|-----|-----------------|--------|")
    for node in result.nodes:
        if node.error:
            url = root_url = "—"
            status = f"error: {_cell(str(node.error))}"
        else:
            url, root_url, status = _cell(node.url), _cell(node.repository_root_url), "ok"
        lines.append(f"| `{_rel(node.directory, result.root)}` | {url} | {root_url} | {status} |")

    lines.append("")
    return "\n".join(lines)
