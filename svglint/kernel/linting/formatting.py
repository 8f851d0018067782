"""Presentation helpers for diagnostics.

Diagnostics keep raw node/tree references; these functions decide how a
location is shown (plain text excerpt, JSON-safe dict).
"""

from __future__ import annotations

from typing import Any

from svglint.kernel.linting.models import Diagnostic, RunReport


def render_excerpt(diagnostic: Diagnostic, context_lines: int = 1) -> str | None:
    """Render the source lines around the diagnostic's node.

    Returns None when the diagnostic has no location. Lines are numbered
    and the node's line is marked with ``>``; a caret points at its column.
    """
    node, tree = diagnostic.node, diagnostic.tree
    if node is None or tree is None:
        return None

    lines = tree.source_lines
    if not 1 <= node.line <= len(lines):
        return node.open_tag()

    first = max(1, node.line - context_lines)
    last = min(len(lines), node.line + context_lines)
    width = len(str(last))
    out = []
    for number in range(first, last + 1):
        marker = ">" if number == node.line else " "
        out.append(f"{marker} {number:>{width}} | {lines[number - 1]}")
        if number == node.line:
            out.append(f"  {' ' * width} | {' ' * node.column}^")
    return "\n".join(out)


def to_dict(diagnostic: Diagnostic) -> dict[str, Any]:
    """JSON-safe representation of a diagnostic."""
    data: dict[str, Any] = {
        "kind": diagnostic.kind,
        "rule": diagnostic.rule_name,
        "message": diagnostic.message,
    }
    if diagnostic.node is not None:
        data["node"] = {
            "tag": diagnostic.node.tag,
            "line": diagnostic.node.line,
            "column": diagnostic.node.column,
            "source": diagnostic.node.open_tag(),
        }
    if diagnostic.error is not None:
        data["error_type"] = type(diagnostic.error).__name__
    return data


def report_to_dict(report: RunReport) -> dict[str, Any]:
    """JSON-safe representation of a whole run."""
    return {
        "source": report.source_name,
        "filepath": report.filepath,
        "passed": report.passed,
        "exceptions": [to_dict(d) for d in report.exceptions],
        "errors": [to_dict(d) for d in report.errors],
        "warnings": [to_dict(d) for d in report.warnings],
        "logs": [to_dict(d) for d in report.logs],
    }
