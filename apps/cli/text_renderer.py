# text_renderer.py
# Plain-text rendering of a board view tree for the terminal session.
from __future__ import annotations

from types_sudoku import ViewNode


def _cell(node: ViewNode) -> str:
    if node.kind == "cell" and node.selected:
        return f"[{node.text}]"
    return f" {node.text} "


def to_text(view: ViewNode) -> str:
    lines: list[str] = []
    for node in view.children:
        if node.kind == "header":
            lines.append(node.text)
            lines.append("")
        elif node.kind == "controls":
            lines.append("  ".join(f"<{b.text}>" for b in node.children))
        elif node.kind == "grid":
            for row in node.children:
                lines.append("".join(_cell(c) for c in row.children).rstrip())
        elif node.kind == "keypad":
            lines.append("")
            for row in node.children:
                lines.append(" ".join(f"[{b.text}]" for b in row.children))
        elif node.kind == "status":
            lines.append("")
            lines.append(node.text)
    return "\n".join(lines) + "\n"
