# html_renderer.py
# HTML markup for a board view tree. Every actionable node becomes a submit
# button whose formaction posts the matching message to the board API.
from __future__ import annotations

from html import escape

from types_sudoku import Guess, Message, NewGame, SelectCell, SolveStep, ViewNode

STYLE = """
table { border-collapse: collapse; margin: 8px 0; }
td { text-align: center; padding: 0; }
td button { width: 2.2em; height: 2.2em; }
td.ct-f0 button { background: #9be89b; font-weight: bold; }
td.sep { width: 0.8em; color: #888; }
"""


def action_url(action: Message) -> str:
    if isinstance(action, NewGame):
        return "/actions/new"
    if isinstance(action, SolveStep):
        return "/actions/solve"
    if isinstance(action, Guess):
        return f"/actions/guess/{action.digit}"
    if isinstance(action, SelectCell):
        return f"/actions/select/{action.index}"
    raise TypeError(f"not a board message: {action!r}")


def _button(node: ViewNode) -> str:
    return f'<button formaction="{action_url(node.action)}">{escape(node.text)}</button>'


def _table_cell(node: ViewNode) -> str:
    if node.kind == "separator":
        return f'<td class="sep">{escape(node.text)}</td>'
    cls = ' class="ct-f0"' if node.selected else ""
    return f"<td{cls}>{_button(node)}</td>"


def _table(rows) -> str:
    body = "".join("<tr>" + "".join(_table_cell(c) for c in row.children) + "</tr>" for row in rows)
    return f"<table>{body}</table>"


def to_html(view: ViewNode) -> str:
    parts: list[str] = []
    for node in view.children:
        if node.kind == "header":
            parts.append(f"<h1>{escape(node.text)}</h1>")
        elif node.kind == "controls":
            parts.append("".join(_button(b) for b in node.children))
        elif node.kind in ("grid", "keypad"):
            parts.append(_table(node.children))
        elif node.kind == "status":
            parts.append(f"<span>{escape(node.text)}</span>")
    return (
        "<!DOCTYPE html><html><head><meta charset=\"utf-8\"><title>Sudoku</title>"
        f"<style>{STYLE}</style></head><body><main>"
        f'<form method="post"><article>{"".join(parts)}</article></form>'
        "</main></body></html>"
    )
