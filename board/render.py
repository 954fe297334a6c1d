"""Pure view composition: (board, selection) -> ViewNode tree with the header, the New Game / Solve controls, the 9x9 grid with 3x3 separators, the 1-9 keypad and, once solved, the success banner."""

# render.py
from __future__ import annotations

from typing import Any

from solver import engine
from types_sudoku import Board, Guess, NewGame, SelectCell, Selection, SolveStep, ViewNode

TITLE = "Sudoku!"
PLACEHOLDER = "_"
SEPARATOR = "="
BANNER = "Congratulations! You've solved it!"
BLOCK = 3
SIZE = 9


def needs_separator(pos: int) -> bool:
    """True after positions 2 and 5 of a row (or of the grid), not after the last one."""
    return (pos + 1) % BLOCK == 0 and (pos + 1) % SIZE != 0


def cell_text(value: int) -> str:
    return str(value) if value else PLACEHOLDER


def render_cell(index: int, value: int, selection: Selection) -> tuple[ViewNode, ...]:
    cell = ViewNode(
        kind="cell",
        text=cell_text(value),
        selected=selection == index,
        action=SelectCell(index),
    )
    if needs_separator(index % SIZE):
        return (cell, ViewNode(kind="separator", text=SEPARATOR))
    return (cell,)


def render_row(row: int, values: list[int], selection: Selection) -> ViewNode:
    children: list[ViewNode] = []
    for col, value in enumerate(values):
        children.extend(render_cell(row * SIZE + col, value, selection))
    return ViewNode(kind="row", children=tuple(children))


def render_separator_row(width: int) -> ViewNode:
    return ViewNode(
        kind="separator-row",
        children=tuple(ViewNode(kind="separator", text=SEPARATOR) for _ in range(width)),
    )


def render_grid(board: Board, selection: Selection) -> ViewNode:
    cells = engine.to_flat_array(board)
    rows: list[ViewNode] = []
    for r in range(SIZE):
        row = render_row(r, cells[r * SIZE : r * SIZE + SIZE], selection)
        rows.append(row)
        if needs_separator(r):
            rows.append(render_separator_row(len(row.children)))
    return ViewNode(kind="grid", children=tuple(rows))


def render_keypad() -> ViewNode:
    rows = []
    for start in range(1, 10, BLOCK):
        rows.append(
            ViewNode(
                kind="row",
                children=tuple(
                    ViewNode(kind="button", text=str(d), action=Guess(d))
                    for d in range(start, start + BLOCK)
                ),
            )
        )
    return ViewNode(kind="keypad", children=tuple(rows))


def render_status(board: Board) -> tuple[ViewNode, ...]:
    if engine.is_solved(board):
        return (ViewNode(kind="status", text=BANNER),)
    return ()


def render(board: Board, selection: Selection) -> ViewNode:
    controls = ViewNode(
        kind="controls",
        children=(
            ViewNode(kind="button", text="New Game", action=NewGame()),
            ViewNode(kind="button", text="Solve", action=SolveStep()),
        ),
    )
    return ViewNode(
        kind="main",
        children=(
            ViewNode(kind="header", text=TITLE),
            controls,
            render_grid(board, selection),
            render_keypad(),
            *render_status(board),
        ),
    )


def action_to_dict(action) -> dict[str, Any] | None:
    if action is None:
        return None
    if isinstance(action, Guess):
        return {"type": "guess", "value": action.digit}
    if isinstance(action, SelectCell):
        return {"type": "select_cell", "value": action.index}
    if isinstance(action, NewGame):
        return {"type": "new_game"}
    return {"type": "solve_step"}


def view_to_dict(node: ViewNode) -> dict[str, Any]:
    """JSON-ready projection of a view tree for hosts."""
    out: dict[str, Any] = {"kind": node.kind}
    if node.text:
        out["text"] = node.text
    if node.selected:
        out["selected"] = True
    if node.action is not None:
        out["action"] = action_to_dict(node.action)
    if node.children:
        out["children"] = [view_to_dict(c) for c in node.children]
    return out
