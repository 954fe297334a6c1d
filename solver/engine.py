"""Puzzle engine: parse a linear puzzle line, project to/from the flat 81-cell array with validation, and advance a board by one human-style deduction. This is the whole surface the board controller and renderer use."""

# engine.py
from __future__ import annotations

import logging

from types_sudoku import CELL_COUNT, Board, Move

from .errors import ParseError, ValidationError
from .solver_core import (
    apply_elimination,
    apply_placement,
    compute_candidates as _compute_candidates,
    find_conflicts,
    find_hidden_singles,
    find_locked_candidates,
    find_naked_singles,
    search_placement,
    search_solution,
)

logger = logging.getLogger(__name__)

EMPTY_SYMBOLS = "._0"


def parse(line: str) -> Board:
    """Decode an 81-symbol line ('1'-'9' givens, '.', '_' or '0' blanks).

    Anything after the 81st symbol must be separated by whitespace and is ignored
    as a comment. Raises ParseError on bad length, bad symbols, or conflicting givens.
    """
    if not isinstance(line, str):
        raise ParseError(f"puzzle line must be a string, got {type(line).__name__}")
    text = line.strip()
    if len(text) > CELL_COUNT:
        if not text[CELL_COUNT].isspace():
            raise ParseError(f"puzzle line longer than {CELL_COUNT} cells")
        text = text[:CELL_COUNT]
    if len(text) != CELL_COUNT:
        raise ParseError(f"puzzle line has {len(text)} cells, expected {CELL_COUNT}")
    cells = []
    for pos, ch in enumerate(text):
        if ch in EMPTY_SYMBOLS:
            cells.append(0)
        elif "1" <= ch <= "9":
            cells.append(int(ch))
        else:
            raise ParseError(f"unexpected symbol {ch!r} at position {pos}")
    issues = find_conflicts(cells)
    if issues:
        raise ParseError(f"puzzle givens conflict in {', '.join(i['unit'] for i in issues)}")
    return Board(tuple(cells))


def to_line(board: Board) -> str:
    """Inverse of parse; blanks are written as '.'."""
    return "".join(str(v) if v else "." for v in board.cells)


def to_flat_array(board: Board) -> list[int]:
    return list(board.cells)


def sanity_check(cells) -> dict:
    """Report duplicates per unit: {'ok': bool, 'issues': [...]}."""
    issues = find_conflicts(cells)
    return {"ok": len(issues) == 0, "issues": issues}


def from_flat_array(values) -> Board:
    """Build a Board from 81 cell values, rejecting range and uniqueness violations."""
    cells = list(values)
    if len(cells) != CELL_COUNT:
        raise ValidationError(f"expected {CELL_COUNT} cells, got {len(cells)}")
    for pos, v in enumerate(cells):
        if isinstance(v, bool) or not isinstance(v, int) or not 0 <= v <= 9:
            raise ValidationError(
                f"cell {pos} holds {v!r}, expected 0..9",
                [{"type": "out_of_range", "position": pos, "found": v}],
            )
    report = sanity_check(cells)
    if not report["ok"]:
        units = ", ".join(i["unit"] for i in report["issues"])
        raise ValidationError(f"duplicate digits in {units}", report["issues"])
    return Board(tuple(cells))


def next_placement(board: Board) -> Move | None:
    """The next placement: singles first, then singles unlocked by
    locked-candidate eliminations, then a search over the remaining
    candidates. None when the board is full or has no solution."""
    cands = _compute_candidates(board.cells)
    # full board, or a blank cell with no candidates left (stuck)
    if not cands or not all(cands.values()):
        return None
    while True:
        singles = find_naked_singles(cands) or find_hidden_singles(cands)
        if singles:
            return singles[0]
        changed = False
        for move in find_locked_candidates(cands):
            changed = apply_elimination(cands, move) or changed
        if not changed:
            break
    solution = search_solution(board.cells)
    if solution is None:
        logger.debug("no solution from %s", to_line(board))
        return None
    return search_placement(cands, solution)


def solve(board: Board) -> Board | None:
    """The completed board, or None if the givens admit no solution."""
    solution = search_solution(board.cells)
    return None if solution is None else Board(tuple(solution))


def solve_step(board: Board) -> Board | None:
    move = next_placement(board)
    if move is None:
        return None
    logger.info("%s: %s = %s", move["technique"], move["cell"], move["digit"])
    return Board(tuple(apply_placement(board.cells, move)))


def is_solved(board: Board) -> bool:
    return all(board.cells) and not find_conflicts(board.cells)
