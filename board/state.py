from __future__ import annotations

from dataclasses import dataclass

from solver import engine
from types_sudoku import CELL_COUNT, Board, Selection


def clamp_digit(digit: int) -> int:
    """Digits outside 0..9 mean 'erase'."""
    return digit if 0 <= digit <= 9 else 0


def normalize_selection(index: int | None) -> Selection:
    # bool is an int subclass; True must not select cell 1
    if index is None or isinstance(index, bool) or not 0 <= index < CELL_COUNT:
        return None
    return index


@dataclass
class BoardState:
    """The board and the highlighted cell. The board is replaced, never mutated."""

    board: Board
    selection: Selection = None

    def snapshot(self) -> tuple[Board, Selection]:
        return self.board, self.selection


def initial_state(puzzle_line: str) -> BoardState:
    # A ParseError here is fatal; there is no board to fall back to.
    return BoardState(board=engine.parse(puzzle_line))
