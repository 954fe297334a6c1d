# types_sudoku.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, TypedDict, Union

CELL_COUNT = 81
"""Cells on a 9x9 board."""

Candidates = dict[int, list[int]]
"""Map from linear cell index (0..80) to its candidate digits (1..9)."""

Selection = Optional[int]
"""Highlighted cell index (0..80) or None."""


@dataclass(frozen=True)
class Board:
    """Immutable 81-cell snapshot, row-major (index = row * 9 + col)."""

    cells: tuple[int, ...]

    def __post_init__(self) -> None:
        if len(self.cells) != CELL_COUNT:
            raise ValueError(f"board needs {CELL_COUNT} cells, got {len(self.cells)}")
        for v in self.cells:
            if not 0 <= v <= 9:
                raise ValueError(f"cell value out of range: {v!r}")


class Move(TypedDict, total=False):
    """A single human-style solving action found by the engine."""

    technique: str  # 'naked_single', 'hidden_single', 'locked_candidates_pointing', ...
    type: str  # 'placement' or 'elimination'
    digit: int
    position: int  # linear index of a placement
    cell: str  # same cell as a 1-based key, e.g. 'r4c7'
    eliminate: list[int]  # for eliminations, linear indices losing `digit`
    caption: str  # human-friendly explanation


# Messages: the only ways board state may change.


@dataclass(frozen=True)
class NewGame:
    pass


@dataclass(frozen=True)
class SolveStep:
    pass


@dataclass(frozen=True)
class Guess:
    digit: int


@dataclass(frozen=True)
class SelectCell:
    index: int


Message = Union[NewGame, SolveStep, Guess, SelectCell]


@dataclass(frozen=True)
class ViewNode:
    """One node of a rendered view tree.

    kind: 'main', 'header', 'controls', 'button', 'grid', 'row', 'cell',
    'separator', 'separator-row', 'keypad', 'status'.
    action: the message a host sends when the node is activated.
    """

    kind: str
    text: str = ""
    selected: bool = False
    action: Optional[Message] = None
    children: tuple[ViewNode, ...] = ()

    def find(self, kind: str) -> list[ViewNode]:
        """All descendants (and self) of the given kind, depth-first."""
        found = [self] if self.kind == kind else []
        for child in self.children:
            found.extend(child.find(kind))
        return found
