"""Board state machine: each Message maps to exactly one transition; engine failures are absorbed here and leave the previous state in place."""

# controller.py
from __future__ import annotations

import logging
import threading
from typing import Callable

from solver import engine
from solver.errors import ParseError, ValidationError
from types_sudoku import Board, Guess, Message, NewGame, SelectCell, Selection, SolveStep, ViewNode

from .config import CANONICAL_PUZZLE
from .render import render
from .state import BoardState, clamp_digit, initial_state, normalize_selection

logger = logging.getLogger(__name__)


def new_game(state: BoardState, msg: NewGame, puzzle_line: str) -> None:
    try:
        state.board = engine.parse(puzzle_line)
    except ParseError as e:
        logger.warning("new game ignored, puzzle did not parse: %s", e)


def solve_step(state: BoardState, msg: SolveStep, puzzle_line: str) -> None:
    board = engine.solve_step(state.board)
    if board is None:
        logger.info("solve step: board is full or has no solution")
        return
    state.board = board


def guess(state: BoardState, msg: Guess, puzzle_line: str) -> None:
    if state.selection is None:
        return
    digit = clamp_digit(msg.digit)
    cells = engine.to_flat_array(state.board)
    cells[state.selection] = digit
    try:
        state.board = engine.from_flat_array(cells)
    except ValidationError as e:
        logger.info("guess %s at cell %s rejected: %s", digit, state.selection, e)


def select_cell(state: BoardState, msg: SelectCell, puzzle_line: str) -> None:
    state.selection = normalize_selection(msg.index)


_HANDLERS: dict[type, Callable[[BoardState, Message, str], None]] = {
    NewGame: new_game,
    SolveStep: solve_step,
    Guess: guess,
    SelectCell: select_cell,
}


def update(state: BoardState, message: Message, puzzle_line: str = CANONICAL_PUZZLE) -> bool:
    """Apply one message to `state`. Returns whether to re-render (always True)."""
    handler = _HANDLERS.get(type(message))
    if handler is None:
        raise TypeError(f"not a board message: {message!r}")
    logger.debug("message %r", message)
    handler(state, message, puzzle_line)
    return True


class BoardController:
    """Owns one BoardState and serialises messages from the host.

    Raises ParseError from the constructor if `puzzle_line` is unusable.
    """

    def __init__(self, puzzle_line: str = CANONICAL_PUZZLE):
        self.puzzle_line = puzzle_line
        self.state = initial_state(puzzle_line)
        self._lock = threading.Lock()

    def send(self, message: Message) -> ViewNode:
        with self._lock:
            update(self.state, message, self.puzzle_line)
            return render(*self.state.snapshot())

    def apply(self, message: Message) -> tuple[Board, Selection]:
        """Like send, but returns the state this message produced, read under the same lock."""
        with self._lock:
            update(self.state, message, self.puzzle_line)
            return self.state.snapshot()

    def view(self) -> ViewNode:
        with self._lock:
            return render(*self.state.snapshot())

    def snapshot(self) -> tuple[Board, Selection]:
        with self._lock:
            return self.state.snapshot()
