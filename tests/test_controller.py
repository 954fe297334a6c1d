# tests/test_controller.py
import random
import threading

import pytest

from board.config import CANONICAL_PUZZLE
from board.controller import BoardController, update
from board.render import BANNER
from board.state import BoardState, clamp_digit, initial_state, normalize_selection
from solver import engine
from solver.errors import ParseError
from types_sudoku import Guess, NewGame, SelectCell, SolveStep


def cells_of(controller):
    return engine.to_flat_array(controller.state.board)


def test_initial_state(controller):
    assert controller.state.selection is None
    assert controller.state.board == engine.parse(CANONICAL_PUZZLE)


def test_bad_canonical_puzzle_is_fatal():
    with pytest.raises(ParseError):
        BoardController("not a puzzle")
    with pytest.raises(ParseError):
        initial_state("1" * 81)


@pytest.mark.parametrize("digit,expected", [(0, 0), (5, 5), (9, 9), (10, 0), (255, 0), (-1, 0)])
def test_clamp_digit(digit, expected):
    assert clamp_digit(digit) == expected


def test_select_cell_every_index(controller):
    for i in range(81):
        controller.send(SelectCell(i))
        assert controller.state.selection == i


@pytest.mark.parametrize("index", [-1, 81, 90, 10_000])
def test_select_out_of_range_clears_selection(controller, index):
    controller.send(SelectCell(4))
    controller.send(SelectCell(index))
    assert controller.state.selection is None
    assert normalize_selection(index) is None


@pytest.mark.parametrize("index", [True, False])
def test_bool_index_is_not_a_selection(controller, index):
    controller.send(SelectCell(4))
    controller.send(SelectCell(index))
    assert controller.state.selection is None
    assert normalize_selection(index) is None


def test_guess_without_selection_is_a_noop(controller):
    before = controller.state.snapshot()
    controller.send(Guess(7))
    assert controller.state.snapshot() == before


def test_accepted_guess_replaces_board(controller):
    old_board = controller.state.board
    controller.send(SelectCell(4))
    controller.send(Guess(7))
    assert cells_of(controller)[4] == 7
    assert controller.state.board is not old_board
    assert old_board.cells[4] == 0


def test_rejected_guess_leaves_state_untouched(controller):
    controller.send(SelectCell(4))
    before = controller.state.snapshot()
    controller.send(Guess(6))  # row 1 already has a 6
    assert controller.state.snapshot() == before
    assert cells_of(controller)[4] == 0


@pytest.mark.parametrize("digit", [10, 12, 99, -3])
def test_out_of_range_guess_erases(digit):
    erased = BoardController()
    clamped = BoardController()
    for c in (erased, clamped):
        c.send(SelectCell(4))
        c.send(Guess(7))
    erased.send(Guess(0))
    clamped.send(Guess(digit))
    assert cells_of(clamped)[4] == 0
    assert clamped.state.snapshot() == erased.state.snapshot()


def test_given_cells_can_be_erased(controller):
    controller.send(SelectCell(3))
    controller.send(Guess(0))
    assert cells_of(controller)[3] == 0


def test_new_game_restores_puzzle_and_keeps_selection(controller):
    controller.send(SelectCell(4))
    controller.send(Guess(7))
    controller.send(SolveStep())
    controller.send(NewGame())
    assert controller.state.board == engine.parse(CANONICAL_PUZZLE)
    assert controller.state.selection == 4


def test_new_game_with_unparsable_puzzle_keeps_state(controller):
    controller.send(SelectCell(4))
    controller.send(Guess(7))
    before = controller.state.snapshot()
    controller.puzzle_line = "garbage"
    controller.send(NewGame())
    assert controller.state.snapshot() == before


def test_solve_step_fills_one_cell(easy_line):
    controller = BoardController(easy_line)
    before = cells_of(controller)
    controller.send(SolveStep())
    after = cells_of(controller)
    assert sum(1 for a, b in zip(before, after) if a != b) == 1


def test_solve_step_until_stuck_or_solved(easy_line, solution_line):
    controller = BoardController(easy_line)
    for _ in range(81):
        board = controller.state.board
        controller.send(SolveStep())
        if controller.state.board == board:
            break
    assert engine.is_solved(controller.state.board)
    assert engine.to_line(controller.state.board) == solution_line


def test_solve_step_solves_the_canonical_puzzle(controller):
    blanks = cells_of(controller).count(0)
    for _ in range(blanks):
        before = cells_of(controller)
        view = controller.send(SolveStep())
        after = cells_of(controller)
        assert sum(1 for a, b in zip(before, after) if a != b) == 1
    assert engine.is_solved(controller.state.board)
    assert view.children[-1].text == BANNER
    assert controller.view() == view


def test_solve_step_on_stuck_board_is_a_noop():
    controller = BoardController(".23456789" + "1........" + "." * 63)
    before = controller.state.snapshot()
    controller.send(SolveStep())
    assert controller.state.snapshot() == before


def test_update_always_asks_for_render():
    state = BoardState(board=engine.parse(CANONICAL_PUZZLE))
    for msg in (Guess(3), SelectCell(99), SelectCell(4), Guess(6), SolveStep(), NewGame()):
        assert update(state, msg, CANONICAL_PUZZLE) is True


def test_update_rejects_unknown_messages():
    state = BoardState(board=engine.parse(CANONICAL_PUZZLE))
    with pytest.raises(TypeError):
        update(state, "Guess(3)", CANONICAL_PUZZLE)


def test_random_message_sequences_keep_board_invariants(controller):
    rng = random.Random(1234)
    for _ in range(500):
        roll = rng.random()
        if roll < 0.45:
            msg = SelectCell(rng.randint(-5, 90))
        elif roll < 0.9:
            msg = Guess(rng.randint(-2, 12))
        elif roll < 0.97:
            msg = SolveStep()
        else:
            msg = NewGame()
        controller.send(msg)
        cells = cells_of(controller)
        assert len(cells) == 81
        assert all(0 <= v <= 9 for v in cells)
        assert controller.state.selection is None or 0 <= controller.state.selection <= 80
        assert engine.sanity_check(cells)["ok"]


def test_apply_returns_the_state_its_message_produced(controller):
    board, selection = controller.apply(SelectCell(4))
    assert selection == 4
    board, selection = controller.apply(Guess(7))
    assert board.cells[4] == 7
    assert (board, selection) == controller.snapshot()


def test_apply_from_many_threads_reads_back_its_own_selection(controller):
    seen = {i: set() for i in range(8)}

    def worker(i):
        for _ in range(200):
            _, selection = controller.apply(SelectCell(i))
            seen[i].add(selection)

    threads = [threading.Thread(target=worker, args=(i,)) for i in seen]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert seen == {i: {i} for i in seen}


def test_guess_readback_matches_validation(controller):
    rng = random.Random(7)
    for _ in range(200):
        i, d = rng.randint(0, 80), rng.randint(0, 9)
        before = cells_of(controller)
        controller.send(SelectCell(i))
        controller.send(Guess(d))
        candidate = list(before)
        candidate[i] = d
        accepted = engine.sanity_check(candidate)["ok"]
        assert cells_of(controller)[i] == (d if accepted else before[i])


def test_scenario():
    controller = BoardController()
    assert controller.state.selection is None

    controller.send(SelectCell(4))
    controller.send(Guess(7))
    assert cells_of(controller)[4] == 7

    controller.send(SelectCell(90))
    assert controller.state.selection is None

    before = controller.state.snapshot()
    controller.send(Guess(3))
    assert controller.state.snapshot() == before

    solvable = engine.solve(controller.state.board) is not None
    for _ in range(81):
        board = controller.state.board
        controller.send(SolveStep())
        if controller.state.board == board:
            break
    assert engine.solve_step(controller.state.board) is None
    cells = cells_of(controller)
    assert engine.is_solved(controller.state.board) == (0 not in cells and engine.sanity_check(cells)["ok"])
    assert engine.is_solved(controller.state.board) == solvable
