# tests/conftest.py
import sys
from pathlib import Path

import pytest

# Add project root to sys.path so "board", "solver", "apps" can be imported in tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from board.config import CANONICAL_PUZZLE  # noqa: E402
from board.controller import BoardController  # noqa: E402

# A complete valid grid; puzzles below are made by blanking some of its cells.
SOLUTION = (
    "534678912"
    "672195348"
    "198342567"
    "859761423"
    "426853791"
    "713924856"
    "961537284"
    "287419635"
    "345286179"
)


def blank(line: str, positions) -> str:
    cells = list(line)
    for p in positions:
        cells[p] = "."
    return "".join(cells)


@pytest.fixture
def solution_line():
    return SOLUTION


@pytest.fixture
def easy_line():
    # one blank per row, each a naked single
    return blank(SOLUTION, [0, 10, 20, 30, 40, 50, 60, 70, 80])


@pytest.fixture
def controller():
    return BoardController(CANONICAL_PUZZLE)
