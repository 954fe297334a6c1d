"""Core Sudoku utilities used by the engine: index math, units and peers, candidate computation, singles (placements) and locked candidates (eliminations)."""

# solver_core.py
# Cells are addressed by linear index 0..80 (row * 9 + col); digits 1..9, 0 = blank.
# Human-readable keys ('r1c1'..'r9c9') are only used in captions.
from __future__ import annotations

from types_sudoku import Candidates, Move

SIZE = 9
BOX = 3
DIGITS = range(1, 10)


def index_of(r: int, c: int) -> int:
    return r * SIZE + c


def rc_of(index: int) -> tuple[int, int]:
    return divmod(index, SIZE)


def rc_to_key(r: int, c: int) -> str:
    return f"r{r + 1}c{c + 1}"


def key_to_index(key: str) -> int:
    """'r4c7' -> 33. Raises ValueError on a malformed or out-of-range key."""
    row, sep, col = key.lower().removeprefix("r").partition("c")
    if not sep:
        raise ValueError(f"not a cell key: {key!r}")
    r, c = int(row), int(col)
    if not (1 <= r <= SIZE and 1 <= c <= SIZE):
        raise ValueError(f"cell key out of range: {key!r}")
    return index_of(r - 1, c - 1)


def cell_key(index: int) -> str:
    return rc_to_key(*rc_of(index))


def which_box(r: int, c: int) -> int:
    return BOX * (r // BOX) + c // BOX


ROW_UNITS = [[index_of(r, c) for c in range(SIZE)] for r in range(SIZE)]
COL_UNITS = [[index_of(r, c) for r in range(SIZE)] for c in range(SIZE)]
BOX_UNITS = [
    [index_of(BOX * (b // BOX) + i, BOX * (b % BOX) + j) for i in range(BOX) for j in range(BOX)]
    for b in range(SIZE)
]
UNITS = [("row", u) for u in ROW_UNITS] + [("col", u) for u in COL_UNITS] + [("box", u) for u in BOX_UNITS]

PEERS = [
    frozenset(
        set(ROW_UNITS[i // SIZE]) | set(COL_UNITS[i % SIZE]) | set(BOX_UNITS[which_box(*rc_of(i))])
    )
    - {i}
    for i in range(SIZE * SIZE)
]


def duplicates_in_unit(vals) -> set:
    seen = set()
    dups = set()
    for v in vals:
        if v == 0:
            continue
        if v in seen:
            dups.add(v)
        seen.add(v)
    return dups


def find_conflicts(cells) -> list[dict]:
    """Duplicate digits per unit, e.g. {'type': 'duplicate', 'unit': 'r1', 'digits': [5], 'cells': ['r1c2', 'r1c8']}."""
    issues = []
    for kind, unit in UNITS:
        dups = duplicates_in_unit(cells[i] for i in unit)
        if not dups:
            continue
        n = {"row": ROW_UNITS, "col": COL_UNITS, "box": BOX_UNITS}[kind].index(unit) + 1
        issues.append(
            {
                "type": "duplicate",
                "unit": f"{kind[0]}{n}",
                "digits": sorted(dups),
                "cells": [cell_key(i) for i in unit if cells[i] in dups],
            }
        )
    return issues


def compute_candidates(cells) -> Candidates:
    cand = {}
    for i, v in enumerate(cells):
        if v == 0:
            used = {cells[p] for p in PEERS[i]}
            cand[i] = [d for d in DIGITS if d not in used]
    return cand


def _placement(technique: str, index: int, digit: int, why: str) -> Move:
    return {
        "technique": technique,
        "type": "placement",
        "position": index,
        "cell": cell_key(index),
        "digit": digit,
        "caption": why,
    }


def find_naked_singles(candidates: Candidates) -> list[Move]:
    moves = []
    for index in sorted(candidates):
        opts = candidates[index]
        if len(opts) == 1:
            moves.append(
                _placement("naked_single", index, opts[0], f"Only one candidate fits {cell_key(index)}.")
            )
    return moves


def find_hidden_singles(candidates: Candidates) -> list[Move]:
    moves = []
    for kind, unit in UNITS:
        pos_for_digit = {d: [] for d in DIGITS}
        for i in unit:
            for d in candidates.get(i, ()):
                pos_for_digit[d].append(i)
        for d, cells in pos_for_digit.items():
            if len(cells) == 1:
                moves.append(
                    _placement(
                        "hidden_single",
                        cells[0],
                        d,
                        f"Digit {d} appears in only one cell of its {kind}.",
                    )
                )
    return moves


def _locked(technique: str, digit: int, elim: list[int], why: str) -> Move:
    return {
        "technique": technique,
        "type": "elimination",
        "digit": digit,
        "eliminate": elim,
        "caption": why,
    }


def find_locked_candidates(candidates: Candidates) -> list[Move]:
    """Pointing: a digit confined to one line inside a box leaves the rest of that line.
    Claiming: a digit confined to one box inside a line leaves the rest of that box.
    """
    moves = []
    for b, box in enumerate(BOX_UNITS):
        for d in DIGITS:
            locs = [i for i in box if d in candidates.get(i, ())]
            if len(locs) < 2:
                continue
            for lines, axis in ((ROW_UNITS, 0), (COL_UNITS, 1)):
                keys = {rc_of(i)[axis] for i in locs}
                if len(keys) != 1:
                    continue
                line = lines[keys.pop()]
                elim = [i for i in line if i not in box and d in candidates.get(i, ())]
                if elim:
                    moves.append(
                        _locked(
                            "locked_candidates_pointing",
                            d,
                            elim,
                            f"In box {b + 1}, digit {d} is locked to one line; eliminate it from the rest of that line.",
                        )
                    )
    for name, lines in (("row", ROW_UNITS), ("column", COL_UNITS)):
        for n, line in enumerate(lines, 1):
            for d in DIGITS:
                locs = [i for i in line if d in candidates.get(i, ())]
                if len(locs) < 2:
                    continue
                boxes = {which_box(*rc_of(i)) for i in locs}
                if len(boxes) != 1:
                    continue
                b = boxes.pop()
                elim = [i for i in BOX_UNITS[b] if i not in line and d in candidates.get(i, ())]
                if elim:
                    moves.append(
                        _locked(
                            "locked_candidates_claiming",
                            d,
                            elim,
                            f"In {name} {n}, digit {d} is confined to box {b + 1}; eliminate it from the rest of the box.",
                        )
                    )
    return moves


def apply_elimination(candidates: Candidates, move: Move) -> bool:
    """Removes the move's digit from its target cells in place; True if anything changed."""
    changed = False
    d = move["digit"]
    for i in move.get("eliminate", []):
        if d in candidates.get(i, ()):
            candidates[i] = [x for x in candidates[i] if x != d]
            changed = True
    return changed


def apply_placement(cells, move: Move) -> list[int]:
    """Placement only; returns a new cell list with the digit placed."""
    out = list(cells)
    out[move["position"]] = move["digit"]
    return out


def search_solution(cells) -> list[int] | None:
    """Complete `cells` by depth-first search, most constrained blank first.

    Returns a new filled cell list, or None if the givens admit no solution.
    """
    grid = list(cells)
    if find_conflicts(grid):
        return None
    return grid if _search(grid) else None


def _search(grid: list[int]) -> bool:
    best, best_opts = None, None
    for i, v in enumerate(grid):
        if v:
            continue
        used = {grid[p] for p in PEERS[i]}
        opts = [d for d in DIGITS if d not in used]
        if not opts:
            return False
        if best_opts is None or len(opts) < len(best_opts):
            best, best_opts = i, opts
    if best is None:
        return True
    for d in best_opts:
        grid[best] = d
        if _search(grid):
            return True
    grid[best] = 0
    return False


def search_placement(candidates: Candidates, solution) -> Move:
    """Place the solution digit in the blank with the fewest candidates (lowest index on ties)."""
    index = min(candidates, key=lambda i: (len(candidates[i]), i))
    return _placement(
        "search",
        index,
        solution[index],
        f"No single is left; trying candidates shows {cell_key(index)} must be {solution[index]}.",
    )
