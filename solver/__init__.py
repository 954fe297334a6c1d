from .engine import (
    from_flat_array,
    is_solved,
    next_placement,
    parse,
    solve,
    solve_step,
    to_flat_array,
    to_line,
)
from .errors import ParseError, PuzzleError, ValidationError

__all__ = [
    "ParseError",
    "PuzzleError",
    "ValidationError",
    "from_flat_array",
    "is_solved",
    "next_placement",
    "parse",
    "solve",
    "solve_step",
    "to_flat_array",
    "to_line",
]
