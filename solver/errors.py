# errors.py
from __future__ import annotations


class PuzzleError(ValueError):
    """Base class for puzzle engine failures."""


class ParseError(PuzzleError):
    """A linear puzzle encoding is malformed, not 81 cells long, or self-contradicting."""


class ValidationError(PuzzleError):
    """A candidate cell array is out of range or breaks row/column/box uniqueness."""

    def __init__(self, message: str, issues: list[dict] | None = None):
        super().__init__(message)
        self.issues = issues or []
