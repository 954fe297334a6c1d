"""Terminal session for the Sudoku board: reads commands, turns them into board messages and prints the re-rendered board after each one."""

# board_cli.py
# Usage:
#   python -m apps.cli.board_cli                         # interactive
#   python -m apps.cli.board_cli --script "c 4; g 7; s"  # scripted
#   python -m apps.cli.board_cli --config board.yaml --snapshot board.png --json
#
# Commands:
#   new | n               start the configured puzzle again
#   solve | s             place one deduced digit
#   guess D | g D         put digit D in the selected cell (0 erases)
#   select I | c I        select cell I (0..80) or a key like r3c5
#   quit | q
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Iterable, TextIO

from board.config import load_config, setup_logging
from board.controller import BoardController
from solver import engine
from solver.errors import ParseError
from solver.solver_core import key_to_index
from types_sudoku import Guess, Message, NewGame, SelectCell, SolveStep

from .snapshot_renderer import draw_view
from .text_renderer import to_text

logger = logging.getLogger(__name__)

QUIT = "quit"


def parse_command(text: str) -> Message | str | None:
    """One command line -> Message, QUIT, or None for a blank line. ValueError if unknown."""
    parts = text.strip().split()
    if not parts:
        return None
    cmd, args = parts[0].lower(), parts[1:]
    if cmd in ("q", "quit", "exit"):
        return QUIT
    if cmd in ("n", "new"):
        return NewGame()
    if cmd in ("s", "solve"):
        return SolveStep()
    if cmd in ("g", "guess") and len(args) == 1:
        return Guess(int(args[0]))
    if cmd in ("c", "select") and len(args) == 1:
        arg = args[0]
        if arg.lower().startswith("r"):
            return SelectCell(key_to_index(arg))
        return SelectCell(int(arg))
    raise ValueError(f"unknown command: {text.strip()!r}")


def split_script(script: str) -> list[str]:
    return [part for part in script.replace("\n", ";").split(";") if part.strip()]


def run_session(controller: BoardController, commands: Iterable[str], out: TextIO, echo: bool = False) -> None:
    out.write(to_text(controller.view()))
    for line in commands:
        if echo:
            out.write(f"> {line.strip()}\n")
        try:
            msg = parse_command(line)
        except ValueError as e:
            out.write(f"error: {e}\n")
            continue
        if msg is None:
            continue
        if msg == QUIT:
            break
        out.write(to_text(controller.send(msg)))


def _interactive_lines():
    while True:
        try:
            yield input("> ")
        except EOFError:
            return


def state_payload(controller: BoardController) -> dict:
    board, selection = controller.snapshot()
    return {
        "line": engine.to_line(board),
        "cells": engine.to_flat_array(board),
        "selection": selection,
        "solved": engine.is_solved(board),
    }


def main(args=None) -> int:
    ap = argparse.ArgumentParser(description="Play a Sudoku board in the terminal.")
    ap.add_argument("--config", type=str, default=None, help="YAML config (puzzle, log_level, cell_px)")
    ap.add_argument("--puzzle", type=str, default=None, help="81-symbol puzzle line, overrides the config")
    ap.add_argument("--log-level", type=str, default=None)
    ap.add_argument("--script", type=str, default=None, help="';'-separated commands, run without prompting")
    ap.add_argument("--snapshot", type=str, default=None, help="Write a PNG of the final board here")
    ap.add_argument("--json", action="store_true", help="Print the final state as JSON")
    args = ap.parse_args(args)

    cfg = load_config(args.config, puzzle=args.puzzle, log_level=args.log_level)
    setup_logging(cfg.log_level)

    try:
        controller = BoardController(cfg.puzzle)
    except ParseError as e:
        print(f"cannot start: {e}", file=sys.stderr)
        return 2

    if args.script is not None:
        run_session(controller, split_script(args.script), sys.stdout, echo=True)
    else:
        run_session(controller, _interactive_lines(), sys.stdout)

    if args.snapshot:
        draw_view(controller.view(), args.snapshot, cell_px=cfg.cell_px)
        logger.info("snapshot written to %s", args.snapshot)
    if args.json:
        print(json.dumps(state_payload(controller), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
