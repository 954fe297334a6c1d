# board_api.py
# FastAPI host for one Sudoku board: an HTML page plus a small JSON API.
# Run with: pip install ".[serve]" && uvicorn apps.api.board_api:app --reload
# Set SUDOKU_BOARD_CONFIG=/path/to/board.yaml to change the puzzle or log level.
from __future__ import annotations

from typing import Literal

from fastapi import FastAPI
from fastapi.responses import HTMLResponse, RedirectResponse
from pydantic import BaseModel

from board.config import BoardConfig, config_from_env, setup_logging
from board.controller import BoardController
from board.render import view_to_dict
from solver import engine
from types_sudoku import Board, Guess, Message, NewGame, SelectCell, Selection, SolveStep

from .html_renderer import to_html


class MessageModel(BaseModel):
    type: Literal["new_game", "solve_step", "guess", "select_cell"]
    value: int = 0


class StateModel(BaseModel):
    line: str
    cells: list[int]
    selection: int | None
    solved: bool


def to_message(req: MessageModel) -> Message:
    if req.type == "new_game":
        return NewGame()
    if req.type == "solve_step":
        return SolveStep()
    if req.type == "guess":
        return Guess(req.value)
    return SelectCell(req.value)


def state_of(board: Board, selection: Selection) -> StateModel:
    return StateModel(
        line=engine.to_line(board),
        cells=engine.to_flat_array(board),
        selection=selection,
        solved=engine.is_solved(board),
    )


def create_app(config: BoardConfig | None = None) -> FastAPI:
    """Build the app around one controller. A bad puzzle in the config raises ParseError here."""
    cfg = config or config_from_env()
    setup_logging(cfg.log_level)
    controller = BoardController(cfg.puzzle)

    app = FastAPI(title="Sudoku Board")
    app.state.controller = controller

    def _act(msg: Message) -> RedirectResponse:
        controller.send(msg)
        return RedirectResponse("/", status_code=303)

    @app.get("/", response_class=HTMLResponse)
    def page():
        return to_html(controller.view())

    @app.post("/actions/new")
    def act_new():
        return _act(NewGame())

    @app.post("/actions/solve")
    def act_solve():
        return _act(SolveStep())

    @app.post("/actions/guess/{digit}")
    def act_guess(digit: int):
        return _act(Guess(digit))

    @app.post("/actions/select/{index}")
    def act_select(index: int):
        return _act(SelectCell(index))

    @app.get("/api/state", response_model=StateModel)
    def api_state():
        return state_of(*controller.snapshot())

    @app.get("/api/view")
    def api_view():
        return view_to_dict(controller.view())

    @app.post("/api/messages", response_model=StateModel)
    def api_message(req: MessageModel):
        return state_of(*controller.apply(to_message(req)))

    return app


app = create_app()
