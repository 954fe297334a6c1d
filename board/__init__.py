from .config import CANONICAL_PUZZLE, BoardConfig, load_config
from .controller import BoardController, update
from .render import render, view_to_dict
from .state import BoardState

__all__ = [
    "CANONICAL_PUZZLE",
    "BoardConfig",
    "BoardController",
    "BoardState",
    "load_config",
    "render",
    "update",
    "view_to_dict",
]
