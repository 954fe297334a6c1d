from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

import yaml

CANONICAL_PUZZLE = "...2...633....54.1..1..398........9....538....3........263..5..5.37....847...1..."
CONFIG_ENV = "SUDOKU_BOARD_CONFIG"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class DotDict(dict):
    __getattr__ = dict.get
    __setattr__ = dict.__setitem__
    __delattr__ = dict.__delitem__


def load_yaml(path: str | Path) -> DotDict:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")
    return DotDict(data)


def merge_overrides(cfg: Dict[str, Any], **overrides) -> Dict[str, Any]:
    for k, v in overrides.items():
        if v is None:
            continue
        cfg[k] = v
    return cfg


@dataclass
class BoardConfig:
    """Settings shared by the terminal session and the HTTP host."""

    # linear encoding parsed at startup and on every new game
    puzzle: str = CANONICAL_PUZZLE
    log_level: str = "INFO"
    # PNG snapshot cell size in pixels
    cell_px: int = 60


def load_config(path: str | Path | None = None, **overrides) -> BoardConfig:
    """Defaults <- YAML file (if any) <- keyword overrides (None values ignored)."""
    cfg: Dict[str, Any] = dataclasses.asdict(BoardConfig())
    if path:
        merge_overrides(cfg, **load_yaml(path))
    merge_overrides(cfg, **overrides)
    known = {f.name for f in dataclasses.fields(BoardConfig)}
    unknown = sorted(set(cfg) - known)
    if unknown:
        raise ValueError(f"unknown config keys: {', '.join(unknown)}")
    return BoardConfig(**cfg)


def config_from_env() -> BoardConfig:
    return load_config(os.environ.get(CONFIG_ENV) or None)


def setup_logging(level: str | int = "INFO") -> None:
    if isinstance(level, str):
        level = level.upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)
