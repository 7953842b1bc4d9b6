from __future__ import annotations

from typing import TYPE_CHECKING

import cappa

from fiery_dragons.config import GameConfig
from fiery_dragons.core.errors import FieryDragonsError
from fiery_dragons.engine.record import load_game

if TYPE_CHECKING:
    from pathlib import Path

    from fiery_dragons.core.state import GameState


def load_config(path: Path | None) -> GameConfig:
    if path is None:
        return GameConfig.default()
    if not path.exists():
        msg = f"Config file not found: {path}"
        raise cappa.Exit(msg, code=1)
    try:
        return GameConfig.from_toml(path)
    except FieryDragonsError as e:
        msg = f"Invalid config file: {e}"
        raise cappa.Exit(msg, code=1) from e


def load_save(path: Path) -> GameState:
    if not path.exists():
        msg = f"Save file not found: {path}"
        raise cappa.Exit(msg, code=1)
    try:
        return load_game(path)
    except FieryDragonsError as e:
        msg = f"Cannot load {path}: {e}"
        raise cappa.Exit(msg, code=1) from e
