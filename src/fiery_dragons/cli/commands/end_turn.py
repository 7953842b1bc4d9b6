from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path  # cappa needs this at runtime
from typing import Annotated

import cappa

from fiery_dragons.cli.converters import load_save
from fiery_dragons.cli.render import print_game
from fiery_dragons.engine.game_engine import GameEngine
from fiery_dragons.engine.record import save_game


@cappa.command(name="end-turn", help="Pass the turn to the next dragon.")
@dataclass
class EndTurnCommand:
    save: Annotated[Path, cappa.Arg(help="Save file to play.")]

    def __call__(self) -> None:
        state = load_save(self.save)
        engine = GameEngine(state)
        if state.current_dragon is None:
            engine.start()
        else:
            engine.end_turn()
        save_game(self.save, state)
        print_game(state)
