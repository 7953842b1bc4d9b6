"""CLI command for starting a new game."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path  # cappa needs this at runtime
from typing import Annotated

import cappa

from fiery_dragons.cli.converters import load_config
from fiery_dragons.cli.render import console, print_game
from fiery_dragons.core.errors import ConfigurationError
from fiery_dragons.core.types import MIN_PLAYERS
from fiery_dragons.engine.game_engine import GameEngine
from fiery_dragons.engine.record import save_game
from fiery_dragons.engine.setup import new_game

DEFAULT_SAVE = Path("fiery_dragons.json")


@cappa.command(name="new", help="Set up a new game and write it to a save file.")
@dataclass
class NewCommand:
    players: Annotated[
        int,
        cappa.Arg(short="-p", long="--players", help="Number of dragons."),
    ] = MIN_PLAYERS
    seed: Annotated[
        int | None,
        cappa.Arg(short="-s", long="--seed", help="Seed for the deck shuffle."),
    ] = None
    config_file: Annotated[
        Path | None,
        cappa.Arg(short="-c", long="--config", help="Path to TOML board config."),
    ] = None
    output: Annotated[
        Path,
        cappa.Arg(short="-o", long="--output", help="Where to write the save file."),
    ] = DEFAULT_SAVE

    def __call__(self) -> None:
        config = load_config(self.config_file)
        try:
            state = new_game(config, self.players, self.seed)
        except ConfigurationError as e:
            raise cappa.Exit(str(e), code=1) from e

        GameEngine(state).start()
        save_game(self.output, state)
        print_game(state)
        console.print(f"Saved to {self.output}")
