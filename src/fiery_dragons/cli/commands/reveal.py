"""CLI command for playing one chit card."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path  # cappa needs this at runtime
from typing import Annotated

import cappa

from fiery_dragons.cli.converters import load_save
from fiery_dragons.cli.render import console, print_game, print_result
from fiery_dragons.engine.game_engine import GameEngine, TurnOutcome
from fiery_dragons.engine.record import save_game


@cappa.command(name="reveal", help="Turn a chit card face up for the active dragon.")
@dataclass
class RevealCommand:
    save: Annotated[Path, cappa.Arg(help="Save file to play.")]
    card: Annotated[int, cappa.Arg(help="Deck position of the card.")]

    def __call__(self) -> None:
        state = load_save(self.save)
        engine = GameEngine(state)
        if state.current_dragon is None:
            engine.start()

        try:
            result = engine.reveal_card(self.card)
        except IndexError as e:
            raise cappa.Exit(str(e), code=1) from e

        if result is None:
            console.print(f"Card {self.card} is already face up.")
        else:
            print_result(result)
            if result.outcome is TurnOutcome.WON:
                console.print("All dragons return to their caves for a new game.")
                engine.start()

        save_game(self.save, state)
        print_game(state)
