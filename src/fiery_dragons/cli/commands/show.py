from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path  # cappa needs this at runtime
from typing import Annotated

import cappa

from fiery_dragons.cli.converters import load_save
from fiery_dragons.cli.render import print_game


@cappa.command(name="show", help="Print the board and deck of a saved game.")
@dataclass
class ShowCommand:
    save: Annotated[Path, cappa.Arg(help="Save file to read.")]

    def __call__(self) -> None:
        print_game(load_save(self.save))
