from __future__ import annotations

from dataclasses import dataclass

import cappa

from fiery_dragons.cli.commands.end_turn import EndTurnCommand  # noqa: TC001
from fiery_dragons.cli.commands.new import (
    NewCommand,  # noqa: TC001 # cappa needs to know about this at runtime
)
from fiery_dragons.cli.commands.reveal import RevealCommand  # noqa: TC001
from fiery_dragons.cli.commands.show import ShowCommand  # noqa: TC001
from fiery_dragons.engine.logging import configure_logging


@dataclass
class Main:
    subcommand: cappa.Subcommands[NewCommand | ShowCommand | RevealCommand | EndTurnCommand]


def main():
    configure_logging()
    cappa.invoke(Main)


if __name__ == "__main__":
    main()
