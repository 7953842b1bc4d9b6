"""Rich tables for printing a game to the terminal."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

from fiery_dragons.engine.logging import DRAGON_COLORS

if TYPE_CHECKING:
    from fiery_dragons.core.state import GameState
    from fiery_dragons.core.types import Color
    from fiery_dragons.engine.board import Square
    from fiery_dragons.engine.game_engine import RevealResult

console = Console()


def _dragon(color: Color) -> str:
    return f"[bold {DRAGON_COLORS[color]}]{color}[/]"


def _cell(square: Square) -> str:
    if square.occupant is None:
        return square.token
    return f"{square.token} {_dragon(square.occupant)}"


def ring_table(state: GameState) -> Table:
    table = Table(title="Volcano ring", show_lines=False)
    table.add_column("#", justify="right", style="grey50")
    table.add_column("Squares")
    table.add_column("Cave")

    for i, segment in enumerate(state.ring):
        squares = "  ".join(
            f"{j}:{_cell(square)}" for j, square in enumerate(segment.squares)
        )
        cave = "" if segment.cave is None else f"@{segment.cave_index} {_cell(segment.cave)}"
        table.add_row(str(i), squares, cave)
    return table


def deck_table(state: GameState) -> Table:
    table = Table(title="Chit cards")
    table.add_column("#", justify="right", style="grey50")
    table.add_column("Card")

    for i, card in enumerate(state.chit_cards):
        shown = f"[bold]{card.repr}[/]" if state.is_revealed(i) else "[grey50]face down[/]"
        table.add_row(str(i), shown)
    return table


def print_game(state: GameState) -> None:
    console.print(ring_table(state))
    console.print(deck_table(state))
    if (dragon := state.current_dragon) is not None:
        console.print(f"Active dragon: {_dragon(dragon.color)} at {dragon.position}")
    else:
        console.print("No active dragon.")


OUTCOME_TEXT = {
    "moved": "moves {start} -> {end} and keeps the turn",
    "blocked": "cannot move, turn over",
    "no_match": "draws a card that does not match its square, turn over",
    "swapped": "swaps {start} -> {end}, turn over",
    "won": "lands on its cave and wins!",
}


def print_result(result: RevealResult) -> None:
    text = OUTCOME_TEXT[result.outcome].format(start=result.start, end=result.end)
    console.print(f"{_dragon(result.color)} reveals [bold]{result.card.repr}[/] and {text}")
