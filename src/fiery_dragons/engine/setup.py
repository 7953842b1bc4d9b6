from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING

from fiery_dragons.core import LOGGER_NAME
from fiery_dragons.core.errors import ConfigurationError
from fiery_dragons.core.state import ChitCard, Dragon, GameState
from fiery_dragons.core.types import MIN_PLAYERS, CardKind, Creature
from fiery_dragons.engine.board import Cave, Orientation, Ring, Segment, Square
from fiery_dragons.engine.cursor import Cursor, Position

if TYPE_CHECKING:
    from collections.abc import Sequence

    from fiery_dragons.config import GameConfig
    from fiery_dragons.core.types import CaveName

logger = logging.getLogger(LOGGER_NAME)


def orientation_for(idx: int, ring_size: int) -> Orientation:
    """Rows and columns swap every two cards; the far half of the ring is reversed."""
    rows, cols = (2, 3) if (idx // 2) % 2 == 0 else (3, 2)
    return Orientation(rows=rows, cols=cols, reversed=idx >= ring_size // 2)


def seat_segments(ring_size: int, players: int) -> list[int]:
    """
    Segment holding each seat's cave, in config order.

    The first two seats face each other across the ring; a third and fourth
    seat take the quarter points between them.
    """
    half, quarter = ring_size // 2, ring_size // 4
    return [0, half, quarter, half + quarter][:players]


def build_ring(
    layouts: Sequence[Sequence[Creature]],
    caves: dict[int, CaveName],
    cave_index: int,
) -> Ring:
    segments = [
        Segment(
            squares=tuple(Square(kind) for kind in layout),
            cave=Cave(Creature.from_cave_name(caves[i])) if i in caves else None,
            cave_index=cave_index,
            orientation=orientation_for(i, len(layouts)),
        )
        for i, layout in enumerate(layouts)
    ]
    return Ring(segments)


def build_deck(chit_card_moves: dict[CardKind, list[int]]) -> list[ChitCard]:
    return [
        ChitCard(kind, moves)
        for kind, all_moves in chit_card_moves.items()
        for moves in all_moves
    ]


def new_game(config: GameConfig, players: int, seed: int | None = None) -> GameState:
    """
    Build a fresh game: every dragon at home in its cave, deck shuffled, no active dragon.

    Args:
        config: Validated board and deck configuration.
        players: Number of dragons, between 2 and ``config.max_players``.
        seed: Seed for the deck shuffle; None for a random order.
    """
    if not MIN_PLAYERS <= players <= config.max_players:
        msg = f"Player count must be between {MIN_PLAYERS} and {config.max_players}, got {players}"
        raise ConfigurationError(msg)

    seats = seat_segments(config.ring_size, players)
    caves = {seg: config.caves[seat] for seat, seg in enumerate(seats)}
    ring = build_ring(config.volcano_cards, caves, config.cave_index)

    # Turn order runs around the ring, not in config order.
    dragons: list[Dragon] = []
    for idx, seg in enumerate(sorted(seats)):
        cave = ring[seg].cave
        assert cave is not None
        dragon = Dragon(idx, cave.color, seg, Cursor(ring, Position(seg)))
        cave.occupant = dragon.color
        dragons.append(dragon)

    deck = build_deck(config.chit_card_moves)
    random.Random(seed).shuffle(deck)

    logger.info(
        f"New game: {players} dragons on {len(ring)} volcano cards, {len(deck)} chit cards",
    )
    return GameState(ring=ring, dragons=dragons, chit_cards=deck)
