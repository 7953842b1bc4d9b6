"""
Flat, restorable snapshot of a game and its JSON save file format.

The record keeps exactly what is needed to rebuild the ring, the deck and
every dragon. Decoding re-validates all board invariants and refuses to
produce a partially wired game.
"""

from __future__ import annotations

import logging
from pathlib import Path

import msgspec

from fiery_dragons.core import LOGGER_NAME
from fiery_dragons.core.errors import CorruptSaveError, StructuralError
from fiery_dragons.core.state import ChitCard, Dragon, GameState
from fiery_dragons.core.types import (
    MIN_PLAYERS,
    NO_CAVE_INDEX,
    CardKind,
    CaveName,
    Color,
    Creature,
)
from fiery_dragons.engine.board import Cave, Ring, Segment, Square
from fiery_dragons.engine.cursor import Cursor, Position
from fiery_dragons.engine.setup import orientation_for

logger = logging.getLogger(LOGGER_NAME)


class SegmentRecord(msgspec.Struct, frozen=True):
    squares: list[Creature]
    cave: CaveName | None = None
    cave_index: int = NO_CAVE_INDEX


class CardRecord(msgspec.Struct, frozen=True):
    kind: CardKind
    moves: int = 0


class DragonRecord(msgspec.Struct, frozen=True):
    color: Color
    segment: int
    # -1 while resting in the cave
    index: int


class GameRecord(msgspec.Struct, frozen=True):
    volcano_cards: list[SegmentRecord]
    chit_cards: list[CardRecord]
    dragons: list[DragonRecord]
    flipped_chit_cards: list[int]
    current_dragon: int
    dragon_caves: dict[Color, int]


def encode_state(state: GameState) -> GameRecord:
    segments = [
        SegmentRecord(
            squares=[square.kind for square in segment.squares],
            cave=segment.cave.kind.cave_name if segment.cave is not None else None,
            cave_index=segment.cave_index if segment.cave is not None else NO_CAVE_INDEX,
        )
        for segment in state.ring
    ]
    return GameRecord(
        volcano_cards=segments,
        chit_cards=[CardRecord(card.kind, card.moves) for card in state.chit_cards],
        dragons=[
            DragonRecord(d.color, d.position.segment, d.position.persisted_index)
            for d in state.dragons
        ],
        flipped_chit_cards=list(state.revealed),
        current_dragon=state.current_dragon_idx,
        dragon_caves={d.color: d.home_segment for d in state.dragons},
    )


def decode_state(record: GameRecord) -> GameState:
    """Rebuild a game from ``record``. Raises ``CorruptSaveError`` on any inconsistency."""
    try:
        return _decode(record)
    except CorruptSaveError:
        raise
    except StructuralError as e:
        raise CorruptSaveError(str(e)) from e


def _decode(record: GameRecord) -> GameState:
    ring = Ring(
        [
            Segment(
                squares=tuple(Square(kind) for kind in seg.squares),
                cave=Cave(Creature.from_cave_name(seg.cave)) if seg.cave else None,
                cave_index=seg.cave_index,
                orientation=orientation_for(i, len(record.volcano_cards)),
            )
            for i, seg in enumerate(record.volcano_cards)
        ],
    )

    if len(record.dragons) < MIN_PLAYERS:
        raise CorruptSaveError(f"Need at least {MIN_PLAYERS} dragons, got {len(record.dragons)}")
    colors = [d.color for d in record.dragons]
    if len(set(colors)) != len(colors):
        raise CorruptSaveError(f"Duplicate dragon colors in {colors}")
    if set(record.dragon_caves) != set(colors):
        msg = f"dragon_caves covers {sorted(record.dragon_caves)} but dragons are {sorted(colors)}"
        raise CorruptSaveError(msg)

    dragons = [
        _decode_dragon(ring, idx, d, record.dragon_caves[d.color])
        for idx, d in enumerate(record.dragons)
    ]

    card_count = len(record.chit_cards)
    flipped = record.flipped_chit_cards
    if any(not 0 <= i < card_count for i in flipped):
        raise CorruptSaveError(f"Face-up cards {flipped} outside a deck of {card_count}")
    if len(set(flipped)) != len(flipped):
        raise CorruptSaveError(f"Face-up cards {flipped} contain repeats")

    if not -1 <= record.current_dragon < len(dragons):
        raise CorruptSaveError(f"Active dragon {record.current_dragon} out of range")

    return GameState(
        ring=ring,
        dragons=dragons,
        chit_cards=[ChitCard(c.kind, c.moves) for c in record.chit_cards],
        revealed=list(flipped),
        current_dragon_idx=record.current_dragon,
    )


def _decode_dragon(ring: Ring, idx: int, record: DragonRecord, home: int) -> Dragon:
    if not 0 <= home < len(ring) or ring[home].cave_color is not record.color:
        raise CorruptSaveError(f"{record.color} cave is not on segment {home}")
    if not 0 <= record.segment < len(ring):
        raise CorruptSaveError(f"{record.color} dragon on unknown segment {record.segment}")
    if record.index != -1 and not 0 <= record.index < ring[record.segment].num_squares:
        msg = f"{record.color} dragon at index {record.index} of segment {record.segment}"
        raise CorruptSaveError(msg)

    position = Position.from_persisted(record.segment, record.index)
    square = ring.resolve(position)
    if square.occupant is not None:
        msg = f"{record.color} and {square.occupant} both occupy {position}"
        raise CorruptSaveError(msg)
    square.occupant = record.color
    return Dragon(idx, record.color, home, Cursor(ring, position))


def to_json(state: GameState) -> bytes:
    return msgspec.json.encode(encode_state(state))


def from_json(data: bytes | str) -> GameState:
    try:
        record = msgspec.json.decode(data, type=GameRecord)
    except msgspec.DecodeError as e:
        raise CorruptSaveError(f"Malformed save data: {e}") from e
    return decode_state(record)


def save_game(path: str | Path, state: GameState) -> None:
    Path(path).write_bytes(msgspec.json.format(to_json(state), indent=2))
    logger.debug(f"Saved game to {path}")


def load_game(path: str | Path) -> GameState:
    """Read a save file. The game resumes with the same active dragon and face-up cards."""
    state = from_json(Path(path).read_bytes())
    logger.debug(f"Loaded game from {path}")
    return state
