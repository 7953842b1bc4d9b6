from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from fiery_dragons.core.errors import StructuralError
from fiery_dragons.core.types import CardKind, Color
from fiery_dragons.engine.cursor import Cursor, Position

if TYPE_CHECKING:
    from fiery_dragons.engine.board import Cave, Ring, Square


@dataclass(frozen=True, slots=True)
class ChitCard:
    kind: CardKind
    moves: int = 0

    @property
    def repr(self) -> str:
        if self.kind is CardKind.SWAP:
            return self.kind.value
        return f"{self.kind.value}{self.moves:+d}"


@dataclass(slots=True)
class Dragon:
    idx: int
    color: Color
    home_segment: int
    cursor: Cursor

    @property
    def repr(self) -> str:
        return f"{self.idx}:{self.color}"

    @property
    def position(self) -> Position:
        return self.cursor.position

    @property
    def square(self) -> Square:
        return self.cursor.square

    @property
    def at_home(self) -> bool:
        return self.cursor.at_home

    @property
    def home_position(self) -> Position:
        return Position(self.home_segment)


@dataclass(slots=True)
class GameState:
    ring: Ring
    dragons: list[Dragon]
    chit_cards: list[ChitCard]
    # Deck positions face up this turn, in reveal order.
    revealed: list[int] = field(default_factory=list)
    current_dragon_idx: int = -1
    winner: Color | None = None

    @property
    def started(self) -> bool:
        return self.current_dragon_idx >= 0

    @property
    def current_dragon(self) -> Dragon | None:
        if not self.started:
            return None
        return self.dragons[self.current_dragon_idx]

    def get_dragon(self, color: Color) -> Dragon:
        for dragon in self.dragons:
            if dragon.color is color:
                return dragon
        raise KeyError(color)

    def home_cave(self, dragon: Dragon) -> Cave:
        cave = self.ring[dragon.home_segment].cave
        if cave is None:
            msg = f"{dragon.repr} is anchored to segment {dragon.home_segment} which has no cave"
            raise StructuralError(msg)
        return cave

    def is_revealed(self, card_idx: int) -> bool:
        return card_idx in self.revealed

    def occupant_at(self, position: Position) -> Dragon | None:
        color = self.ring.resolve(position).occupant
        return None if color is None else self.get_dragon(color)

    def place(self, dragon: Dragon, position: Position) -> None:
        """Put ``dragon`` on ``position``, keeping square occupancy in sync."""
        target = self.ring.resolve(position)
        if target.occupant is not None and target.occupant is not dragon.color:
            msg = f"{dragon.repr} cannot enter {position}: held by {target.occupant}"
            raise StructuralError(msg)

        current = dragon.cursor.square
        if current.occupant is dragon.color:
            current.occupant = None
        dragon.cursor.position = position
        target.occupant = dragon.color

    def send_all_home(self) -> None:
        self.ring.clear_occupants()
        for dragon in self.dragons:
            dragon.cursor.position = dragon.home_position
            self.home_cave(dragon).occupant = dragon.color


@dataclass(slots=True)
class LogContext:
    """Per-game logging state."""

    engine_id: int = 0
    total_turn: int = 0
    turn_log_count: int = 0
    current_dragon_repr: str = "_"

    def new_round(self):
        self.total_turn += 1

    def start_turn_log(self, dragon_repr: str):
        self.turn_log_count = 0
        self.current_dragon_repr = dragon_repr

    def inc_log_count(self):
        self.turn_log_count += 1
