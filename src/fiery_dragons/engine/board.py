from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import IntEnum
from typing import TYPE_CHECKING, override

from fiery_dragons.core import LOGGER_NAME
from fiery_dragons.core.errors import StructuralError
from fiery_dragons.core.types import (
    CAVE_COLORS,
    DEFAULT_CAVE_INDEX,
    Color,
    Creature,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from fiery_dragons.engine.cursor import Position

logger = logging.getLogger(LOGGER_NAME)

MIN_RING_SIZE = 4


class Direction(IntEnum):
    BACKWARD = -1
    FORWARD = 1


@dataclass(slots=True, eq=False)
class Square:
    """A typed cell of a volcano card. Holds at most one dragon."""

    kind: Creature
    occupant: Color | None = None

    @property
    def occupied(self) -> bool:
        return self.occupant is not None

    @property
    def is_cave(self) -> bool:
        return False

    @property
    def token(self) -> str:
        return self.kind.value


@dataclass(slots=True, eq=False)
class Cave(Square):
    """Home slot of one dragon and its exact winning destination."""

    @property
    def color(self) -> Color:
        return CAVE_COLORS[self.kind]

    @property
    @override
    def is_cave(self) -> bool:
        return True

    @property
    @override
    def token(self) -> str:
        return self.kind.cave_name


@dataclass(frozen=True, slots=True)
class Orientation:
    """Layout hints for renderers. The rules never read these."""

    rows: int = 2
    cols: int = 3
    reversed: bool = False


@dataclass(slots=True, eq=False)
class Segment:
    """One volcano card: a fixed run of squares plus an optional cave."""

    squares: tuple[Square, ...]
    cave: Cave | None = None
    cave_index: int = DEFAULT_CAVE_INDEX
    orientation: Orientation = field(default_factory=Orientation)
    next_idx: int = field(default=-1, init=False)
    prev_idx: int = field(default=-1, init=False)

    @property
    def num_squares(self) -> int:
        return len(self.squares)

    @property
    def last_index(self) -> int:
        return len(self.squares) - 1

    @property
    def cave_color(self) -> Color | None:
        return self.cave.color if self.cave is not None else None

    def square_at(self, index: int | None) -> Square | None:
        """Square at ``index``; ``None`` resolves to the cave, which may be absent."""
        if index is None:
            return self.cave
        return self.squares[index]

    def neighbor_idx(self, direction: Direction) -> int:
        return self.next_idx if direction is Direction.FORWARD else self.prev_idx


@dataclass(slots=True)
class Ring:
    """Closed loop of volcano cards, addressed by position in the list."""

    segments: list[Segment]

    def __post_init__(self) -> None:
        self._validate()
        count = len(self.segments)
        for i, segment in enumerate(self.segments):
            segment.next_idx = (i + 1) % count
            segment.prev_idx = (i - 1) % count

    def _validate(self) -> None:
        count = len(self.segments)
        if count < MIN_RING_SIZE or count % 2:
            msg = f"Ring needs an even number of at least {MIN_RING_SIZE} segments, got {count}"
            raise StructuralError(msg)

        seen_colors: dict[Color, int] = {}
        for i, segment in enumerate(self.segments):
            if not segment.squares:
                raise StructuralError(f"Segment {i} has no squares")
            if segment.cave is None:
                continue
            if not 0 <= segment.cave_index < segment.num_squares:
                msg = (
                    f"Segment {i} places its cave at offset {segment.cave_index} "
                    f"but only has {segment.num_squares} squares"
                )
                raise StructuralError(msg)
            color = segment.cave.color
            if color in seen_colors:
                msg = f"{color} cave declared on segments {seen_colors[color]} and {i}"
                raise StructuralError(msg)
            seen_colors[color] = i

    def __len__(self) -> int:
        return len(self.segments)

    def __getitem__(self, idx: int) -> Segment:
        return self.segments[idx]

    def __iter__(self) -> Iterator[Segment]:
        return iter(self.segments)

    @property
    def total_squares(self) -> int:
        return sum(s.num_squares for s in self.segments)

    def neighbor(self, segment_idx: int, direction: Direction) -> int:
        return self.segments[segment_idx].neighbor_idx(direction)

    def cave_segment(self, color: Color) -> int | None:
        for i, segment in enumerate(self.segments):
            if segment.cave_color is color:
                return i
        return None

    def resolve(self, position: Position) -> Square:
        square = self.segments[position.segment].square_at(position.index)
        if square is None:
            msg = f"Segment {position.segment} has no cave to rest in"
            raise StructuralError(msg)
        return square

    def iter_squares(self) -> Iterator[tuple[int, int | None, Square]]:
        """Yield ``(segment, index, square)`` for every square and cave."""
        for i, segment in enumerate(self.segments):
            if segment.cave is not None:
                yield i, None, segment.cave
            for j, square in enumerate(segment.squares):
                yield i, j, square

    def clear_occupants(self) -> None:
        for _, _, square in self.iter_squares():
            square.occupant = None

    def dump_state(self) -> None:
        """Log every occupied square and cave.

        Useful for debugging test failures.
        """
        logger.info("=== RING STATE DUMP ===")
        occupied = [
            (seg, idx, sq) for seg, idx, sq in self.iter_squares() if sq.occupied
        ]
        if not occupied:
            logger.info("  (No dragons on the ring)")
        for seg, idx, sq in occupied:
            where = "cave" if idx is None else f"{idx}"
            logger.info(f"  Segment {seg:02d} @ {where:>4} {sq.token}: {sq.occupant}")
        logger.info("=======================")
