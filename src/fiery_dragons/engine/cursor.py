"""
Position cursor over the volcano ring.

Stepping is implemented once, as pure functions over ``Position``. The
mutating ``Cursor.step`` and every read-only predicate (``peek``,
``passes_cave``, ``on_cave``) walk the same sequence of positions, so a
legality check can never disagree with the move it approves.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, cast

from fiery_dragons.core.types import HOME_INDEX

if TYPE_CHECKING:
    from collections.abc import Iterator

    from fiery_dragons.core.types import Color
    from fiery_dragons.engine.board import Ring, Square


@dataclass(frozen=True, slots=True)
class Position:
    """``(segment, index)``; ``index is None`` means resting in the segment's cave."""

    segment: int
    index: int | None = None

    @property
    def at_home(self) -> bool:
        return self.index is None

    @property
    def persisted_index(self) -> int:
        return HOME_INDEX if self.index is None else self.index

    @classmethod
    def from_persisted(cls, segment: int, index: int) -> Position:
        return cls(segment, None if index == HOME_INDEX else index)

    def __str__(self) -> str:
        where = "cave" if self.index is None else str(self.index)
        return f"({self.segment},{where})"


def advance(ring: Ring, position: Position) -> Position:
    segment = ring[position.segment]
    # Leaving the cave enters the ring just after the cave's offset.
    idx = segment.cave_index if position.index is None else position.index
    idx += 1
    if idx > segment.last_index:
        return Position(segment.next_idx, 0)
    return Position(position.segment, idx)


def retreat(ring: Ring, position: Position) -> Position:
    if position.index is None or position.index == 0:
        prev_idx = ring[position.segment].prev_idx
        return Position(prev_idx, ring[prev_idx].last_index)
    return Position(position.segment, position.index - 1)


def walk(ring: Ring, position: Position, n: int) -> Iterator[Position]:
    """Yield every position visited by ``n`` single steps, final one included."""
    step = advance if n > 0 else retreat
    current = position
    for _ in range(abs(n)):
        current = step(ring, current)
        yield current


def offset(ring: Ring, position: Position, n: int) -> Position:
    step = advance if n > 0 else retreat
    for _ in range(abs(n)):
        position = step(ring, position)
    return position


def passes_cave(ring: Ring, position: Position, color: Color, n: int) -> bool:
    """
    Whether moving ``n`` from ``position`` flies over ``color``'s cave.

    Backward, touching the square at the cave offset at any step counts as
    passing, the final step included. Forward, any square beyond the cave
    offset on the cave's segment counts, and the cave offset itself only
    when it is not the last step (the last step there is a win).
    A cursor resting at home never passes.
    """
    if position.index is None:
        return False

    for i, step in enumerate(walk(ring, position, n)):
        segment = ring[step.segment]
        if segment.cave_color is not color:
            continue
        # walk never yields a cave position
        index = cast("int", step.index)
        if n < 0:
            if index == segment.cave_index:
                return True
        elif index > segment.cave_index or (index == segment.cave_index and i < n - 1):
            return True
    return False


def on_cave(ring: Ring, position: Position, color: Color, n: int) -> bool:
    """Whether moving ``n`` ends on the square at ``color``'s cave offset."""
    target = offset(ring, position, n)
    segment = ring[target.segment]
    return segment.cave_color is color and target.index == segment.cave_index


@dataclass(slots=True)
class Cursor:
    """Mutable location of one dragon on a ring."""

    ring: Ring
    position: Position

    @property
    def segment(self) -> int:
        return self.position.segment

    @property
    def index(self) -> int | None:
        return self.position.index

    @property
    def at_home(self) -> bool:
        return self.position.index is None

    @property
    def square(self) -> Square:
        return self.ring.resolve(self.position)

    def step(self, n: int) -> Square:
        """Move ``n`` squares (negative is backward) and return the new square."""
        self.position = offset(self.ring, self.position, n)
        return self.square

    def peek_position(self, n: int) -> Position:
        return offset(self.ring, self.position, n)

    def peek(self, n: int) -> Square:
        return self.ring.resolve(self.peek_position(n))

    def passes_cave(self, color: Color, n: int) -> bool:
        return passes_cave(self.ring, self.position, color, n)

    def on_cave(self, color: Color, n: int) -> bool:
        return on_cave(self.ring, self.position, color, n)
