from __future__ import annotations

from typing import TYPE_CHECKING

from fiery_dragons.core.events import MoveAppliedEvent, WinEvent

if TYPE_CHECKING:
    from fiery_dragons.core.state import Dragon
    from fiery_dragons.core.types import MoveSource
    from fiery_dragons.engine.game_engine import GameEngine


def check_valid_move(engine: GameEngine, dragon: Dragon, distance: int) -> bool:
    """
    Validate moving ``dragon`` by ``distance`` and process a win if it lands home.

    Checks run in a fixed order: occupied target, flying over the own cave,
    retreating out of the cave. A move that passes all three is legal; if it
    also ends on the dragon's cave square the game is won as a side effect.
    """
    cursor = dragon.cursor
    target = cursor.peek_position(distance)

    if engine.state.ring.resolve(target).occupied:
        engine.log_info(f"Blocked: {dragon.repr} cannot land on occupied {target}")
        return False

    if cursor.passes_cave(dragon.color, distance):
        engine.log_info(f"Blocked: {dragon.repr} would fly over its own cave")
        return False

    if cursor.at_home and distance < 0:
        engine.log_info(f"Blocked: {dragon.repr} cannot retreat out of its cave")
        return False

    check_win(engine, dragon, distance)
    return True


def check_win(engine: GameEngine, dragon: Dragon, distance: int) -> bool:
    if not dragon.cursor.on_cave(dragon.color, distance):
        return False

    state = engine.state
    start = dragon.position
    state.winner = dragon.color
    move_to_cave(engine, dragon)
    engine.log_info(f"!!! Win: {dragon.repr} lands on its cave from {start} !!!")
    engine.emit(MoveAppliedEvent(dragon.color, start, dragon.position, "Win"))
    engine.emit(WinEvent(dragon.color))
    engine.reset()
    return True


def move_to_cave(engine: GameEngine, dragon: Dragon) -> None:
    """Relocate ``dragon`` into its own cave, whatever currently sits there."""
    state = engine.state
    current = dragon.square
    if current.occupant is dragon.color:
        current.occupant = None
    dragon.cursor.position = dragon.home_position
    state.home_cave(dragon).occupant = dragon.color


def move_dragon(
    engine: GameEngine,
    dragon: Dragon,
    distance: int,
    source: MoveSource = "Card",
) -> bool:
    """Move ``dragon`` if legal. Returns False when the move was rejected."""
    if not check_valid_move(engine, dragon, distance):
        return False

    if engine.state.winner is dragon.color:
        # Board has already been reset by the win.
        return True

    start = dragon.position
    end = dragon.cursor.peek_position(distance)
    engine.state.place(dragon, end)
    engine.log_info(f"Move: {dragon.repr} {start}->{end} ({source})")
    engine.emit(MoveAppliedEvent(dragon.color, start, end, source))
    return True


def find_closest(engine: GameEngine, dragon: Dragon) -> Dragon | None:
    """
    Nearest dragon on the ring, scanning outward one step at a time.

    Forward is checked before backward at each distance, so a tie goes
    forward. Dragons resting in caves are never found.
    """
    state = engine.state
    cursor = dragon.cursor
    forward = cursor.peek_position(1)
    backward = cursor.peek_position(-1)
    closest: Dragon | None = None
    i = 1
    while forward != backward:
        if (closest := state.occupant_at(forward)) is not None:
            return closest
        if (closest := state.occupant_at(backward)) is not None:
            return closest
        forward = cursor.peek_position(1 + i)
        if forward == backward:
            break
        backward = cursor.peek_position(-1 - i)
        i += 1

    # The scans met on one square.
    return state.occupant_at(forward) or state.occupant_at(backward)


def swap_closest(engine: GameEngine, dragon: Dragon) -> Dragon | None:
    """Exchange places with the nearest dragon, bypassing legality checks."""
    other = find_closest(engine, dragon)
    if other is None:
        engine.log_info(f"Swap: no dragon on the ring for {dragon.repr} to swap with")
        return None

    mine, theirs = dragon.square, other.square
    start, other_start = dragon.position, other.position
    dragon.cursor, other.cursor = other.cursor, dragon.cursor
    mine.occupant = other.color
    theirs.occupant = dragon.color

    engine.log_info(f"Swap: {dragon.repr} {start}<->{other_start} {other.repr}")
    engine.emit(MoveAppliedEvent(dragon.color, start, other_start, "Swap"))
    engine.emit(MoveAppliedEvent(other.color, other_start, start, "Swap"))
    return other
