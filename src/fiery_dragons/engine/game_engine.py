from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from fiery_dragons.core import LOGGER_NAME
from fiery_dragons.core.errors import ReentrantCallError
from fiery_dragons.core.events import (
    ActiveDragonChangedEvent,
    CardRevealedEvent,
    CardsResetEvent,
    GameEvent,
    GameResetEvent,
)
from fiery_dragons.core.state import LogContext
from fiery_dragons.core.types import CardKind
from fiery_dragons.engine.interactions import Effect, interact
from fiery_dragons.engine.logging import ContextFilter
from fiery_dragons.engine.movement import move_dragon, swap_closest

if TYPE_CHECKING:
    from fiery_dragons.core.state import ChitCard, Dragon, GameState
    from fiery_dragons.core.types import Color
    from fiery_dragons.engine.cursor import Position


class TurnOutcome(StrEnum):
    MOVED = "moved"
    BLOCKED = "blocked"
    NO_MATCH = "no_match"
    SWAPPED = "swapped"
    WON = "won"


@dataclass(frozen=True)
class RevealResult:
    """What happened when the active dragon turned one card face up."""

    card_idx: int
    card: ChitCard
    color: Color
    outcome: TurnOutcome
    start: Position
    end: Position
    turn_ended: bool
    swapped_with: Color | None = None


EventCallback = Callable[["GameEngine", GameEvent], None]


@dataclass
class GameEngine:
    state: GameState
    log_context: LogContext = field(default_factory=LogContext)

    # Callback for external observers. Must not call back into the engine.
    on_event: EventCallback | None = None
    verbose: bool = True
    _logger: logging.Logger = field(init=False, repr=False)
    _dispatching: bool = field(default=False, init=False, repr=False)

    def __post_init__(self) -> None:
        base = logging.getLogger(LOGGER_NAME)
        self._logger = base.getChild(f"engine.{id(self)}")

        if self.verbose:
            self._logger.addFilter(ContextFilter(self))

    # --- Turn Flow ---
    def start(self) -> None:
        """Clear any previous winner and hand the turn to the next dragon."""
        self._guard()
        self.state.winner = None
        self._advance_turn()

    def end_turn(self) -> None:
        """Pass explicitly, e.g. when every card is already face up."""
        self._guard()
        if self.state.current_dragon is None:
            return
        self.log_info(f"{self.state.current_dragon.repr} ends the turn")
        self._advance_turn()

    def reveal_card(self, card_idx: int) -> RevealResult | None:
        """
        Turn card ``card_idx`` face up for the active dragon and apply it.

        Returns None when the reveal is ignored: the card is already face up,
        no dragon is active, or the last game has been won and not restarted.
        """
        self._guard()
        state = self.state
        if not 0 <= card_idx < len(state.chit_cards):
            msg = f"No chit card at position {card_idx} (deck has {len(state.chit_cards)})"
            raise IndexError(msg)

        dragon = state.current_dragon
        if dragon is None or state.winner is not None:
            self.log_debug(f"Ignoring reveal of card {card_idx}: no active dragon")
            return None
        if state.is_revealed(card_idx):
            self.log_debug(f"Ignoring reveal of card {card_idx}: already face up")
            return None

        card = state.chit_cards[card_idx]
        state.revealed.append(card_idx)
        self.log_info(f"{dragon.repr} reveals {card.repr}")
        self.emit(CardRevealedEvent(card_idx, card, dragon.color))

        match card.kind:
            case CardKind.SWAP:
                start = dragon.position
                other = swap_closest(self, dragon)
                result = RevealResult(
                    card_idx,
                    card,
                    dragon.color,
                    TurnOutcome.SWAPPED,
                    start,
                    dragon.position,
                    turn_ended=True,
                    swapped_with=other.color if other is not None else None,
                )
            case CardKind.PIRATE_DRAGON:
                result = self._apply_move(card_idx, card, dragon, card.moves)
            case _:
                square = dragon.square
                if interact(square.kind, card.kind) is Effect.MOVE:
                    result = self._apply_move(card_idx, card, dragon, card.moves)
                else:
                    self.log_info(
                        f"No match: {card.kind} played on {square.token}, turn over",
                    )
                    result = RevealResult(
                        card_idx,
                        card,
                        dragon.color,
                        TurnOutcome.NO_MATCH,
                        dragon.position,
                        dragon.position,
                        turn_ended=True,
                    )

        if result.turn_ended and result.outcome is not TurnOutcome.WON:
            self._advance_turn()
        return result

    def _apply_move(
        self,
        card_idx: int,
        card: ChitCard,
        dragon: Dragon,
        distance: int,
    ) -> RevealResult:
        start = dragon.position
        if not move_dragon(self, dragon, distance):
            outcome = TurnOutcome.BLOCKED
        elif self.state.winner is dragon.color:
            outcome = TurnOutcome.WON
        else:
            outcome = TurnOutcome.MOVED
        return RevealResult(
            card_idx,
            card,
            dragon.color,
            outcome,
            start,
            dragon.position,
            turn_ended=outcome is not TurnOutcome.MOVED,
        )

    def _advance_turn(self) -> None:
        self._flip_back_cards()

        curr = self.state.current_dragon_idx
        next_idx = (curr + 1) % len(self.state.dragons)
        # A round completes when rotation wraps back to the first seat.
        if curr >= 0 and next_idx <= curr:
            self.log_context.new_round()

        self.state.current_dragon_idx = next_idx
        dragon = self.state.dragons[next_idx]
        self.log_context.start_turn_log(dragon.repr)
        self.log_info(f"=== START TURN: {dragon.repr} ===")
        self.emit(ActiveDragonChangedEvent(next_idx, dragon.color))

    def _flip_back_cards(self) -> None:
        if not self.state.revealed:
            return
        flipped = tuple(self.state.revealed)
        self.state.revealed.clear()
        self.log_debug(f"Flipping back {len(flipped)} card(s)")
        self.emit(CardsResetEvent(flipped))

    def reset(self) -> None:
        """Send every dragon home and turn all cards face down. Keeps the winner."""
        self._guard()
        self.state.send_all_home()
        self._flip_back_cards()
        self.state.current_dragon_idx = -1
        self.log_context.total_turn = 0
        self.log_context.start_turn_log("_")
        self.log_info("Game reset: all dragons back in their caves")
        self.emit(GameResetEvent())

    # --- Notifications ---
    def emit(self, event: GameEvent) -> None:
        if self.on_event is None:
            return
        self._dispatching = True
        try:
            self.on_event(self, event)
        finally:
            self._dispatching = False

    def _guard(self) -> None:
        if self._dispatching:
            msg = "Event callbacks must not drive the engine"
            raise ReentrantCallError(msg)

    # -- Getters for convenience --
    @property
    def current_dragon(self) -> Dragon | None:
        return self.state.current_dragon

    def get_dragon(self, color: Color) -> Dragon:
        return self.state.get_dragon(color)

    # -- Logging --
    def _log(self, level: int, msg: str, *args: Any, **kwargs: Any) -> None:
        """Core logging helper; respects engine verbosity."""
        if not self.verbose:
            return
        self._logger.log(level, msg, *args, **kwargs)

    def log_debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.DEBUG, msg, *args, **kwargs)

    def log_info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.INFO, msg, *args, **kwargs)
