"""Notifications the engine fires synchronously after each transition."""

from __future__ import annotations

from abc import ABC
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fiery_dragons.core.state import ChitCard
    from fiery_dragons.core.types import Color, MoveSource
    from fiery_dragons.engine.cursor import Position


@dataclass(frozen=True)
class GameEvent(ABC):
    pass


@dataclass(frozen=True)
class ActiveDragonChangedEvent(GameEvent):
    dragon_idx: int
    color: Color


@dataclass(frozen=True)
class CardRevealedEvent(GameEvent):
    card_idx: int
    card: ChitCard
    color: Color


@dataclass(frozen=True)
class CardsResetEvent(GameEvent):
    """Every listed deck position went face down in the same step."""

    card_indices: tuple[int, ...]


@dataclass(frozen=True)
class MoveAppliedEvent(GameEvent):
    color: Color
    start: Position
    end: Position
    source: MoveSource


@dataclass(frozen=True)
class WinEvent(GameEvent):
    color: Color


@dataclass(frozen=True)
class GameResetEvent(GameEvent):
    """All dragons are back in their caves and no dragon is active."""
