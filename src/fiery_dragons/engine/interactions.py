from __future__ import annotations

from enum import StrEnum
from itertools import product

from fiery_dragons.core.types import CardKind, Creature


class Effect(StrEnum):
    MOVE = "MoveByCardMagnitude"
    END_TURN = "EndTurnNoMove"


# Square (or cave) type vs. played creature card. Only matching types move.
INTERACTIONS: dict[tuple[Creature, CardKind], Effect] = {
    (square, card): Effect.MOVE if square.value == card.value else Effect.END_TURN
    for square, card in product(Creature, (k for k in CardKind if k.is_creature))
}


def interact(square_kind: Creature, card_kind: CardKind) -> Effect:
    """Look up the effect of playing ``card_kind`` while standing on ``square_kind``."""
    try:
        return INTERACTIONS[square_kind, card_kind]
    except KeyError:
        msg = f"{card_kind} does not interact with squares"
        raise ValueError(msg) from None
