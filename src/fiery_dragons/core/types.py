from enum import StrEnum
from typing import Literal

CreatureName = Literal["Bat", "Spider", "Salamander", "BabyDragon"]
CaveName = Literal["BatCave", "SpiderCave", "SalamanderCave", "BabyDragonCave"]
CardName = Literal[
    "Bat",
    "Spider",
    "Salamander",
    "BabyDragon",
    "PirateDragon",
    "SwapCard",
]
ColorName = Literal["White", "Orange", "Blue", "Green"]


class Creature(StrEnum):
    """Type tag shared by squares, caves and the four creature chit cards."""

    BAT = "Bat"
    SPIDER = "Spider"
    SALAMANDER = "Salamander"
    BABY_DRAGON = "BabyDragon"

    @property
    def cave_name(self) -> CaveName:
        return f"{self.value}Cave"  # pyright: ignore[reportReturnType]

    @classmethod
    def from_cave_name(cls, name: str) -> "Creature":
        if not name.endswith("Cave"):
            raise ValueError(f"'{name}' is not a cave token")
        return cls(name.removesuffix("Cave"))


class CardKind(StrEnum):
    BAT = "Bat"
    SPIDER = "Spider"
    SALAMANDER = "Salamander"
    BABY_DRAGON = "BabyDragon"
    PIRATE_DRAGON = "PirateDragon"
    SWAP = "SwapCard"

    @property
    def is_creature(self) -> bool:
        return self.value in CREATURE_VALUES

    @property
    def creature(self) -> Creature:
        return Creature(self.value)


class Color(StrEnum):
    WHITE = "White"
    ORANGE = "Orange"
    BLUE = "Blue"
    GREEN = "Green"


CREATURE_VALUES = frozenset(c.value for c in Creature)

# Each cave type belongs to exactly one dragon color.
CAVE_COLORS: dict[Creature, Color] = {
    Creature.SALAMANDER: Color.WHITE,
    Creature.SPIDER: Color.ORANGE,
    Creature.BAT: Color.BLUE,
    Creature.BABY_DRAGON: Color.GREEN,
}

DEFAULT_CAVE_INDEX = 1
HOME_INDEX = -1  # persisted marker for "resting in the cave"
NO_CAVE_INDEX = -1
MIN_PLAYERS = 2
MAX_PLAYERS = 4

# What caused a dragon to change position.
MoveSource = Literal["Card", "Swap", "Win"]
