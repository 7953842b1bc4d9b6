"""Game configuration schema loaded from TOML using msgspec."""

from __future__ import annotations

from importlib import resources
from pathlib import Path

import msgspec

from fiery_dragons.core.errors import ConfigurationError
from fiery_dragons.core.types import (
    DEFAULT_CAVE_INDEX,
    MAX_PLAYERS,
    MIN_PLAYERS,
    CardKind,
    CaveName,
    Creature,
)
from fiery_dragons.engine.board import MIN_RING_SIZE

DEFAULT_CONFIG = "default.toml"


class GameConfig(msgspec.Struct, frozen=True, forbid_unknown_fields=True):
    """
    Board layout and deck contents for one game.

    Parsing only checks types; call ``validate()`` (done by the loaders)
    before building a game from it.
    """

    volcano_cards: list[list[Creature]]
    caves: list[CaveName]
    chit_card_moves: dict[CardKind, list[int]]
    cave_index: int = DEFAULT_CAVE_INDEX

    @classmethod
    def from_toml(cls, path: str | Path) -> GameConfig:
        try:
            data = Path(path).read_bytes()
        except OSError as e:
            msg = f"Cannot read config file {path}: {e}"
            raise ConfigurationError(msg) from e
        return cls.from_bytes(data)

    @classmethod
    def from_bytes(cls, data: bytes | str) -> GameConfig:
        try:
            config = msgspec.toml.decode(data, type=cls)
        except msgspec.DecodeError as e:
            raise ConfigurationError(f"Invalid game config: {e}") from e
        config.validate()
        return config

    @classmethod
    def default(cls) -> GameConfig:
        data = resources.files("fiery_dragons.config").joinpath(DEFAULT_CONFIG)
        return cls.from_bytes(data.read_bytes())

    @property
    def ring_size(self) -> int:
        return len(self.volcano_cards)

    @property
    def max_players(self) -> int:
        return min(MAX_PLAYERS, self.ring_size // 2, len(self.caves))

    @property
    def deck_size(self) -> int:
        return sum(len(moves) for moves in self.chit_card_moves.values())

    def validate(self) -> None:
        """Raise ``ConfigurationError`` if no playable board can be built."""
        size = self.ring_size
        if size < MIN_RING_SIZE or size % 2:
            msg = f"Need an even number of at least {MIN_RING_SIZE} volcano cards, got {size}"
            raise ConfigurationError(msg)

        for i, squares in enumerate(self.volcano_cards):
            if not squares:
                raise ConfigurationError(f"Volcano card {i} has no squares")
            if not 0 <= self.cave_index < len(squares):
                msg = (
                    f"Cave offset {self.cave_index} does not fit volcano card {i} "
                    f"({len(squares)} squares)"
                )
                raise ConfigurationError(msg)

        if len(self.caves) < MIN_PLAYERS:
            msg = f"Need at least {MIN_PLAYERS} caves, got {len(self.caves)}"
            raise ConfigurationError(msg)
        if len(set(self.caves)) != len(self.caves):
            raise ConfigurationError(f"Duplicate caves in {self.caves}")

        for kind, moves in self.chit_card_moves.items():
            if kind is CardKind.SWAP:
                if any(moves):
                    raise ConfigurationError("SwapCard magnitudes must all be 0")
            elif 0 in moves:
                raise ConfigurationError(f"{kind} cards cannot move 0 squares")

        if self.deck_size == 0:
            raise ConfigurationError("Deck has no chit cards")
