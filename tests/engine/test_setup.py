import pytest

from fiery_dragons.config import GameConfig
from fiery_dragons.core.errors import ConfigurationError
from fiery_dragons.core.types import CardKind, Color
from fiery_dragons.engine.board import Orientation
from fiery_dragons.engine.cursor import Position
from fiery_dragons.engine.game_engine import GameEngine
from fiery_dragons.engine.setup import build_deck, new_game, orientation_for, seat_segments


@pytest.fixture
def config() -> GameConfig:
    return GameConfig.default()


@pytest.mark.parametrize(
    ("ring_size", "players", "expected"),
    [
        (8, 2, [0, 4]),
        (8, 3, [0, 4, 2]),
        (8, 4, [0, 4, 2, 6]),
        (12, 3, [0, 6, 3]),
        (10, 2, [0, 5]),
        (6, 3, [0, 3, 1]),
        (4, 2, [0, 2]),
    ],
)
def test_first_two_seats_face_each_other(ring_size: int, players: int, expected: list[int]):
    assert seat_segments(ring_size, players) == expected


def test_new_game_places_dragons_in_caves(config: GameConfig):
    state = new_game(config, players=2, seed=7)

    assert [d.color for d in state.dragons] == [Color.WHITE, Color.ORANGE]
    assert [d.home_segment for d in state.dragons] == [0, 4]
    for dragon in state.dragons:
        assert dragon.position == Position(dragon.home_segment)
        assert state.home_cave(dragon).occupant is dragon.color
    assert state.current_dragon is None
    assert state.revealed == []
    assert state.winner is None


def test_only_seated_caves_exist(config: GameConfig):
    state = new_game(config, players=2, seed=1)

    assert [i for i, seg in enumerate(state.ring) if seg.cave is not None] == [0, 4]


def test_deck_is_shuffled_deterministically(config: GameConfig):
    first = new_game(config, players=2, seed=42).chit_cards
    second = new_game(config, players=2, seed=42).chit_cards

    assert first == second
    assert sorted(first, key=repr) == sorted(build_deck(config.chit_card_moves), key=repr)


def test_default_deck_contents(config: GameConfig):
    deck = build_deck(config.chit_card_moves)

    assert len(deck) == 18
    assert sum(c.kind is CardKind.SWAP for c in deck) == 2
    assert sorted(c.moves for c in deck if c.kind is CardKind.PIRATE_DRAGON) == [-2, -2, -1, -1]


@pytest.mark.parametrize("players", [1, 5])
def test_player_count_is_bounded(config: GameConfig, players: int):
    with pytest.raises(ConfigurationError, match="Player count"):
        new_game(config, players=players)


def test_orientation_alternates_every_two_cards():
    orientations = [orientation_for(i, 8) for i in range(8)]

    assert orientations[0] == Orientation(2, 3, reversed=False)
    assert orientations[1] == Orientation(2, 3, reversed=False)
    assert orientations[2] == Orientation(3, 2, reversed=False)
    assert orientations[5] == Orientation(2, 3, reversed=True)
    assert orientations[7] == Orientation(3, 2, reversed=True)


@pytest.mark.parametrize(
    ("players", "caves", "colors"),
    [
        (3, {0: Color.WHITE, 2: Color.BLUE, 4: Color.ORANGE}, [Color.WHITE, Color.BLUE, Color.ORANGE]),
        (
            4,
            {0: Color.WHITE, 2: Color.BLUE, 4: Color.ORANGE, 6: Color.GREEN},
            [Color.WHITE, Color.BLUE, Color.ORANGE, Color.GREEN],
        ),
    ],
)
def test_extra_seats_fill_between_the_first_two(
    config: GameConfig,
    players: int,
    caves: dict[int, Color],
    colors: list[Color],
):
    """
    Scenario: 3 and 4 player games on the default board.
    Verify: the second cave faces the first, and turns go around the ring.
    """
    state = new_game(config, players=players, seed=5)

    assert {i: seg.cave_color for i, seg in enumerate(state.ring) if seg.cave is not None} == caves
    assert [d.color for d in state.dragons] == colors
    assert [d.home_segment for d in state.dragons] == sorted(caves)

    engine = GameEngine(state, verbose=False)
    engine.start()
    order = []
    for _ in range(players):
        order.append(engine.current_dragon.color)  # pyright: ignore[reportOptionalMemberAccess]
        engine.end_turn()
    assert order == colors
