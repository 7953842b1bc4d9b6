import msgspec
import pytest

from fiery_dragons.config import GameConfig
from fiery_dragons.core.errors import CorruptSaveError
from fiery_dragons.core.state import ChitCard
from fiery_dragons.core.types import CardKind, Color
from fiery_dragons.engine.cursor import Position
from fiery_dragons.engine.game_engine import GameEngine
from fiery_dragons.engine.record import (
    GameRecord,
    decode_state,
    encode_state,
    from_json,
    load_game,
    save_game,
    to_json,
)
from fiery_dragons.engine.setup import new_game
from tests.test_utils import DragonConfig, GameScenario


@pytest.fixture
def played(scenario: type[GameScenario]) -> GameScenario:
    """White out on the ring, one card face up, Orange home."""
    game = scenario(
        [DragonConfig(Color.WHITE, 0), DragonConfig(Color.ORANGE, 4)],
        [ChitCard(CardKind.SALAMANDER, 3), ChitCard(CardKind.BAT, 1), ChitCard(CardKind.SWAP)],
    )
    game.reveal(0)
    return game


def as_dict(record: GameRecord) -> dict:
    return msgspec.to_builtins(record)


def test_record_fields(played: GameScenario):
    record = encode_state(played.state)

    assert record.volcano_cards[0].cave == "SalamanderCave"
    assert record.volcano_cards[0].cave_index == 1
    assert record.volcano_cards[1].cave is None
    assert record.volcano_cards[1].cave_index == -1
    assert record.dragons[0].color is Color.WHITE
    assert (record.dragons[0].segment, record.dragons[0].index) == (1, 1)
    assert (record.dragons[1].segment, record.dragons[1].index) == (4, -1)
    assert record.flipped_chit_cards == [0]
    assert record.current_dragon == 0
    assert record.dragon_caves == {Color.WHITE: 0, Color.ORANGE: 4}


def test_encode_decode_encode_is_stable(played: GameScenario):
    record = encode_state(played.state)

    assert encode_state(decode_state(record)) == record


def test_decoded_game_is_wired_like_the_saved_one(played: GameScenario):
    state = decode_state(encode_state(played.state))

    for seg, saved in zip(state.ring, played.state.ring, strict=True):
        assert (seg.next_idx, seg.prev_idx) == (saved.next_idx, saved.prev_idx)
        assert seg.cave_color == saved.cave_color
        assert [sq.occupant for sq in seg.squares] == [sq.occupant for sq in saved.squares]
    assert state.get_dragon(Color.WHITE).position == Position(1, 1)
    assert state.ring[4].cave.occupant is Color.ORANGE  # pyright: ignore[reportOptionalMemberAccess]


def test_loaded_game_resumes_same_turn(played: GameScenario, tmp_path):
    path = tmp_path / "save.json"
    save_game(path, played.state)

    state = load_game(path)
    engine = GameEngine(state, verbose=False)

    assert state.current_dragon_idx == 0
    assert state.revealed == [0]
    assert engine.reveal_card(0) is None
    result = engine.reveal_card(1)
    assert result is not None
    assert result.color is Color.WHITE


def test_dragon_swapped_into_foreign_cave_survives_reload(
    scenario: type[GameScenario],
    tmp_path,
):
    """
    Scenario: White swaps out of its cave with Orange on (1,0).
    Verify: the save with Orange resting in White's cave loads back unchanged.
    """
    game = scenario(
        [DragonConfig(Color.WHITE, 0), DragonConfig(Color.ORANGE, 4, segment=1, index=0)],
        [ChitCard(CardKind.SWAP)],
    )
    game.reveal(0)
    assert game.get_dragon(Color.ORANGE).position == Position(0)

    record = encode_state(game.state)
    assert encode_state(decode_state(record)) == record

    path = tmp_path / "save.json"
    save_game(path, game.state)
    state = load_game(path)
    assert state.get_dragon(Color.ORANGE).position == Position(0)
    assert state.get_dragon(Color.ORANGE).home_segment == 4
    assert state.ring[0].cave.occupant is Color.ORANGE  # pyright: ignore[reportOptionalMemberAccess]
    assert state.ring[4].cave.occupant is None  # pyright: ignore[reportOptionalMemberAccess]


def test_json_round_trip_of_new_game():
    state = new_game(GameConfig.default(), players=4, seed=3)

    assert to_json(from_json(to_json(state))) == to_json(state)


@pytest.mark.parametrize(
    ("mutate", "match"),
    [
        (lambda d: d.update(volcano_cards=d["volcano_cards"][:3]), "even number"),
        (lambda d: d.update(volcano_cards=d["volcano_cards"][:7]), "even number"),
        (lambda d: d["volcano_cards"][2].update(squares=[]), "no squares"),
        (lambda d: d["volcano_cards"][0].update(cave_index=3), "offset 3"),
        (lambda d: d["volcano_cards"][2].update(cave="SalamanderCave", cave_index=1), "White cave"),
        (lambda d: d["dragon_caves"].pop("Orange"), "dragon_caves"),
        (lambda d: d["dragon_caves"].update(Orange=2), "Orange cave is not on segment 2"),
        (lambda d: d["dragons"][1].update(segment=8), "unknown segment"),
        (lambda d: d["dragons"][1].update(segment=4, index=3), "index 3"),
        (lambda d: d["dragons"][1].update(segment=1, index=1), "both occupy"),
        (lambda d: d["dragons"][0].update(segment=2, index=-1), "no cave"),
        (lambda d: d["dragons"][0].update(segment=4, index=-1), "both occupy"),
        (lambda d: d["dragons"][1].update(color="White"), "Duplicate dragon colors"),
        (lambda d: d.update(dragons=d["dragons"][:1]), "at least 2 dragons"),
        (lambda d: d.update(flipped_chit_cards=[3]), "outside a deck"),
        (lambda d: d.update(flipped_chit_cards=[0, 0]), "repeats"),
        (lambda d: d.update(current_dragon=2), "Active dragon"),
    ],
)
def test_corrupt_records_are_rejected(played: GameScenario, mutate, match: str):
    data = as_dict(encode_state(played.state))
    mutate(data)

    with pytest.raises(CorruptSaveError, match=match):
        from_json(msgspec.json.encode(data))


@pytest.mark.parametrize(
    "payload",
    [
        b"not json",
        b"{}",
        b'{"volcano_cards": 3}',
    ],
)
def test_malformed_json_is_rejected(payload: bytes):
    with pytest.raises(CorruptSaveError, match="Malformed"):
        from_json(payload)


def test_unknown_color_is_rejected(played: GameScenario):
    data = as_dict(encode_state(played.state))
    data["dragons"][0]["color"] = "Purple"

    with pytest.raises(CorruptSaveError, match="Malformed"):
        from_json(msgspec.json.encode(data))
