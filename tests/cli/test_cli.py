from pathlib import Path

import cappa
import pytest

from fiery_dragons.cli.commands.end_turn import EndTurnCommand
from fiery_dragons.cli.commands.new import NewCommand
from fiery_dragons.cli.commands.reveal import RevealCommand
from fiery_dragons.cli.commands.show import ShowCommand
from fiery_dragons.core.types import Color
from fiery_dragons.engine.record import load_game


@pytest.fixture
def save(tmp_path: Path) -> Path:
    path = tmp_path / "game.json"
    NewCommand(players=3, seed=11, output=path)()
    return path


def test_new_writes_a_started_game(capsys: pytest.CaptureFixture[str], save: Path):
    state = load_game(save)

    assert len(state.dragons) == 3
    assert state.current_dragon_idx == 0
    assert all(d.at_home for d in state.dragons)
    assert "Volcano ring" in capsys.readouterr().out


def test_new_rejects_bad_player_count(tmp_path: Path):
    with pytest.raises(cappa.Exit) as exc:
        NewCommand(players=9, output=tmp_path / "x.json")()
    assert exc.value.code == 1


def test_new_rejects_missing_config(tmp_path: Path):
    with pytest.raises(cappa.Exit) as exc:
        NewCommand(config_file=tmp_path / "nope.toml", output=tmp_path / "x.json")()
    assert "not found" in str(exc.value.message)


def test_show_prints_board(save: Path, capsys: pytest.CaptureFixture[str]):
    capsys.readouterr()

    ShowCommand(save=save)()

    out = capsys.readouterr().out
    assert "Chit cards" in out
    assert "Active dragon" in out


def test_show_missing_save_exits(tmp_path: Path):
    with pytest.raises(cappa.Exit) as exc:
        ShowCommand(save=tmp_path / "missing.json")()
    assert exc.value.code == 1


def test_show_corrupt_save_exits(tmp_path: Path):
    path = tmp_path / "broken.json"
    path.write_text("{")

    with pytest.raises(cappa.Exit) as exc:
        ShowCommand(save=path)()
    assert exc.value.code == 1
    assert "Cannot load" in str(exc.value.message)


def test_reveal_updates_the_save(save: Path):
    RevealCommand(save=save, card=0)()

    state = load_game(save)
    assert state.revealed == [0] or state.current_dragon_idx == 1


def test_reveal_bad_index_exits(save: Path):
    with pytest.raises(cappa.Exit):
        RevealCommand(save=save, card=99)()


def test_end_turn_rotates(save: Path):
    EndTurnCommand(save=save)()

    state = load_game(save)
    assert state.current_dragon_idx == 1
    assert state.dragons[1].color is Color.BLUE
