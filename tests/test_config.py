from pathlib import Path

import pytest

from stroop.app.loader import GAMES_DIR, load_game_manifest, load_game_module
from stroop.core.config import GameConfig
from stroop.core.const import BASE_COLORS, TIMEOUT_TIERS, UNLOCK_TABLE
from stroop.core.types import ColorName


def test_defaults_match_constants():
    cfg = GameConfig()
    assert cfg.total_rounds == 30
    assert cfg.base_colors == BASE_COLORS
    assert cfg.unlock_table == UNLOCK_TABLE
    assert cfg.timeout_tiers == TIMEOUT_TIERS


def test_shipped_manifest_parses():
    manifest = load_game_manifest(GAMES_DIR / "stroop")
    cfg = GameConfig.from_manifest(manifest)
    assert cfg.total_rounds == 30
    assert cfg.unlock_table[0] == (3, ColorName.PURPLE)
    assert cfg.timeout_tiers == TIMEOUT_TIERS


def test_overrides_win_and_none_is_ignored():
    manifest = {"options": {"total_rounds": 30, "countdown_ms": 2000}}
    cfg = GameConfig.from_manifest(manifest, total_rounds=10, countdown_ms=None)
    assert cfg.total_rounds == 10
    assert cfg.countdown_ms == 2000


def test_lowercase_color_names_are_accepted():
    cfg = GameConfig.from_manifest({"options": {"base_colors": ["red", "blue"]}})
    assert cfg.base_colors == (ColorName.RED, ColorName.BLUE)


@pytest.mark.parametrize("options", [
    {"total_rounds": 0},
    {"base_colors": ["RED"]},
    {"countdown_ms": -1},
    {"timeout_tiers": [[0, 1000, "a"], [5, 2000, "b"]]},
    {"base_colors": ["MAUVE", "RED"]},
])
def test_invalid_options_raise(options):
    with pytest.raises(ValueError):
        GameConfig.from_manifest({"options": options})


def test_missing_manifest_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_game_manifest(tmp_path)


def test_module_without_factory_raises(tmp_path: Path):
    (tmp_path / "main.py").write_text("x = 1\n", encoding="utf-8")
    with pytest.raises(AttributeError):
        load_game_module(tmp_path)


def test_module_with_factory_loads(tmp_path: Path):
    (tmp_path / "main.py").write_text("def get_game():\n    return 'ok'\n", encoding="utf-8")
    assert load_game_module(tmp_path).get_game() == "ok"


@pytest.mark.parametrize("unlock_table", [
    [[0, "PURPLE"]],                      # non-positive milestone
    [[3, "PURPLE"], [3, "ORANGE"]],       # duplicate milestone
    [[3, "PURPLE"], [6, "PURPLE"]],       # same color twice
    [[3, "RED"]],                         # already a base color
])
def test_unlock_table_that_could_never_fire_is_rejected(unlock_table):
    with pytest.raises(ValueError):
        GameConfig.from_manifest({"options": {"unlock_table": unlock_table}})


def test_custom_base_colors_must_leave_room_for_unlocks():
    with pytest.raises(ValueError):
        GameConfig(base_colors=(ColorName.RED, ColorName.PURPLE))
    cfg = GameConfig(base_colors=(ColorName.RED, ColorName.PURPLE), unlock_table=((4, ColorName.CYAN),))
    assert cfg.unlock_table == ((4, ColorName.CYAN),)


def test_history_dir_comes_from_options_or_overrides(tmp_path):
    assert GameConfig().history_dir is None
    cfg = GameConfig.from_manifest({"options": {"history_dir": "/srv/a"}}, history_dir=str(tmp_path))
    assert cfg.history_dir == str(tmp_path)
