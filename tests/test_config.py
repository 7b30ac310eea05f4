import json
from pathlib import Path

import pytest

from gridcraft.content.config import DEFAULT_CONFIG_PATH, GameConfig, load_game_config_json
from gridcraft.sim.grid import CellCoord


def test_default_content_config_matches_builtin_defaults() -> None:
    assert load_game_config_json(DEFAULT_CONFIG_PATH) == GameConfig()


def test_default_start_cell_is_derived_from_start_location() -> None:
    assert GameConfig().start_cell == CellCoord(369894, -1220628)


def test_small_board_config_loads() -> None:
    config = load_game_config_json("content/config/small_board.json")

    assert config.start_cell == CellCoord(0, 0)
    assert config.neighborhood_radius == 4
    assert config.interaction_radius == 2
    assert config.win_threshold == 4


def test_config_round_trips_through_dict() -> None:
    config = GameConfig(start_location=(1.25, -3.5), tile_degrees=0.5, spawn_rate=0.3, win_threshold=32)

    assert GameConfig.from_dict(config.to_dict()) == config


def test_config_rejects_unknown_fields(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"schema_version": 1, "spawn_chance": 0.2}), encoding="utf-8")

    with pytest.raises(ValueError, match="unknown game config fields"):
        load_game_config_json(path)


@pytest.mark.parametrize(
    ("overrides", "message"),
    [
        ({"tile_degrees": 0}, "tile_degrees must be a number > 0"),
        ({"neighborhood_radius": -1}, "neighborhood_radius must be >= 0"),
        ({"interaction_radius": 9}, "interaction_radius must be <= neighborhood_radius"),
        ({"spawn_rate": 1.2}, "spawn_rate must be within"),
        ({"win_threshold": 0}, "win_threshold must be > 0"),
        ({"win_threshold": 2.5}, "win_threshold must be an integer"),
        ({"start_location": [1.0]}, "start_location must be a \\(lat, lng\\) pair"),
        ({"schema_version": 3}, "unsupported game config schema_version"),
    ],
)
def test_config_validation(overrides: dict, message: str) -> None:
    payload = {**GameConfig().to_dict(), **overrides}

    with pytest.raises(ValueError, match=message):
        GameConfig.from_dict(payload)
