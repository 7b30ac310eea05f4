from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from gridcraft.sim.grid import CellCoord, latlng_to_cell

CONFIG_SCHEMA_VERSION = 1
DEFAULT_CONFIG_PATH = "content/config/default_game.json"

DEFAULT_START_LOCATION = (36.98949379578401, -122.06277128548504)
DEFAULT_TILE_DEGREES = 0.0001
DEFAULT_NEIGHBORHOOD_RADIUS = 8
DEFAULT_INTERACTION_RADIUS = 3
DEFAULT_SPAWN_RATE = 0.1
DEFAULT_WIN_THRESHOLD = 16

_CONFIG_FIELDS = {
    "schema_version",
    "start_location",
    "tile_degrees",
    "neighborhood_radius",
    "interaction_radius",
    "spawn_rate",
    "win_threshold",
}


@dataclass(frozen=True)
class GameConfig:
    start_location: tuple[float, float] = DEFAULT_START_LOCATION
    tile_degrees: float = DEFAULT_TILE_DEGREES
    neighborhood_radius: int = DEFAULT_NEIGHBORHOOD_RADIUS
    interaction_radius: int = DEFAULT_INTERACTION_RADIUS
    spawn_rate: float = DEFAULT_SPAWN_RATE
    win_threshold: int = DEFAULT_WIN_THRESHOLD

    def __post_init__(self) -> None:
        if not isinstance(self.start_location, tuple) or len(self.start_location) != 2:
            raise ValueError("start_location must be a (lat, lng) pair")
        for value in self.start_location:
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError("start_location entries must be numeric")
        if isinstance(self.tile_degrees, bool) or not isinstance(self.tile_degrees, (int, float)) or self.tile_degrees <= 0:
            raise ValueError("tile_degrees must be a number > 0")
        for field_name in ("neighborhood_radius", "interaction_radius", "win_threshold"):
            value = getattr(self, field_name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{field_name} must be an integer")
        if self.neighborhood_radius < 0:
            raise ValueError("neighborhood_radius must be >= 0")
        if self.interaction_radius < 0:
            raise ValueError("interaction_radius must be >= 0")
        if self.interaction_radius > self.neighborhood_radius:
            raise ValueError("interaction_radius must be <= neighborhood_radius")
        if self.win_threshold <= 0:
            raise ValueError("win_threshold must be > 0")
        if isinstance(self.spawn_rate, bool) or not isinstance(self.spawn_rate, (int, float)):
            raise ValueError("spawn_rate must be numeric")
        if not 0.0 <= self.spawn_rate <= 1.0:
            raise ValueError("spawn_rate must be within [0, 1]")

    @property
    def start_cell(self) -> CellCoord:
        return latlng_to_cell(self.start_location[0], self.start_location[1], self.tile_degrees)

    def to_dict(self) -> dict[str, Any]:
        return {
            "schema_version": CONFIG_SCHEMA_VERSION,
            "start_location": list(self.start_location),
            "tile_degrees": self.tile_degrees,
            "neighborhood_radius": self.neighborhood_radius,
            "interaction_radius": self.interaction_radius,
            "spawn_rate": self.spawn_rate,
            "win_threshold": self.win_threshold,
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "GameConfig":
        if not isinstance(payload, dict):
            raise ValueError("game config payload must be an object")

        schema_version = payload.get("schema_version")
        if isinstance(schema_version, bool) or not isinstance(schema_version, int):
            raise ValueError("game config must contain integer field: schema_version")
        if schema_version != CONFIG_SCHEMA_VERSION:
            raise ValueError(f"unsupported game config schema_version: {schema_version}")

        unknown = set(payload.keys()) - _CONFIG_FIELDS
        if unknown:
            raise ValueError(f"unknown game config fields: {sorted(unknown)}")

        kwargs: dict[str, Any] = {key: value for key, value in payload.items() if key != "schema_version"}
        if "start_location" in kwargs:
            start_location = kwargs["start_location"]
            if not isinstance(start_location, list):
                raise ValueError("start_location must be a [lat, lng] list")
            kwargs["start_location"] = tuple(start_location)
        return cls(**kwargs)


def load_game_config_json(path: str | Path) -> GameConfig:
    payload = json.loads(Path(path).read_text(encoding="utf-8"))
    return GameConfig.from_dict(payload)
