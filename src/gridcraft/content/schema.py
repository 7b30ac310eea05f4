from __future__ import annotations

from typing import Any

SUPPORTED_SCHEMA_VERSIONS = {1}
REQUIRED_SAVE_FIELDS = ("schema_version", "player", "overrides", "save_hash")
REQUIRED_PLAYER_FIELDS = {"location", "inventory"}


def _require_int(value: Any, *, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{field_name} must be an integer")
    return value


def _validate_cell_shape(value: Any, *, field_name: str) -> None:
    if not isinstance(value, dict):
        raise ValueError(f"{field_name} must be an object")
    _require_int(value.get("i"), field_name=f"{field_name}.i")
    _require_int(value.get("j"), field_name=f"{field_name}.j")


def _validate_token_value(value: Any, *, field_name: str) -> None:
    if value is None:
        return
    if _require_int(value, field_name=field_name) < 0:
        raise ValueError(f"{field_name} must be >= 0")


def _validate_player_shape(player: Any) -> None:
    if not isinstance(player, dict):
        raise ValueError("save payload must contain object field: player")
    missing = REQUIRED_PLAYER_FIELDS - set(player.keys())
    if missing:
        raise ValueError(f"player missing fields: {sorted(missing)}")
    _validate_cell_shape(player["location"], field_name="player.location")
    _validate_token_value(player["inventory"], field_name="player.inventory")
    if not isinstance(player.get("has_won", False), bool):
        raise ValueError("player.has_won must be a boolean")


def _validate_overrides_shape(overrides: Any) -> None:
    if not isinstance(overrides, list):
        raise ValueError("save payload must contain list field: overrides")
    seen: set[tuple[int, int]] = set()
    for index, row in enumerate(overrides):
        field_name = f"overrides[{index}]"
        _validate_cell_shape(row, field_name=field_name)
        if "value" not in row:
            raise ValueError(f"{field_name} missing value")
        _validate_token_value(row["value"], field_name=f"{field_name}.value")
        coord = (row["i"], row["j"])
        if coord in seen:
            raise ValueError(f"duplicate override cell: {coord[0]},{coord[1]}")
        seen.add(coord)


def validate_save_payload(payload: Any) -> None:
    if not isinstance(payload, dict):
        raise ValueError("save payload must be an object")
    for field_name in REQUIRED_SAVE_FIELDS:
        if field_name not in payload:
            raise ValueError(f"save payload missing field: {field_name}")

    schema_version = payload["schema_version"]
    if isinstance(schema_version, bool) or not isinstance(schema_version, int):
        raise ValueError("save payload must contain integer field: schema_version")
    if schema_version not in SUPPORTED_SCHEMA_VERSIONS:
        raise ValueError(f"unsupported schema_version: {schema_version}")

    if not isinstance(payload["save_hash"], str) or not payload["save_hash"]:
        raise ValueError("save payload must contain string field: save_hash")

    _validate_player_shape(payload["player"])
    _validate_overrides_shape(payload["overrides"])
