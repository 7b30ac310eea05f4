from __future__ import annotations

import hashlib
import json
from typing import TYPE_CHECKING, Any

from gridcraft.sim.cells import OverrideStore
from gridcraft.sim.interactions import PlayerState

if TYPE_CHECKING:
    from gridcraft.sim.core import GameEngine


def _digest(payload: Any) -> str:
    encoded = json.dumps(payload, sort_keys=True, separators=(",", ":")).encode("utf-8")
    return hashlib.sha256(encoded).hexdigest()


def save_hash(payload: dict[str, Any]) -> str:
    hash_payload = {
        "schema_version": payload["schema_version"],
        "player": payload["player"],
        "overrides": payload["overrides"],
    }
    return _digest(hash_payload)


def state_hash(player: PlayerState, store: OverrideStore) -> str:
    return _digest({"player": player.to_dict(), "overrides": store.to_records()})


def engine_hash(engine: GameEngine) -> str:
    payload = {
        "player": engine.player.to_dict(),
        "overrides": engine.store.to_records(),
        "window": [
            {"i": cell.i, "j": cell.j, "value": value.to_payload()}
            for cell, value in sorted(engine.visible_cells().items(), key=lambda item: item[0])
        ],
    }
    return _digest(payload)
