from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any, Protocol

from gridcraft.content.schema import validate_save_payload
from gridcraft.sim.cells import OverrideStore
from gridcraft.sim.errors import CorruptSaveError, StorageUnavailableError
from gridcraft.sim.hash import save_hash
from gridcraft.sim.interactions import PlayerState

SCHEMA_VERSION = 1
CANONICAL_JSON_INDENT = 2
CANONICAL_JSON_SEPARATORS = (",", ": ")

logger = logging.getLogger(__name__)


class SaveSlot(Protocol):
    def read(self) -> str | None: ...

    def write(self, text: str) -> None: ...


class MemorySlot:
    """Save slot kept in process memory."""

    def __init__(self, text: str | None = None) -> None:
        self.text = text
        self.write_count = 0

    def read(self) -> str | None:
        return self.text

    def write(self, text: str) -> None:
        self.text = text
        self.write_count += 1


class JsonFileSlot:
    """Save slot backed by a single JSON file replaced atomically on write."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def read(self) -> str | None:
        try:
            return self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except UnicodeDecodeError as exc:
            raise CorruptSaveError(f"save is not valid utf-8: {self.path}") from exc
        except OSError as exc:
            raise StorageUnavailableError(f"cannot read save {self.path}: {exc}") from exc

    def write(self, text: str) -> None:
        try:
            _write_atomic_text(self.path, text)
        except OSError as exc:
            raise StorageUnavailableError(f"cannot write save {self.path}: {exc}") from exc


def _write_atomic_text(path: Path, serialized: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)

    temp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=path.parent,
            delete=False,
            suffix=".tmp",
        ) as temp_file:
            temp_path = Path(temp_file.name)
            temp_file.write(serialized)
            temp_file.flush()
            os.fsync(temp_file.fileno())
        os.replace(temp_path, path)
    except Exception:
        if temp_path is not None:
            temp_path.unlink(missing_ok=True)
        raise


def _canonical_json(payload: dict[str, Any]) -> str:
    return json.dumps(
        payload,
        indent=CANONICAL_JSON_INDENT,
        separators=CANONICAL_JSON_SEPARATORS,
        sort_keys=True,
    )


def build_save_payload(player: PlayerState, store: OverrideStore) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "schema_version": SCHEMA_VERSION,
        "player": player.to_dict(),
        "overrides": store.to_records(),
    }
    payload["save_hash"] = save_hash(payload)
    return payload


def parse_save_payload(payload: Any) -> tuple[PlayerState, OverrideStore]:
    validate_save_payload(payload)

    expected_hash = payload["save_hash"]
    actual_hash = save_hash(payload)
    if expected_hash != actual_hash:
        raise ValueError(
            f"save_hash mismatch while loading save (stored={expected_hash}, recomputed={actual_hash})"
        )
    return PlayerState.from_dict(payload["player"]), OverrideStore.from_records(payload["overrides"])


class PersistenceGateway:
    """Reads and writes the player state and override store to one save slot."""

    def __init__(self, slot: SaveSlot) -> None:
        self.slot = slot

    def save(self, player: PlayerState, store: OverrideStore) -> None:
        self.slot.write(_canonical_json(build_save_payload(player, store)))
        logger.debug("saved player=%s overrides=%d", player.location.key, len(store))

    def load(self) -> tuple[PlayerState, OverrideStore] | None:
        text = self.slot.read()
        if text is None:
            return None
        try:
            payload = json.loads(text)
            return parse_save_payload(payload)
        except ValueError as exc:
            # json.JSONDecodeError is a ValueError too
            raise CorruptSaveError(str(exc)) from exc
        except (KeyError, TypeError) as exc:
            raise CorruptSaveError(f"malformed save: {exc!r}") from exc

    def reset(self, player: PlayerState) -> None:
        self.save(player, OverrideStore())
        logger.info("save reset to start cell %s", player.location.key)


def open_json_gateway(path: str | Path) -> PersistenceGateway:
    return PersistenceGateway(JsonFileSlot(path))
