from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Sequence

from gridcraft.content.config import GameConfig, load_game_config_json
from gridcraft.content.io import open_json_gateway
from gridcraft.sim.errors import CorruptSaveError, StorageUnavailableError
from gridcraft.sim.hash import state_hash
from gridcraft.sim.interactions import PlayerState


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gridcraft-save",
        description="Inspect a gridcraft save JSON, or reset it to the configured start state.",
    )
    parser.add_argument("save_path", help="Path to save JSON")
    parser.add_argument("--config", default=None, help="Game config JSON used to find the start cell on --reset")
    parser.add_argument("--reset", action="store_true", help="Replace the save with a fresh start state")
    parser.add_argument("--list-overrides", action="store_true", help="Print every override record")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    save_path = Path(args.save_path)
    gateway = open_json_gateway(save_path)

    try:
        if args.reset:
            config = load_game_config_json(args.config) if args.config else GameConfig()
            gateway.reset(PlayerState(location=config.start_cell))

        loaded = gateway.load()
        if loaded is None:
            raise ValueError(f"no save at {save_path}")
        player, store = loaded

        payload = json.loads(save_path.read_text(encoding="utf-8"))
        inventory = "-" if player.inventory is None else player.inventory
        print(
            "ok "
            f"save_path={save_path} "
            f"cell={player.location.key} "
            f"inventory={inventory} "
            f"has_won={player.has_won} "
            f"overrides={len(store)} "
            f"state_hash={state_hash(player, store)} "
            f"save_hash={payload['save_hash']}"
        )
        if args.list_overrides:
            for row in store.to_records():
                value = "empty" if row["value"] is None else row["value"]
                print(f"override {row['i']},{row['j']} {value}")
    except (CorruptSaveError, StorageUnavailableError, ValueError, OSError) as exc:
        print(f"error: {exc}")
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
