from __future__ import annotations

import argparse
import logging
import os
from typing import Sequence

from gridcraft.cli.viewer import AsciiViewer, run_loop
from gridcraft.content.config import DEFAULT_CONFIG_PATH, GameConfig, load_game_config_json
from gridcraft.content.io import open_json_gateway
from gridcraft.sim.core import GameEngine

DEFAULT_SAVE_PATH = "saves/gridcraft_save.json"
SAVE_PATH_ENV_VAR = "GRIDCRAFT_SAVE_PATH"
LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gridcraft-play", description="Terminal gridcraft session.")
    parser.add_argument(
        "--config",
        default=None,
        help=f"Game config JSON (default: {DEFAULT_CONFIG_PATH} when present, else built-in defaults).",
    )
    parser.add_argument(
        "--save-path",
        default=None,
        help=f"Save JSON path (default: ${SAVE_PATH_ENV_VAR} or {DEFAULT_SAVE_PATH}).",
    )
    parser.add_argument("--headless", action="store_true", help="Render the starting view once and exit.")
    parser.add_argument("--verbose", action="store_true", help="Log engine debug output.")
    return parser


def resolve_save_path(cli_value: str | None) -> str:
    if cli_value:
        return cli_value
    return os.environ.get(SAVE_PATH_ENV_VAR, "").strip() or DEFAULT_SAVE_PATH


def load_config(cli_value: str | None) -> GameConfig:
    if cli_value:
        return load_game_config_json(cli_value)
    if os.path.exists(DEFAULT_CONFIG_PATH):
        return load_game_config_json(DEFAULT_CONFIG_PATH)
    return GameConfig()


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format=LOG_FORMAT)

    try:
        config = load_config(args.config)
    except (OSError, ValueError) as exc:
        print(f"[gridcraft.play] failed to load config: {exc}")
        return 1

    save_path = resolve_save_path(args.save_path)
    engine = GameEngine.start(config, open_json_gateway(save_path))
    if engine.load_error is not None:
        print(f"[gridcraft.play] warning: save at {save_path} was unreadable; starting fresh")
    print(
        "[gridcraft.play] started "
        f"save_path={save_path} "
        f"cell={engine.player.location.key} "
        f"overrides={len(engine.store)}"
    )

    if args.headless:
        print(AsciiViewer().render(engine.view()))
        return 0

    run_loop(engine)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
