from __future__ import annotations

from typing import Callable

from gridcraft.sim.cells import Token
from gridcraft.sim.core import GameEngine, GameView
from gridcraft.sim.errors import InteractionError, StorageUnavailableError
from gridcraft.sim.grid import CellCoord
from gridcraft.sim.rules import GameListener

MOVE_DIRECTIONS: dict[str, tuple[int, int]] = {
    "n": (1, 0),
    "s": (-1, 0),
    "e": (0, 1),
    "w": (0, -1),
}
HELP_TEXT = "Commands: n | s | e | w | take <di> <dj> | goto <lat> <lng> | reset | show | quit"


class AsciiViewer:
    """Read-only projection of a game view for terminal display."""

    def render(self, view: GameView) -> str:
        inventory = "-" if view.inventory is None else str(view.inventory)
        lines = [f"cell={view.location.key} inventory={inventory} won={'yes' if view.has_won else 'no'}"]

        center = view.location
        # north at the top: i grows with latitude
        for di in range(view.radius, -view.radius - 1, -1):
            row: list[str] = []
            for dj in range(-view.radius, view.radius + 1):
                cell = center.offset(di, dj)
                row.append(self._glyph(view, cell, is_player=(di == 0 and dj == 0)))
            lines.append("".join(row))
        return "\n".join(lines)

    @staticmethod
    def _glyph(view: GameView, cell: CellCoord, *, is_player: bool) -> str:
        if is_player:
            return "  @"
        value = view.cells.get(cell)
        if isinstance(value, Token):
            return f"{value.value:>3}"
        return "  ," if cell in view.interactable else "  ."


class WinBanner(GameListener):
    name = "win_banner"

    def __init__(self) -> None:
        self.messages: list[str] = []

    def on_win(self, engine: GameEngine, value: int) -> None:
        self.messages.append(f"you win: holding {value} (target {engine.config.win_threshold})")


class GameController:
    """Small command adapter; issues engine calls but does not own state."""

    def __init__(self, engine: GameEngine) -> None:
        self.engine = engine
        self.banner = WinBanner()
        engine.register_listener(self.banner)

    def handle(self, raw: str) -> str:
        parts = raw.strip().split()
        if not parts:
            return ""
        command = parts[0].lower()

        try:
            if command in MOVE_DIRECTIONS and len(parts) == 1:
                self.engine.on_player_move(*MOVE_DIRECTIONS[command])
                return "moved"
            if command == "take" and len(parts) == 3:
                target = self.engine.player.location.offset(int(parts[1]), int(parts[2]))
                self.engine.on_cell_activated(target)
                return self._drain_banner(f"inventory={self.engine.player.inventory}")
            if command == "goto" and len(parts) == 3:
                self.engine.on_absolute_position_update(float(parts[1]), float(parts[2]))
                return f"now at {self.engine.player.location.key}"
            if command == "reset" and len(parts) == 1:
                self.engine.on_reset_requested()
                return "game reset"
        except InteractionError as exc:
            return f"{exc.reason}: {exc}"
        except StorageUnavailableError as exc:
            return f"warning: progress not saved ({exc})"
        except ValueError as exc:
            return f"invalid input: {exc}"

        return "unknown command"

    def _drain_banner(self, message: str) -> str:
        if not self.banner.messages:
            return message
        lines = [message, *self.banner.messages]
        self.banner.messages.clear()
        return "\n".join(lines)


def run_loop(
    engine: GameEngine,
    *,
    read_line: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> None:
    view = AsciiViewer()
    controller = GameController(engine)

    write(HELP_TEXT)
    write(view.render(engine.view()))

    while True:
        try:
            raw = read_line("> ").strip()
        except EOFError:
            break
        if raw in {"quit", "exit"}:
            break
        if raw == "show":
            write(view.render(engine.view()))
            continue

        message = controller.handle(raw)
        if message:
            write(message)
        if message not in {"", "unknown command"} and not message.startswith("invalid input"):
            write(view.render(engine.view()))
