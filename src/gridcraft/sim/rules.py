from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gridcraft.sim.core import GameEngine
    from gridcraft.sim.grid import CellCoord
    from gridcraft.sim.interactions import Transition


class GameListener:
    """Observer substrate for engine notifications.

    Listeners are registered on a ``GameEngine`` and are called in stable
    registration order after the triggering change has been persisted.
    """

    name: str = "listener"

    def on_player_moved(self, engine: GameEngine, location: CellCoord) -> None:
        """Called after the player changes cell."""

    def on_transition(self, engine: GameEngine, transition: Transition) -> None:
        """Called after each committed pickup or craft."""

    def on_win(self, engine: GameEngine, value: int) -> None:
        """Called once, at the transition where the inventory first reaches the win threshold."""

    def on_reset(self, engine: GameEngine) -> None:
        """Called after a reset has replaced the save."""
