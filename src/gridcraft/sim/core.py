from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from gridcraft.content.config import GameConfig
from gridcraft.sim.cells import CellValue, OverrideStore
from gridcraft.sim.errors import CorruptSaveError, GridcraftError, StorageUnavailableError
from gridcraft.sim.grid import CellCoord, latlng_to_cell, parse_cell_key
from gridcraft.sim.interactions import PlayerState, Transition, resolve_interaction
from gridcraft.sim.rng import CellGenerator
from gridcraft.sim.rules import GameListener
from gridcraft.sim.window import ActiveWindow, Generator, is_interactable

if TYPE_CHECKING:
    from gridcraft.content.io import PersistenceGateway

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameView:
    """Snapshot handed to the presentation layer after every entry point."""

    player: PlayerState
    cells: dict[CellCoord, CellValue]
    interactable: frozenset[CellCoord]
    radius: int

    @property
    def location(self) -> CellCoord:
        return self.player.location

    @property
    def inventory(self) -> int | None:
        return self.player.inventory

    @property
    def has_won(self) -> bool:
        return self.player.has_won


class GameEngine:
    def __init__(
        self,
        config: GameConfig,
        gateway: PersistenceGateway,
        *,
        generator: Generator | None = None,
        player: PlayerState | None = None,
        store: OverrideStore | None = None,
    ) -> None:
        self.config = config
        self.gateway = gateway
        self.generator = generator if generator is not None else CellGenerator(config.spawn_rate)
        self.player = player if player is not None else PlayerState(location=config.start_cell)
        self.store = store if store is not None else OverrideStore()
        self.window = ActiveWindow(self.store, self.generator)
        self.listeners: list[GameListener] = []
        self.load_error: GridcraftError | None = None
        self._cells = self.window.materialize(self.player.location, self.config.neighborhood_radius)

    @classmethod
    def start(
        cls,
        config: GameConfig,
        gateway: PersistenceGateway,
        *,
        generator: Generator | None = None,
    ) -> "GameEngine":
        """Build an engine from the persisted save, or from defaults when there is none."""
        load_error: GridcraftError | None = None
        try:
            loaded = gateway.load()
        except CorruptSaveError as exc:
            logger.warning("discarding corrupt save: %s", exc)
            loaded = None
            load_error = exc
        except StorageUnavailableError as exc:
            logger.warning("save slot unreadable, starting from defaults: %s", exc)
            loaded = None
            load_error = exc

        if loaded is None:
            engine = cls(config, gateway, generator=generator)
        else:
            player, store = loaded
            engine = cls(config, gateway, generator=generator, player=player, store=store)
            logger.info("loaded save player=%s overrides=%d", player.location.key, len(store))
        engine.load_error = load_error
        return engine

    def register_listener(self, listener: GameListener) -> None:
        self.listeners.append(listener)

    def view(self) -> GameView:
        location = self.player.location
        return GameView(
            player=self.player,
            cells=dict(self._cells),
            interactable=frozenset(
                cell for cell in self._cells if is_interactable(location, cell, self.config.interaction_radius)
            ),
            radius=self.config.neighborhood_radius,
        )

    def visible_cells(self) -> dict[CellCoord, CellValue]:
        return dict(self._cells)

    def on_player_move(self, delta_i: int, delta_j: int) -> GameView:
        if delta_i == 0 and delta_j == 0:
            return self.view()
        return self._move_to(self.player.location.offset(delta_i, delta_j))

    def on_absolute_position_update(self, lat: float, lng: float) -> GameView:
        location = latlng_to_cell(lat, lng, self.config.tile_degrees)
        if location == self.player.location:
            return self.view()
        return self._move_to(location)

    def on_cell_activated(self, cell: CellCoord | str) -> GameView:
        target = parse_cell_key(cell) if isinstance(cell, str) else cell
        transition = resolve_interaction(
            self.player,
            target,
            self.window.cell_value(target),
            interaction_radius=self.config.interaction_radius,
            win_threshold=self.config.win_threshold,
        )

        self.store.set(target, transition.cell_value)
        self.player = transition.player
        if target in self._cells:
            self._cells[target] = transition.cell_value
        logger.info(
            "%s at %s inventory=%s cell=%s",
            transition.kind,
            target.key,
            self.player.inventory,
            transition.cell_value.to_payload(),
        )
        try:
            self._persist()
        finally:
            # the transition is committed in memory even when the save failed
            self._notify_transition(transition)
        return self.view()

    def on_reset_requested(self) -> GameView:
        fresh_player = PlayerState(location=self.config.start_cell)
        # durable slot first: if it fails nothing in memory has changed
        self.gateway.reset(fresh_player)

        self.store.reset()
        self.player = fresh_player
        self.window.clear()
        self._cells = self.window.materialize(self.player.location, self.config.neighborhood_radius)
        for listener in self.listeners:
            listener.on_reset(self)
        return self.view()

    def _move_to(self, location: CellCoord) -> GameView:
        self.player = self.player.moved_to(location)
        self._cells = self.window.materialize(location, self.config.neighborhood_radius)
        logger.debug("player moved to %s", location.key)
        try:
            self._persist()
        finally:
            for listener in self.listeners:
                listener.on_player_moved(self, location)
        return self.view()

    def _persist(self) -> None:
        try:
            self.gateway.save(self.player, self.store)
        except StorageUnavailableError:
            logger.warning("session continues without a durable save")
            raise

    def _notify_transition(self, transition: Transition) -> None:
        for listener in self.listeners:
            listener.on_transition(self, transition)
        if transition.won and transition.player.inventory is not None:
            logger.info("win threshold %d reached with %d", self.config.win_threshold, transition.player.inventory)
            for listener in self.listeners:
                listener.on_win(self, transition.player.inventory)
