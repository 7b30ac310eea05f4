from __future__ import annotations

from typing import Protocol

from gridcraft.sim.cells import EMPTY, CellValue, OverrideStore, Token
from gridcraft.sim.grid import CellCoord, chebyshev_distance, window_cells
from gridcraft.sim.rng import SpawnDecision


class Generator(Protocol):
    def generate(self, key: str) -> SpawnDecision: ...


def is_interactable(player_cell: CellCoord, cell: CellCoord, interaction_radius: int) -> bool:
    return chebyshev_distance(player_cell, cell) <= interaction_radius


class ActiveWindow:
    """Materializes the cells around the player from overrides and generated defaults.

    Generated spawn decisions are cached for the current window only and are
    never written into the override store. Overrides are read on every call,
    so a committed interaction shows up on the next materialization.
    """

    def __init__(self, store: OverrideStore, generator: Generator) -> None:
        self.store = store
        self.generator = generator
        self.center: CellCoord | None = None
        self.radius: int | None = None
        self._generated: dict[CellCoord, SpawnDecision] = {}

    @property
    def cached_cell_count(self) -> int:
        return len(self._generated)

    def materialize(self, player_cell: CellCoord, radius: int) -> dict[CellCoord, CellValue]:
        cells = list(window_cells(player_cell, radius))
        members = set(cells)
        for stale in [cell for cell in self._generated if cell not in members]:
            del self._generated[stale]

        self.center = player_cell
        self.radius = radius
        return {cell: self.cell_value(cell) for cell in cells}

    def cell_value(self, cell: CellCoord) -> CellValue:
        override = self.store.get(cell)
        if override is not None:
            return override
        decision = self._generated.get(cell)
        if decision is None:
            decision = self.generator.generate(cell.key)
            if self._in_window(cell):
                self._generated[cell] = decision
        if decision.present:
            return Token(decision.value)
        return EMPTY

    def clear(self) -> None:
        self._generated.clear()
        self.center = None
        self.radius = None

    def _in_window(self, cell: CellCoord) -> bool:
        if self.center is None or self.radius is None:
            return False
        return chebyshev_distance(self.center, cell) <= self.radius
