from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from gridcraft.sim.cells import EMPTY, CellValue, Token
from gridcraft.sim.errors import EmptyCellError, MismatchError, OutOfRangeError
from gridcraft.sim.grid import CellCoord, chebyshev_distance

PICKUP_TRANSITION = "pickup"
CRAFT_TRANSITION = "craft"


@dataclass(frozen=True)
class PlayerState:
    location: CellCoord
    inventory: int | None = None
    has_won: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.location, CellCoord):
            raise ValueError("player.location must be a CellCoord")
        if self.inventory is not None:
            if isinstance(self.inventory, bool) or not isinstance(self.inventory, int):
                raise ValueError("player.inventory must be an integer or null")
            if self.inventory < 0:
                raise ValueError("player.inventory must be >= 0")
        if not isinstance(self.has_won, bool):
            raise ValueError("player.has_won must be a boolean")

    @property
    def holding(self) -> bool:
        return self.inventory is not None

    def moved_to(self, location: CellCoord) -> "PlayerState":
        return replace(self, location=location)

    def to_dict(self) -> dict[str, Any]:
        return {
            "location": self.location.to_dict(),
            "inventory": self.inventory,
            "has_won": self.has_won,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PlayerState":
        return cls(
            location=CellCoord.from_dict(data["location"]),
            inventory=data.get("inventory"),
            has_won=data.get("has_won", False),
        )


@dataclass(frozen=True)
class Transition:
    kind: str
    cell: CellCoord
    cell_value: CellValue
    player: PlayerState
    won: bool = False


def resolve_interaction(
    player: PlayerState,
    cell: CellCoord,
    current: CellValue,
    *,
    interaction_radius: int,
    win_threshold: int,
) -> Transition:
    """Compute the pickup/craft outcome for ``cell`` without mutating anything."""
    if chebyshev_distance(player.location, cell) > interaction_radius:
        raise OutOfRangeError(f"cell {cell.key} is out of reach", cell=cell)
    if not isinstance(current, Token):
        raise EmptyCellError(f"cell {cell.key} holds no token", cell=cell)

    if player.inventory is None:
        kind = PICKUP_TRANSITION
        after_player = replace(player, inventory=current.value)
        cell_value: CellValue = EMPTY
    else:
        if current.value != player.inventory:
            raise MismatchError(
                f"cell {cell.key} holds {current.value}, inventory holds {player.inventory}",
                cell=cell,
            )
        kind = CRAFT_TRANSITION
        after_player = replace(player, inventory=None)
        cell_value = Token(current.value * 2)

    won = (
        not after_player.has_won
        and after_player.inventory is not None
        and after_player.inventory >= win_threshold
    )
    if won:
        after_player = replace(after_player, has_won=True)
    return Transition(kind=kind, cell=cell, cell_value=cell_value, player=after_player, won=won)
