from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gridcraft.sim.grid import CellCoord


class GridcraftError(Exception):
    """Base class for recoverable engine errors."""


class InteractionError(GridcraftError, ValueError):
    reason = "invalid_interaction"

    def __init__(self, message: str, *, cell: CellCoord) -> None:
        super().__init__(message)
        self.cell = cell


class OutOfRangeError(InteractionError):
    reason = "out_of_range"


class EmptyCellError(InteractionError):
    reason = "empty_cell"


class MismatchError(InteractionError):
    reason = "mismatch"


class CorruptSaveError(GridcraftError, ValueError):
    """Persisted save exists but cannot be decoded or fails validation."""


class StorageUnavailableError(GridcraftError, OSError):
    """Durable save slot could not be read or written."""
