from __future__ import annotations

import hashlib
from dataclasses import dataclass

from gridcraft.sim.grid import CellCoord

DEFAULT_SPAWN_RATE = 0.1
INITIAL_TOKEN_VALUE = 1
_LUCK_DENOMINATOR = float(1 << 64)


def luck(key: str) -> float:
    """Map a string key to a stable value in [0, 1)."""
    digest = hashlib.sha256(key.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], byteorder="big", signed=False) / _LUCK_DENOMINATOR


@dataclass(frozen=True)
class SpawnDecision:
    present: bool
    value: int = 0


class CellGenerator:
    """Procedural default state of a cell, derived from its canonical key only."""

    def __init__(self, spawn_rate: float = DEFAULT_SPAWN_RATE) -> None:
        if isinstance(spawn_rate, bool) or not isinstance(spawn_rate, (int, float)):
            raise ValueError("spawn_rate must be numeric")
        if not 0.0 <= spawn_rate <= 1.0:
            raise ValueError("spawn_rate must be within [0, 1]")
        self.spawn_rate = float(spawn_rate)

    def generate(self, key: str) -> SpawnDecision:
        if luck(key) < self.spawn_rate:
            return SpawnDecision(present=True, value=INITIAL_TOKEN_VALUE)
        return SpawnDecision(present=False)

    def generate_cell(self, cell: CellCoord) -> SpawnDecision:
        return self.generate(cell.key)
