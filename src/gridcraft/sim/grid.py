from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Iterator

CELL_KEY_SEPARATOR = ","


@dataclass(frozen=True, order=True)
class CellCoord:
    """Lattice cell coordinate (i, j); i follows latitude, j longitude."""

    i: int
    j: int

    def __post_init__(self) -> None:
        if isinstance(self.i, bool) or not isinstance(self.i, int):
            raise ValueError("cell.i must be an integer")
        if isinstance(self.j, bool) or not isinstance(self.j, int):
            raise ValueError("cell.j must be an integer")

    @property
    def key(self) -> str:
        return cell_key(self)

    def offset(self, delta_i: int, delta_j: int) -> "CellCoord":
        return CellCoord(self.i + delta_i, self.j + delta_j)

    def to_dict(self) -> dict[str, int]:
        return {"i": self.i, "j": self.j}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CellCoord":
        return cls(i=_require_int(data.get("i"), field_name="i"), j=_require_int(data.get("j"), field_name="j"))


def _require_int(value: Any, *, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"cell.{field_name} must be an integer")
    return value


def cell_key(cell: CellCoord) -> str:
    return f"{cell.i}{CELL_KEY_SEPARATOR}{cell.j}"


def parse_cell_key(key: str) -> CellCoord:
    if not isinstance(key, str):
        raise ValueError("cell key must be a string")
    parts = key.split(CELL_KEY_SEPARATOR)
    if len(parts) != 2:
        raise ValueError(f"malformed cell key: {key!r}")
    try:
        i, j = int(parts[0]), int(parts[1])
    except ValueError:
        raise ValueError(f"malformed cell key: {key!r}") from None
    cell = CellCoord(i, j)
    if cell.key != key:
        # rejects "+1,2", " 1,2", "01,2" and friends so keys stay canonical
        raise ValueError(f"non-canonical cell key: {key!r}")
    return cell


def latlng_to_cell(lat: float, lng: float, tile_degrees: float) -> CellCoord:
    if not math.isfinite(lat):
        raise ValueError("lat must be a finite number")
    if not math.isfinite(lng):
        raise ValueError("lng must be a finite number")
    if tile_degrees <= 0:
        raise ValueError("tile_degrees must be > 0")
    return CellCoord(i=math.floor(lat / tile_degrees), j=math.floor(lng / tile_degrees))


def cell_to_latlng(cell: CellCoord, tile_degrees: float) -> tuple[float, float]:
    """South-west corner of the cell."""
    return (cell.i * tile_degrees, cell.j * tile_degrees)


def cell_bounds(cell: CellCoord, tile_degrees: float) -> tuple[tuple[float, float], tuple[float, float]]:
    south, west = cell_to_latlng(cell, tile_degrees)
    return ((south, west), (south + tile_degrees, west + tile_degrees))


def chebyshev_distance(a: CellCoord, b: CellCoord) -> int:
    return max(abs(a.i - b.i), abs(a.j - b.j))


def window_cells(center: CellCoord, radius: int) -> Iterator[CellCoord]:
    """Every cell within Chebyshev distance ``radius``, row-major from the south-west."""
    if radius < 0:
        raise ValueError("radius must be >= 0")
    for di in range(-radius, radius + 1):
        for dj in range(-radius, radius + 1):
            yield CellCoord(center.i + di, center.j + dj)
