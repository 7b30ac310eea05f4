from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Union

from gridcraft.sim.grid import CellCoord


@dataclass(frozen=True)
class Empty:
    """Cell holds no token."""

    def to_payload(self) -> None:
        return None


@dataclass(frozen=True)
class Token:
    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValueError("token value must be an integer")
        if self.value < 0:
            raise ValueError("token value must be >= 0")

    def to_payload(self) -> int:
        return self.value


CellValue = Union[Empty, Token]
EMPTY = Empty()


def cell_value_from_payload(raw: Any) -> CellValue:
    if raw is None:
        return EMPTY
    return Token(raw)


class OverrideStore:
    """Cells whose state diverged from the generated default.

    Holds nothing for cells that were only viewed; ``reset`` is the only
    removal path.
    """

    def __init__(self, records: Iterable[tuple[CellCoord, CellValue]] = ()) -> None:
        self._overrides: dict[CellCoord, CellValue] = {}
        for cell, value in records:
            self.set(cell, value)

    def get(self, cell: CellCoord) -> CellValue | None:
        return self._overrides.get(cell)

    def set(self, cell: CellCoord, value: CellValue) -> None:
        if not isinstance(cell, CellCoord):
            raise ValueError("override cell must be a CellCoord")
        if not isinstance(value, (Empty, Token)):
            raise ValueError("override value must be Empty or Token")
        self._overrides[cell] = value

    def all(self) -> Iterator[tuple[CellCoord, CellValue]]:
        return iter(list(self._overrides.items()))

    def reset(self) -> None:
        self._overrides.clear()

    def to_records(self) -> list[dict[str, Any]]:
        return [
            {"i": cell.i, "j": cell.j, "value": value.to_payload()}
            for cell, value in sorted(self._overrides.items(), key=lambda item: item[0])
        ]

    @classmethod
    def from_records(cls, rows: Iterable[dict[str, Any]]) -> "OverrideStore":
        store = cls()
        for row in rows:
            store.set(CellCoord.from_dict(row), cell_value_from_payload(row.get("value")))
        return store

    def __len__(self) -> int:
        return len(self._overrides)

    def __contains__(self, cell: object) -> bool:
        return cell in self._overrides

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OverrideStore):
            return NotImplemented
        return self._overrides == other._overrides

    def __repr__(self) -> str:
        return f"OverrideStore({len(self._overrides)} overrides)"
