import pytest

from gridcraft.sim.grid import (
    CellCoord,
    cell_bounds,
    cell_key,
    cell_to_latlng,
    chebyshev_distance,
    latlng_to_cell,
    parse_cell_key,
    window_cells,
)


def test_cell_key_is_canonical_for_equal_pairs() -> None:
    assert cell_key(CellCoord(3, -4)) == "3,-4"
    assert CellCoord(3, -4).key == CellCoord(3, -4).key
    assert CellCoord(0, 0).key == CellCoord(-0, 0).key == "0,0"


def test_parse_cell_key_round_trips() -> None:
    for cell in (CellCoord(0, 0), CellCoord(-7, 12), CellCoord(369894, -1220628)):
        assert parse_cell_key(cell.key) == cell


@pytest.mark.parametrize("key", ["", "1", "1,2,3", "a,b", "+1,2", "01,2", " 1,2", "-0,0"])
def test_parse_cell_key_rejects_malformed_or_non_canonical_keys(key: str) -> None:
    with pytest.raises(ValueError):
        parse_cell_key(key)


def test_cell_coord_rejects_non_integer_components() -> None:
    with pytest.raises(ValueError, match="cell.i must be an integer"):
        CellCoord(1.5, 0)  # type: ignore[arg-type]
    with pytest.raises(ValueError, match="cell.j must be an integer"):
        CellCoord(0, True)  # type: ignore[arg-type]


def test_latlng_to_cell_floors_towards_negative_infinity() -> None:
    assert latlng_to_cell(36.98949379578401, -122.06277128548504, 0.0001) == CellCoord(369894, -1220628)
    assert latlng_to_cell(-0.5, -0.5, 1.0) == CellCoord(-1, -1)
    assert latlng_to_cell(0.0, 0.99, 1.0) == CellCoord(0, 0)


def test_latlng_to_cell_requires_positive_tile_size() -> None:
    with pytest.raises(ValueError, match="tile_degrees must be > 0"):
        latlng_to_cell(1.0, 1.0, 0.0)


@pytest.mark.parametrize(
    "lat, lng, field",
    [(float("inf"), 0.0, "lat"), (0.0, float("-inf"), "lng"), (float("nan"), 1.0, "lat")],
)
def test_latlng_to_cell_rejects_non_finite_coordinates(lat: float, lng: float, field: str) -> None:
    with pytest.raises(ValueError, match=f"{field} must be a finite number"):
        latlng_to_cell(lat, lng, 1.0)


def test_cell_bounds_span_one_tile_from_south_west_corner() -> None:
    cell = CellCoord(2, -3)

    assert cell_to_latlng(cell, 0.5) == (1.0, -1.5)
    assert cell_bounds(cell, 0.5) == ((1.0, -1.5), (1.5, -1.0))


def test_chebyshev_distance_uses_larger_axis_delta() -> None:
    assert chebyshev_distance(CellCoord(0, 0), CellCoord(2, 1)) == 2
    assert chebyshev_distance(CellCoord(-3, 4), CellCoord(1, 4)) == 4
    assert chebyshev_distance(CellCoord(5, 5), CellCoord(5, 5)) == 0


def test_window_cells_covers_square_around_center() -> None:
    cells = list(window_cells(CellCoord(10, -10), 2))

    assert len(cells) == 25
    assert len(set(cells)) == 25
    assert all(chebyshev_distance(CellCoord(10, -10), cell) <= 2 for cell in cells)


def test_window_cells_rejects_negative_radius() -> None:
    with pytest.raises(ValueError, match="radius must be >= 0"):
        list(window_cells(CellCoord(0, 0), -1))
