import pytest

from gridcraft.sim.grid import CellCoord, window_cells
from gridcraft.sim.rng import CellGenerator, SpawnDecision, luck

# leading 8 bytes of sha256 over the canonical key; changing them breaks existing saves
PINNED_DIGEST_PREFIXES = {
    "0,0": "7334821429a99561",
    "2,1": "d19b84a729d74792",
    "1,1": "03ebfc2d40db3012",
    "-3,0": "06d7a3dd42e4015b",
}


@pytest.mark.parametrize("key", sorted(PINNED_DIGEST_PREFIXES))
def test_luck_matches_pinned_sha256_prefix(key: str) -> None:
    expected = int(PINNED_DIGEST_PREFIXES[key], 16) / float(1 << 64)

    assert luck(key) == expected


def test_luck_is_in_unit_interval_and_repeatable() -> None:
    for cell in window_cells(CellCoord(0, 0), 5):
        value = luck(cell.key)
        assert 0.0 <= value < 1.0
        assert luck(cell.key) == value


def test_generator_spawns_value_one_below_spawn_rate() -> None:
    generator = CellGenerator(spawn_rate=0.1)

    assert generator.generate("1,1") == SpawnDecision(present=True, value=1)
    assert generator.generate("0,0") == SpawnDecision(present=False)
    assert generator.generate("2,1").present is False
    assert generator.generate_cell(CellCoord(-3, 0)).present is True


def test_generator_is_independent_of_call_order() -> None:
    keys = [cell.key for cell in window_cells(CellCoord(4, -2), 4)]
    forward = [CellGenerator(0.1).generate(key) for key in keys]

    generator = CellGenerator(0.1)
    backward = [generator.generate(key) for key in reversed(keys)]

    assert forward == list(reversed(backward))


def test_spawn_rate_controls_density() -> None:
    generator = CellGenerator(spawn_rate=0.1)
    cells = list(window_cells(CellCoord(0, 0), 50))

    spawned = sum(1 for cell in cells if generator.generate(cell.key).present)

    assert 0.07 < spawned / len(cells) < 0.13


def test_spawn_rate_bounds() -> None:
    assert CellGenerator(0.0).generate("1,1").present is False
    assert CellGenerator(1.0).generate("2,1").present is True
    with pytest.raises(ValueError, match="spawn_rate must be within"):
        CellGenerator(1.5)
    with pytest.raises(ValueError, match="spawn_rate must be numeric"):
        CellGenerator("0.1")  # type: ignore[arg-type]
