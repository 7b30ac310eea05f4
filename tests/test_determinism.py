from gridcraft.content.config import GameConfig
from gridcraft.content.io import MemorySlot, PersistenceGateway
from gridcraft.sim.core import GameEngine
from gridcraft.sim.errors import InteractionError
from gridcraft.sim.hash import engine_hash

CONFIG = GameConfig(start_location=(0.5, 0.5), tile_degrees=1.0)


def _run_scripted_session(engine: GameEngine) -> None:
    for delta_i, delta_j in [(1, 0), (0, 1), (-2, 0), (0, -3), (4, 4)]:
        engine.on_player_move(delta_i, delta_j)
        for cell in sorted(engine.view().interactable):
            try:
                engine.on_cell_activated(cell)
            except InteractionError:
                continue


def test_same_commands_produce_identical_hash() -> None:
    engine_a = GameEngine.start(CONFIG, PersistenceGateway(MemorySlot()))
    engine_b = GameEngine.start(CONFIG, PersistenceGateway(MemorySlot()))

    _run_scripted_session(engine_a)
    _run_scripted_session(engine_b)

    assert engine_hash(engine_a) == engine_hash(engine_b)
    assert len(engine_a.store) > 0


def test_reloaded_engine_matches_live_engine() -> None:
    slot = MemorySlot()
    live = GameEngine.start(CONFIG, PersistenceGateway(slot))
    _run_scripted_session(live)

    reloaded = GameEngine.start(CONFIG, PersistenceGateway(slot))

    assert engine_hash(reloaded) == engine_hash(live)
