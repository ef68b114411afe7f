"""
Testy dla silnika walki.

Testuje:
- Ruch wszystkich jednostek w pierwszej rundzie
- Ruch + atak w jednej turze
- Pomijanie jednostek zabitych w trakcie rundy
- Pełne walki na mapie przykładowej (wynik, liczba rund)
- Tryb STOP_ON_ELF_DEATH
- Zakończenie walki bez kontaktu i limit rund
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from cavern.core.position import Position
from cavern.events import EventType
from cavern.simulation import RunMode, Simulation, SimulationConfig
from cavern.text import parse_grid
from cavern.units import Faction


EXAMPLE_MAP = Path(__file__).parent.parent / "data" / "example.txt"


# ═══════════════════════════════════════════════════════════════════════════
# FIXTURES
# ═══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def example_text():
    """Mapa 7x7: dwa Gobliny po lewej, dwa Elfy po prawej."""
    return EXAMPLE_MAP.read_text(encoding="utf-8")


def positions(grid):
    """Helper - {id: (x, y)} żywych jednostek."""
    return {u.id: (u.position.x, u.position.y) for u in grid.units_in_reading_order()}


def hit_points(grid):
    return {u.id: u.hit_points for u in grid.units_in_reading_order()}


# ═══════════════════════════════════════════════════════════════════════════
# TEST: POJEDYNCZE RUNDY
# ═══════════════════════════════════════════════════════════════════════════

def test_first_round_moves_every_unit_once(example_text):
    sim = Simulation(parse_grid(example_text))

    assert sim.run_round() is True

    assert positions(sim.grid) == {
        "goblin_0": (2, 1),
        "elf_0": (4, 1),
        "goblin_1": (2, 5),
        "elf_1": (4, 5),
    }
    assert sim.grid.total_hit_points() == 800


def test_move_then_attack_in_same_turn(example_text):
    sim = Simulation(parse_grid(example_text))
    sim.run_round()
    sim.run_round()

    assert positions(sim.grid)["goblin_0"] == (3, 1)
    assert hit_points(sim.grid) == {
        "goblin_0": 197,
        "elf_0": 197,
        "goblin_1": 197,
        "elf_1": 197,
    }


def test_unit_killed_earlier_in_round_does_not_act():
    grid = parse_grid(
        "#####\n"
        "#GE.#   G(200), E(3)\n"
        "#####"
    )
    sim = Simulation(grid)

    outcome = sim.run()

    assert outcome.winner is Faction.GOBLIN
    assert outcome.completed_rounds == 0
    assert outcome.total_hit_points == 200
    assert outcome.score == 0
    assert sim.logger.get_events_for_unit("elf_0")[-1].event_type == EventType.UNIT_DEATH


def test_round_incomplete_when_last_enemy_dies_mid_round():
    """Runda kończy się jako niepełna, nawet gdy pozostałe jednostki snapshotu nie żyją."""
    grid = parse_grid(
        "#######\n"
        "#..GE.#   G(200), E(3)\n"
        "#######"
    )
    sim = Simulation(grid)

    assert sim.run_round() is False
    assert sim.is_finished
    assert sim.outcome.winner is Faction.GOBLIN
    assert sim.outcome.completed_rounds == 0


def test_dead_unit_not_confused_with_unit_on_its_cell():
    """Jednostka, która weszła na pole zabitej, działa tylko raz."""
    grid = parse_grid(
        "#####\n"
        "##G.#\n"
        "#EE.#   E(200), E(3)\n"
        "#####"
    )
    sim = Simulation(grid)

    assert sim.run_round() is True

    assert positions(sim.grid) == {"goblin_0": (2, 1), "elf_0": (2, 2)}
    assert hit_points(sim.grid)["goblin_0"] == 197
    attacks = sim.logger.get_events_by_type(EventType.UNIT_ATTACK)
    assert [e.unit_id for e in attacks] == ["goblin_0", "elf_0"]


def test_round_interrupted_when_no_enemies_left():
    grid = parse_grid(
        "#####\n"
        "#EGG#   E(3), G(200), G(200)\n"
        "#####"
    )
    sim = Simulation(grid)

    completed = sim.run_round()

    assert completed is False
    assert sim.is_finished
    assert sim.outcome.winner is Faction.GOBLIN
    assert sim.outcome.completed_rounds == 0
    assert sim.outcome.total_hit_points == 397


# ═══════════════════════════════════════════════════════════════════════════
# TEST: PEŁNE WALKI
# ═══════════════════════════════════════════════════════════════════════════

def test_goblins_win_without_bonus(example_text):
    sim = Simulation(parse_grid(example_text))

    outcome = sim.run()

    assert outcome.winner is Faction.GOBLIN
    assert outcome.completed_rounds == 67
    assert outcome.total_hit_points == 4
    assert outcome.score == 268
    assert outcome.elf_casualties == 2
    assert not outcome.aborted


def test_elves_win_with_bonus(example_text):
    sim = Simulation(parse_grid(example_text), SimulationConfig(elf_attack_bonus=1))

    outcome = sim.run()

    assert outcome.winner is Faction.ELF
    assert outcome.completed_rounds == 51
    assert outcome.total_hit_points == 100
    assert outcome.score == 5100
    assert outcome.elves_won_flawlessly


def test_stop_on_elf_death_aborts(example_text):
    config = SimulationConfig(mode=RunMode.STOP_ON_ELF_DEATH)
    sim = Simulation(parse_grid(example_text), config)

    outcome = sim.run()

    assert outcome.aborted
    assert outcome.winner is Faction.GOBLIN
    assert outcome.completed_rounds == 67
    assert outcome.total_hit_points == 6
    assert outcome.elf_casualties == 1
    assert len(sim.logger.get_events_by_type(EventType.COMBAT_ABORTED)) == 1


def test_stop_on_elf_death_runs_to_end_when_elves_survive(example_text):
    config = SimulationConfig(elf_attack_bonus=1, mode=RunMode.STOP_ON_ELF_DEATH)

    outcome = Simulation(parse_grid(example_text), config).run()

    assert not outcome.aborted
    assert outcome.score == 5100


def test_no_enemies_at_start():
    outcome = Simulation(parse_grid("#####\n#G.G#\n#####")).run()

    assert outcome.winner is Faction.GOBLIN
    assert outcome.completed_rounds == 0
    assert outcome.score == 0


def test_separated_factions_stall_after_idle_round():
    grid = parse_grid("#######\n#G.#.E#\n#######")
    sim = Simulation(grid)

    outcome = sim.run()

    assert outcome.stalled
    assert outcome.winner is None
    assert outcome.completed_rounds == 1
    assert outcome.score == 400
    assert sim.logger.get_events_by_type(EventType.UNIT_MOVE) == []
    assert len(sim.logger.get_events_by_type(EventType.ROUND_END)) == 1


def test_round_limit_stops_active_combat(example_text):
    sim = Simulation(parse_grid(example_text), SimulationConfig(max_rounds=5))

    outcome = sim.run()

    assert outcome.stalled
    assert outcome.winner is None
    assert outcome.completed_rounds == 5
    assert outcome.total_hit_points == 4 * 188


def test_same_input_same_result(example_text):
    first = Simulation(parse_grid(example_text)).run()
    second = Simulation(parse_grid(example_text)).run()

    assert first == second


# ═══════════════════════════════════════════════════════════════════════════
# TEST: KONFIGURACJA I WYNIK
# ═══════════════════════════════════════════════════════════════════════════

def test_negative_bonus_rejected():
    with pytest.raises(ValueError):
        SimulationConfig(elf_attack_bonus=-1)


def test_result_before_run_raises(example_text):
    sim = Simulation(parse_grid(example_text))
    with pytest.raises(RuntimeError):
        sim.get_result()


def test_result_contains_survivors_and_final_grid(example_text):
    sim = Simulation(parse_grid(example_text), SimulationConfig(elf_attack_bonus=1))
    sim.run()

    result = sim.get_result()

    assert result["winner"] == "ELF"
    assert result["score"] == 5100
    assert [u["hp"] for u in result["survivors"]] == [50, 50]
    assert "E(50)" in result["final_grid"]


def test_record_frames_one_per_round(example_text):
    sim = Simulation(parse_grid(example_text), SimulationConfig(max_rounds=3, record_frames=True))
    sim.run()

    frames = sim.logger.get_frames()

    assert len(frames) == 3
    assert frames[0].splitlines()[1] == "#.G.E.#   G(200), E(200)"


def test_events_logged_for_move_and_attack(example_text):
    sim = Simulation(parse_grid(example_text))
    sim.run()

    moves = sim.logger.get_events_in_round(0)
    assert [e.event_type for e in moves].count(EventType.UNIT_MOVE) == 4

    second = sim.logger.get_events_in_round(1)
    attacks = [e for e in second if e.event_type == EventType.UNIT_ATTACK]
    assert [(e.unit_id, e.target_id) for e in attacks] == [
        ("goblin_0", "elf_0"),
        ("elf_0", "goblin_0"),
        ("goblin_1", "elf_1"),
        ("elf_1", "goblin_1"),
    ]
    assert attacks[0].data == {"damage": 3, "hp_after": 197, "killed": False}


def test_death_is_logged(example_text):
    sim = Simulation(parse_grid(example_text))
    sim.run()

    deaths = sim.logger.get_events_by_type(EventType.UNIT_DEATH)

    assert sorted(e.unit_id for e in deaths) == ["elf_0", "elf_1"]
    assert all(e.data["killer_id"].startswith("goblin_") for e in deaths)
