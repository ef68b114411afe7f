"""
Testy dla siatki jaskini i BFS.

Testuje:
- Kolejność czytania i snapshot jednostek
- Najkrótsza ścieżka i odległość (BFS, remisy pierwszego kroku)
- Otwarte pola sąsiednie
- Ruch o jeden krok i atak (z usunięciem zabitej jednostki)
- Błędy logiki (GridError)
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from cavern.core.position import Position
from cavern.core.grid import Grid, GridError, Terrain
from cavern.core.pathfinding import find_path, find_path_next_step
from cavern.combat.damage import calculate_damage, apply_damage
from cavern.units.unit import Faction, Unit


# ═══════════════════════════════════════════════════════════════════════════
# FIXTURES
# ═══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def grid():
    """Otwarta siatka 5x5 bez ścian."""
    return Grid(width=5, height=5)


def create_unit(unit_id: str, faction: Faction, x: int, y: int, hp: int = 200) -> Unit:
    """Helper do tworzenia jednostek testowych."""
    return Unit(id=unit_id, faction=faction, hit_points=hp, position=Position(x, y))


# ═══════════════════════════════════════════════════════════════════════════
# TEST: POSITION
# ═══════════════════════════════════════════════════════════════════════════

def test_neighbors_are_in_reading_order():
    """Sąsiedzi w kolejności UP, LEFT, RIGHT, DOWN."""
    assert Position(2, 2).neighbors() == [
        Position(2, 1), Position(1, 2), Position(3, 2), Position(2, 3),
    ]


def test_reading_key_orders_rows_first():
    positions = [Position(0, 2), Position(3, 0), Position(1, 0)]
    assert sorted(positions, key=lambda p: p.reading_key) == [
        Position(1, 0), Position(3, 0), Position(0, 2),
    ]


def test_manhattan_distance():
    assert Grid.manhattan_distance(Position(1, 1), Position(4, 3)) == 5


# ═══════════════════════════════════════════════════════════════════════════
# TEST: TEREN I ZAJĘTOŚĆ
# ═══════════════════════════════════════════════════════════════════════════

def test_walls_are_not_open(grid):
    walled = Grid(width=3, height=3, walls=[Position(1, 1)])
    assert walled.terrain_at(Position(1, 1)) is Terrain.WALL
    assert not walled.is_open(Position(1, 1))
    assert not walled.is_open(Position(5, 5))


def test_wall_outside_grid_raises():
    with pytest.raises(ValueError):
        Grid(width=3, height=3, walls=[Position(3, 0)])


def test_place_unit_on_occupied_cell_raises(grid):
    grid.place_unit(create_unit("goblin_0", Faction.GOBLIN, 1, 1))
    with pytest.raises(GridError):
        grid.place_unit(create_unit("elf_0", Faction.ELF, 1, 1))


def test_unit_at_returns_none_for_empty_cell(grid):
    goblin = create_unit("goblin_0", Faction.GOBLIN, 1, 1)
    grid.place_unit(goblin)

    assert grid.unit_at(Position(1, 1)) is goblin
    assert grid.unit_at(Position(2, 2)) is None


def test_units_in_reading_order(grid):
    late = create_unit("elf_0", Faction.ELF, 0, 3)
    early = create_unit("goblin_0", Faction.GOBLIN, 4, 0)
    middle = create_unit("goblin_1", Faction.GOBLIN, 1, 3)
    for unit in (late, early, middle):
        grid.place_unit(unit)

    assert [u.id for u in grid.units_in_reading_order()] == ["goblin_0", "elf_0", "goblin_1"]


def test_reading_order_snapshot_is_independent(grid):
    """Mutacje siatki nie zmieniają pobranego snapshotu."""
    goblin = create_unit("goblin_0", Faction.GOBLIN, 0, 0)
    elf = create_unit("elf_0", Faction.ELF, 1, 0, hp=3)
    grid.place_unit(goblin)
    grid.place_unit(elf)

    snapshot = grid.units_in_reading_order()
    grid.attack_unit(goblin, elf.position)

    assert snapshot == [goblin, elf]
    assert grid.units_in_reading_order() == [goblin]


def test_adjacent_open_cells_skip_walls_and_units():
    grid = Grid(width=3, height=3, walls=[Position(1, 0)])
    grid.place_unit(create_unit("elf_0", Faction.ELF, 0, 1))
    grid.place_unit(create_unit("goblin_0", Faction.GOBLIN, 1, 1))

    assert grid.adjacent_open_cells(Position(1, 1)) == {Position(2, 1), Position(1, 2)}


def test_adjacent_open_cells_in_corner(grid):
    assert grid.adjacent_open_cells(Position(0, 0)) == {Position(1, 0), Position(0, 1)}


# ═══════════════════════════════════════════════════════════════════════════
# TEST: BFS
# ═══════════════════════════════════════════════════════════════════════════

def test_distance_to_self_is_zero(grid):
    assert grid.distance(Position(2, 2), Position(2, 2)) == 0


def test_distance_goes_around_walls():
    grid = Grid(width=5, height=3, walls=[Position(2, 0), Position(2, 1)])
    assert grid.distance(Position(0, 0), Position(4, 0)) == 8


def test_unreachable_cell_has_no_path():
    grid = Grid(width=5, height=1, walls=[Position(2, 0)])

    assert grid.shortest_path(Position(0, 0), Position(4, 0)) is None
    assert grid.distance(Position(0, 0), Position(4, 0)) is None
    assert find_path(grid, Position(0, 0), Position(4, 0)) == []


def test_path_does_not_walk_through_units(grid):
    grid.place_unit(create_unit("goblin_0", Faction.GOBLIN, 1, 0))
    assert grid.distance(Position(0, 0), Position(2, 0)) == 4


def test_first_step_is_earliest_in_reading_order(grid):
    """Przy kilku najkrótszych ścieżkach pierwszy krok idzie w górę/lewo."""
    path = grid.shortest_path(Position(0, 0), Position(1, 1))
    assert path == [Position(0, 0), Position(1, 0), Position(1, 1)]

    path = grid.shortest_path(Position(2, 2), Position(3, 3))
    assert path[1] == Position(3, 2)

    assert find_path_next_step(grid, Position(2, 2), Position(1, 3)) == Position(1, 2)


def test_next_step_to_self_is_none(grid):
    assert find_path_next_step(grid, Position(2, 2), Position(2, 2)) is None


# ═══════════════════════════════════════════════════════════════════════════
# TEST: RUCH
# ═══════════════════════════════════════════════════════════════════════════

def test_move_unit_takes_single_step(grid):
    goblin = create_unit("goblin_0", Faction.GOBLIN, 0, 0)
    grid.place_unit(goblin)

    new_pos = grid.move_unit(goblin, Position(3, 0))

    assert new_pos == Position(1, 0)
    assert goblin.position == Position(1, 0)
    assert grid.unit_at(Position(1, 0)) is goblin
    assert grid.is_open(Position(0, 0))


def test_move_unit_to_wall_raises():
    grid = Grid(width=3, height=1, walls=[Position(2, 0)])
    goblin = create_unit("goblin_0", Faction.GOBLIN, 0, 0)
    grid.place_unit(goblin)

    with pytest.raises(GridError):
        grid.move_unit(goblin, Position(2, 0))


def test_move_unit_to_unreachable_cell_raises():
    grid = Grid(width=5, height=1, walls=[Position(2, 0)])
    goblin = create_unit("goblin_0", Faction.GOBLIN, 0, 0)
    grid.place_unit(goblin)

    with pytest.raises(GridError):
        grid.move_unit(goblin, Position(4, 0))


def test_move_unit_not_on_grid_raises(grid):
    ghost = create_unit("goblin_0", Faction.GOBLIN, 0, 0)
    with pytest.raises(GridError):
        grid.move_unit(ghost, Position(2, 0))


# ═══════════════════════════════════════════════════════════════════════════
# TEST: ATAK
# ═══════════════════════════════════════════════════════════════════════════

def test_damage_formula():
    assert calculate_damage() == 3
    assert calculate_damage(bonus=4) == 7
    with pytest.raises(ValueError):
        calculate_damage(bonus=-1)


def test_apply_damage_marks_kill():
    attacker = create_unit("goblin_0", Faction.GOBLIN, 0, 0)
    target = create_unit("elf_0", Faction.ELF, 1, 0, hp=3)

    result = apply_damage(attacker, target, 3)

    assert result.killed
    assert result.hp_after == 0
    assert not target.is_alive()


def test_attack_reduces_hit_points(grid):
    goblin = create_unit("goblin_0", Faction.GOBLIN, 1, 1)
    elf = create_unit("elf_0", Faction.ELF, 2, 1)
    grid.place_unit(goblin)
    grid.place_unit(elf)

    result = grid.attack_unit(elf, goblin.position, damage_bonus=2)

    assert result.damage == 5
    assert goblin.hit_points == 195
    assert not result.killed
    assert grid.total_hit_points() == 395


def test_attack_kills_and_frees_cell(grid):
    goblin = create_unit("goblin_0", Faction.GOBLIN, 1, 1)
    elf = create_unit("elf_0", Faction.ELF, 1, 2, hp=2)
    grid.place_unit(goblin)
    grid.place_unit(elf)

    result = grid.attack_unit(goblin, elf.position)

    assert result.killed
    assert result.target_id == "elf_0"
    assert grid.unit_at(Position(1, 2)) is None
    assert grid.is_open(Position(1, 2))
    assert not grid.contains(elf)
    assert grid.count(Faction.ELF) == 0
    assert grid.factions_alive() == {Faction.GOBLIN}


def test_attack_empty_cell_raises(grid):
    goblin = create_unit("goblin_0", Faction.GOBLIN, 1, 1)
    grid.place_unit(goblin)

    with pytest.raises(GridError):
        grid.attack_unit(goblin, Position(2, 1))


def test_attack_non_adjacent_raises(grid):
    goblin = create_unit("goblin_0", Faction.GOBLIN, 1, 1)
    elf = create_unit("elf_0", Faction.ELF, 2, 2)
    grid.place_unit(goblin)
    grid.place_unit(elf)

    with pytest.raises(GridError):
        grid.attack_unit(goblin, elf.position)


def test_contains_compares_identity(grid):
    """Inna jednostka na tym samym polu nie jest myloną jednostką."""
    original = create_unit("elf_0", Faction.ELF, 1, 1)
    impostor = create_unit("elf_1", Faction.ELF, 1, 1)
    grid.place_unit(impostor)

    assert grid.contains(impostor)
    assert not grid.contains(original)


def test_remove_unit_frees_cell(grid):
    goblin = create_unit("goblin_0", Faction.GOBLIN, 1, 1)
    grid.place_unit(goblin)

    grid.remove_unit(goblin)

    assert grid.unit_at(Position(1, 1)) is None
    assert grid.is_open(Position(1, 1))
    with pytest.raises(GridError):
        grid.remove_unit(goblin)
