"""
Testy dla parsera i renderera mapy.
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from cavern.core.grid import Terrain
from cavern.core.position import Position
from cavern.core.rules import CombatRules
from cavern.text import MapParseError, parse_grid, render_grid, render_row
from cavern.units import Faction


SMALL_MAP = "#####\n#G.E#\n#####"


# ═══════════════════════════════════════════════════════════════════════════
# TEST: PARSER
# ═══════════════════════════════════════════════════════════════════════════

def test_parse_dimensions_and_terrain():
    grid = parse_grid(SMALL_MAP)

    assert (grid.width, grid.height) == (5, 3)
    assert grid.terrain_at(Position(0, 0)) is Terrain.WALL
    assert grid.terrain_at(Position(2, 1)) is Terrain.OPEN
    assert grid.terrain_at(Position(1, 1)) is Terrain.OPEN


def test_parse_units_with_default_hit_points():
    grid = parse_grid(SMALL_MAP)
    units = grid.units_in_reading_order()

    assert [(u.id, u.faction, u.hit_points) for u in units] == [
        ("goblin_0", Faction.GOBLIN, 200),
        ("elf_0", Faction.ELF, 200),
    ]
    assert units[1].position == Position(3, 1)


def test_ids_numbered_per_faction_in_reading_order():
    grid = parse_grid("######\n#GEG.#\n#.E.G#\n######")

    assert [u.id for u in grid.units_in_reading_order()] == [
        "goblin_0", "elf_0", "goblin_1", "elf_1", "goblin_2",
    ]


def test_parse_uses_rules_for_hit_points():
    rules = CombatRules(goblin_hit_points=50, elf_hit_points=80, base_damage=4)
    grid = parse_grid(SMALL_MAP, rules)

    assert [u.hit_points for u in grid.units_in_reading_order()] == [50, 80]
    assert grid.base_damage == 4


def test_annotations_override_hit_points():
    grid = parse_grid("#####\n#G.E#   G(12), E(197)\n#####")

    assert [u.hit_points for u in grid.units_in_reading_order()] == [12, 197]


def test_surrounding_blank_lines_ignored():
    grid = parse_grid("\n\n" + SMALL_MAP + "\n\n")
    assert grid.height == 3


@pytest.mark.parametrize("text", [
    "",
    "\n\n",
    "#####\n#G.E#\n####",
    "#####\n#GxE#\n#####",
    "#####\n\n#####",
    "#####\n#G.E#   E(10), G(10)\n#####",
    "#####\n#G.E#   G(10)\n#####",
    "#####\n#G.E#   G(0), E(10)\n#####",
    "#####\n#G.E#   hello\n#####",
])
def test_invalid_maps_rejected(text):
    with pytest.raises(MapParseError):
        parse_grid(text)


def test_parse_error_is_value_error():
    assert issubclass(MapParseError, ValueError)


# ═══════════════════════════════════════════════════════════════════════════
# TEST: RENDERER
# ═══════════════════════════════════════════════════════════════════════════

def test_render_row_with_units():
    grid = parse_grid(SMALL_MAP)
    assert render_row(grid, 1) == "#G.E#   G(200), E(200)"


def test_render_row_without_units_has_separator():
    grid = parse_grid(SMALL_MAP)
    assert render_row(grid, 0) == "#####   "


def test_render_grid():
    grid = parse_grid(SMALL_MAP)
    assert render_grid(grid) == "#####   \n#G.E#   G(200), E(200)\n#####   "


def test_render_then_parse_preserves_units():
    grid = parse_grid("#######\n#G..E.#   G(5), E(190)\n#.E...#\n#######")

    restored = parse_grid(render_grid(grid))

    assert [u.to_dict() for u in restored.units_in_reading_order()] == [
        u.to_dict() for u in grid.units_in_reading_order()
    ]
    assert render_grid(restored) == render_grid(grid)
