"""
Renderer siatki do tekstu (diagnostyka, klatki rund).

Format wiersza:
    <znaki terenu/jednostek>   <Typ(hp), Typ(hp), ...>

    - '#' ściana, '.' otwarte pole, 'G' / 'E' jednostka
    - po trzech spacjach lista jednostek z wiersza od lewej
    - wiersz bez jednostek też kończy się trzema spacjami

Przykład:
    #######
    #G...E#   G(200), E(200)
    #######

Tekst z renderera jest akceptowany przez parse_grid, który
odtwarza z adnotacji HP jednostek.
"""

from __future__ import annotations
from typing import List

from ..core.grid import Grid
from ..core.position import Position


ANNOTATION_SEPARATOR = "   "


def render_row(grid: Grid, y: int) -> str:
    """Renderuje jeden wiersz siatki z adnotacjami HP."""
    cells: List[str] = []
    labels: List[str] = []

    for x in range(grid.width):
        pos = Position(x, y)
        unit = grid.unit_at(pos)
        if unit is not None:
            cells.append(unit.faction.symbol)
            labels.append(unit.label())
        else:
            cells.append(grid.terrain_at(pos).symbol)

    return "".join(cells) + ANNOTATION_SEPARATOR + ", ".join(labels)


def render_grid(grid: Grid) -> str:
    """Renderuje całą siatkę (wiersze rozdzielone '\\n')."""
    return "\n".join(render_row(grid, y) for y in range(grid.height))
