"""
Parser mapy jaskini z tekstu.

FORMAT WEJŚCIA:
═══════════════════════════════════════════════════════════════════

    Prostokątny blok tekstu, jeden wiersz siatki na linię:

        #   ściana
        .   otwarte pole
        G   Goblin (HP startowe z CombatRules)
        E   Elf    (HP startowe z CombatRules)

    Wszystkie wiersze muszą mieć tę samą szerokość.
    Puste linie na początku i końcu oraz końcowe spacje są pomijane.

ADNOTACJE (opcjonalne):
═══════════════════════════════════════════════════════════════════

    Wiersz może mieć sufiks z renderera:

        #G.E#   G(12), E(197)

    Wtedy HP jednostek z wiersza są brane z adnotacji (od lewej).
    Liczba i frakcje adnotacji muszą zgadzać się z jednostkami
    w wierszu. Dzięki temu render -> parse odtwarza pozycje,
    frakcje i HP.

Przykład użycia:
    >>> grid = parse_grid("#####\\n#G.E#\\n#####")
    >>> [u.id for u in grid.units_in_reading_order()]
    ['goblin_0', 'elf_0']
"""

from __future__ import annotations
import re
from typing import Dict, List, Optional, Tuple

from ..core.grid import Grid
from ..core.position import Position
from ..core.rules import CombatRules
from ..units.unit import Faction, Unit


WALL = "#"
OPEN = "."

_ANNOTATION = re.compile(r"([GE])\((\d+)\)")
_ANNOTATION_LIST = re.compile(r"[GE]\(\d+\)(?:\s*,\s*[GE]\(\d+\))*")


class MapParseError(ValueError):
    """Niepoprawny tekst mapy."""


def _split_line(line: str, y: int) -> Tuple[str, List[Tuple[str, int]]]:
    """
    Dzieli linię na część mapy i listę adnotacji (symbol, hp).

    Raises:
        MapParseError: Jeśli sufiks nie jest listą adnotacji
    """
    parts = line.split(None, 1)
    cells = parts[0]
    if len(parts) == 1:
        return cells, []

    suffix = parts[1].strip()
    if not _ANNOTATION_LIST.fullmatch(suffix):
        raise MapParseError(f"Invalid unit annotations in row {y}: {suffix!r}")

    return cells, [(symbol, int(hp)) for symbol, hp in _ANNOTATION.findall(suffix)]


def parse_grid(text: str, rules: Optional[CombatRules] = None) -> Grid:
    """
    Buduje Grid z tekstu mapy.

    Args:
        text: Blok tekstu mapy
        rules: Reguły walki (HP startowe, obrażenia bazowe)

    Returns:
        Grid: Nowa siatka z jednostkami

    Raises:
        MapParseError: Pusta mapa, nieznany znak, nierówne wiersze
                       lub adnotacje niezgodne z wierszem
    """
    rules = rules or CombatRules()

    lines = [line.rstrip() for line in text.splitlines()]
    while lines and not lines[-1]:
        lines.pop()
    while lines and not lines[0]:
        lines.pop(0)

    if not lines:
        raise MapParseError("Map is empty")

    rows: List[str] = []
    annotations: List[List[Tuple[str, int]]] = []
    for y, line in enumerate(lines):
        if not line.strip():
            raise MapParseError(f"Row {y} is empty")
        cells, row_annotations = _split_line(line, y)
        rows.append(cells)
        annotations.append(row_annotations)

    width = len(rows[0])
    for y, row in enumerate(rows):
        if len(row) != width:
            raise MapParseError(f"Row {y} has width {len(row)}, expected {width}")

    walls: List[Position] = []
    placements: List[Tuple[Position, Faction, int]] = []

    for y, row in enumerate(rows):
        row_units: List[Tuple[Position, Faction]] = []
        for x, char in enumerate(row):
            pos = Position(x, y)
            if char == WALL:
                walls.append(pos)
            elif char == OPEN:
                continue
            elif char in (Faction.GOBLIN.symbol, Faction.ELF.symbol):
                row_units.append((pos, Faction.from_symbol(char)))
            else:
                raise MapParseError(f"Unknown map character {char!r} at {pos}")

        row_annotations = annotations[y]
        if row_annotations:
            if [f.symbol for _, f in row_units] != [symbol for symbol, _ in row_annotations]:
                raise MapParseError(f"Annotations in row {y} do not match its units")
            for (pos, faction), (_, hp) in zip(row_units, row_annotations):
                placements.append((pos, faction, hp))
        else:
            for pos, faction in row_units:
                placements.append((pos, faction, rules.initial_hit_points(faction)))

    grid = Grid(width=width, height=len(rows), walls=walls, base_damage=rules.base_damage)

    counters: Dict[Faction, int] = {Faction.GOBLIN: 0, Faction.ELF: 0}
    for pos, faction, hp in placements:
        if hp <= 0:
            raise MapParseError(f"Unit at {pos} has non-positive hit points")
        unit = Unit(
            id=f"{faction.name.lower()}_{counters[faction]}",
            faction=faction,
            hit_points=hp,
            position=pos,
        )
        counters[faction] += 1
        grid.place_unit(unit)

    return grid
