"""
Strategia jednostki - wybór akcji na turę.

AKCJE (tagged variant):
═══════════════════════════════════════════════════════════════════

    Move(destination)     - krok w stronę wybranego pola docelowego
    Attack(target, bonus) - atak na jednostkę na sąsiednim polu
    NO_ACTION             - brak celu / brak ścieżki (cichy no-op)

WYBÓR CELU:
═══════════════════════════════════════════════════════════════════

    1. Wrogowie = żywe jednostki przeciwnej frakcji
    2. Dla każdego wroga:
       - otwarte pola wokół niego
       - odległość BFS od jednostki do każdego pola
       - zostaje najbliższe osiągalne pole (nieosiągalne odpadają)
       - jeśli wróg już sąsiaduje (Manhattan == 1) -> dodatkowy
         kandydat "atak" z odległością 0 na pozycji wroga
    3. Sortowanie kandydatów rosnąco po:

           (distance, hp wroga, wiersz pola, kolumna pola)

       czyli: bliżej > mniej HP > wcześniej w kolejności czytania
    4. Pierwszy kandydat:
       - distance == 0 -> Attack (bonus tylko dla Elfów)
       - w przeciwnym razie -> Move na pole kandydata

Przykład użycia:
    >>> action = choose_action(grid, unit, elf_attack_bonus=3)
    >>> isinstance(action, Move)
    True
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

from ..core.grid import Grid
from ..core.position import Position
from ..units.unit import Faction, Unit


# ═══════════════════════════════════════════════════════════════════════════
# AKCJE
# ═══════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Move:
    """Ruch o jeden krok w stronę `destination`."""
    destination: Position


@dataclass(frozen=True)
class Attack:
    """Atak na jednostkę stojącą na `target`."""
    target: Position
    bonus: int = 0


class NoAction:
    """Brak akcji. Używaj singletonu NO_ACTION."""

    def __repr__(self) -> str:
        return "NO_ACTION"


NO_ACTION = NoAction()

UnitAction = Union[Move, Attack, NoAction]


# ═══════════════════════════════════════════════════════════════════════════
# KANDYDACI
# ═══════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Target:
    """
    Kandydat na cel.

    Attributes:
        enemy (Unit): Wróg, do którego prowadzi kandydat
        position (Position): Pole docelowe (lub pozycja wroga dla ataku)
        distance (int): Odległość BFS (0 = atak bez ruchu)
    """
    enemy: Unit
    position: Position
    distance: int

    @property
    def sort_key(self) -> Tuple[int, int, int, int]:
        """(distance, hp wroga, wiersz, kolumna) - kontrakt rozstrzygania remisów."""
        return (self.distance, self.enemy.hit_points, self.position.y, self.position.x)


def find_enemies(grid: Grid, unit: Unit) -> List[Unit]:
    """Żywi wrogowie jednostki w kolejności czytania."""
    return grid.units_of(unit.faction.enemy)


def find_reachable_targets(grid: Grid, unit: Unit, enemies: Sequence[Unit]) -> List[Target]:
    """
    Wyznacza osiągalnych kandydatów dla jednostki.

    Args:
        grid: Siatka
        unit: Jednostka wybierająca cel
        enemies: Żywi wrogowie

    Returns:
        List[Target]: Kandydaci (może być pusta)
    """
    targets: List[Target] = []

    for enemy in enemies:
        best = None
        for cell in grid.adjacent_open_cells(enemy.position):
            distance = grid.distance(unit.position, cell)
            if distance is None:
                continue
            candidate = Target(enemy=enemy, position=cell, distance=distance)
            if best is None or (distance, cell.reading_key) < (best.distance, best.position.reading_key):
                best = candidate

        if best is not None:
            targets.append(best)

        if grid.manhattan_distance(unit.position, enemy.position) == 1:
            targets.append(Target(enemy=enemy, position=enemy.position, distance=0))

    return targets


def attack_bonus_for(unit: Unit, elf_attack_bonus: int) -> int:
    """Bonus do obrażeń - tylko Elfy."""
    return elf_attack_bonus if unit.faction is Faction.ELF else 0


def select_target(grid: Grid, unit: Unit) -> Optional[Target]:
    """
    Najlepszy kandydat wg sort_key.

    Returns:
        Optional[Target]: Kandydat lub None (brak wrogów / brak ścieżki)
    """
    enemies = find_enemies(grid, unit)
    if not enemies:
        return None

    targets = find_reachable_targets(grid, unit, enemies)
    if not targets:
        return None

    return min(targets, key=lambda t: t.sort_key)


def action_for(unit: Unit, target: Optional[Target], elf_attack_bonus: int = 0) -> UnitAction:
    """Zamienia wybranego kandydata na akcję."""
    if target is None:
        return NO_ACTION

    if target.distance == 0:
        return Attack(target=target.enemy.position, bonus=attack_bonus_for(unit, elf_attack_bonus))

    return Move(destination=target.position)


def choose_action(grid: Grid, unit: Unit, elf_attack_bonus: int = 0) -> UnitAction:
    """
    Wybiera akcję jednostki na podstawie aktualnego stanu siatki.

    Funkcja tylko czyta siatkę - niczego nie mutuje.

    Args:
        grid: Siatka
        unit: Jednostka w turze
        elf_attack_bonus: Bonus obrażeń Elfów

    Returns:
        UnitAction: Move, Attack lub NO_ACTION
    """
    return action_for(unit, select_target(grid, unit), elf_attack_bonus)
