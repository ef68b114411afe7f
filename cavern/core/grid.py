"""
Siatka jaskini (Grid) - teren, zajętość pól i zapytania przestrzenne.

Grid zarządza przestrzenią gry:
- Określa wymiary siatki (width x height) - stałe przez cały bieg
- Przechowuje teren każdego pola (ściana / otwarte pole)
- Śledzi które pola są zajęte przez jednostki
- Odpowiada na zapytania: sąsiedztwo, najkrótsza ścieżka, odległość
- Wykonuje mutacje zlecone przez silnik: ruch i atak

Stany pola:
    WALL       - '#', nieprzechodnie, nigdy zajęte
    OPEN       - '.', przechodnie, co najwyżej jedna jednostka
    zajęte     - OPEN z jednostką; po zejściu jednostki znów OPEN

Niezmienniki:
    - co najwyżej jedna jednostka na polu
    - unit.position zawsze wskazuje pole, na którym stoi jednostka
    - wymiary nie zmieniają się po utworzeniu

Grid nigdy sam nie inicjuje akcji - jest tylko odpytywany
i mutowany przez silnik (Simulation).

Przykład użycia:
    >>> grid = Grid(width=7, height=7)
    >>> grid.place_unit(goblin, Position(1, 1))
    >>> grid.unit_at(Position(1, 1))
    Unit(goblin_0, GOBLIN, hp=200, pos=(1, 1))
    >>> grid.distance(Position(1, 1), Position(4, 1))
    3
"""

from __future__ import annotations
from enum import Enum
from typing import Dict, Iterable, List, Optional, Set, TYPE_CHECKING

from .position import Position
from .pathfinding import find_path
from ..combat.damage import BASE_DAMAGE, DamageResult, calculate_damage, apply_damage

if TYPE_CHECKING:
    from ..units.unit import Faction, Unit


class GridError(RuntimeError):
    """
    Naruszenie niezmiennika siatki - błąd logiki, nie stan runtime.

    Rzucany gdy silnik próbuje ruszyć jednostkę, której nie ma na
    jej pozycji, wejść na pole nieotwarte/nieosiągalne albo zaatakować
    nieistniejący lub niesąsiadujący cel.
    """


class Terrain(Enum):
    """Teren pola."""

    WALL = "#"
    OPEN = "."

    @property
    def symbol(self) -> str:
        return self.value


class Grid:
    """
    Prostokątna siatka z terenem i jednostkami.

    Attributes:
        width (int): Szerokość siatki
        height (int): Wysokość siatki
        base_damage (int): Bazowe obrażenia ataku
        _terrain (Dict[Position, Terrain]): Teren każdego pola
        _occupancy (Dict[Position, Unit]): Mapa pozycja -> jednostka

    Note:
        Zajęte pole ma teren OPEN - jednostka "stoi na" otwartym polu.
    """

    def __init__(
        self,
        width: int,
        height: int,
        walls: Iterable[Position] = (),
        base_damage: int = BASE_DAMAGE,
    ):
        """
        Tworzy siatkę z otwartym terenem i podanymi ścianami.

        Args:
            width: Szerokość
            height: Wysokość
            walls: Pozycje ścian
            base_damage: Bazowe obrażenia ataku

        Raises:
            ValueError: Jeśli wymiary nie są dodatnie lub ściana jest poza siatką
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")

        self.width = width
        self.height = height
        self.base_damage = base_damage
        self._terrain: Dict[Position, Terrain] = {
            Position(x, y): Terrain.OPEN
            for y in range(height)
            for x in range(width)
        }
        self._occupancy: Dict[Position, "Unit"] = {}

        for wall in walls:
            if not self.is_valid(wall):
                raise ValueError(f"Wall {wall} is outside grid bounds")
            self._terrain[wall] = Terrain.WALL

    # ─────────────────────────────────────────────────────────────────────────
    # WALIDACJA POZYCJI
    # ─────────────────────────────────────────────────────────────────────────

    def is_valid(self, pos: Position) -> bool:
        """Sprawdza czy pozycja jest w granicach siatki."""
        return 0 <= pos.x < self.width and 0 <= pos.y < self.height

    def terrain_at(self, pos: Position) -> Terrain:
        """
        Zwraca teren pola (zajęte pole ma teren OPEN).

        Raises:
            ValueError: Jeśli pozycja jest poza siatką
        """
        if not self.is_valid(pos):
            raise ValueError(f"Position {pos} is outside grid bounds")
        return self._terrain[pos]

    def is_open(self, pos: Position) -> bool:
        """
        Sprawdza czy na pole można wejść.

        Pole jest otwarte jeśli:
        - Jest w granicach siatki
        - Nie jest ścianą
        - Nie jest zajęte
        """
        return (
            self.is_valid(pos)
            and self._terrain[pos] is Terrain.OPEN
            and pos not in self._occupancy
        )

    # ─────────────────────────────────────────────────────────────────────────
    # ZARZĄDZANIE JEDNOSTKAMI
    # ─────────────────────────────────────────────────────────────────────────

    def unit_at(self, pos: Position) -> Optional["Unit"]:
        """
        Zwraca jednostkę na danej pozycji (O(1)).

        Returns:
            Optional[Unit]: Jednostka lub None jeśli pole puste
        """
        return self._occupancy.get(pos)

    def contains(self, unit: "Unit") -> bool:
        """
        Sprawdza czy ta sama jednostka nadal stoi na swojej pozycji.

        Porównanie po tożsamości - inna jednostka, która weszła
        na pole po zabitej, nie jest z nią mylona.
        """
        return self._occupancy.get(unit.position) is unit

    def place_unit(self, unit: "Unit", pos: Optional[Position] = None) -> None:
        """
        Umieszcza jednostkę na siatce (tylko przy budowie siatki).

        Args:
            unit: Jednostka do umieszczenia
            pos: Docelowa pozycja (domyślnie unit.position)

        Raises:
            GridError: Jeśli pole jest poza siatką, jest ścianą lub jest zajęte
        """
        pos = unit.position if pos is None else pos
        if not self.is_open(pos):
            raise GridError(f"Cannot place {unit.id} at {pos}: cell is not open ground")

        self._occupancy[pos] = unit
        unit.position = pos

    def remove_unit(self, unit: "Unit") -> None:
        """
        Usuwa jednostkę z siatki - pole staje się otwarte.

        Raises:
            GridError: Jeśli jednostki nie ma na jej pozycji
        """
        if not self.contains(unit):
            raise GridError(f"Unit {unit.id} not found at position {unit.position}")
        del self._occupancy[unit.position]

    # ─────────────────────────────────────────────────────────────────────────
    # ZAPYTANIA
    # ─────────────────────────────────────────────────────────────────────────

    def units_in_reading_order(self) -> List["Unit"]:
        """
        Snapshot wszystkich żywych jednostek w kolejności czytania.

        Zwraca nową listę - późniejsze mutacje siatki nie zmieniają
        zawartości ani kolejności snapshotu.
        """
        return [
            self._occupancy[pos]
            for pos in sorted(self._occupancy, key=lambda p: p.reading_key)
        ]

    def units_of(self, faction: "Faction") -> List["Unit"]:
        """Żywe jednostki frakcji w kolejności czytania."""
        return [u for u in self.units_in_reading_order() if u.faction is faction]

    def count(self, faction: "Faction") -> int:
        """Liczba żywych jednostek frakcji."""
        return sum(1 for u in self._occupancy.values() if u.faction is faction)

    def factions_alive(self) -> Set["Faction"]:
        """Frakcje, które mają co najmniej jedną żywą jednostkę."""
        return {u.faction for u in self._occupancy.values()}

    def adjacent_open_cells(self, pos: Position) -> Set[Position]:
        """
        Zwraca otwarte pola (nie ściana, nie zajęte) sąsiadujące z pozycją.

        Używane do wyznaczenia pól, z których można zaatakować cel.
        """
        return {n for n in pos.neighbors() if self.is_open(n)}

    def open_neighbors(self, pos: Position) -> List[Position]:
        """
        Otwarci sąsiedzi w stałej kolejności UP, LEFT, RIGHT, DOWN.

        Kolejność ma znaczenie dla BFS (rozstrzyganie pierwszego kroku).
        """
        return [n for n in pos.neighbors() if self.is_open(n)]

    @staticmethod
    def manhattan_distance(a: Position, b: Position) -> int:
        """|dx| + |dy| - tylko do sprawdzania sąsiedztwa przy ataku."""
        return a.manhattan_distance(b)

    def shortest_path(self, start: Position, end: Position) -> Optional[List[Position]]:
        """
        Najkrótsza ścieżka po otwartych polach (BFS).

        Returns:
            Optional[List[Position]]: Ścieżka od start do end włącznie,
                                      None jeśli end jest nieosiągalne
        """
        path = find_path(self, start, end)
        return path or None

    def distance(self, start: Position, end: Position) -> Optional[int]:
        """
        Długość najkrótszej ścieżki w krokach (0 gdy start == end).

        Returns:
            Optional[int]: Liczba kroków lub None jeśli brak ścieżki
        """
        path = self.shortest_path(start, end)
        if path is None:
            return None
        return len(path) - 1

    def total_hit_points(self) -> int:
        """Suma HP wszystkich żywych jednostek."""
        return sum(u.hit_points for u in self._occupancy.values())

    # ─────────────────────────────────────────────────────────────────────────
    # MUTACJE
    # ─────────────────────────────────────────────────────────────────────────

    def move_unit(self, unit: "Unit", destination: Position) -> Position:
        """
        Przesuwa jednostkę o JEDEN krok w stronę celu.

        Wyznacza najkrótszą ścieżkę do `destination` i przenosi
        jednostkę na pierwsze pole za startem.

        Args:
            unit: Jednostka do przesunięcia
            destination: Pole docelowe (otwarte i osiągalne)

        Returns:
            Position: Nowa pozycja jednostki

        Raises:
            GridError: Jeśli jednostki nie ma na jej pozycji, cel nie jest
                       otwartym polem albo nie da się do niego dojść
        """
        if not self.contains(unit):
            raise GridError(f"Unit {unit.id} not found at position {unit.position}")

        if not self.is_open(destination):
            raise GridError(
                f"Unit {unit.id} cannot move to {destination}: cell is not open ground"
            )

        path = self.shortest_path(unit.position, destination)
        if path is None:
            raise GridError(f"Unit {unit.id} cannot reach {destination} from {unit.position}")

        next_pos = path[1]

        del self._occupancy[unit.position]
        self._occupancy[next_pos] = unit
        unit.position = next_pos

        return next_pos

    def attack_unit(
        self,
        attacker: "Unit",
        target_position: Position,
        damage_bonus: int = 0,
    ) -> DamageResult:
        """
        Atakuje jednostkę na sąsiednim polu.

        damage = base_damage + damage_bonus
        Jeśli hp celu <= damage - cel ginie i znika z siatki.

        Args:
            attacker: Jednostka atakująca
            target_position: Pole celu (Manhattan == 1)
            damage_bonus: Bonus do obrażeń

        Returns:
            DamageResult: Wynik ataku

        Raises:
            GridError: Jeśli atakującego nie ma na siatce, na polu celu
                       nie ma jednostki lub cel nie sąsiaduje
        """
        if not self.contains(attacker):
            raise GridError(f"Unit {attacker.id} cannot attack: not found at {attacker.position}")

        target = self.unit_at(target_position)
        if target is None:
            raise GridError(
                f"Unit {attacker.id} cannot attack {target_position}: no unit there"
            )

        if self.manhattan_distance(attacker.position, target_position) != 1:
            raise GridError(
                f"Unit {attacker.id} at {attacker.position} cannot attack "
                f"{target_position}: not adjacent"
            )

        damage = calculate_damage(damage_bonus, self.base_damage)
        result = apply_damage(attacker, target, damage)

        if result.killed:
            self.remove_unit(target)

        return result

    def __repr__(self) -> str:
        return f"Grid({self.width}x{self.height}, units={len(self._occupancy)})"
