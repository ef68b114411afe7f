"""
Unit - jednostka walcząca w jaskini (Goblin lub Elf).

Jednostka to tylko:
- Frakcja (Faction.GOBLIN / Faction.ELF)
- Punkty życia (tylko maleją, brak regeneracji)
- Pozycja na siatce (Position)

Cykl życia jednostki:
═══════════════════════════════════════════════════════════════════

    1. TWORZENIE
       - Z parsera mapy (parse_grid) - 'G' lub 'E' na mapie
       - HP startowe z CombatRules (domyślnie 200)

    2. RUNDY WALKI
       - Ruch o 1 pole (Grid.move_unit)
       - Atak na sąsiada (Grid.attack_unit)

    3. ŚMIERĆ
       - HP <= obrażenia -> HP = 0
       - Usunięcie z siatki (pole staje się otwarte)
       - Brak "zwłok" - pole od razu jest przechodnie

Identyfikacja:
    Każda jednostka ma unikalne `id` (string).
    Format: "{faction}_{index}" np. "goblin_0", "elf_3"
    Indeks nadawany w kolejności czytania przy parsowaniu.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict

from ..core.position import Position


class Faction(Enum):
    """Frakcja jednostki. Walka toczy się tylko między przeciwnymi."""

    GOBLIN = "G"
    ELF = "E"

    @property
    def symbol(self) -> str:
        """Znak na mapie ('G' lub 'E')."""
        return self.value

    @property
    def enemy(self) -> Faction:
        """Frakcja przeciwna."""
        return Faction.ELF if self is Faction.GOBLIN else Faction.GOBLIN

    @classmethod
    def from_symbol(cls, symbol: str) -> Faction:
        """
        Zwraca frakcję dla znaku z mapy.

        Raises:
            ValueError: Jeśli znak nie oznacza jednostki
        """
        return cls(symbol)


@dataclass(eq=False)
class Unit:
    """
    Jednostka na siatce.

    Attributes:
        id (str): Unikalny identyfikator
        faction (Faction): Goblin lub Elf
        hit_points (int): Aktualne HP
        position (Position): Aktualna pozycja - synchronizowana z Grid

    Note:
        - Jednostki są porównywane po `id`
        - Pozycję zmienia wyłącznie Grid (move_unit / place_unit)
    """

    id: str
    faction: Faction
    hit_points: int
    position: Position

    def is_alive(self) -> bool:
        """Sprawdza czy jednostka żyje."""
        return self.hit_points > 0

    def label(self) -> str:
        """Etykieta renderera, np. 'G(200)'."""
        return f"{self.faction.symbol}({self.hit_points})"

    def to_dict(self) -> Dict[str, Any]:
        """
        Serializuje jednostkę do słownika (dla event logu i API).

        Returns:
            Dict: Reprezentacja jednostki
        """
        return {
            "id": self.id,
            "faction": self.faction.name,
            "position": self.position.to_list(),
            "hp": self.hit_points,
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Unit):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"Unit({self.id}, {self.faction.name}, hp={self.hit_points}, pos={self.position})"
