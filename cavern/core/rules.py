"""
Reguły walki - stałe wspólne dla parsera, siatki i symulacji.

Wartości domyślne:
    goblin_hit_points = 200
    elf_hit_points    = 200
    base_damage       = 3

Można je nadpisać w data/defaults.yaml (sekcja `combat`),
patrz ConfigLoader.load_combat_rules().
"""

from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Any, Dict

from ..combat.damage import BASE_DAMAGE
from ..units.unit import Faction


INITIAL_HIT_POINTS = 200


@dataclass(frozen=True)
class CombatRules:
    """
    Reguły jednego biegu symulacji.

    Attributes:
        goblin_hit_points (int): HP startowe Goblinów
        elf_hit_points (int): HP startowe Elfów
        base_damage (int): Bazowe obrażenia ataku (bez bonusu)
    """
    goblin_hit_points: int = INITIAL_HIT_POINTS
    elf_hit_points: int = INITIAL_HIT_POINTS
    base_damage: int = BASE_DAMAGE

    def __post_init__(self) -> None:
        if self.goblin_hit_points <= 0 or self.elf_hit_points <= 0:
            raise ValueError("Initial hit points must be positive")
        if self.base_damage <= 0:
            raise ValueError("Base damage must be positive")

    def initial_hit_points(self, faction: Faction) -> int:
        """HP startowe dla frakcji."""
        if faction is Faction.GOBLIN:
            return self.goblin_hit_points
        return self.elf_hit_points

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
