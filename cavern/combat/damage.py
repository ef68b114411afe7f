"""
System obliczania obrażeń.

OBRAŻENIA:
═══════════════════════════════════════════════════════════════════

    damage = BASE_DAMAGE (3) + bonus

    Bonus dostają tylko Elfy (elf attack bonus z parametrów biegu).
    Gobliny zawsze zadają bazowe obrażenia.

    Brak critów, uników i redukcji - każdy atak trafia.

ŚMIERĆ:
═══════════════════════════════════════════════════════════════════

    Jeśli hp <= damage:
        - hp = 0
        - jednostka jest usuwana z siatki (robi to Grid)
    W przeciwnym razie:
        - hp -= damage

    Przykład (bonus=0):
        hp 200 -> 197 -> ... -> 2 -> martwy (67 trafień)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, TYPE_CHECKING

if TYPE_CHECKING:
    from ..units.unit import Unit


BASE_DAMAGE = 3


@dataclass
class DamageResult:
    """
    Wynik pojedynczego ataku.

    Attributes:
        attacker_id (str): ID atakującego
        target_id (str): ID celu
        damage (int): Zadane obrażenia (3 + bonus)
        hp_after (int): HP celu po ataku (0 jeśli zginął)
        killed (bool): Czy cel zginął
    """
    attacker_id: str
    target_id: str
    damage: int
    hp_after: int
    killed: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Serializuje wynik do słownika."""
        return {
            "damage": self.damage,
            "hp_after": self.hp_after,
            "killed": self.killed,
        }


def calculate_damage(bonus: int = 0, base_damage: int = BASE_DAMAGE) -> int:
    """
    Oblicza obrażenia pojedynczego ataku.

    Args:
        bonus: Dodatkowe obrażenia (elf attack bonus, 0 dla Goblinów)
        base_damage: Bazowe obrażenia

    Returns:
        int: base_damage + bonus

    Raises:
        ValueError: Jeśli bonus jest ujemny
    """
    if bonus < 0:
        raise ValueError(f"Attack bonus must be non-negative, got {bonus}")
    return base_damage + bonus


def apply_damage(attacker: "Unit", target: "Unit", damage: int) -> DamageResult:
    """
    Aplikuje obrażenia do celu.

    Nie usuwa jednostki z siatki - caller (Grid.attack_unit)
    robi to na podstawie `killed`.

    Returns:
        DamageResult: Wynik ataku
    """
    killed = target.hit_points <= damage
    target.hit_points = 0 if killed else target.hit_points - damage

    return DamageResult(
        attacker_id=attacker.id,
        target_id=target.id,
        damage=damage,
        hp_after=target.hit_points,
        killed=killed,
    )
