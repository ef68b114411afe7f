"""
Combat module - obliczanie obrażeń.

Zawiera:
- BASE_DAMAGE: Bazowe obrażenia ataku (3)
- DamageResult: Wynik ataku (obrażenia, HP po ataku, śmierć)
- calculate_damage: Obrażenia z bonusem
- apply_damage: Aplikacja obrażeń do celu
"""

from .damage import BASE_DAMAGE, DamageResult, calculate_damage, apply_damage

__all__ = ["BASE_DAMAGE", "DamageResult", "calculate_damage", "apply_damage"]
