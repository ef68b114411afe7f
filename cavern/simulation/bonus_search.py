"""
Szukanie minimalnego bonusu Elfów.

Zewnętrzna pętla ponawiania:
    1. bonus = start
    2. Sparsuj mapę OD NOWA (czysta siatka, pełne HP)
    3. Uruchom walkę w trybie STOP_ON_ELF_DEATH
    4. Elfy wygrały bez strat -> zwróć bonus
    5. W przeciwnym razie bonus += 1 i wróć do 2.

Każda próba to pełny restart - silnik nie ma mechanizmu
odtwarzania stanu, siatka jest jednorazowa.

Przykład użycia:
    >>> result = find_minimum_elf_bonus(Path("data/example.txt").read_text())
    >>> result.bonus, result.outcome.score
    (1, 5100)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..core.rules import CombatRules
from ..text.parser import parse_grid
from .simulation import CombatOutcome, RunMode, Simulation, SimulationConfig


@dataclass
class BonusSearchResult:
    """
    Wynik szukania bonusu.

    Attributes:
        bonus (int): Minimalny bonus, przy którym Elfy wygrywają bez strat
        outcome (CombatOutcome): Wynik walki z tym bonusem
        attempts (int): Liczba przeprowadzonych walk
    """
    bonus: int
    outcome: CombatOutcome
    attempts: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bonus": self.bonus,
            "attempts": self.attempts,
            "outcome": self.outcome.to_dict(),
        }


def run_with_bonus(
    text: str,
    bonus: int,
    rules: Optional[CombatRules] = None,
    mode: RunMode = RunMode.STOP_ON_ELF_DEATH,
    max_rounds: Optional[int] = 10000,
) -> Simulation:
    """Parsuje mapę od nowa i przeprowadza jedną walkę."""
    grid = parse_grid(text, rules)
    sim = Simulation(
        grid,
        SimulationConfig(elf_attack_bonus=bonus, mode=mode, max_rounds=max_rounds),
    )
    sim.run()
    return sim


def find_minimum_elf_bonus(
    text: str,
    rules: Optional[CombatRules] = None,
    start: int = 0,
    max_bonus: int = 200,
    max_rounds: Optional[int] = 10000,
) -> Optional[BonusSearchResult]:
    """
    Szuka najmniejszego bonusu, przy którym żaden Elf nie ginie.

    Args:
        text: Tekst mapy (parsowany od nowa w każdej próbie)
        rules: Reguły walki
        start: Pierwszy sprawdzany bonus
        max_bonus: Ostatni sprawdzany bonus (włącznie)
        max_rounds: Limit rund pojedynczej walki

    Returns:
        Optional[BonusSearchResult]: Wynik lub None jeśli żaden bonus
                                     z zakresu nie wystarcza

    Raises:
        ValueError: Jeśli start < 0 lub max_bonus < start
        MapParseError: Jeśli mapa jest niepoprawna
    """
    if start < 0:
        raise ValueError(f"start must be non-negative, got {start}")
    if max_bonus < start:
        raise ValueError(f"max_bonus ({max_bonus}) must be >= start ({start})")

    attempts = 0
    for bonus in range(start, max_bonus + 1):
        attempts += 1
        sim = run_with_bonus(text, bonus, rules, max_rounds=max_rounds)
        outcome = sim.outcome
        if outcome is not None and outcome.elves_won_flawlessly:
            return BonusSearchResult(bonus=bonus, outcome=outcome, attempts=attempts)

    return None
