"""
Simulation module - silnik walki i strategia jednostek.

Zawiera:
- Simulation: Pętla rund
- SimulationConfig / RunMode: Parametry biegu
- CombatOutcome: Wynik walki
- choose_action / Move / Attack / NO_ACTION: Strategia jednostki
- find_minimum_elf_bonus: Zewnętrzna pętla szukania bonusu
"""

from .strategy import (
    Move, Attack, NoAction, NO_ACTION, UnitAction, Target,
    choose_action, select_target, find_reachable_targets,
)
from .simulation import Simulation, SimulationConfig, RunMode, CombatOutcome
from .bonus_search import BonusSearchResult, find_minimum_elf_bonus, run_with_bonus

__all__ = [
    "Move", "Attack", "NoAction", "NO_ACTION", "UnitAction", "Target",
    "choose_action", "select_target", "find_reachable_targets",
    "Simulation", "SimulationConfig", "RunMode", "CombatOutcome",
    "BonusSearchResult", "find_minimum_elf_bonus", "run_with_bonus",
]
