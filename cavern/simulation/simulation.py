"""
Główny silnik symulacji walki w jaskini.

Walka toczy się w rundach. Każda runda daje szansę na ruch każdej
jednostce żywej na początku rundy, w kolejności czytania.

PĘTLA RUNDY:
═══════════════════════════════════════════════════════════════════

    0. SNAPSHOT
       ─────────────────────────────────────────────────────────
       • grid.units_in_reading_order() na starcie rundy
       • mutacje siatki nie zmieniają składu ani kolejności

    Dla każdej jednostki ze snapshotu:

    1. CHECK_END
       ─────────────────────────────────────────────────────────
       • na siatce została jedna frakcja -> koniec walki,
         runda NIEPEŁNA (sprawdzane także dla martwych
         jednostek ze snapshotu)

    2. SKIP DEAD
       ─────────────────────────────────────────────────────────
       • jednostka zginęła wcześniej w tej rundzie -> pomiń

    3. STRATEGY + EXECUTE
       ─────────────────────────────────────────────────────────
       • choose_action() -> Move / Attack / NO_ACTION
       • Move -> grid.move_unit, Attack -> grid.attack_unit

    4. DRUGA FAZA TURY
       ─────────────────────────────────────────────────────────
       • po ruchu: ponowna strategia z nowej pozycji
       • wykonywana TYLKO jeśli wynik to Attack
       • nigdy dwa ruchy, nigdy atak a potem ruch

    5. ELF DEATH CHECK (tylko RunMode.STOP_ON_ELF_DEATH)
       ─────────────────────────────────────────────────────────
       • liczba Elfów spadła w tej turze -> przerwij walkę,
         wynik na korzyść Goblinów

WYNIK:
═══════════════════════════════════════════════════════════════════

    score = completed_rounds * suma HP żywych jednostek

DETERMINIZM:
═══════════════════════════════════════════════════════════════════

    Brak losowości. Ta sama mapa i bonus = ten sam przebieg:
    • kolejność tur = kolejność czytania
    • remisy celów = (distance, hp, wiersz, kolumna)
    • remisy kroków = BFS w kolejności UP, LEFT, RIGHT, DOWN

Przykład użycia:
    >>> grid = parse_grid(Path("data/example.txt").read_text())
    >>> sim = Simulation(grid, SimulationConfig(elf_attack_bonus=1))
    >>> outcome = sim.run()
    >>> outcome.winner, outcome.completed_rounds, outcome.score
    (<Faction.ELF: 'E'>, 51, 5100)
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from ..core.grid import Grid
from ..core.position import Position
from ..events.event_logger import EventLogger
from ..text.renderer import render_grid
from ..units.unit import Faction, Unit
from .strategy import (
    Attack, Move, UnitAction,
    action_for, choose_action, select_target,
)


class RunMode(Enum):
    """Tryb biegu symulacji."""

    COMPLETE = "complete"                     # walka do naturalnego końca
    STOP_ON_ELF_DEATH = "stop_on_elf_death"   # przerwij przy pierwszej śmierci Elfa


@dataclass
class SimulationConfig:
    """
    Konfiguracja symulacji.

    Attributes:
        elf_attack_bonus (int): Bonus obrażeń Elfów (>= 0)
        mode (RunMode): Tryb biegu
        max_rounds (Optional[int]): Limit pełnych rund (None = bez limitu)
        record_frames (bool): Zapisuj wyrenderowaną mapę po każdej rundzie
    """
    elf_attack_bonus: int = 0
    mode: RunMode = RunMode.COMPLETE
    max_rounds: Optional[int] = 10000
    record_frames: bool = False

    def __post_init__(self) -> None:
        if self.elf_attack_bonus < 0:
            raise ValueError(f"elf_attack_bonus must be non-negative, got {self.elf_attack_bonus}")
        if self.max_rounds is not None and self.max_rounds < 0:
            raise ValueError(f"max_rounds must be non-negative, got {self.max_rounds}")


@dataclass
class CombatOutcome:
    """
    Wynik walki.

    Attributes:
        winner (Optional[Faction]): Zwycięska frakcja (None = brak rozstrzygnięcia)
        completed_rounds (int): Liczba pełnych rund
        total_hit_points (int): Suma HP żywych jednostek na końcu
        elf_casualties (int): Liczba poległych Elfów
        aborted (bool): Przerwano po śmierci Elfa (STOP_ON_ELF_DEATH)
        stalled (bool): Pełna runda bez ruchu i ataku albo osiągnięto max_rounds
    """
    winner: Optional[Faction]
    completed_rounds: int
    total_hit_points: int
    elf_casualties: int = 0
    aborted: bool = False
    stalled: bool = False

    @property
    def score(self) -> int:
        """completed_rounds * total_hit_points."""
        return self.completed_rounds * self.total_hit_points

    @property
    def elves_won_flawlessly(self) -> bool:
        """Elfy wygrały bez strat."""
        return self.winner is Faction.ELF and self.elf_casualties == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "winner": self.winner.name if self.winner else None,
            "completed_rounds": self.completed_rounds,
            "total_hit_points": self.total_hit_points,
            "score": self.score,
            "elf_casualties": self.elf_casualties,
            "aborted": self.aborted,
            "stalled": self.stalled,
        }


class Simulation:
    """
    Silnik walki - jedyny właściciel i mutator siatki w trakcie biegu.

    Attributes:
        grid (Grid): Siatka (przekazana jawnie, brak stanu globalnego)
        config (SimulationConfig): Konfiguracja
        round (int): Numer aktualnej rundy = liczba pełnych rund
        logger (EventLogger): Logger zdarzeń
        is_finished (bool): Czy walka się zakończyła
        outcome (Optional[CombatOutcome]): Wynik po zakończeniu

    Example:
        >>> sim = Simulation(parse_grid(text))
        >>> outcome = sim.run()
    """

    def __init__(self, grid: Grid, config: Optional[SimulationConfig] = None):
        self.grid = grid
        self.config = config or SimulationConfig()
        self.round = 0

        self.logger = EventLogger(
            grid_width=grid.width,
            grid_height=grid.height,
            elf_attack_bonus=self.config.elf_attack_bonus,
        )

        self.is_finished = False
        self.outcome: Optional[CombatOutcome] = None
        self._round_actions = 0
        self._initial_elves = grid.count(Faction.ELF)

    # ─────────────────────────────────────────────────────────────────────────
    # GŁÓWNA PĘTLA
    # ─────────────────────────────────────────────────────────────────────────

    def run(self) -> CombatOutcome:
        """
        Uruchamia walkę do końca.

        Returns:
            CombatOutcome: Wynik walki
        """
        self.logger.log_simulation_start(
            [u.to_dict() for u in self.grid.units_in_reading_order()],
            self.config.mode.value,
        )

        while not self.is_finished:
            if len(self.grid.factions_alive()) < 2:
                # Walka rozstrzygnięta przed rundą (lub mapa bez przeciwników)
                self._finish(self._sole_faction())
                break

            if self.config.max_rounds is not None and self.round >= self.config.max_rounds:
                self._finish(None, stalled=True)
                break

            self.logger.log_round_start(self.round)
            completed = self.run_round()
            self._log_round_end(completed)

            if completed:
                self.round += 1
                if self._round_actions == 0:
                    # Runda bez ruchu i ataku - każda kolejna będzie identyczna
                    self._finish(None, stalled=True)

        outcome = self.outcome
        self.logger.log_simulation_end(self.round, outcome.to_dict())
        return outcome

    def run_round(self) -> bool:
        """
        Wykonuje jedną rundę.

        Returns:
            bool: True jeśli runda była pełna, False jeśli walka
                  skończyła się w jej trakcie
        """
        self._round_actions = 0

        for unit in self.grid.units_in_reading_order():
            if len(self.grid.factions_alive()) < 2:
                self._finish(self._sole_faction())
                return False

            if not self.grid.contains(unit):
                continue  # zginęła wcześniej w tej rundzie

            elves_before = self.grid.count(Faction.ELF)

            self._take_turn(unit)

            if self.config.mode is RunMode.STOP_ON_ELF_DEATH:
                elves_after = self.grid.count(Faction.ELF)
                if elves_after < elves_before:
                    self.logger.log_combat_aborted(self.round, unit.id, elves_before, elves_after)
                    self._finish(Faction.GOBLIN, aborted=True)
                    return False

        return True

    # ─────────────────────────────────────────────────────────────────────────
    # TURA JEDNOSTKI
    # ─────────────────────────────────────────────────────────────────────────

    def _take_turn(self, unit: Unit) -> None:
        """Tura: akcja, a po ruchu ewentualny atak z nowej pozycji."""
        action = self._decide(unit)
        self._execute(unit, action)

        if isinstance(action, Move):
            follow_up = choose_action(self.grid, unit, self.config.elf_attack_bonus)
            if isinstance(follow_up, Attack):
                self._execute(unit, follow_up)

    def _decide(self, unit: Unit) -> UnitAction:
        """Strategia jednostki + log wybranego pola docelowego."""
        target = select_target(self.grid, unit)
        action = action_for(unit, target, self.config.elf_attack_bonus)

        if isinstance(action, Move):
            self.logger.log_target_acquired(
                self.round, unit.id, target.enemy.id,
                target.position.to_list(), target.distance,
            )

        return action

    def _execute(self, unit: Unit, action: UnitAction) -> Position:
        """
        Jedyny dispatcher akcji.

        Returns:
            Position: Pozycja jednostki po akcji
        """
        if isinstance(action, Move):
            self._round_actions += 1
            old_pos = unit.position
            new_pos = self.grid.move_unit(unit, action.destination)
            self.logger.log_move(self.round, unit.id, old_pos.to_list(), new_pos.to_list())
            return new_pos

        if isinstance(action, Attack):
            self._round_actions += 1
            result = self.grid.attack_unit(unit, action.target, action.bonus)
            self.logger.log_attack(
                self.round, unit.id, result.target_id, **result.to_dict(),
            )
            if result.killed:
                self.logger.log_death(self.round, result.target_id, unit.id, action.target.to_list())
            return unit.position

        # NO_ACTION - cichy no-op
        return unit.position

    # ─────────────────────────────────────────────────────────────────────────
    # UTILITY
    # ─────────────────────────────────────────────────────────────────────────

    def _sole_faction(self) -> Optional[Faction]:
        alive = self.grid.factions_alive()
        return next(iter(alive)) if len(alive) == 1 else None

    def _finish(self, winner: Optional[Faction], aborted: bool = False, stalled: bool = False) -> None:
        """Zamyka walkę i zapisuje wynik."""
        self.is_finished = True
        self.outcome = CombatOutcome(
            winner=winner,
            completed_rounds=self.round,
            total_hit_points=self.grid.total_hit_points(),
            elf_casualties=self._initial_elves - self.grid.count(Faction.ELF),
            aborted=aborted,
            stalled=stalled,
        )

    def _log_round_end(self, completed: bool) -> None:
        frame = render_grid(self.grid) if self.config.record_frames else None
        self.logger.log_round_end(self.round, completed, frame)

    def get_result(self) -> Dict[str, Any]:
        """
        Zwraca wynik walki jako słownik (API, CLI).

        Raises:
            RuntimeError: Jeśli walka jeszcze się nie skończyła
        """
        if self.outcome is None:
            raise RuntimeError("Simulation has not finished yet")
        return {
            **self.outcome.to_dict(),
            "survivors": [u.to_dict() for u in self.grid.units_in_reading_order()],
            "final_grid": render_grid(self.grid),
        }

    def save_log(self, filepath: str) -> None:
        """Zapisuje log zdarzeń do pliku JSON."""
        self.logger.save(filepath)
