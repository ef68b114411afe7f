"""
System logowania zdarzeń do formatu JSON dla replay.

Każde zdarzenie w symulacji (ruch, atak, śmierć, koniec rundy)
jest zapisywane z numerem rundy i kontekstem. Log może być później
użyty do odtworzenia walki runda po rundzie.

TYPY ZDARZEŃ:
═══════════════════════════════════════════════════════════════════

    SIMULATION_START
    ─────────────────────────────────────────────────────────────
    Początek walki.
    Data: units (lista snapshotów), elf_attack_bonus, mode

    SIMULATION_END
    ─────────────────────────────────────────────────────────────
    Koniec walki.
    Data: winner, completed_rounds, total_hit_points, score

    ROUND_START / ROUND_END
    ─────────────────────────────────────────────────────────────
    Granice rundy.
    Data (END): completed, opcjonalnie frame (wyrenderowana mapa)

    TARGET_ACQUIRED
    ─────────────────────────────────────────────────────────────
    Jednostka wybrała pole docelowe ruchu.
    Data: enemy_id, cell [x, y], distance

    UNIT_MOVE
    ─────────────────────────────────────────────────────────────
    Ruch jednostki o jedno pole.
    Data: from [x, y], to [x, y]

    UNIT_ATTACK
    ─────────────────────────────────────────────────────────────
    Atak na sąsiada.
    Data: damage, hp_after, killed

    UNIT_DEATH
    ─────────────────────────────────────────────────────────────
    Śmierć jednostki (usunięcie z siatki).
    Data: killer_id, position

    COMBAT_ABORTED
    ─────────────────────────────────────────────────────────────
    Przerwanie walki po pierwszej śmierci Elfa (tryb STOP_ON_ELF_DEATH).
    Data: elves_before, elves_after

FORMAT LOGU:
═══════════════════════════════════════════════════════════════════

{
    "metadata": {
        "version": "1.0",
        "grid": {"width": 7, "height": 7},
        "elf_attack_bonus": 0,
        "timestamp": "2024-01-01T12:00:00"
    },
    "initial_state": {"units": [...]},
    "events": [
        {"round": 0, "type": "UNIT_MOVE", "unit_id": "goblin_0",
         "data": {"from": [1, 1], "to": [2, 1]}},
        ...
    ],
    "final_state": {"winner": "GOBLIN", "completed_rounds": 67, ...}
}
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional
from datetime import datetime
import json
from pathlib import Path


class EventType(Enum):
    """Typ zdarzenia w symulacji."""

    # Symulacja
    SIMULATION_START = auto()
    SIMULATION_END = auto()
    COMBAT_ABORTED = auto()

    # Rundy
    ROUND_START = auto()
    ROUND_END = auto()

    # Jednostki
    TARGET_ACQUIRED = auto()
    UNIT_MOVE = auto()
    UNIT_ATTACK = auto()
    UNIT_DEATH = auto()


@dataclass
class GameEvent:
    """
    Pojedyncze zdarzenie w symulacji.

    Attributes:
        round (int): Numer rundy (od 0)
        event_type (EventType): Typ zdarzenia
        unit_id (Optional[str]): ID jednostki (jeśli dotyczy jednostki)
        target_id (Optional[str]): ID celu (jeśli dotyczy)
        data (Dict): Dodatkowe dane specyficzne dla typu zdarzenia
    """
    round: int
    event_type: EventType
    unit_id: Optional[str] = None
    target_id: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Serializuje zdarzenie do słownika."""
        result = {
            "round": self.round,
            "type": self.event_type.name,
        }

        if self.unit_id:
            result["unit_id"] = self.unit_id
        if self.target_id:
            result["target_id"] = self.target_id
        if self.data:
            result["data"] = self.data

        return result


class EventLogger:
    """
    Logger zdarzeń symulacji.

    Zbiera wszystkie zdarzenia i może je zapisać do pliku JSON.

    Example:
        >>> logger = EventLogger(grid_width=7, grid_height=7)
        >>> logger.log_move(0, "goblin_0", [1, 1], [2, 1])
        >>> logger.save("output/battle.json")
    """

    def __init__(self, grid_width: int, grid_height: int, elf_attack_bonus: int = 0):
        self.events: List[GameEvent] = []
        self.metadata: Dict[str, Any] = {
            "version": "1.0",
            "grid": {"width": grid_width, "height": grid_height},
            "elf_attack_bonus": elf_attack_bonus,
            "timestamp": datetime.now().isoformat(),
        }
        self.initial_state: Dict[str, Any] = {}
        self.final_state: Dict[str, Any] = {}

    # ─────────────────────────────────────────────────────────────────────────
    # LOGOWANIE OGÓLNE
    # ─────────────────────────────────────────────────────────────────────────

    def log(self, event: GameEvent) -> None:
        """Dodaje zdarzenie do logu."""
        self.events.append(event)

    def log_event(
        self,
        round_number: int,
        event_type: EventType,
        unit_id: Optional[str] = None,
        target_id: Optional[str] = None,
        **data: Any,
    ) -> GameEvent:
        """
        Tworzy i loguje zdarzenie.

        Args:
            round_number: Numer rundy
            event_type: Typ zdarzenia
            unit_id: ID jednostki
            target_id: ID celu
            **data: Dodatkowe dane

        Returns:
            GameEvent: Utworzone zdarzenie
        """
        event = GameEvent(
            round=round_number,
            event_type=event_type,
            unit_id=unit_id,
            target_id=target_id,
            data=dict(data),
        )
        self.log(event)
        return event

    # ─────────────────────────────────────────────────────────────────────────
    # POMOCNICZE METODY LOGOWANIA
    # ─────────────────────────────────────────────────────────────────────────

    def log_simulation_start(self, units: List[Dict], mode: str) -> None:
        """Loguje start symulacji."""
        self.initial_state = {"units": units}
        self.log_event(0, EventType.SIMULATION_START, units=units, mode=mode)

    def log_simulation_end(self, round_number: int, outcome: Dict[str, Any]) -> None:
        """Loguje koniec symulacji."""
        self.final_state = dict(outcome)
        self.log_event(round_number, EventType.SIMULATION_END, **outcome)

    def log_round_start(self, round_number: int) -> None:
        self.log_event(round_number, EventType.ROUND_START)

    def log_round_end(
        self,
        round_number: int,
        completed: bool,
        frame: Optional[str] = None,
    ) -> None:
        """Loguje koniec rundy (opcjonalnie z wyrenderowaną mapą)."""
        data: Dict[str, Any] = {"completed": completed}
        if frame is not None:
            data["frame"] = frame
        self.log_event(round_number, EventType.ROUND_END, **data)

    def log_target_acquired(
        self,
        round_number: int,
        unit_id: str,
        enemy_id: str,
        cell: List[int],
        distance: int,
    ) -> None:
        """Loguje wybór pola docelowego."""
        self.log_event(
            round_number,
            EventType.TARGET_ACQUIRED,
            unit_id=unit_id,
            target_id=enemy_id,
            cell=cell,
            distance=distance,
        )

    def log_move(
        self,
        round_number: int,
        unit_id: str,
        from_pos: List[int],
        to_pos: List[int],
    ) -> None:
        """Loguje ruch jednostki."""
        self.log_event(
            round_number,
            EventType.UNIT_MOVE,
            unit_id=unit_id,
            **{"from": from_pos, "to": to_pos},
        )

    def log_attack(
        self,
        round_number: int,
        unit_id: str,
        target_id: str,
        damage: int,
        hp_after: int,
        killed: bool,
    ) -> None:
        """Loguje atak."""
        self.log_event(
            round_number,
            EventType.UNIT_ATTACK,
            unit_id=unit_id,
            target_id=target_id,
            damage=damage,
            hp_after=hp_after,
            killed=killed,
        )

    def log_death(
        self,
        round_number: int,
        unit_id: str,
        killer_id: Optional[str],
        position: List[int],
    ) -> None:
        """Loguje śmierć jednostki."""
        self.log_event(
            round_number,
            EventType.UNIT_DEATH,
            unit_id=unit_id,
            killer_id=killer_id,
            position=position,
        )

    def log_combat_aborted(self, round_number: int, unit_id: str, elves_before: int, elves_after: int) -> None:
        self.log_event(
            round_number,
            EventType.COMBAT_ABORTED,
            unit_id=unit_id,
            elves_before=elves_before,
            elves_after=elves_after,
        )

    # ─────────────────────────────────────────────────────────────────────────
    # SERIALIZACJA
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> Dict[str, Any]:
        """
        Serializuje cały log do słownika.

        Returns:
            Dict: Pełny log w formacie dla JSON
        """
        return {
            "metadata": self.metadata,
            "initial_state": self.initial_state,
            "events": [e.to_dict() for e in self.events],
            "final_state": self.final_state,
        }

    def save(self, filepath: str) -> None:
        """
        Zapisuje log do pliku JSON.

        Args:
            filepath: Ścieżka do pliku (foldery tworzone automatycznie)
        """
        path = Path(filepath)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w', encoding='utf-8') as f:
            json.dump(self.to_dict(), f, indent=2, ensure_ascii=False)

    def to_json(self, indent: Optional[int] = 2) -> str:
        """
        Zwraca log jako string JSON.

        Args:
            indent: Wcięcie (None = compact)
        """
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    # ─────────────────────────────────────────────────────────────────────────
    # STATYSTYKI
    # ─────────────────────────────────────────────────────────────────────────

    def get_events(self) -> List[Dict[str, Any]]:
        """Zwraca zdarzenia jako listę słowników (API)."""
        return [e.to_dict() for e in self.events]

    def get_event_count(self) -> int:
        """Zwraca liczbę zdarzeń."""
        return len(self.events)

    def get_events_by_type(self, event_type: EventType) -> List[GameEvent]:
        """Filtruje zdarzenia po typie."""
        return [e for e in self.events if e.event_type == event_type]

    def get_events_for_unit(self, unit_id: str) -> List[GameEvent]:
        """Filtruje zdarzenia dla jednostki."""
        return [e for e in self.events if e.unit_id == unit_id]

    def get_events_in_round(self, round_number: int) -> List[GameEvent]:
        """Filtruje zdarzenia w rundzie."""
        return [e for e in self.events if e.round == round_number]

    def get_frames(self) -> List[str]:
        """Wyrenderowane mapy z końca rund (jeśli były nagrywane)."""
        return [
            e.data["frame"]
            for e in self.get_events_by_type(EventType.ROUND_END)
            if "frame" in e.data
        ]
