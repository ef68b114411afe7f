"""
Loader konfiguracji z automatycznym uzupełnianiem wartości domyślnych.

Konfiguracja leży w data/defaults.yaml:

    combat:
      initial_hit_points:
        goblin: 200
        elf: 200
      base_damage: 3
    simulation:
      max_rounds: 10000
      record_frames: false
    bonus_search:
      start: 0
      max_bonus: 200

Logika merge (uzupełniania defaults):
    1. Zacznij od wbudowanych BUILTIN_DEFAULTS
    2. Nadpisz wartościami z pliku YAML (deep merge)
    3. Brakujące klucze w pliku -> wartości wbudowane

Użycie:
    >>> loader = ConfigLoader("data/")
    >>> rules = loader.load_combat_rules()
    >>> rules.base_damage
    3
"""

from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, Optional
import copy

import yaml

from .rules import CombatRules, INITIAL_HIT_POINTS
from ..combat.damage import BASE_DAMAGE


BUILTIN_DEFAULTS: Dict[str, Any] = {
    "combat": {
        "initial_hit_points": {
            "goblin": INITIAL_HIT_POINTS,
            "elf": INITIAL_HIT_POINTS,
        },
        "base_damage": BASE_DAMAGE,
    },
    "simulation": {
        "max_rounds": 10000,
        "record_frames": False,
    },
    "bonus_search": {
        "start": 0,
        "max_bonus": 200,
    },
}


class ConfigLoader:
    """
    Ładuje konfigurację z pliku YAML z automatycznym merge defaults.

    Attributes:
        data_path (Path): Ścieżka do folderu data/
        filename (str): Nazwa pliku konfiguracji
        _defaults (Dict): Cache wczytanej konfiguracji
    """

    def __init__(self, data_path: str = "data/", filename: str = "defaults.yaml"):
        """
        Args:
            data_path: Ścieżka do folderu z plikami YAML
            filename: Nazwa pliku konfiguracji
        """
        self.data_path = Path(data_path)
        self.filename = filename
        self._defaults: Optional[Dict] = None

    # ─────────────────────────────────────────────────────────────────────────
    # WCZYTYWANIE PLIKÓW
    # ─────────────────────────────────────────────────────────────────────────

    def _load_yaml(self, filename: str) -> Dict:
        """
        Wczytuje plik YAML.

        Raises:
            FileNotFoundError: Jeśli plik nie istnieje
        """
        filepath = self.data_path / filename
        with open(filepath, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}

    def get_defaults(self) -> Dict:
        """
        Zwraca pełną konfigurację (plik + wartości wbudowane).

        Cache'uje wczytany plik - kolejne wywołania są szybkie.
        """
        if self._defaults is None:
            self._defaults = self._deep_merge(BUILTIN_DEFAULTS, self._load_yaml(self.filename))
        return self._defaults

    def get_simulation_config(self) -> Dict:
        """Sekcja `simulation` (max_rounds, record_frames)."""
        return self.get_defaults()["simulation"]

    def get_search_config(self) -> Dict:
        """Sekcja `bonus_search` (start, max_bonus)."""
        return self.get_defaults()["bonus_search"]

    def load_combat_rules(self) -> CombatRules:
        """
        Buduje CombatRules z sekcji `combat`.

        Raises:
            ValueError: Jeśli wartości są niepoprawne (np. HP <= 0)
        """
        combat = self.get_defaults()["combat"]
        hit_points = combat["initial_hit_points"]
        return CombatRules(
            goblin_hit_points=int(hit_points["goblin"]),
            elf_hit_points=int(hit_points["elf"]),
            base_damage=int(combat["base_damage"]),
        )

    # ─────────────────────────────────────────────────────────────────────────
    # HELPERY
    # ─────────────────────────────────────────────────────────────────────────

    @staticmethod
    def _deep_merge(base: Dict, override: Dict) -> Dict:
        """
        Głęboko łączy dwa słowniki.

        Override nadpisuje wartości w base.
        Nested dicts są merge'owane rekurencyjnie.
        """
        result = copy.deepcopy(base)

        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = ConfigLoader._deep_merge(result[key], value)
            else:
                result[key] = copy.deepcopy(value)

        return result

    def reload(self) -> None:
        """Czyści cache i wymusza ponowne wczytanie pliku."""
        self._defaults = None
