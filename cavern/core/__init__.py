"""
Core module - podstawowe komponenty silnika.

Zawiera:
- Position: Współrzędne pola i kolejność czytania
- Grid: Siatka jaskini z terenem i zajętością
- find_path: BFS po otwartych polach
- CombatRules: Reguły walki (core.rules)
- ConfigLoader: Wczytywanie konfiguracji YAML (core.config_loader)
"""

from .position import Position, DIRECTIONS
from .pathfinding import find_path, find_path_next_step
from .grid import Grid, GridError, Terrain

__all__ = [
    "Position", "DIRECTIONS", "find_path", "find_path_next_step",
    "Grid", "GridError", "Terrain",
]
