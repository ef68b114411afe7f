"""
Units module - jednostki walczące w jaskini.

Zawiera:
- Faction: Enum frakcji (GOBLIN, ELF)
- Unit: Jednostka z HP i pozycją
"""

from .unit import Faction, Unit

__all__ = ["Faction", "Unit"]
