"""
Cavern Combat Simulator - Gobliny kontra Elfy na siatce jaskini.

Moduły:
- core: Position, Grid, BFS, reguły i konfiguracja
- units: Faction, Unit
- combat: obrażenia
- simulation: silnik rund, strategia, szukanie bonusu
- text: parser i renderer mapy
- events: log zdarzeń JSON
"""

__version__ = "1.0.0"
