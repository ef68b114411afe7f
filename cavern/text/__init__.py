"""
Text module - parser i renderer mapy jaskini.

Zawiera:
- parse_grid: Tekst -> Grid
- MapParseError: Błąd niepoprawnej mapy
- render_grid: Grid -> tekst z adnotacjami HP
"""

from .parser import parse_grid, MapParseError
from .renderer import render_grid, render_row

__all__ = ["parse_grid", "MapParseError", "render_grid", "render_row"]
