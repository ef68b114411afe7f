"""
Przeszukiwanie wszerz (BFS) dla siatki jaskini.

Każdy ruch na sąsiednie pole kosztuje 1, więc BFS znajduje
najkrótszą ścieżkę bez heurystyki.

Jak działa BFS:
    1. Kolejka FIFO zaczyna się od startu
    2. Zdejmij pole z kolejki; jeśli to cel - odtwórz ścieżkę
    3. Dodaj do kolejki nieodwiedzonych otwartych sąsiadów
       w kolejności UP, LEFT, RIGHT, DOWN
    4. Rodzic pola ustalany jest przy PIERWSZYM odkryciu

Rozstrzyganie remisów:
    Sąsiedzi są dodawani w kolejności czytania, a rodzic nie jest
    później nadpisywany. Kolejka na każdym poziomie jest więc
    posortowana po pierwszym kroku - spośród wszystkich najkrótszych
    ścieżek zwracana jest ta, której pierwszy krok jest najwcześniejszy
    w kolejności czytania.

Przechodniość:
    Tylko pola otwarte (nie ściana, nie zajęte). Pole startowe jest
    zajęte przez samą jednostkę - nie wraca do przeszukiwania.

Przykład użycia:
    >>> path = find_path(grid, Position(1, 1), Position(4, 1))
    >>> path
    [Position(x=1, y=1), Position(x=2, y=1), Position(x=3, y=1), Position(x=4, y=1)]

Edge cases:
    - Start == Goal: zwraca [start]
    - Brak ścieżki: zwraca pustą listę []
    - Start lub Goal poza siatką: zwraca []
"""

from __future__ import annotations
from collections import deque
from typing import Deque, Dict, List, Optional, TYPE_CHECKING

from .position import Position

if TYPE_CHECKING:
    from .grid import Grid


def find_path(grid: "Grid", start: Position, goal: Position) -> List[Position]:
    """
    Znajduje najkrótszą ścieżkę między dwoma polami.

    Args:
        grid: Siatka z informacją o terenie i zajętości
        start: Pozycja startowa (zwykle pole jednostki)
        goal: Pozycja docelowa (musi być otwarta, chyba że == start)

    Returns:
        List[Position]: Ścieżka od start do goal (włącznie z oboma).
                        Pusta lista jeśli ścieżka nie istnieje.

    Complexity:
        Time: O(w * h)
        Space: O(w * h) dla mapy rodziców
    """
    if not grid.is_valid(start) or not grid.is_valid(goal):
        return []

    if start == goal:
        return [start]

    queue: Deque[Position] = deque([start])
    parents: Dict[Position, Position] = {}
    visited = {start}

    while queue:
        current = queue.popleft()

        if current == goal:
            return _reconstruct_path(parents, start, goal)

        for neighbor in grid.open_neighbors(current):
            if neighbor in visited:
                continue
            visited.add(neighbor)
            parents[neighbor] = current
            queue.append(neighbor)

    # Brak ścieżki
    return []


def _reconstruct_path(
    parents: Dict[Position, Position],
    start: Position,
    goal: Position,
) -> List[Position]:
    """Odtwarza ścieżkę od goal do start używając mapy rodziców."""
    path = [goal]
    current = goal

    while current != start:
        current = parents[current]
        path.append(current)

    path.reverse()
    return path


def find_path_next_step(grid: "Grid", start: Position, goal: Position) -> Optional[Position]:
    """
    Znajduje tylko następny krok na ścieżce do celu.

    Returns:
        Optional[Position]: Następne pole lub None jeśli brak ścieżki/jesteśmy w celu
    """
    path = find_path(grid, start, goal)

    if len(path) < 2:
        return None

    return path[1]
