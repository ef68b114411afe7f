"""
Pozycje na prostokątnej siatce jaskini.

Używamy współrzędnych (x, y) gdzie:
- x = kolumna (0 = lewa krawędź)
- y = wiersz (0 = górna krawędź)

Kolejność czytania (reading order):
    Pozycje porządkujemy po (wiersz, kolumna) rosnąco - tak jak
    czyta się tekst. Ta kolejność decyduje o kolejności tur
    i o wszystkich rozstrzygnięciach remisów.

    y=0:  (0,0) (1,0) (2,0) ...
    y=1:  (0,1) (1,1) (2,1) ...

Sąsiedzi (4 kierunki, bez przekątnych):
    Kierunek   (dx, dy)
    ─────────────────────
    UP   (↑)   ( 0, -1)
    LEFT (←)   (-1,  0)
    RIGHT(→)   (+1,  0)
    DOWN (↓)   ( 0, +1)

    Kolejność UP, LEFT, RIGHT, DOWN jest jednocześnie kolejnością
    czytania sąsiadów - BFS eksplorujący w tej kolejności wybiera
    pierwszy krok najwcześniejszy w kolejności czytania.

Przykład użycia:
    >>> a = Position(1, 1)
    >>> a.manhattan_distance(Position(4, 2))
    4
    >>> a.neighbors()
    [Position(x=1, y=0), Position(x=0, y=1), Position(x=2, y=1), Position(x=1, y=2)]
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Tuple


# Kolejność: UP, LEFT, RIGHT, DOWN
DIRECTIONS: List[Tuple[int, int]] = [
    (0, -1),   # UP
    (-1, 0),   # LEFT
    (+1, 0),   # RIGHT
    (0, +1),   # DOWN
]


@dataclass(frozen=True)
class Position:
    """
    Pole siatki (kolumna, wiersz), liczone od 0.

    Klasa jest niemutowalna (frozen=True), więc może być
    kluczem w słowniku lub elementem zbioru.

    Attributes:
        x (int): Kolumna
        y (int): Wiersz
    """
    x: int
    y: int

    @property
    def reading_key(self) -> Tuple[int, int]:
        """
        Klucz sortowania w kolejności czytania.

        Returns:
            Tuple[int, int]: (wiersz, kolumna)
        """
        return (self.y, self.x)

    def manhattan_distance(self, other: Position) -> int:
        """
        Odległość Manhattan |dx| + |dy|.

        Nie uwzględnia ścian ani jednostek - służy tylko do
        sprawdzenia czy dwa pola ze sobą sąsiadują (== 1).

        Example:
            >>> Position(0, 0).manhattan_distance(Position(2, 1))
            3
        """
        return abs(self.x - other.x) + abs(self.y - other.y)

    def neighbor(self, direction: int) -> Position:
        """Zwraca sąsiada w kierunku o indeksie z DIRECTIONS."""
        dx, dy = DIRECTIONS[direction]
        return Position(self.x + dx, self.y + dy)

    def neighbors(self) -> List[Position]:
        """
        Zwraca 4 sąsiadów w kolejności UP, LEFT, RIGHT, DOWN.

        Note:
            Nie sprawdza granic siatki - to robi Grid.
        """
        return [self.neighbor(i) for i in range(len(DIRECTIONS))]

    def to_list(self) -> List[int]:
        """Serializacja do [x, y] (event log, API)."""
        return [self.x, self.y]

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"
