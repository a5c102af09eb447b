# terrain_lab/core/location.py
# Grid coordinates for the terrain search: x is the column, y is the row.
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Tuple

# Ordered: successor generation follows this order, which only matters for tie-breaks.
MOVES: Dict[str, Tuple[int, int]] = {
    "Up": (0, -1),
    "Down": (0, 1),
    "Left": (-1, 0),
    "Right": (1, 0),
}


@dataclass(frozen=True)
class Location:
    x: int
    y: int

    @property
    def key(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def distance(self, other: "Location") -> int:
        """Manhattan distance (4-neighbour grid metric)."""
        return abs(self.x - other.x) + abs(self.y - other.y)

    def step(self, action: str) -> "Location":
        try:
            dx, dy = MOVES[action]
        except KeyError:
            raise ValueError(f"Unknown move {action!r}; expected one of {list(MOVES)}") from None
        return Location(self.x + dx, self.y + dy)

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"
