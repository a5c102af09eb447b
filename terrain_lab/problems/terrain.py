# terrain_lab/problems/terrain.py
from __future__ import annotations
import logging
from typing import AbstractSet, Iterable, Iterator, Optional, Sequence, Set, Tuple

import numpy as np

from ..config import GRASS_COST, MUD_COST
from ..core.location import MOVES, Location
from ..core.problem import SearchProblem, Successor

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]

_GRASS, _MUD, _WALL = ".", "~", "#"


class InvalidLocationError(ValueError):
    """Start or goal outside the map, or on a wall."""


def generate_cost_map(width: int, height: int, start: Location, goal: Location,
                      mud_probability: float, seed: Optional[int] = None) -> np.ndarray:
    """
    Random (height, width) array of step costs: each cell is independently mud
    with probability ``mud_probability``, except start and goal which stay grass.
    The same seed always gives the same map.
    """
    if width < 1 or height < 1:
        raise ValueError(f"Map must be at least 1x1, got {width}x{height}")
    if not 0.0 <= mud_probability <= 1.0:
        raise ValueError(f"mud_probability must be in [0, 1], got {mud_probability!r}")
    rng = np.random.default_rng(seed)
    mud = rng.random((height, width)) < mud_probability
    costs = np.where(mud, MUD_COST, GRASS_COST).astype(float)
    for loc in (start, goal):
        if 0 <= loc.x < width and 0 <= loc.y < height:
            costs[loc.y, loc.x] = GRASS_COST
    return costs


class TerrainMap:
    """
    Frozen grass/mud cost grid with optional impassable walls.

    - costs[y, x]: cost of stepping onto (x, y)
    - walls: cells that cannot be entered at all
    """
    def __init__(self, costs, walls: Iterable[Coord] = ()):
        arr = np.array(costs, dtype=float)
        if arr.ndim != 2 or arr.size == 0:
            raise ValueError(f"costs must be a non-empty 2D array, got shape {arr.shape}")
        if np.isnan(arr).any() or (arr < 0).any():
            raise ValueError("costs must be non-negative numbers")
        arr.setflags(write=False)
        self.costs = arr
        self.walls: AbstractSet[Coord] = frozenset((int(x), int(y)) for x, y in walls)

    @classmethod
    def random(cls, width: int, height: int, start: Location, goal: Location,
               mud_probability: float, seed: Optional[int] = None,
               walls: Iterable[Coord] = ()) -> "TerrainMap":
        return cls(generate_cost_map(width, height, start, goal, mud_probability, seed), walls)

    @classmethod
    def uniform(cls, width: int, height: int, walls: Iterable[Coord] = ()) -> "TerrainMap":
        return cls(np.full((height, width), GRASS_COST), walls)

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> "TerrainMap":
        """Build from text rows: '.' grass, '~' mud, '#' wall."""
        if not rows or len({len(r) for r in rows}) != 1:
            raise ValueError("rows must be non-empty and all the same length")
        costs = np.full((len(rows), len(rows[0])), GRASS_COST)
        walls: Set[Coord] = set()
        for y, row in enumerate(rows):
            for x, ch in enumerate(row):
                if ch == _MUD:
                    costs[y, x] = MUD_COST
                elif ch == _WALL:
                    walls.add((x, y))
                elif ch != _GRASS:
                    raise ValueError(f"Unknown terrain symbol {ch!r} at ({x}, {y})")
        return cls(costs, walls)

    @property
    def width(self) -> int:
        return self.costs.shape[1]

    @property
    def height(self) -> int:
        return self.costs.shape[0]

    def in_bounds(self, loc: Location) -> bool:
        return 0 <= loc.x < self.width and 0 <= loc.y < self.height

    def passable(self, loc: Location) -> bool:
        return self.in_bounds(loc) and loc.key not in self.walls

    def cost(self, loc: Location) -> float:
        return float(self.costs[loc.y, loc.x])

    def is_mud(self, loc: Location) -> bool:
        return self.in_bounds(loc) and self.cost(loc) >= MUD_COST

    def rows(self) -> Iterator[str]:
        for y in range(self.height):
            yield "".join(
                _WALL if (x, y) in self.walls else _MUD if self.is_mud(Location(x, y)) else _GRASS
                for x in range(self.width)
            )


class TerrainProblem(SearchProblem):
    """
    4-neighbour path finding over a TerrainMap.

    - ACTIONS: 'Up', 'Down', 'Left', 'Right' that stay in bounds and off walls
    - edge cost: cost of the cell being entered (grass 1, mud 10)
    - heuristic: Manhattan distance * GRASS_COST (admissible and consistent,
      since no step costs less than grass)
    """
    def __init__(self, terrain: TerrainMap, start: Location, goal: Location):
        for name, loc in (("start", start), ("goal", goal)):
            if not terrain.in_bounds(loc):
                raise InvalidLocationError(
                    f"{name} {loc} is outside the {terrain.width}x{terrain.height} map")
            if not terrain.passable(loc):
                raise InvalidLocationError(f"{name} {loc} is on a wall")
        self.terrain = terrain
        self.start = start
        self.goal = goal
        self._min_step = min(GRASS_COST, float(terrain.costs.min()))
        logger.debug("TerrainProblem %dx%d start=%s goal=%s walls=%d",
                     terrain.width, terrain.height, start, goal, len(terrain.walls))

    def initial_location(self) -> Location:
        return self.start

    def is_goal(self, loc: Location) -> bool:
        return loc == self.goal

    def heuristic(self, loc: Location) -> float:
        return float(loc.distance(self.goal)) * self._min_step

    def successors(self, loc: Location) -> Iterator[Successor]:
        for action in MOVES:
            nxt = loc.step(action)
            if self.terrain.passable(nxt):
                yield action, nxt, self.terrain.cost(nxt)

    def is_mud(self, loc: Location) -> bool:
        return self.terrain.is_mud(loc)


def make_terrain_problem(width: int, height: int, mud_probability: float,
                         seed: Optional[int] = None,
                         start: Optional[Location] = None,
                         goal: Optional[Location] = None) -> TerrainProblem:
    """Random map, corner to corner unless told otherwise."""
    start = start or Location(0, 0)
    goal = goal or Location(width - 1, height - 1)
    # Validate before generating so a bad start/goal is reported as such.
    bounds = TerrainMap.uniform(width, height)
    for name, loc in (("start", start), ("goal", goal)):
        if not bounds.in_bounds(loc):
            raise InvalidLocationError(f"{name} {loc} is outside the {width}x{height} map")
    terrain = TerrainMap.random(width, height, start, goal, mud_probability, seed)
    return TerrainProblem(terrain, start, goal)
