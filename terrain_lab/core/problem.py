# Defines the interface a search domain has to provide to the engine (start, goal test, successors, heuristic).
# terrain_lab/core/problem.py
from __future__ import annotations
from typing import Hashable, Iterable, Protocol, Tuple

from .location import Location

Action = Hashable
# (action label, neighbour, cost of the edge)
Successor = Tuple[Action, Location, float]


class SearchProblem(Protocol):
    """Search domain as seen by the engine.

    All four methods must be pure. ``heuristic`` has to be admissible and
    consistent for A* to return optimal paths; an inadmissible heuristic is
    not detected, it only degrades the result.
    """
    def initial_location(self) -> Location: ...
    def is_goal(self, loc: Location) -> bool: ...
    def heuristic(self, loc: Location) -> float: ...
    # Order is free; it only changes which of several equal-cost nodes pops first.
    def successors(self, loc: Location) -> Iterable[Successor]: ...
