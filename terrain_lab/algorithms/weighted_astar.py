# terrain_lab/algorithms/weighted_astar.py
# Weighted A*: same engine, heap ordered by g + w*h instead of g + h.
from __future__ import annotations
from typing import Optional
from .astar import AStarEngine
from ..config import WA_W
from ..core.frontiers import weighted_f_cost
from ..core.metrics import SearchResult
from ..core.problem import SearchProblem

def weighted_a_star_search(problem: SearchProblem, w: float = WA_W,
                           max_expansions: Optional[int] = None) -> SearchResult:
    """
    Weighted A*: f = g + w*h (w>1 focuses search; not optimal in general).
    """
    name = f"WeightedA*(w={w})"
    return AStarEngine(problem, weighted_f_cost(w), name=name, max_expansions=max_expansions).run()
