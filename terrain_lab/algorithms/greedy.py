# terrain_lab/algorithms/greedy.py
from __future__ import annotations
from typing import Optional
from .astar import AStarEngine
from ..core.frontiers import by_h_cost
from ..core.metrics import SearchResult
from ..core.problem import SearchProblem

def greedy_best_first_search(problem: SearchProblem, max_expansions: Optional[int] = None) -> SearchResult:
    # greedy: order by h alone; g is still tracked so the reported cost is real
    return AStarEngine(problem, by_h_cost, name="Greedy", max_expansions=max_expansions).run()
