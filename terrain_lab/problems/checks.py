from __future__ import annotations
import logging
import math
from collections import deque
from typing import Set, Tuple

from ..core.problem import SearchProblem

logger = logging.getLogger(__name__)


def reachable_locations(problem: SearchProblem, max_states: int = 100_000) -> Set[Tuple[int, int]]:
    """Keys of every location reachable from the start (breadth-first, start included)."""
    start = problem.initial_location()
    seen = {start.key}
    q = deque([start])
    while q and len(seen) < max_states:
        loc = q.popleft()
        for _, nxt, _ in problem.successors(loc):
            if nxt.key not in seen:
                seen.add(nxt.key)
                q.append(nxt)
    if q:
        logger.warning("reachable_locations stopped at max_states=%d with %d locations still queued; "
                       "the result is incomplete", max_states, len(q))
    return seen


def sanity_check_problem(problem: SearchProblem, max_states: int = 10_000) -> str:
    """Walks states breadth-first and checks costs and heuristic values are usable."""
    seen = set()
    q = deque([problem.initial_location()])
    steps = 0
    while q and steps < max_states:
        loc = q.popleft()
        if loc.key in seen:
            continue
        seen.add(loc.key)
        h = problem.heuristic(loc)
        if h is None or math.isnan(h) or h < 0:
            raise AssertionError(f"heuristic({loc}) = {h!r}; must be a non-negative number")
        for a, nxt, cost in problem.successors(loc):
            if cost is None or math.isnan(cost) or cost < 0:
                raise AssertionError(f"edge cost is {cost!r} for ({loc}, {a}, {nxt})")
            # consistency: h(n) <= c(n, n') + h(n')
            if h > cost + problem.heuristic(nxt) + 1e-9:
                raise AssertionError(f"heuristic is inconsistent across ({loc}, {a}, {nxt})")
            q.append(nxt)
        steps += 1
    return f"OK: visited {len(seen)} states; costs and heuristic look sane."
