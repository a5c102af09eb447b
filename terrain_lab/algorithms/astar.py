# terrain_lab/algorithms/astar.py
"""
Step-by-step A* over a SearchProblem.

The engine owns three structures for one run:

- frontier: MinCostHeap of Nodes not yet expanded (may hold stale duplicates)
- best:     location key -> lowest g-cost at which it was pushed
- closed:   location keys already popped

Each call to ``step()`` pops one node and returns a StepRecord describing the
state after it, so a caller can render or pause between steps. A cheaper path
to a location pushes a new Node rather than updating the old one; the old one
is skipped when it pops (its g-cost is above ``best``).
"""
from __future__ import annotations
import enum
import logging
import math
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterator, Optional, Set, Tuple

from ..core.frontiers import MinCostHeap, Precedes, by_f_cost
from ..core.metrics import Diagnostics, MeasuredRun, SearchResult
from ..core.node import Node
from ..core.problem import Action, SearchProblem
from ..core.utils import reconstruct_path

logger = logging.getLogger(__name__)

Key = Tuple[int, int]


class SearchStatus(enum.Enum):
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    EXHAUSTED = "exhausted"          # frontier empty: no path exists
    LIMIT_REACHED = "limit reached"  # stopped by max_expansions; a path may still exist


@dataclass(frozen=True)
class StepRecord:
    index: int                   # 1 for the first pop
    current: Node
    path: Tuple[Action, ...]     # actions from the start to current
    frontier: Tuple[Node, ...]   # heap order, not sorted
    closed: FrozenSet[Key]
    stale: bool                  # popped but not expanded
    status: SearchStatus


class AStarEngine:
    def __init__(self, problem: SearchProblem, precedes: Precedes = by_f_cost,
                 name: str = "A*", max_expansions: Optional[int] = None):
        self.problem = problem
        self.name = name
        self.max_expansions = max_expansions

        start = problem.initial_location()
        root = Node(start, g_cost=0.0, h_cost=problem.heuristic(start))
        self.frontier: MinCostHeap[Node] = MinCostHeap(precedes)
        self.frontier.push(root)
        self.best: Dict[Key, float] = {start.key: 0.0}
        self.closed: Set[Key] = set()

        self.status = SearchStatus.RUNNING
        self.steps_taken = 0
        self.goal_node: Optional[Node] = None
        self.diagnostics: Optional[Diagnostics] = None
        self._error: Optional[str] = None
        self._result: Optional[SearchResult] = None

    @property
    def done(self) -> bool:
        return self.status is not SearchStatus.RUNNING

    def step(self) -> Optional[StepRecord]:
        """One pop (and expansion, unless stale). None once the run is over."""
        if self.done:
            return None
        if self.max_expansions is not None and self.steps_taken >= self.max_expansions:
            self._error = "expansion limit reached"
            self._finish(SearchStatus.LIMIT_REACHED)
            return None

        curr = self.frontier.pop()
        if curr is None:
            self._finish(SearchStatus.EXHAUSTED)
            return None

        self.steps_taken += 1
        key = curr.location.key
        # Close before the goal test: start == goal then reports 1 explored, not 0.
        self.closed.add(key)

        stale = False
        if self.problem.is_goal(curr.location):
            self.goal_node = curr
            actions, _ = reconstruct_path(curr)
            self.diagnostics = Diagnostics.compute(len(actions), len(self.closed))
            self._finish(SearchStatus.SUCCEEDED)
        elif curr.g_cost > self.best[key]:
            stale = True
        else:
            self._expand(curr)

        record = StepRecord(
            index=self.steps_taken,
            current=curr,
            path=tuple(reconstruct_path(curr)[0]),
            frontier=self.frontier.snapshot(),
            closed=frozenset(self.closed),
            stale=stale,
            status=self.status,
        )
        logger.debug("%s step %d: %r%s frontier=%d closed=%d", self.name, record.index, curr,
                     " (stale)" if stale else "", len(record.frontier), len(record.closed))
        return record

    def _expand(self, curr: Node) -> None:
        for action, neighbor, cost in self.problem.successors(curr.location):
            cost = float(cost)
            if math.isnan(cost) or cost < 0:
                raise ValueError(
                    f"successors({curr.location}) returned cost {cost!r} for {action!r}; "
                    "edge costs must be non-negative numbers")
            new_g = curr.g_cost + cost
            prev = self.best.get(neighbor.key)
            # Equal-cost rediscoveries are dropped: the earlier path wins.
            if prev is None or new_g < prev:
                self.best[neighbor.key] = new_g
                self.frontier.push(curr.child(action, neighbor, cost, self.problem.heuristic(neighbor)))

    def _finish(self, status: SearchStatus) -> None:
        self.status = status
        if status is SearchStatus.SUCCEEDED:
            d = self.diagnostics
            logger.info("%s found a path: length=%d cost=%g explored=%d efficiency=%.1f%%",
                        self.name, d.path_length, self.goal_node.g_cost, d.total_explored, d.efficiency)
        elif status is SearchStatus.LIMIT_REACHED:
            logger.warning("%s hit the expansion limit (%d) after exploring %d locations; no verdict on the path",
                           self.name, self.max_expansions, len(self.closed))
        else:
            logger.info("%s found no path after exploring %d locations", self.name, len(self.closed))

    def iter_steps(self) -> Iterator[StepRecord]:
        """Yield every step until the run terminates."""
        while True:
            record = self.step()
            if record is None:
                return
            yield record

    def run(self) -> SearchResult:
        with MeasuredRun() as meter:
            for _ in self.iter_steps():
                pass
        self._result = self._build_result(meter.elapsed, meter.peak_kb)
        return self._result

    @property
    def result(self) -> Optional[SearchResult]:
        """SearchResult once the run has terminated (timing only filled in by run())."""
        if self._result is None and self.done:
            self._result = self._build_result(0.0, 0)
        return self._result

    def _build_result(self, time_s: float, peak_kb: int) -> SearchResult:
        if self.status is SearchStatus.SUCCEEDED:
            actions, cost = reconstruct_path(self.goal_node)
            return SearchResult(self.name, True, actions, cost, len(self.closed), time_s, peak_kb,
                                diagnostics=self.diagnostics, goal=self.goal_node)
        return SearchResult(self.name, False, [], float("inf"), len(self.closed), time_s, peak_kb,
                            error=self._error,
                            limit_reached=self.status is SearchStatus.LIMIT_REACHED)


def a_star_search(problem: SearchProblem, max_expansions: Optional[int] = None) -> SearchResult:
    return AStarEngine(problem, by_f_cost, name="A*", max_expansions=max_expansions).run()
