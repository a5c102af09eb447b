# terrain_lab/core/metrics.py
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional
import time, tracemalloc

from .node import Node


@dataclass(frozen=True)
class Diagnostics:
    path_length: int
    total_explored: int
    efficiency: float   # percent

    @classmethod
    def compute(cls, path_length: int, total_explored: int) -> "Diagnostics":
        # start == goal gives 0 / 1, never 0 / 0: the root is closed before the goal test.
        if total_explored <= 0:
            return cls(path_length, total_explored, 0.0)
        return cls(path_length, total_explored, path_length / total_explored * 100)


@dataclass
class SearchResult:
    algo: str
    success: bool
    actions: List[str]
    cost: float
    nodes_expanded: int
    time_s: float
    peak_kb: int
    error: Optional[str] = None
    diagnostics: Optional[Diagnostics] = None
    goal: Optional[Node] = None
    limit_reached: bool = False   # stopped by an expansion cap, not a "no path" verdict

    def as_row(self) -> dict:
        """Flat dict for JSON output / plotting."""
        d = self.diagnostics
        return {
            "algo": self.algo,
            "success": self.success,
            "cost": self.cost if self.success else None,
            "nodes_expanded": self.nodes_expanded,
            "path_length": d.path_length if d else None,
            "efficiency": round(d.efficiency, 3) if d else None,
            "time_s": self.time_s,
            "peak_kb": self.peak_kb,
            "limit_reached": self.limit_reached,
            "error": self.error,
        }


class MeasuredRun:
    """
    Context manager for timing and (approximate) peak memory.
    Safe to query .elapsed and .peak_kb *inside* the with-block.
    """
    def __init__(self) -> None:
        self.t0: Optional[float] = None
        self.t1: Optional[float] = None
        self._peak_kb: int = 0
        self._tracing: bool = False

    def __enter__(self) -> "MeasuredRun":
        # Nested runs share the outer trace instead of stopping it early.
        self._owns_trace = not tracemalloc.is_tracing()
        if self._owns_trace:
            tracemalloc.start()
        self._tracing = True
        self.t0 = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.t1 = time.perf_counter()
        current, peak = tracemalloc.get_traced_memory()
        if self._owns_trace:
            tracemalloc.stop()
        self._tracing = False
        self._peak_kb = max(self._peak_kb, peak // 1024)
        return False  # don't suppress exceptions

    @property
    def elapsed(self) -> float:
        """Seconds elapsed. Works before and after __exit__."""
        if self.t0 is None:
            return 0.0
        if self.t1 is None:
            return time.perf_counter() - self.t0
        return self.t1 - self.t0

    @property
    def peak_kb(self) -> int:
        """Approx peak KB. Works before and after __exit__."""
        if self._tracing:
            current, peak = tracemalloc.get_traced_memory()
            return max(self._peak_kb, peak // 1024)
        return self._peak_kb
