# terrain_lab/benchmarks/run_all.py
# Run every search strategy on one seeded terrain map and report the results.
#   python -m terrain_lab.benchmarks.run_all --width 20 --height 12 --seed 7
from __future__ import annotations

import argparse
import json
import logging
import time
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from ..algorithms.astar import AStarEngine, a_star_search
from ..algorithms.greedy import greedy_best_first_search
from ..algorithms.weighted_astar import weighted_a_star_search
from ..config import TerrainConfig
from ..core.frontiers import by_f_cost
from ..core.metrics import SearchResult
from ..problems.terrain import TerrainProblem, make_terrain_problem

logger = logging.getLogger(__name__)


# ---- Helpers ----------------------------------------------------------------
def _fmt_time(x):
    return "n/a" if x is None else f"{float(x):.4f}"


def _load_algos(cfg: TerrainConfig) -> List[Tuple[str, Callable[[TerrainProblem], SearchResult]]]:
    return [
        ("A*", a_star_search),
        ("Greedy", greedy_best_first_search),
        (f"WeightedA*(w={cfg.weight})", lambda p: weighted_a_star_search(p, w=cfg.weight)),
    ]


def trace(problem: TerrainProblem) -> SearchResult:
    """A* with one log line per step (what a step-by-step viewer would show)."""
    engine = AStarEngine(problem, by_f_cost, name="A*")
    for rec in engine.iter_steps():
        cur = rec.current
        logger.info("step %3d  at %-9s g=%-5g h=%-5g f=%-5g frontier=%-3d closed=%-3d%s%s",
                    rec.index, str(cur.location), cur.g_cost, cur.h_cost, cur.f_cost,
                    len(rec.frontier), len(rec.closed),
                    "  (mud)" if problem.is_mud(cur.location) else "",
                    "  (stale, skipped)" if rec.stale else "")
    return engine.result


def _status_label(r: SearchResult) -> str:
    if r.success:
        return "OK"
    return "LIMIT" if r.limit_reached else "NO PATH"


def run(cfg: TerrainConfig, problem: Optional[TerrainProblem] = None, do_trace: bool = False) -> dict:
    """Run every algorithm on ``problem`` (built from ``cfg`` when not given); the
    summary carries the map rows so it can be matched against a plot of the same map."""
    if problem is None:
        problem = make_terrain_problem(cfg.width, cfg.height, cfg.mud_probability, cfg.seed)
    print(f"Map {cfg.width}x{cfg.height} seed={cfg.seed} mud={cfg.mud_probability}:")
    for row in problem.terrain.rows():
        print(f"  {row}")
    if do_trace:
        trace(problem)

    rows = []
    for name, fn in _load_algos(cfg):
        print(f"→ Running {name} ...")
        r = fn(problem)
        d = r.diagnostics
        print(
            f"  {r.algo}: "
            f"{_status_label(r)} "
            f"cost={r.cost:g} "
            f"explored={r.nodes_expanded}"
            + (f" path_length={d.path_length} efficiency={d.efficiency:.1f}%" if d else "")
            + f", time={_fmt_time(r.time_s)}s"
        )
        rows.append(r.as_row())

    return {
        "map": {"width": cfg.width, "height": cfg.height, "seed": cfg.seed,
                "mud_probability": cfg.mud_probability, "rows": list(problem.terrain.rows())},
        "results": rows,
        "ts": time.time(),
    }


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Compare A*, greedy and weighted A* on a random terrain map.")
    ap.add_argument("--width", type=int, default=None)
    ap.add_argument("--height", type=int, default=None)
    ap.add_argument("--mud", type=float, default=None, dest="mud_probability",
                    help="probability that a cell is mud (cost 10)")
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--weight", type=float, default=None, help="weight for weighted A*")
    ap.add_argument("--trace", action="store_true", help="log every A* expansion step")
    ap.add_argument("--out", type=Path, default=None, help="write the JSON summary here")
    ap.add_argument("--plot", type=Path, default=None, help="save a PNG of the A* search here")
    ap.add_argument("-v", "--verbose", action="store_true")
    return ap


def main(argv: Optional[List[str]] = None) -> dict:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s %(name)s: %(message)s")
    cfg = TerrainConfig.from_env(width=args.width, height=args.height,
                                 mud_probability=args.mud_probability,
                                 seed=args.seed, weight=args.weight)
    # The report and the plot must show the same map.
    problem = make_terrain_problem(cfg.width, cfg.height, cfg.mud_probability, cfg.seed)
    out = run(cfg, problem, do_trace=args.trace)
    print(json.dumps(out, indent=2))

    if args.out is not None:
        args.out.write_text(json.dumps(out, indent=2))
        print(f"Wrote {args.out}")
    if args.plot is not None:
        import matplotlib
        matplotlib.use("Agg")
        from ..plots.plotting import plot_search, save_png
        save_png(plot_search(problem, a_star_search(problem)), args.plot)
        print(f"Wrote {args.plot}")
    return out


if __name__ == "__main__":
    main()
