# terrain_lab/plots/plotting.py
# Drawing helpers for the presentation side: a terrain map with the state of a search
# on top of it, and a bar chart comparing several search results.
# Functions return Figures; nothing here calls plt.show().
from __future__ import annotations
import io
from pathlib import Path
from typing import Iterable, Optional, Union

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.colors import ListedColormap

from ..algorithms.astar import StepRecord
from ..config import MUD_COST
from ..core.metrics import SearchResult
from ..core.utils import path_locations
from ..problems.terrain import TerrainProblem

_TERRAIN_CMAP = ListedColormap(["#9bd18b", "#8a6a43", "#333333"])   # grass, mud, wall


def terrain_image(problem: TerrainProblem) -> np.ndarray:
    """0 grass / 1 mud / 2 wall, shaped (height, width)."""
    t = problem.terrain
    img = (t.costs >= MUD_COST).astype(int)
    for x, y in t.walls:
        img[y, x] = 2
    return img


def plot_search(problem: TerrainProblem, state: Union[StepRecord, SearchResult, None] = None,
                title: Optional[str] = None):
    """Map plus closed cells, frontier and path from a StepRecord or a finished SearchResult."""
    fig, ax = plt.subplots(figsize=(max(4, problem.terrain.width * 0.4), max(3, problem.terrain.height * 0.4)))
    ax.imshow(terrain_image(problem), cmap=_TERRAIN_CMAP, vmin=0, vmax=2)

    path_node = None
    if isinstance(state, StepRecord):
        if state.closed:
            xs, ys = zip(*state.closed)
            ax.scatter(xs, ys, s=18, c="#6fa8dc", marker="s", label="closed")
        if state.frontier:
            ax.scatter([n.location.x for n in state.frontier], [n.location.y for n in state.frontier],
                       s=18, c="orange", marker="o", label="frontier")
        path_node = state.current
    elif isinstance(state, SearchResult):
        path_node = state.goal

    if path_node is not None:
        locs = path_locations(path_node)
        ax.plot([l.x for l in locs], [l.y for l in locs], c="gold", lw=2, label="path")

    ax.scatter([problem.start.x], [problem.start.y], c="green", s=60, label="start")
    ax.scatter([problem.goal.x], [problem.goal.y], c="red", s=60, label="goal")
    ax.set_xticks(range(problem.terrain.width))
    ax.set_yticks(range(problem.terrain.height))
    ax.tick_params(labelsize=6)
    ax.set_title(title or _title_for(state))
    ax.legend(loc="upper left", bbox_to_anchor=(1.01, 1), fontsize=7)
    fig.tight_layout()
    return fig


def _title_for(state) -> str:
    if isinstance(state, StepRecord):
        return f"Step {state.index} ({state.status.value})"
    if isinstance(state, SearchResult):
        if state.success:
            d = state.diagnostics
            return f"{state.algo}: cost {state.cost:g}, {d.path_length} steps, {d.total_explored} explored"
        if state.limit_reached:
            return f"{state.algo}: stopped at expansion limit ({state.nodes_expanded} explored)"
        return f"{state.algo}: no path ({state.nodes_expanded} explored)"
    return "Terrain"


def bar_compare(results: Iterable[SearchResult], title="Search Comparison"):
    results = list(results)
    names = [r.algo for r in results]
    nodes = [r.nodes_expanded for r in results]
    costs = [r.cost if r.success else 0 for r in results]
    times = [r.time_s for r in results]
    mems  = [r.peak_kb or 0 for r in results]

    fig, axs = plt.subplots(2, 2, figsize=(11,8))
    axs = axs.ravel()
    axs[0].bar(names, nodes); axs[0].set_title("Locations Explored"); axs[0].tick_params(axis='x', rotation=45)
    axs[1].bar(names, costs); axs[1].set_title("Path Cost"); axs[1].tick_params(axis='x', rotation=45)
    axs[2].bar(names, times); axs[2].set_title("Time (s)"); axs[2].tick_params(axis='x', rotation=45)
    axs[3].bar(names, mems); axs[3].set_title("Peak Memory (KB)"); axs[3].tick_params(axis='x', rotation=45)
    fig.suptitle(title)
    fig.tight_layout(rect=[0,0,1,0.95])
    return fig


def fig_to_png_bytes(fig) -> bytes:
    buf = io.BytesIO()
    fig.savefig(buf, format="png", dpi=160)
    return buf.getvalue()


def save_png(fig, path: Path) -> None:
    Path(path).write_bytes(fig_to_png_bytes(fig))
    plt.close(fig)
