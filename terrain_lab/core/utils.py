# terrain_lab/core/utils.py
# Walks a node's parent chain back to the root to recover the path that produced it.
from __future__ import annotations
from typing import List, Tuple

from .location import Location
from .node import Node


def reconstruct_path(node: Node) -> Tuple[List, float]:
    actions = []
    cost = float(node.g_cost)
    cur = node
    while cur.parent is not None:
        actions.append(cur.action)
        cur = cur.parent
    actions.reverse()
    return actions, cost


def path_locations(node: Node) -> List[Location]:
    """Locations from the root to ``node``, both included."""
    locs = []
    cur = node
    while cur is not None:
        locs.append(cur.location)
        cur = cur.parent
    locs.reverse()
    return locs
