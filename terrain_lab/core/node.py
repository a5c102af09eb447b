# terrain_lab/core/node.py
# Search-tree record used by the engine. Nodes are never mutated: a cheaper path
# to a location produces a new Node, and parent links only ever point at older nodes.
from __future__ import annotations
import math
from dataclasses import dataclass, field
from typing import Optional

from .location import Location
from .problem import Action


def _check_cost(name: str, value: float) -> float:
    value = float(value)
    if math.isnan(value) or value < 0:
        raise ValueError(f"{name} must be a non-negative number, got {value!r}")
    return value


@dataclass(frozen=True, eq=False)
class Node:
    location: Location
    parent: Optional["Node"] = None
    action: Optional[Action] = None
    g_cost: float = 0.0
    h_cost: float = 0.0
    depth: int = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "g_cost", _check_cost("g_cost", self.g_cost))
        object.__setattr__(self, "h_cost", _check_cost("h_cost", self.h_cost))
        object.__setattr__(self, "depth", 0 if self.parent is None else self.parent.depth + 1)

    @property
    def f_cost(self) -> float:
        return self.g_cost + self.h_cost

    def child(self, action: Action, location: Location, step_cost: float, h_cost: float) -> "Node":
        """Node reached from this one by ``action`` over an edge of ``step_cost``."""
        step_cost = float(step_cost)
        if math.isnan(step_cost) or step_cost < 0:
            raise ValueError(
                f"Edge cost for ({self.location} --{action!r}--> {location}) must be "
                f"non-negative, got {step_cost!r}. Check the problem's successors()."
            )
        return Node(location, parent=self, action=action, g_cost=self.g_cost + step_cost, h_cost=h_cost)

    def __repr__(self) -> str:
        return (f"Node({self.location}, action={self.action!r}, "
                f"g={self.g_cost:g}, h={self.h_cost:g}, f={self.f_cost:g})")
