"""
edge.py — Graph Edge
====================
Connects two nodes with a strictly positive weight.

Design decisions:
  - `source` and `target` are node-id strings, NOT Node references.
    This keeps edges serialisable and avoids circular references.
  - The weight is checked on construction. Shortest-path engines only
    stay correct with positive weights, so a bad weight never makes it
    into a Graph.
  - `directed` is stored per-edge so serialisation is self-contained;
    the owning Graph overwrites it on insertion.
"""

import math
from dataclasses import dataclass
from enum import Enum
from numbers import Real
from typing import Optional

from graph.errors import InvalidWeight


# ---------------------------------------------------------------------------
# Edge State Enum: one classification per edge per step
# ---------------------------------------------------------------------------
class EdgeState(Enum):
    DEFAULT     = "default"       # untouched
    CONSIDERING = "considering"   # under examination in this step
    RELAXED     = "relaxed"       # just improved a distance (transient)
    REJECTED    = "rejected"      # examined, no improvement (transient)
    PATH        = "path"          # on the reconstructed shortest path


def check_weight(weight, edge_id: Optional[str] = None) -> float:
    """Return `weight` as a float, or raise InvalidWeight."""
    if isinstance(weight, bool) or not isinstance(weight, Real):
        raise InvalidWeight(weight, edge_id)
    if not math.isfinite(weight) or weight <= 0:
        raise InvalidWeight(weight, edge_id)
    return float(weight)


# ---------------------------------------------------------------------------
# Edge
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Edge:
    """
    Attributes:
        id       : Unique identifier.
        source   : ID of the tail node.
        target   : ID of the head node.
        weight   : Positive finite cost.
        directed : If False, traversal works in both directions.
    """

    id:       str
    source:   str
    target:   str
    weight:   float = 1.0
    directed: bool  = False

    def __post_init__(self):
        object.__setattr__(self, "weight", check_weight(self.weight, self.id))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def other_end(self, node_id: str) -> Optional[str]:
        """Given one endpoint, return the other. None if not traversable from node_id."""
        if node_id == self.source:
            return self.target
        if node_id == self.target and not self.directed:
            return self.source
        return None

    def with_direction(self, directed: bool) -> "Edge":
        if directed == self.directed:
            return self
        return Edge(self.id, self.source, self.target, self.weight, directed)

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "id":       self.id,
            "source":   self.source,
            "target":   self.target,
            "weight":   self.weight,
            "directed": self.directed,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Edge":
        source, target = data["source"], data["target"]
        return cls(
            id=data.get("id") or f"{source}-{target}",
            source=source,
            target=target,
            weight=data.get("weight", 1.0),
            directed=data.get("directed", False),
        )

    def __repr__(self) -> str:
        arrow = " → " if self.directed else " ↔ "
        return f"Edge({self.source}{arrow}{self.target}, w={self.weight})"
