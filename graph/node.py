from dataclasses import dataclass
from enum import Enum
from typing import Optional


# ---------------------------------------------------------------------------
# Node State Enum: one classification per node per step
# ---------------------------------------------------------------------------
class NodeState(Enum):
    DEFAULT  = "default"    # untouched
    CURRENT  = "current"    # the node being expanded RIGHT NOW
    VISITED  = "visited"    # distance finalised
    IN_QUEUE = "in-queue"   # reached, waiting in the priority queue
    PATH     = "path"       # on the reconstructed shortest path
    START    = "start"      # source node
    END      = "end"        # target node


# ---------------------------------------------------------------------------
# Node
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Node:
    """
    Immutable graph vertex.

    Attributes:
        id     : Unique identifier.
        x, y   : Planar coordinates. Only heuristics and renderers read them.
                 Geographic graphs store longitude in x and latitude in y.
        label  : Human-readable name; falls back to the id.
    """

    id:    str
    x:     float = 0.0
    y:     float = 0.0
    label: Optional[str] = None

    @property
    def display_label(self) -> str:
        return self.label or str(self.id)

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "id":    self.id,
            "label": self.label,
            "x":     self.x,
            "y":     self.y,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Node":
        return cls(
            id=data["id"],
            x=float(data.get("x", 0.0)),
            y=float(data.get("y", 0.0)),
            label=data.get("label"),
        )

    def __repr__(self) -> str:
        return f"Node(id={self.id}, label={self.display_label}, pos=({self.x:.2f},{self.y:.2f}))"
