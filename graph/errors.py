"""
errors.py — Graph & Engine Errors
=================================
Structural problems are raised before an algorithm produces a single step.
"No path" is never an error: it is an ordinary terminal step.
"""

from typing import Any, Optional


class GraphError(ValueError):
    """Base class for every error raised by the graph model or the engines."""


class NodeNotFound(GraphError):
    def __init__(self, node_id: Any, role: Optional[str] = None):
        self.node_id = node_id
        self.role    = role
        what = f"{role} node" if role else "Node"
        super().__init__(f"{what} '{node_id}' not found in graph")


class InvalidWeight(GraphError):
    def __init__(self, weight: Any, edge_id: Optional[str] = None):
        self.weight  = weight
        self.edge_id = edge_id
        where = f" on edge '{edge_id}'" if edge_id else ""
        super().__init__(f"Edge weight must be a positive finite number, got {weight!r}{where}")


class TargetRequired(GraphError):
    def __init__(self, algorithm: str = "astar"):
        self.algorithm = algorithm
        super().__init__(f"Algorithm '{algorithm}' needs a target node")
