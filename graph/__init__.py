"""
graph/
-----
Core data layer.  Public API:

    from graph import Graph, Node, Edge, Neighbour
    from graph import NodeState, EdgeState
    from graph import GraphError, NodeNotFound, InvalidWeight, TargetRequired
"""

from graph.errors import GraphError, NodeNotFound, InvalidWeight, TargetRequired
from graph.node   import Node,  NodeState
from graph.edge   import Edge,  EdgeState
from graph.graph  import Graph, Neighbour

__all__ = [
    "Node",       "NodeState",
    "Edge",       "EdgeState",
    "Graph",      "Neighbour",
    "GraphError", "NodeNotFound", "InvalidWeight", "TargetRequired",
]
