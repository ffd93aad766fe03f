"""
graph.py — Immutable Graph Value
================================
Single source of truth for the graph.  Engines, the recorder and the
HTTP layer all read from it; nothing writes to it.

Responsibilities:
  1. Pure edits on nodes & edges            (add / remove → new Graph)
  2. Adjacency queries                      (neighbours, edge_between, …)
  3. Factory methods                        (sample, random)
  4. Import from adjacency-list text        (text → graph)
  5. Serialisation round-trip               (to_dict / from_dict)

Design decisions:
  - Nodes & edges stored in plain dicts keyed by id for O(1) lookup.
  - A separate adjacency dict `_adj[node_id] → (edge_id, …)` is rebuilt
    for the touched endpoints on every edit, so neighbour queries are
    O(degree), not O(E).  Tuples keep insertion order, which keeps the
    engines' neighbour sweep deterministic.
  - Every edit copies the three dicts and returns a new Graph.  Callers
    never see a half-edited graph.
  - `directed` is a graph-level flag; edges are re-stamped with it on
    insertion so serialisation stays self-contained.
"""

import math
import random
from types import MappingProxyType
from typing import Dict, List, Mapping, NamedTuple, Optional, Set, Tuple

from graph.edge import Edge
from graph.errors import NodeNotFound
from graph.node import Node


class Neighbour(NamedTuple):
    node_id: str
    edge_id: str
    weight:  float


class Graph:
    """
    Attributes:
        nodes      : {node_id: Node}            (read-only view)
        edges      : {edge_id: Edge}            (read-only view)
        adjacency  : {node_id: (edge_id, …)}    (read-only view)
        directed   : bool – graph-level directedness
    """

    __slots__ = ("_nodes", "_edges", "_adj", "_directed")

    def __init__(self, directed: bool = False):
        self._nodes:    Dict[str, Node]            = {}
        self._edges:    Dict[str, Edge]            = {}
        self._adj:      Dict[str, Tuple[str, ...]] = {}
        self._directed: bool                       = directed

    def _copy(self) -> "Graph":
        g = Graph(directed=self._directed)
        g._nodes = dict(self._nodes)
        g._edges = dict(self._edges)
        g._adj   = dict(self._adj)
        return g

    # ==================================================================
    # READ-ONLY VIEWS
    # ==================================================================
    @property
    def nodes(self) -> Mapping[str, Node]:
        return MappingProxyType(self._nodes)

    @property
    def edges(self) -> Mapping[str, Edge]:
        return MappingProxyType(self._edges)

    @property
    def adjacency(self) -> Mapping[str, Tuple[str, ...]]:
        return MappingProxyType(self._adj)

    @property
    def directed(self) -> bool:
        return self._directed

    # ==================================================================
    # NODE EDITS
    # ==================================================================
    def add_node(self, node: Node) -> "Graph":
        """Insert or replace a node. Incident edges survive a replace."""
        g = self._copy()
        g._nodes[node.id] = node
        g._adj.setdefault(node.id, ())
        return g

    def create_node(self, node_id: str, x: float = 0.0, y: float = 0.0, label: Optional[str] = None) -> "Graph":
        """Convenience: build the Node and add it in one call."""
        return self.add_node(Node(id=node_id, x=x, y=y, label=label))

    def remove_node(self, node_id: str) -> "Graph":
        """Remove a node and every edge touching it. Unknown ids are a no-op."""
        if node_id not in self._nodes:
            return self
        g = self._copy()
        doomed = [e for e in self._edges.values() if node_id in (e.source, e.target)]
        for e in doomed:
            g._detach(e)
            del g._edges[e.id]
        del g._nodes[node_id]
        g._adj.pop(node_id, None)
        return g

    def get_node(self, node_id: str) -> Optional[Node]:
        return self._nodes.get(node_id)

    def has_node(self, node_id: str) -> bool:
        return node_id in self._nodes

    # ==================================================================
    # EDGE EDITS
    # ==================================================================
    def add_edge(self, edge: Edge) -> "Graph":
        """Insert or replace an edge. Both endpoints must already exist."""
        for endpoint, role in ((edge.source, "Source"), (edge.target, "Target")):
            if endpoint not in self._nodes:
                raise NodeNotFound(endpoint, role)

        edge = edge.with_direction(self._directed)
        g = self._copy()
        old = g._edges.get(edge.id)
        if old is not None:
            g._detach(old)
        g._edges[edge.id] = edge
        g._attach(edge)
        return g

    def connect(self, source: str, target: str, weight: float = 1.0, edge_id: Optional[str] = None) -> "Graph":
        """Convenience: build the Edge (default id "<source>-<target>") and add it."""
        if edge_id is None:
            edge_id = base = f"{source}-{target}"
            n = 1
            while edge_id in self._edges:
                n += 1
                edge_id = f"{base}#{n}"
        return self.add_edge(Edge(id=edge_id, source=source, target=target, weight=weight))

    def remove_edge(self, edge_id: str) -> "Graph":
        """Remove an edge from the index of both endpoints. Unknown ids are a no-op."""
        edge = self._edges.get(edge_id)
        if edge is None:
            return self
        g = self._copy()
        g._detach(edge)
        del g._edges[edge_id]
        return g

    def get_edge(self, edge_id: str) -> Optional[Edge]:
        return self._edges.get(edge_id)

    def edge_between(self, a: str, b: str) -> Optional[Edge]:
        """First edge leading from a to b (direction-aware)."""
        for eid in self._adj.get(a, ()):
            e = self._edges[eid]
            if e.other_end(a) == b:
                return e
        return None

    # -- adjacency maintenance (only ever called on a fresh copy) --
    def _attach(self, edge: Edge) -> None:
        ends = [edge.source] if self._directed else [edge.source, edge.target]
        for nid in ends:
            current = self._adj.get(nid, ())
            if edge.id not in current:
                self._adj[nid] = current + (edge.id,)

    def _detach(self, edge: Edge) -> None:
        for nid in {edge.source, edge.target}:
            if nid in self._adj:
                self._adj[nid] = tuple(eid for eid in self._adj[nid] if eid != edge.id)

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def neighbours(self, node_id: str) -> List[Neighbour]:
        """Return [(neighbour_id, edge_id, weight)] for every reachable neighbour."""
        result = []
        for eid in self._adj.get(node_id, ()):
            e = self._edges[eid]
            other = e.other_end(node_id)
            if other is None:
                continue
            result.append(Neighbour(other, eid, e.weight))
        return result

    def degree(self, node_id: str) -> int:
        return len(self._adj.get(node_id, ()))

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "directed": self._directed,
            "nodes":    [n.to_dict() for n in self._nodes.values()],
            "edges":    [e.to_dict() for e in self._edges.values()],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        g = cls(directed=bool(data.get("directed", False)))
        for nd in data.get("nodes", []):
            g = g.add_node(Node.from_dict(nd))
        for ed in data.get("edges", []):
            if ed.get("id"):
                g = g.add_edge(Edge.from_dict(ed))
            else:
                # id-less parallel edges get "#n" suffixes instead of replacing each other
                g = g.connect(ed["source"], ed["target"], ed.get("weight", 1.0))
        return g

    # ==================================================================
    # FACTORIES
    # ==================================================================
    @classmethod
    def sample(cls) -> "Graph":
        """Six-node demo graph. Shortest A→F is A, C, E, F with cost 8."""
        g = cls(directed=False)
        for nid, x, y in (
            ("A", 100, 200), ("B", 250, 100), ("C", 250, 300),
            ("D", 400, 150), ("E", 400, 250), ("F", 550, 200),
        ):
            g = g.create_node(nid, x, y)
        for src, dst, w in (
            ("A", "B", 4), ("A", "C", 2), ("B", "D", 5), ("C", "D", 8),
            ("C", "E", 3), ("D", "E", 2), ("D", "F", 6), ("E", "F", 3),
        ):
            g = g.connect(src, dst, w, edge_id=src + dst)
        return g

    @classmethod
    def generate_random(
        cls,
        num_nodes: int = 10,
        edge_probability: float = 0.3,
        directed: bool = False,
        weight_range: Tuple[int, int] = (1, 10),
        seed: Optional[int] = None,
        canvas_w: float = 800,
        canvas_h: float = 500,
    ) -> "Graph":
        """
        Erdős–Rényi style random graph.
        Each possible edge is included with probability `edge_probability`,
        then a random spanning chain guarantees connectivity.
        """
        rng = random.Random(seed)
        g = cls(directed=directed)
        margin = 40

        # place nodes in a circle with jitter so it looks natural
        ids = []
        for i in range(num_nodes):
            angle  = 2 * math.pi * i / num_nodes
            radius = min(canvas_w, canvas_h) * 0.35
            cx, cy = canvas_w / 2, canvas_h / 2
            x = cx + radius * math.cos(angle) + rng.uniform(-30, 30)
            y = cy + radius * math.sin(angle) + rng.uniform(-30, 30)
            x = max(margin, min(canvas_w - margin, x))
            y = max(margin, min(canvas_h - margin, y))
            nid = str(i)
            g = g.create_node(nid, x, y)
            ids.append(nid)

        for i in range(num_nodes):
            for j in (range(i + 1, num_nodes) if not directed else range(num_nodes)):
                if i == j:
                    continue
                if rng.random() < edge_probability:
                    g = g.connect(ids[i], ids[j], weight=rng.randint(*weight_range))

        shuffled = list(ids)
        rng.shuffle(shuffled)
        for k in range(1, len(shuffled)):
            if not g.edge_between(shuffled[k - 1], shuffled[k]):
                g = g.connect(shuffled[k - 1], shuffled[k], weight=rng.randint(*weight_range))

        return g

    @classmethod
    def from_adjacency_list(
        cls,
        text: str,
        directed: bool = False,
        canvas_w: float = 800,
        canvas_h: float = 500,
    ) -> "Graph":
        """
        Parse a simple text adjacency list.

        Supported formats (one node per line):
            A: B C D            → A connects to B, C, D  (weight 1)
            A: B(3) C(7)        → A→B weight 3, A→C weight 7
            0 -> 1,2,3          → alternate arrow syntax
            0: 1(5), 2(3)       → comma-separated with weights

        Nodes are auto-laid-out in a circle.  A weight that is not a
        positive number raises InvalidWeight.
        """
        adjacency: Dict[str, List[Tuple[str, float]]] = {}

        for line in text.strip().splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            for sep in (":", "→", "->"):
                if sep in line:
                    src, rest = line.split(sep, 1)
                    break
            else:
                continue

            src = src.strip()
            adjacency.setdefault(src, [])

            for token in rest.replace(",", " ").split():
                # "B(3)" or "B"
                if "(" in token and token.endswith(")"):
                    tgt, w_str = token[:-1].split("(", 1)
                    try:
                        w = float(w_str)
                    except ValueError:
                        w = w_str
                else:
                    tgt, w = token, 1.0
                adjacency.setdefault(tgt, [])
                adjacency[src].append((tgt, w))

        g = cls(directed=directed)
        labels = list(adjacency)
        n = len(labels)
        if n == 0:
            return g

        cx, cy = canvas_w / 2, canvas_h / 2
        radius = min(canvas_w, canvas_h) * 0.35
        for i, label in enumerate(labels):
            angle = 2 * math.pi * i / n
            g = g.create_node(label, cx + radius * math.cos(angle), cy + radius * math.sin(angle))

        # deduplicate for undirected
        seen: Set = set()
        for src, targets in adjacency.items():
            for tgt, w in targets:
                key = (src, tgt) if directed else frozenset([src, tgt])
                if key in seen:
                    continue
                seen.add(key)
                g = g.connect(src, tgt, weight=w)

        return g

    # ==================================================================
    # UTILITY
    # ==================================================================
    def node_count(self) -> int:
        return len(self._nodes)

    def edge_count(self) -> int:
        return len(self._edges)

    def node_ids(self) -> List[str]:
        return list(self._nodes)

    def __eq__(self, other) -> bool:
        return (
            isinstance(other, Graph)
            and self._directed == other._directed
            and self._nodes == other._nodes
            and self._edges == other._edges
            and {k: set(v) for k, v in self._adj.items()} == {k: set(v) for k, v in other._adj.items()}
        )

    __hash__ = None

    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count()}, edges={self.edge_count()}, directed={self.directed})"
