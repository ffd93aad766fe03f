"""
astar.py — A* Search
=====================
Eager, step-recording A* with a pluggable heuristic function.

Ships these built-in heuristics (all take two Nodes, return float):
  • euclidean   – √(Δx² + Δy²) / HEURISTIC_SCALE
  • manhattan   – (|Δx| + |Δy|) / HEURISTIC_SCALE
  • haversine   – great-circle km, x = longitude, y = latitude (degrees)
  • zero        – h = 0, A* degrades to Dijkstra
  • custom      – caller supplies a callable(node, target) → float

Same step vocabulary and queue discipline as Dijkstra, except the queue
is ordered by f = g + h and a relaxation pushes (and reports) the new f.

Contract: the heuristic should be admissible (never overestimates) and
consistent (triangle inequality along edges).  Nothing checks this; a
bad heuristic only costs optimality.
"""

import logging
import math
from typing import Callable, Dict, List, Optional, Union

import config
from graph import Graph, Node, EdgeState, NodeNotFound, TargetRequired
from algorithms.path import reconstruct_path, path_edge_ids
from algorithms.step import (
    Step, StepBuilder, EdgeDetail, fmt,
    InitStep, SelectNodeStep, MarkVisitedStep, ExamineEdgeStep,
    RelaxEdgeStep, SkipEdgeStep, PathFoundStep, NoPathStep,
)

logger = logging.getLogger(__name__)

Heuristic = Callable[[Node, Node], float]


# ---------------------------------------------------------------------------
# Built-in heuristics
# ---------------------------------------------------------------------------
def euclidean(a: Node, b: Node) -> float:
    return math.hypot(a.x - b.x, a.y - b.y) / config.HEURISTIC_SCALE

def manhattan(a: Node, b: Node) -> float:
    return (abs(a.x - b.x) + abs(a.y - b.y)) / config.HEURISTIC_SCALE

def haversine(a: Node, b: Node) -> float:
    """Great-circle distance in km between two (lng=x, lat=y) nodes."""
    lat1, lat2 = math.radians(a.y), math.radians(b.y)
    d_lat = lat2 - lat1
    d_lng = math.radians(b.x - a.x)
    h = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lng / 2) ** 2
    # rounding can push h just outside [0, 1] for antipodal points
    return 2 * config.EARTH_RADIUS_KM * math.asin(math.sqrt(max(0.0, min(1.0, h))))

def zero(a: Node, b: Node) -> float:
    """h=0 → A* degrades to Dijkstra.  Useful for comparison."""
    return 0.0

HEURISTICS: Dict[str, Heuristic] = {
    "euclidean": euclidean,
    "manhattan": manhattan,
    "haversine": haversine,
    "zero":      zero,
}


def resolve_heuristic(heuristic: Union[str, Heuristic, None]) -> Heuristic:
    if heuristic is None:
        return HEURISTICS[config.DEFAULT_HEURISTIC]
    if callable(heuristic):
        return heuristic
    try:
        return HEURISTICS[heuristic]
    except KeyError:
        raise ValueError(f"Unknown heuristic: {heuristic}") from None


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def AStar(graph, source, target, h):",                   # 0
    "    g ← {v: ∞ for v in V};  prev ← {v: None}",            # 1
    "    g[source] ← 0;  f[source] ← h(source, target)",       # 2
    "    open ← [(f[source], source)];  closed ← {}",          # 3
    "    while open is not empty:",                             # 4
    "        u ← open.pop_min()            # lowest f",        # 5
    "        if u in closed: continue      # stale",           # 6
    "        if u == target: return path(prev, u)",            # 7
    "        closed.add(u)",                                   # 8
    "        for (v, w) in adj(u), v not in closed:",          # 9
    "            tentative ← g[u] + w",                        # 10
    "            if tentative < g[v]:",                        # 11
    "                g[v] ← tentative;  prev[v] ← u",          # 12
    "                f[v] ← g[v] + h(v, target)",              # 13
    "                open.push((f[v], v))",                    # 14
    "            else: keep g[v]",                             # 15
    "    return NOT FOUND",                                    # 16
]

LINE_INIT, LINE_SELECT, LINE_FOUND, LINE_VISIT = 3, 5, 7, 8
LINE_EXAMINE, LINE_RELAX, LINE_SKIP, LINE_DONE = 10, 13, 15, 16


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------
def astar(
    graph: Graph,
    source: str,
    target: Optional[str] = None,
    heuristic: Union[str, Heuristic, None] = None,
) -> List[Step]:
    """
    Args:
        graph     : The graph.
        source    : Start node id.
        target    : Goal node id (required).
        heuristic : Key into HEURISTICS, a callable(node, target) → float,
                    or None for config.DEFAULT_HEURISTIC.

    Raises:
        TargetRequired : no target given.
        NodeNotFound   : source or target not in the graph.
        ValueError     : unknown heuristic key.
    """
    h_fn = resolve_heuristic(heuristic)
    if graph.node_count() == 0:
        return []
    if target is None:
        raise TargetRequired("astar")
    if not graph.has_node(source):
        raise NodeNotFound(source, "Source")
    if not graph.has_node(target):
        raise NodeNotFound(target, "Target")

    goal = graph.get_node(target)
    h_cache: Dict[str, float] = {}

    def h(node_id: str) -> float:
        if node_id not in h_cache:
            h_cache[node_id] = h_fn(graph.get_node(node_id), goal)
        return h_cache[node_id]

    sb = StepBuilder(graph, source, target)
    g, prev = sb.distances, sb.predecessors
    f: Dict[str, float] = {nid: math.inf for nid in graph.nodes}
    f[source] = h(source)
    sb.enqueue(source, f[source])

    sb.build(
        InitStep, LINE_INIT,
        beginner=(
            f"Starting A* from {source} to {target}. A heuristic estimate of the remaining "
            f"distance steers the search toward the goal."
        ),
        advanced=(
            f"Init: g({source}) = 0, f({source}) = h({source},{target}) = {fmt(f[source])}. "
            f"Open set: {{{source}}}."
        ),
    )

    while sb.queue:
        node, _ = sb.queue.dequeue()
        if node in sb.visited:
            continue

        sb.set_current(node)
        sb.build(
            SelectNodeStep, LINE_SELECT,
            beginner=(
                f"Selecting node {node} because it has the lowest f-score ({fmt(f[node])}): "
                f"distance so far ({fmt(g[node])}) plus estimated remaining ({fmt(h(node))})."
            ),
            advanced=f"Pop {node}: f = {fmt(f[node])} = g({fmt(g[node])}) + h({fmt(h(node))}).",
        )

        if node == target:
            path = reconstruct_path(prev, target)
            sb.visited.add(node)
            sb.set_path(path, path_edge_ids(graph, path))
            sb.build(
                PathFoundStep, LINE_FOUND,
                beginner=(
                    f"Found the shortest path! Total distance: {fmt(g[target])}. A* got here by "
                    f"expanding the nodes that looked closest to the goal first."
                ),
                advanced=(
                    f"Path found: {' → '.join(path)}. Cost: {fmt(g[target])}. "
                    f"Nodes expanded: {len(sb.visited)}."
                ),
                path=tuple(path),
                total_cost=g[target],
            )
            logger.debug("astar %s→%s: path found in %d steps", source, target, len(sb.steps))
            return sb.steps

        sb.visit(node)
        sb.build(
            MarkVisitedStep, LINE_VISIT,
            beginner=f"Node {node} goes into the closed set. Its distance ({fmt(g[node])}) is final.",
            advanced=f"closed ← closed ∪ {{{node}}}; g[{node}] = {fmt(g[node])} final.",
        )

        for nbr, edge_id, weight in graph.neighbours(node):
            if nbr in sb.visited:
                continue

            old = g[nbr]
            tentative = g[node] + weight
            new_f = tentative + h(nbr)
            detail = EdgeDetail(
                edge_id=edge_id, source=node, target=nbr, weight=weight,
                old_distance=old, new_distance=tentative, relaxed=tentative < old, priority=new_f,
            )

            sb.set_edge(edge_id, EdgeState.CONSIDERING)
            sb.build(
                ExamineEdgeStep, LINE_EXAMINE,
                beginner=(
                    f"Checking neighbour {nbr}. Path through {node} would cost {fmt(tentative)}, "
                    f"current best is {fmt(old)}."
                ),
                advanced=(
                    f"Edge ({node},{nbr}): tentative_g = {fmt(g[node])} + {fmt(weight)} = {fmt(tentative)}"
                ),
                edge=detail,
            )

            if tentative < old:
                g[nbr] = tentative
                f[nbr] = new_f
                prev[nbr] = node
                sb.enqueue(nbr, new_f)
                sb.set_edge(edge_id, EdgeState.RELAXED)
                sb.build(
                    RelaxEdgeStep, LINE_RELAX,
                    beginner=(
                        f"Found a better path to {nbr}! g = {fmt(tentative)}, h = {fmt(h(nbr))}, "
                        f"f = {fmt(new_f)}."
                    ),
                    advanced=(
                        f"Update: g[{nbr}] = {fmt(tentative)}, f[{nbr}] = {fmt(new_f)}, "
                        f"prev[{nbr}] = {node}; push ({nbr}, {fmt(new_f)})."
                    ),
                    edge=detail,
                )
            else:
                sb.set_edge(edge_id, EdgeState.REJECTED)
                sb.build(
                    SkipEdgeStep, LINE_SKIP,
                    beginner=f"Path through {node} to {nbr} isn't better. Keeping the current path.",
                    advanced=f"No update: {fmt(tentative)} ≥ {fmt(old)}.",
                    edge=detail,
                )
                sb.set_edge(edge_id, EdgeState.DEFAULT)

        sb.clear_relaxed()

    sb.current_node = None
    sb.build(
        NoPathStep, LINE_DONE,
        beginner=f"No path exists from {source} to {target}.",
        advanced=f"Open set empty. Target {target} unreachable.",
    )
    logger.debug("astar %s→%s: no path after %d steps", source, target, len(sb.steps))
    return sb.steps
