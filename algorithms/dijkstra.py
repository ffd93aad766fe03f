"""
dijkstra.py — Dijkstra's Shortest-Path Algorithm
==================================================
Eager, step-recording Dijkstra over a lazy-deletion min-heap.

Records a Step at:
  1. Initialise distances / push source            → init
  2. Pop minimum-distance node                     → select-node
  3. Target popped                                 → path-found (stop)
  4. Node finalised                                → mark-visited
  5. Each unvisited neighbour                      → examine-edge, then
                                                     relax-edge or skip-edge
  6. Heap empty                                    → no-path (target given)
                                                     or complete (broadcast)

Stale heap entries (a node popped again after it was finalised) are
dropped silently: they never produce a step.

Correctness note: Dijkstra requires positive weights.  Graph edges
cannot carry anything else (see graph.edge.check_weight).
"""

import logging
from typing import List, Optional

from graph import Graph, EdgeState, NodeNotFound
from algorithms.path import reconstruct_path, path_edge_ids
from algorithms.step import (
    Step, StepBuilder, EdgeDetail, fmt,
    InitStep, SelectNodeStep, MarkVisitedStep, ExamineEdgeStep,
    RelaxEdgeStep, SkipEdgeStep, PathFoundStep, NoPathStep, CompleteStep,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def Dijkstra(graph, source, target=None):",            # 0
    "    dist ← {v: ∞ for v in V};  prev ← {v: None}",       # 1
    "    dist[source] ← 0",                                  # 2
    "    pq ← [(0, source)];  visited ← {}",                 # 3
    "    while pq is not empty:",                             # 4
    "        u ← pq.pop_min()",                              # 5
    "        if u in visited: continue        # stale",      # 6
    "        if u == target: return path(prev, u)",          # 7
    "        visited.add(u)",                                # 8
    "        for (v, w) in adj(u), v not in visited:",       # 9
    "            alt ← dist[u] + w",                         # 10
    "            if alt < dist[v]:",                         # 11
    "                dist[v] ← alt;  prev[v] ← u",           # 12
    "                pq.push((alt, v))",                     # 13
    "            else: keep dist[v]",                        # 14
    "    return NOT FOUND if target else (dist, prev)",      # 15
]

LINE_INIT, LINE_SELECT, LINE_FOUND, LINE_VISIT = 3, 5, 7, 8
LINE_EXAMINE, LINE_RELAX, LINE_SKIP, LINE_DONE = 10, 12, 14, 15


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------
def dijkstra(
    graph: Graph,
    source: str,
    target: Optional[str] = None,
) -> List[Step]:
    """
    Run Dijkstra from `source` and return every step it took.

    With a `target` the run stops as soon as the target is popped;
    without one it settles every reachable node and ends on `complete`.

    Raises:
        NodeNotFound : source (or a given target) is not in the graph.
    """
    if graph.node_count() == 0:
        return []
    if not graph.has_node(source):
        raise NodeNotFound(source, "Source")
    if target is not None and not graph.has_node(target):
        raise NodeNotFound(target, "Target")

    sb = StepBuilder(graph, source, target)
    dist, prev = sb.distances, sb.predecessors
    sb.enqueue(source, 0.0)

    sb.build(
        InitStep, LINE_INIT,
        beginner=(
            f"Starting Dijkstra's algorithm from node {source}. All distances are set "
            f"to infinity except the source, which is 0."
        ),
        advanced=(
            f"Initialisation: dist[{source}] = 0, dist[v] = ∞ for all v ≠ {source}. "
            f"pq = [({source}, 0)]."
        ),
    )

    while sb.queue:
        node, _ = sb.queue.dequeue()
        if node in sb.visited:
            continue

        sb.set_current(node)
        sb.build(
            SelectNodeStep, LINE_SELECT,
            beginner=f"Selecting node {node} because it has the smallest known distance ({fmt(dist[node])}).",
            advanced=f"Extract-min: u = {node} with dist[u] = {fmt(dist[node])}. This distance is now final.",
        )

        if node == target:
            path = reconstruct_path(prev, target)
            sb.visited.add(node)
            sb.set_path(path, path_edge_ids(graph, path))
            sb.build(
                PathFoundStep, LINE_FOUND,
                beginner=f"Found the shortest path to {target}! Total distance: {fmt(dist[target])}.",
                advanced=(
                    f"Target reached. Shortest path: {' → '.join(path)} "
                    f"with total weight {fmt(dist[target])}."
                ),
                path=tuple(path),
                total_cost=dist[target],
            )
            logger.debug("dijkstra %s→%s: path found in %d steps", source, target, len(sb.steps))
            return sb.steps

        sb.visit(node)
        sb.build(
            MarkVisitedStep, LINE_VISIT,
            beginner=f"Node {node} is now permanently visited. We've found the shortest path to it.",
            advanced=f"visited ← visited ∪ {{{node}}}. dist[{node}] = {fmt(dist[node])} is final.",
        )

        for nbr, edge_id, weight in graph.neighbours(node):
            if nbr in sb.visited:
                continue

            old = dist[nbr]
            new = dist[node] + weight
            detail = EdgeDetail(
                edge_id=edge_id, source=node, target=nbr, weight=weight,
                old_distance=old, new_distance=new, relaxed=new < old, priority=new,
            )

            sb.set_edge(edge_id, EdgeState.CONSIDERING)
            sb.build(
                ExamineEdgeStep, LINE_EXAMINE,
                beginner=(
                    f"Looking at neighbour {nbr}. Current path to it costs {fmt(old)}. "
                    f"Going through {node} would cost {fmt(new)}."
                ),
                advanced=(
                    f"Examining edge ({node}, {nbr}). alt = dist[{node}] + w({node},{nbr}) "
                    f"= {fmt(dist[node])} + {fmt(weight)} = {fmt(new)}"
                ),
                edge=detail,
            )

            if new < old:
                dist[nbr] = new
                prev[nbr] = node
                sb.enqueue(nbr, new)
                sb.set_edge(edge_id, EdgeState.RELAXED)
                sb.build(
                    RelaxEdgeStep, LINE_RELAX,
                    beginner=f"Found a shorter path to {nbr}! Updated distance from {fmt(old)} to {fmt(new)}.",
                    advanced=(
                        f"Relaxation: {fmt(new)} < {fmt(old)}, so dist[{nbr}] ← {fmt(new)}, "
                        f"prev[{nbr}] ← {node}; push ({nbr}, {fmt(new)})."
                    ),
                    edge=detail,
                )
            else:
                sb.set_edge(edge_id, EdgeState.REJECTED)
                sb.build(
                    SkipEdgeStep, LINE_SKIP,
                    beginner=(
                        f"Path through {node} to {nbr} costs {fmt(new)}, which isn't better than "
                        f"the current {fmt(old)}. No update needed."
                    ),
                    advanced=f"No relaxation: {fmt(new)} ≥ {fmt(old)}, so dist[{nbr}] remains {fmt(old)}.",
                    edge=detail,
                )
                sb.set_edge(edge_id, EdgeState.DEFAULT)

        sb.clear_relaxed()

    # --- queue exhausted ---
    sb.current_node = None
    if target is not None:
        sb.build(
            NoPathStep, LINE_DONE,
            beginner=f"No path exists from {source} to {target}.",
            advanced=f"Priority queue empty. Target {target} unreachable from {source}.",
        )
        logger.debug("dijkstra %s→%s: no path after %d steps", source, target, len(sb.steps))
    else:
        sb.build(
            CompleteStep, LINE_DONE,
            beginner=(
                f"Dijkstra's algorithm complete! Found shortest paths from {source} "
                f"to all reachable nodes."
            ),
            advanced=(
                f"Priority queue empty. Single-source shortest paths computed for "
                f"{len(sb.visited)} vertices reachable from {source}."
            ),
        )
        logger.debug("dijkstra from %s: settled %d nodes in %d steps", source, len(sb.visited), len(sb.steps))
    return sb.steps
