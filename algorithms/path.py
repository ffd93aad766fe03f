"""Path reconstruction helpers shared by every engine."""

from typing import List, Mapping, Optional

from graph import Graph, Neighbour


def reconstruct_path(predecessors: Mapping[str, Optional[str]], target: str) -> List[str]:
    """
    Walk predecessor links back from `target` to the node with no
    predecessor (the source) and return the nodes source-first.

    A target that was never reached yields just [target].
    """
    path, cur = [], target
    seen = set()
    while cur is not None and cur not in seen:
        seen.add(cur)
        path.append(cur)
        cur = predecessors.get(cur)
    path.reverse()
    return path


def _cheapest_link(graph: Graph, a: str, b: str) -> Neighbour:
    links = [n for n in graph.neighbours(a) if n.node_id == b]
    if not links:
        raise ValueError(f"No edge from '{a}' to '{b}'")
    return min(links, key=lambda n: n.weight)


def path_edge_ids(graph: Graph, path: List[str]) -> List[str]:
    """Edge ids along `path`; the cheapest one wherever edges run in parallel."""
    return [_cheapest_link(graph, a, b).edge_id for a, b in zip(path, path[1:])]


def path_cost(graph: Graph, path: List[str]) -> float:
    return sum(_cheapest_link(graph, a, b).weight for a, b in zip(path, path[1:]))
