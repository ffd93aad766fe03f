"""
Pytest configuration and shared fixtures.

This file is automatically loaded by pytest and provides
fixtures available to all test files.
"""

import itertools
import math

import pytest

from graph import Graph


@pytest.fixture
def sample_graph() -> Graph:
    """The six-node A–F demo graph (shortest A→F = A, C, E, F, cost 8)."""
    return Graph.sample()


@pytest.fixture
def disconnected_graph(sample_graph: Graph) -> Graph:
    """Sample graph with F cut off."""
    return sample_graph.remove_edge("DF").remove_edge("EF")


@pytest.fixture
def grid_graph() -> Graph:
    """
    4×4 undirected grid, unit weights, nodes 50 px apart.

    With HEURISTIC_SCALE = 50 both euclidean and manhattan are admissible
    and consistent on it.
    """
    g = Graph()
    for r, c in itertools.product(range(4), range(4)):
        g = g.create_node(f"{r}_{c}", x=c * 50, y=r * 50)
    for r, c in itertools.product(range(4), range(4)):
        if c + 1 < 4:
            g = g.connect(f"{r}_{c}", f"{r}_{c + 1}", 1)
        if r + 1 < 4:
            g = g.connect(f"{r}_{c}", f"{r + 1}_{c}", 1)
    return g


def brute_force_distances(graph: Graph, source: str) -> dict:
    """Shortest distance to every node by enumerating all simple paths."""
    best = {nid: math.inf for nid in graph.nodes}

    def walk(node, cost, seen):
        if cost < best[node]:
            best[node] = cost
        for nbr, _, w in graph.neighbours(node):
            if nbr not in seen:
                walk(nbr, cost + w, seen | {nbr})

    walk(source, 0.0, {source})
    return best


@pytest.fixture
def brute_force():
    return brute_force_distances
