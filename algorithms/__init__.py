"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every algorithm the engine knows about.

    from algorithms import REGISTRY, get_algorithm, run_algorithm

REGISTRY is a dict:
    {
        "dijkstra": AlgoInfo(key, label, fn, pseudocode, aliases, …),
        "astar":    AlgoInfo(…),
    }

Each engine is a plain function (graph, source, target, …) → List[Step].
Adding an engine is: write the function, add one entry here.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from graph import Graph
from algorithms.step import Step
from algorithms.dijkstra import dijkstra as _dijkstra, PSEUDOCODE as _dij_pc
from algorithms.astar    import astar    as _astar,    PSEUDOCODE as _ast_pc, HEURISTICS


# ---------------------------------------------------------------------------
# AlgoInfo: metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:               str                    # registry key, e.g. "dijkstra"
    label:             str                    # human label
    fn:                Callable[..., List[Step]]
    pseudocode:        List[str]              # lines the steps' pseudocode_line indexes
    aliases:           List[str] = field(default_factory=list)
    requires_target:   bool     = False
    has_heuristic:     bool     = False       # expose heuristic selector?
    complexity_time:   str      = ""
    complexity_space:  str      = ""
    description:       str      = ""

    def to_dict(self) -> dict:
        return {
            "key":              self.key,
            "label":            self.label,
            "aliases":          list(self.aliases),
            "pseudocode":       list(self.pseudocode),
            "requires_target":  self.requires_target,
            "has_heuristic":    self.has_heuristic,
            "complexity_time":  self.complexity_time,
            "complexity_space": self.complexity_space,
            "description":      self.description,
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "dijkstra": AlgoInfo(
        key="dijkstra", label="Dijkstra's Algorithm", fn=_dijkstra, pseudocode=_dij_pc,
        aliases=["single-source"],
        complexity_time="O((V + E) log V)", complexity_space="O(V)",
        description="Greedily expands the closest node. Target optional: without one it settles every reachable node.",
    ),

    "astar": AlgoInfo(
        key="astar", label="A* Search", fn=_astar, pseudocode=_ast_pc,
        aliases=["heuristic-guided"],
        requires_target=True, has_heuristic=True,
        complexity_time="O((V + E) log V)", complexity_space="O(V)",
        description="Dijkstra + heuristic guidance. Optimal when h is admissible.",
    ),
}

_ALIASES: Dict[str, str] = {alias: info.key for info in REGISTRY.values() for alias in info.aliases}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key or alias, or None."""
    return REGISTRY.get(_ALIASES.get(key, key))


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def run_algorithm(
    key: str,
    graph: Graph,
    source: str,
    target: Optional[str] = None,
    heuristic=None,
) -> List[Step]:
    """Look up `key` and run it to completion. Unknown keys raise ValueError."""
    info = get_algorithm(key)
    if info is None:
        raise ValueError(f"Unknown algorithm: {key}")

    kwargs = {"graph": graph, "source": source, "target": target}
    if info.has_heuristic:
        kwargs["heuristic"] = heuristic
    return info.fn(**kwargs)


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "HEURISTICS",
    "get_algorithm",
    "list_algorithms",
    "run_algorithm",
]
