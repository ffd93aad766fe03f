"""
recorder.py — Run Recorder & Analytics
========================================
Runs an algorithm to completion, keeps every Step, then computes the
metrics for an analytics card and for side-by-side comparison.

Usage:
    rec = Recorder()
    rec.record("dijkstra", graph, source="A", target="F")
    metrics = rec.metrics            # the analytics card
    rec.export()                     # JSON-safe snapshot for the API

Comparison:
    Run two Recorders on the SAME graph, then compare(rec1, rec2).
"""

import logging
import time
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import config
from graph import Graph
from algorithms import get_algorithm, run_algorithm, AlgoInfo
from algorithms.step import Step, StepKind, PathFoundStep
from engine.stepper import Stepper

logger = logging.getLogger(__name__)


def _heuristic_name(heuristic) -> str:
    if heuristic is None:
        return config.DEFAULT_HEURISTIC
    if callable(heuristic):
        return getattr(heuristic, "__name__", "custom")
    return str(heuristic)


# ---------------------------------------------------------------------------
# Metrics dataclass: what an analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:        str   = ""
    algo_label:      str   = ""
    source:          str   = ""
    target:          Optional[str] = None
    heuristic:       str   = ""        # A* only
    nodes_visited:   int   = 0
    edges_examined:  int   = 0
    edges_relaxed:   int   = 0
    path:            Tuple[str, ...] = ()
    path_length:     int   = 0         # number of edges on the final path
    path_cost:       Optional[float] = None
    total_steps:     int   = 0
    wall_time_ms:    float = 0.0
    path_found:      bool  = False
    outcome:         str   = ""        # kind of the last step

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["path"] = list(self.path)
        return d


# ---------------------------------------------------------------------------
# ComparisonResult: side-by-side analytics
# ---------------------------------------------------------------------------
@dataclass
class ComparisonResult:
    left:  RunMetrics = field(default_factory=RunMetrics)
    right: RunMetrics = field(default_factory=RunMetrics)
    # derived
    winner_nodes:  str = ""   # which algo visited fewer nodes
    winner_edges:  str = ""   # which algo relaxed fewer edges
    winner_path:   str = ""   # which algo found the cheaper path

    def to_dict(self) -> Dict[str, Any]:
        return {
            "left":         self.left.to_dict(),
            "right":        self.right.to_dict(),
            "winner_nodes": self.winner_nodes,
            "winner_edges": self.winner_edges,
            "winner_path":  self.winner_path,
        }


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        steps    : Full list of Steps from the run.
        metrics  : Computed RunMetrics (after record()).
        stepper  : A Stepper loaded with the run, for playback.
    """

    def __init__(self):
        self.steps:    List[Step]           = []
        self.metrics:  Optional[RunMetrics] = None
        self.stepper:  Stepper              = Stepper()

        self._algo_info:  Optional[AlgoInfo] = None
        self._source:     str                = ""
        self._target:     Optional[str]      = None
        self._graph:      Optional[Graph]    = None
        self._heuristic:  str                = ""

    def record(
        self,
        algo_key: str,
        graph: Graph,
        source: str,
        target: Optional[str] = None,
        heuristic=None,
    ) -> RunMetrics:
        """Run the algorithm, keep every step, compute metrics."""
        info = get_algorithm(algo_key)
        if info is None:
            raise ValueError(f"Unknown algorithm: {algo_key}")

        self._algo_info = info
        self._source    = source
        self._target    = target
        self._graph     = graph
        self._heuristic = _heuristic_name(heuristic) if info.has_heuristic else ""

        started = time.perf_counter()
        self.steps = run_algorithm(info.key, graph, source, target, heuristic=heuristic)
        wall_ms = (time.perf_counter() - started) * 1000

        self.stepper.load(self.steps)
        self.metrics = self._compute_metrics(wall_ms)
        logger.info(
            "%s %s→%s: %s in %d steps (%.2f ms)",
            info.key, source, target or "*", self.metrics.outcome or "empty graph",
            self.metrics.total_steps, self.metrics.wall_time_ms,
        )
        return self.metrics

    # ------------------------------------------------------------------
    # Export (JSON-safe snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        return {
            "algo_key":  self._algo_info.key if self._algo_info else "",
            "source":    self._source,
            "target":    self._target,
            "heuristic": self._heuristic,
            "graph":     self._graph.to_dict() if self._graph else {},
            "metrics":   self.metrics.to_dict() if self.metrics else {},
            "steps":     [s.to_dict() for s in self.steps],
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, wall_ms: float) -> RunMetrics:
        info = self._algo_info
        last = self.steps[-1] if self.steps else None
        kinds = [s.kind for s in self.steps]

        path: Tuple[str, ...] = ()
        cost = None
        if isinstance(last, PathFoundStep):
            path, cost = last.path, last.total_cost

        return RunMetrics(
            algo_key=info.key if info else "",
            algo_label=info.label if info else "",
            source=self._source,
            target=self._target,
            heuristic=self._heuristic,
            nodes_visited=len(last.visited) if last else 0,
            edges_examined=kinds.count(StepKind.EXAMINE_EDGE),
            edges_relaxed=kinds.count(StepKind.RELAX_EDGE),
            path=path,
            path_length=max(len(path) - 1, 0),
            path_cost=cost,
            total_steps=len(self.steps),
            wall_time_ms=round(wall_ms, 2),
            path_found=bool(path),
            outcome=last.kind.value if last else "",
        )


# ---------------------------------------------------------------------------
# Comparison helper
# ---------------------------------------------------------------------------
def compare(left: Recorder, right: Recorder) -> ComparisonResult:
    """Given two completed Recorders, produce a ComparisonResult."""
    l = left.metrics  or RunMetrics()
    r = right.metrics or RunMetrics()

    def winner(l_val, r_val, l_key, r_key):
        if l_val == r_val:
            return "tie"
        if l_val is None:
            return r_key
        if r_val is None:
            return l_key
        return l_key if l_val < r_val else r_key

    return ComparisonResult(
        left=l,
        right=r,
        winner_nodes=winner(l.nodes_visited, r.nodes_visited, l.algo_label, r.algo_label),
        winner_edges=winner(l.edges_relaxed, r.edges_relaxed, l.algo_label, r.algo_label),
        winner_path =winner(l.path_cost, r.path_cost, l.algo_label, r.algo_label),
    )
