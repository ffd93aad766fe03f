"""
step.py — Algorithm Step Snapshot
==================================
Every engine returns a list of Step objects.  A Step is a frozen-in-time
picture of everything a viewer needs to render one frame:

    • Which node is being expanded and how every node / edge is classified
    • The distance and predecessor maps
    • The finalised (visited) set and the priority-queue contents
    • Which line of pseudocode is executing right now
    • A two-tier explanation of *why* this step happened

Design decisions:
  - One frozen dataclass per step kind.  Only edge steps have `edge`,
    only PathFoundStep has `path` / `total_cost`.
  - Steps own read-only copies of every map and set, so neither a later
    step nor a consumer can change what an earlier one recorded.
  - StepBuilder is the mutable scratch-pad the engines work on; `build()`
    is the only place a Step gets made.
"""

import math
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import ClassVar, Dict, FrozenSet, List, Mapping, Optional, Set, Tuple, Type

from graph import Graph, NodeState, EdgeState
from algorithms.priority_queue import PriorityQueue, QueueEntry

INF = float("inf")


class StepKind(Enum):
    INIT         = "init"
    SELECT_NODE  = "select-node"
    EXAMINE_EDGE = "examine-edge"
    RELAX_EDGE   = "relax-edge"
    SKIP_EDGE    = "skip-edge"
    MARK_VISITED = "mark-visited"
    UPDATE_QUEUE = "update-queue"
    PATH_FOUND   = "path-found"
    NO_PATH      = "no-path"
    COMPLETE     = "complete"


TERMINAL_KINDS = frozenset({StepKind.PATH_FOUND, StepKind.NO_PATH, StepKind.COMPLETE})


class ExplanationLevel(Enum):
    BEGINNER = "beginner"
    ADVANCED = "advanced"


def fmt(value: Optional[float]) -> str:
    """Distance for humans: ∞, 8, 2.5."""
    if value is None:
        return "-"
    if math.isinf(value):
        return "∞"
    return f"{round(value, 2):g}"


def _json_number(value: float) -> Optional[float]:
    return None if math.isinf(value) else value


@dataclass(frozen=True)
class Explanation:
    beginner: str
    advanced: str

    def for_level(self, level: ExplanationLevel) -> str:
        return self.advanced if level is ExplanationLevel.ADVANCED else self.beginner


@dataclass(frozen=True)
class EdgeDetail:
    """
    The edge under examination.

    `priority` is what the neighbour is (or would be) queued with:
    the new distance for Dijkstra, g + h for A*.
    """

    edge_id:      str
    source:       str
    target:       str
    weight:       float
    old_distance: float
    new_distance: float
    relaxed:      bool
    priority:     float

    def to_dict(self) -> dict:
        return {
            "edge_id":      self.edge_id,
            "from":         self.source,
            "to":           self.target,
            "weight":       self.weight,
            "old_distance": _json_number(self.old_distance),
            "new_distance": _json_number(self.new_distance),
            "relaxed":      self.relaxed,
            "priority":     _json_number(self.priority),
        }


# ---------------------------------------------------------------------------
# Step variants
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Step:
    """
    Attributes:
        step_number     : 0-based index of this step in the run.
        current_node    : ID of the node being expanded right now (or None).
        distances       : {node_id: float} — best known distance, inf if unreached.
        predecessors    : {node_id: node_id | None}.
        visited         : Node ids whose distance is final.
        queue           : Priority-queue contents in heap order, stale entries included.
        node_states     : {node_id: NodeState} for every node.
        edge_states     : {edge_id: EdgeState} for every edge.
        pseudocode_line : 0-based index into the engine's PSEUDOCODE.
        explanation     : Beginner and advanced text.
    """

    kind: ClassVar[StepKind]

    step_number:     int
    current_node:    Optional[str]
    distances:       Mapping[str, float]
    predecessors:    Mapping[str, Optional[str]]
    visited:         FrozenSet[str]
    queue:           Tuple[QueueEntry, ...]
    node_states:     Mapping[str, NodeState]
    edge_states:     Mapping[str, EdgeState]
    pseudocode_line: int
    explanation:     Explanation

    @property
    def is_terminal(self) -> bool:
        return self.kind in TERMINAL_KINDS

    def explain(self, level: ExplanationLevel = ExplanationLevel.BEGINNER) -> str:
        return self.explanation.for_level(level)

    def to_dict(self) -> dict:
        return {
            "type":            self.kind.value,
            "step_number":     self.step_number,
            "current_node":    self.current_node,
            "distances":       {n: _json_number(d) for n, d in self.distances.items()},
            "predecessors":    dict(self.predecessors),
            "visited":         sorted(self.visited),
            "queue":           [{"node_id": e.node_id, "priority": e.priority} for e in self.queue],
            "node_states":     {n: s.value for n, s in self.node_states.items()},
            "edge_states":     {e: s.value for e, s in self.edge_states.items()},
            "pseudocode_line": self.pseudocode_line,
            "explanation":     {"beginner": self.explanation.beginner, "advanced": self.explanation.advanced},
        }


class InitStep(Step):
    kind = StepKind.INIT


class SelectNodeStep(Step):
    kind = StepKind.SELECT_NODE


class MarkVisitedStep(Step):
    kind = StepKind.MARK_VISITED


class UpdateQueueStep(Step):
    kind = StepKind.UPDATE_QUEUE


class NoPathStep(Step):
    kind = StepKind.NO_PATH


class CompleteStep(Step):
    kind = StepKind.COMPLETE


@dataclass(frozen=True)
class EdgeStep(Step):
    edge: EdgeDetail

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["edge"] = self.edge.to_dict()
        return d


class ExamineEdgeStep(EdgeStep):
    kind = StepKind.EXAMINE_EDGE


class RelaxEdgeStep(EdgeStep):
    kind = StepKind.RELAX_EDGE


class SkipEdgeStep(EdgeStep):
    kind = StepKind.SKIP_EDGE


@dataclass(frozen=True)
class PathFoundStep(Step):
    kind = StepKind.PATH_FOUND

    path:       Tuple[str, ...]
    total_cost: float

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["path"] = list(self.path)
        d["total_cost"] = self.total_cost
        return d


STEP_TYPES: Dict[StepKind, Type[Step]] = {
    cls.kind: cls
    for cls in (
        InitStep, SelectNodeStep, ExamineEdgeStep, RelaxEdgeStep, SkipEdgeStep,
        MarkVisitedStep, UpdateQueueStep, PathFoundStep, NoPathStep, CompleteStep,
    )
}


# ---------------------------------------------------------------------------
# Builder: the engines' mutable scratch-pad
# ---------------------------------------------------------------------------
class StepBuilder:
    """
    Holds the live state of one run and snapshots it into Steps.

    Usage inside an engine:
        sb = StepBuilder(graph, source, target)
        sb.enqueue(source, 0.0)
        sb.build(InitStep, line=2, beginner="…", advanced="…")
        …
        return sb.steps

    Source and target keep their START / END classification until the
    path is painted.
    """

    def __init__(self, graph: Graph, source: str, target: Optional[str] = None):
        self.steps:        List[Step]                = []
        self.current_node: Optional[str]             = None
        self.distances:    Dict[str, float]          = {nid: INF for nid in graph.nodes}
        self.predecessors: Dict[str, Optional[str]]  = {nid: None for nid in graph.nodes}
        self.visited:      Set[str]                  = set()
        self.queue:        PriorityQueue[str]        = PriorityQueue()
        self.node_states:  Dict[str, NodeState]      = {nid: NodeState.DEFAULT for nid in graph.nodes}
        self.edge_states:  Dict[str, EdgeState]      = {eid: EdgeState.DEFAULT for eid in graph.edges}

        self.distances[source]   = 0.0
        self.node_states[source] = NodeState.START
        self._protected = {source}
        if target is not None:
            self.node_states[target] = NodeState.END
            self._protected.add(target)

    # -- node helpers --
    def paint(self, node_id: str, state: NodeState) -> None:
        if node_id not in self._protected:
            self.node_states[node_id] = state

    def set_current(self, node_id: str) -> None:
        self.current_node = node_id
        self.paint(node_id, NodeState.CURRENT)

    def visit(self, node_id: str) -> None:
        self.visited.add(node_id)
        self.paint(node_id, NodeState.VISITED)

    def enqueue(self, node_id: str, priority: float) -> None:
        self.queue.enqueue(node_id, priority)
        self.paint(node_id, NodeState.IN_QUEUE)

    # -- edge helpers --
    def set_edge(self, edge_id: str, state: EdgeState) -> None:
        self.edge_states[edge_id] = state

    def clear_relaxed(self) -> None:
        """RELAXED only lasts for the neighbour sweep that produced it."""
        for eid, state in self.edge_states.items():
            if state is EdgeState.RELAXED:
                self.edge_states[eid] = EdgeState.DEFAULT

    def set_path(self, path: List[str], edge_ids: List[str]) -> None:
        for nid in path:
            self.paint(nid, NodeState.PATH)
        for eid in edge_ids:
            self.edge_states[eid] = EdgeState.PATH

    # -- snapshot --
    def build(self, step_cls: Type[Step], line: int, beginner: str, advanced: str, **extra) -> Step:
        step = step_cls(
            step_number=len(self.steps),
            current_node=self.current_node,
            distances=MappingProxyType(dict(self.distances)),
            predecessors=MappingProxyType(dict(self.predecessors)),
            visited=frozenset(self.visited),
            queue=self.queue.snapshot(),
            node_states=MappingProxyType(dict(self.node_states)),
            edge_states=MappingProxyType(dict(self.edge_states)),
            pseudocode_line=line,
            explanation=Explanation(beginner=beginner, advanced=advanced),
            **extra,
        )
        self.steps.append(step)
        return step
