"""Tests for run recording, metrics and comparison."""

import pytest

from algorithms import get_algorithm, list_algorithms, run_algorithm
from engine import Recorder, compare
from graph import Graph


class TestRegistry:

    def test_keys_and_aliases(self):
        assert [a.key for a in list_algorithms()] == ["dijkstra", "astar"]
        assert get_algorithm("single-source").key == "dijkstra"
        assert get_algorithm("heuristic-guided").key == "astar"
        assert get_algorithm("bogus") is None

    def test_run_algorithm_by_alias(self, sample_graph):
        steps = run_algorithm("heuristic-guided", sample_graph, "A", "F", heuristic="zero")
        assert steps[-1].total_cost == 8.0

    def test_unknown_key(self, sample_graph):
        with pytest.raises(ValueError):
            run_algorithm("bogus", sample_graph, "A")

    def test_cards_are_serialisable(self):
        card = get_algorithm("astar").to_dict()
        assert card["requires_target"] is True
        assert card["has_heuristic"] is True
        assert card["pseudocode"]


class TestRecorder:
    """Metrics computed from a recorded run."""

    def test_dijkstra_metrics(self, sample_graph):
        rec = Recorder()
        m = rec.record("dijkstra", sample_graph, "A", "F")
        assert m.algo_key == "dijkstra"
        assert m.path == ("A", "C", "E", "F")
        assert m.path_length == 3
        assert m.path_cost == 8.0
        assert m.path_found is True
        assert m.outcome == "path-found"
        assert m.nodes_visited == 6
        assert m.edges_examined == 8
        assert m.edges_relaxed == 7
        assert m.total_steps == len(rec.steps) == 29
        assert m.heuristic == ""

    def test_stepper_is_loaded(self, sample_graph):
        rec = Recorder()
        rec.record("dijkstra", sample_graph, "A", "F")
        assert rec.stepper.current_step is rec.steps[0]

    def test_no_path_metrics(self, disconnected_graph):
        m = Recorder().record("dijkstra", disconnected_graph, "A", "F")
        assert m.path_found is False
        assert m.path_cost is None
        assert m.outcome == "no-path"

    def test_heuristic_name(self, sample_graph):
        assert Recorder().record("astar", sample_graph, "A", "F").heuristic == "euclidean"
        assert Recorder().record("astar", sample_graph, "A", "F", heuristic="manhattan").heuristic == "manhattan"

    def test_empty_graph(self):
        rec = Recorder()
        m = rec.record("dijkstra", Graph(), "A")
        assert m.total_steps == 0
        assert m.outcome == ""
        assert rec.export()["steps"] == []

    def test_unknown_algorithm(self, sample_graph):
        with pytest.raises(ValueError):
            Recorder().record("bogus", sample_graph, "A")

    def test_export(self, sample_graph):
        rec = Recorder()
        rec.record("astar", sample_graph, "A", "F")
        out = rec.export()
        assert out["algo_key"] == "astar"
        assert out["heuristic"] == "euclidean"
        assert out["metrics"]["path"] == ["A", "C", "E", "F"]
        assert out["steps"][-1]["type"] == "path-found"
        assert len(out["graph"]["nodes"]) == 6


class TestCompare:

    def test_astar_wins_on_nodes(self, sample_graph):
        left, right = Recorder(), Recorder()
        left.record("dijkstra", sample_graph, "A", "F")
        right.record("astar", sample_graph, "A", "F")
        result = compare(left, right)
        assert result.winner_nodes == "A* Search"
        assert result.winner_path == "tie"
        d = result.to_dict()
        assert d["left"]["nodes_visited"] == 6
        assert d["right"]["nodes_visited"] == 4

    def test_found_path_beats_no_path(self, sample_graph, disconnected_graph):
        left, right = Recorder(), Recorder()
        left.record("dijkstra", sample_graph, "A", "F")
        right.record("dijkstra", disconnected_graph, "A", "F")
        assert compare(left, right).winner_path == "Dijkstra's Algorithm"
