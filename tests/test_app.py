"""Tests for the Flask JSON API."""

import pytest

import config
from main import app


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


class TestCatalogue:

    def test_algorithms(self, client):
        resp = client.get("/api/algorithms")
        assert resp.status_code == 200
        keys = [a["key"] for a in resp.get_json()["algorithms"]]
        assert keys == ["dijkstra", "astar"]

    def test_heuristics(self, client):
        data = client.get("/api/heuristics").get_json()
        assert "haversine" in data["heuristics"]
        assert data["default"] == config.DEFAULT_HEURISTIC


class TestGraphs:

    def test_sample(self, client):
        data = client.get("/api/graph/sample").get_json()
        assert data["node_ids"] == ["A", "B", "C", "D", "E", "F"]
        assert len(data["graph"]["edges"]) == 8

    def test_generate(self, client):
        resp = client.post("/api/graph/generate", json={"nodes": 6, "seed": 3})
        assert resp.status_code == 200
        assert len(resp.get_json()["node_ids"]) == 6

    def test_generate_too_many_nodes(self, client):
        resp = client.post("/api/graph/generate", json={"nodes": config.MAX_NODES + 1})
        assert resp.status_code == 400

    def test_generate_prob_out_of_range(self, client):
        resp = client.post("/api/graph/generate", json={"nodes": 5, "prob": 1.5})
        assert resp.status_code == 400

    def test_generate_respects_edge_limit(self, client):
        """A complete 100-node graph would exceed MAX_EDGES."""
        resp = client.post("/api/graph/generate", json={"nodes": 100, "prob": 1.0})
        assert resp.status_code == 400

    def test_generated_graph_runs(self, client):
        graph = client.post("/api/graph/generate", json={"nodes": 20, "prob": 0.5, "seed": 1}).get_json()["graph"]
        assert len(graph["edges"]) <= config.MAX_EDGES
        resp = client.post("/api/run", json={"graph": graph, "source": "0", "target": "19"})
        assert resp.status_code == 200

    @pytest.mark.parametrize("body", [{"seed": {}}, {"nodes": [3]}, {"prob": "high"}, {"nodes": True}])
    def test_generate_wrong_types(self, client, body):
        assert client.post("/api/graph/generate", json=body).status_code == 400

    def test_import(self, client):
        resp = client.post("/api/graph/import", json={"text": "A: B(2) C\nB: C(4)"})
        assert resp.status_code == 200
        assert sorted(resp.get_json()["node_ids"]) == ["A", "B", "C"]

    def test_import_bad_weight(self, client):
        resp = client.post("/api/graph/import", json={"text": "A: B(0)"})
        assert resp.status_code == 400
        assert "weight" in resp.get_json()["error"]


class TestRun:

    def test_run_on_sample(self, client):
        resp = client.post("/api/run", json={"source": "A", "target": "F"})
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["algo_key"] == "dijkstra"
        assert data["metrics"]["path_cost"] == 8.0
        assert data["steps"][0]["distances"]["F"] is None
        assert data["steps"][-1]["type"] == "path-found"

    def test_run_with_posted_graph(self, client):
        graph = {
            "directed": True,
            "nodes": [{"id": "s"}, {"id": "t"}],
            "edges": [{"source": "s", "target": "t", "weight": 2.5}],
        }
        resp = client.post("/api/run", json={"algorithm": "astar", "graph": graph, "source": "s", "target": "t"})
        assert resp.status_code == 200
        assert resp.get_json()["metrics"]["path"] == ["s", "t"]

    def test_unknown_node_is_404(self, client):
        resp = client.post("/api/run", json={"source": "Z", "target": "F"})
        assert resp.status_code == 404
        assert "Z" in resp.get_json()["error"]

    def test_astar_without_target_is_400(self, client):
        resp = client.post("/api/run", json={"algorithm": "astar", "source": "A"})
        assert resp.status_code == 400

    def test_unknown_algorithm_is_400(self, client):
        resp = client.post("/api/run", json={"algorithm": "bogus", "source": "A"})
        assert resp.status_code == 400

    def test_missing_source_is_400(self, client):
        assert client.post("/api/run", json={}).status_code == 400

    def test_non_object_body_is_400(self, client):
        assert client.post("/api/run", json=[1, 2]).status_code == 400

    def test_negative_weight_is_400(self, client):
        graph = {
            "nodes": [{"id": "a"}, {"id": "b"}],
            "edges": [{"source": "a", "target": "b", "weight": -1}],
        }
        resp = client.post("/api/run", json={"graph": graph, "source": "a"})
        assert resp.status_code == 400

    def test_malformed_graph_is_400(self, client):
        resp = client.post("/api/run", json={"graph": {"nodes": [{"x": 1}]}, "source": "a"})
        assert resp.status_code == 400

    def test_dangling_edge_is_404(self, client):
        graph = {"nodes": [{"id": "a"}], "edges": [{"source": "a", "target": "b"}]}
        resp = client.post("/api/run", json={"graph": graph, "source": "a"})
        assert resp.status_code == 404

    def test_graph_too_large(self, client):
        graph = {"nodes": [{"id": str(i)} for i in range(config.MAX_NODES + 1)], "edges": []}
        resp = client.post("/api/run", json={"graph": graph, "source": "0"})
        assert resp.status_code == 400

    @pytest.mark.parametrize(
        "body",
        [
            {"source": ["A"], "target": "F"},
            {"source": "A", "target": {"id": "F"}},
            {"source": "A", "target": "F", "algorithm": "astar", "heuristic": {"x": 1}},
            {"source": "A", "algorithm": ["dijkstra"]},
        ],
    )
    def test_wrong_field_types_are_400(self, client, body):
        assert client.post("/api/run", json=body).status_code == 400

    def test_parallel_edges_without_ids_are_kept(self, client):
        graph = {
            "nodes": [{"id": "a"}, {"id": "b"}],
            "edges": [
                {"source": "a", "target": "b", "weight": 5},
                {"source": "a", "target": "b", "weight": 2},
            ],
        }
        resp = client.post("/api/run", json={"graph": graph, "source": "a", "target": "b"})
        data = resp.get_json()
        assert len(data["graph"]["edges"]) == 2
        assert data["metrics"]["path_cost"] == 2.0


class TestCompare:

    def test_compare_defaults(self, client):
        resp = client.post("/api/compare", json={"source": "A", "target": "F"})
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["left"]["algo_key"] == "dijkstra"
        assert data["right"]["algo_key"] == "astar"
        assert data["winner_path"] == "tie"
