"""Unit tests for the immutable Graph value."""

import math

import pytest

from graph import Edge, Graph, InvalidWeight, Node, NodeNotFound


def _assert_adjacency_consistent(g: Graph):
    for nid, edge_ids in g.adjacency.items():
        assert nid in g.nodes
        assert len(edge_ids) == len(set(edge_ids))
        for eid in edge_ids:
            assert eid in g.edges
    for e in g.edges.values():
        assert e.source in g.nodes and e.target in g.nodes
        assert e.id in g.adjacency[e.source]
        if not g.directed:
            assert e.id in g.adjacency[e.target]


class TestEdits:
    """Edits return new graphs and keep the adjacency index consistent."""

    def test_add_node_returns_new_graph(self):
        """add_node never mutates the receiver."""
        g0 = Graph()
        g1 = g0.add_node(Node("A", 1, 2))
        assert g0.node_count() == 0
        assert g1.node_count() == 1
        assert g1.get_node("A") == Node("A", 1, 2)
        assert g1.adjacency["A"] == ()

    def test_add_edge_undirected_indexes_both_ends(self, sample_graph):
        """An undirected edge shows up in both endpoints' adjacency."""
        assert "AB" in sample_graph.adjacency["A"]
        assert "AB" in sample_graph.adjacency["B"]
        _assert_adjacency_consistent(sample_graph)

    def test_add_edge_directed_indexes_source_only(self):
        """A directed edge is only indexed on its tail."""
        g = Graph(directed=True).create_node("A").create_node("B").connect("A", "B", 2)
        assert g.adjacency["A"] == ("A-B",)
        assert g.adjacency["B"] == ()
        assert g.get_edge("A-B").directed is True
        _assert_adjacency_consistent(g)

    def test_add_edge_stamps_graph_direction(self):
        """Edges adopt the owning graph's directed flag."""
        g = Graph(directed=False).create_node("A").create_node("B")
        g = g.add_edge(Edge("e", "A", "B", 1, directed=True))
        assert g.get_edge("e").directed is False

    def test_add_edge_dangling_endpoint_raises(self):
        """Edges must not point at missing nodes."""
        g = Graph().create_node("A")
        with pytest.raises(NodeNotFound) as exc:
            g.connect("A", "Z", 1)
        assert exc.value.node_id == "Z"

    def test_add_edge_replaces_same_id(self, sample_graph):
        """Re-adding an edge id moves it and drops the old adjacency entries."""
        g = sample_graph.add_edge(Edge("AB", "A", "F", 1))
        assert g.get_edge("AB").target == "F"
        assert "AB" not in g.adjacency["B"]
        assert "AB" in g.adjacency["F"]
        _assert_adjacency_consistent(g)

    def test_connect_generates_unique_ids(self):
        """Parallel edges get distinct deterministic ids."""
        g = Graph().create_node("A").create_node("B")
        g = g.connect("A", "B", 1).connect("A", "B", 2)
        assert set(g.edges) == {"A-B", "A-B#2"}

    def test_remove_node_cascades(self, sample_graph):
        """Removing a node removes every incident edge and its index entries."""
        g = sample_graph.remove_node("D")
        assert not g.has_node("D")
        assert not {"BD", "CD", "DE", "DF"} & set(g.edges)
        assert "BD" not in g.adjacency["B"]
        assert "DF" not in g.adjacency["F"]
        assert "D" not in g.adjacency
        _assert_adjacency_consistent(g)
        # receiver untouched
        assert sample_graph.has_node("D")
        assert sample_graph.edge_count() == 8

    def test_remove_edge_both_ends(self, sample_graph):
        """Removing an undirected edge drops it from both endpoints."""
        g = sample_graph.remove_edge("CE")
        assert "CE" not in g.edges
        assert "CE" not in g.adjacency["C"]
        assert "CE" not in g.adjacency["E"]
        _assert_adjacency_consistent(g)

    def test_remove_missing_is_noop(self, sample_graph):
        """Removing unknown ids is safe and changes nothing."""
        assert sample_graph.remove_node("ZZ") == sample_graph
        assert sample_graph.remove_edge("ZZ") == sample_graph

    def test_views_are_read_only(self, sample_graph):
        """The public mappings cannot be written through."""
        with pytest.raises(TypeError):
            sample_graph.nodes["X"] = Node("X")
        with pytest.raises(TypeError):
            sample_graph.edges["X"] = None


class TestWeights:
    """Edges only accept positive finite numbers."""

    @pytest.mark.parametrize("weight", [0, -1, -0.5, math.inf, math.nan, "3", None, True])
    def test_invalid_weight_rejected(self, weight):
        with pytest.raises(InvalidWeight):
            Edge("e", "A", "B", weight)

    def test_invalid_weight_via_connect(self):
        g = Graph().create_node("A").create_node("B")
        with pytest.raises(InvalidWeight) as exc:
            g.connect("A", "B", -3)
        assert exc.value.weight == -3

    def test_int_weight_stored_as_float(self):
        assert Edge("e", "A", "B", 4).weight == 4.0


class TestQueries:
    """neighbours() and edge_between() honour directedness."""

    def test_neighbours_undirected(self, sample_graph):
        """Neighbours come back in edge insertion order with weights."""
        assert [(n.node_id, n.edge_id, n.weight) for n in sample_graph.neighbours("A")] == [
            ("B", "AB", 4.0),
            ("C", "AC", 2.0),
        ]
        assert {n.node_id for n in sample_graph.neighbours("D")} == {"B", "C", "E", "F"}

    def test_neighbours_directed(self):
        g = Graph(directed=True).create_node("A").create_node("B").connect("A", "B", 1)
        assert [n.node_id for n in g.neighbours("A")] == ["B"]
        assert g.neighbours("B") == []

    def test_neighbours_unknown_node(self, sample_graph):
        assert sample_graph.neighbours("nope") == []

    def test_edge_between(self, sample_graph):
        assert sample_graph.edge_between("A", "C").id == "AC"
        assert sample_graph.edge_between("C", "A").id == "AC"
        assert sample_graph.edge_between("A", "F") is None
        assert sample_graph.edge_between("nope", "A") is None

    def test_edge_between_directed(self):
        g = Graph(directed=True).create_node("A").create_node("B").connect("A", "B", 1)
        assert g.edge_between("A", "B") is not None
        assert g.edge_between("B", "A") is None


class TestSerialisation:
    """to_dict / from_dict and the factories."""

    def test_round_trip(self, sample_graph):
        assert Graph.from_dict(sample_graph.to_dict()) == sample_graph

    def test_from_dict_invalid_weight(self):
        data = {
            "nodes": [{"id": "A"}, {"id": "B"}],
            "edges": [{"id": "AB", "source": "A", "target": "B", "weight": -2}],
        }
        with pytest.raises(InvalidWeight):
            Graph.from_dict(data)

    def test_generate_random_is_seeded_and_connected(self):
        g1 = Graph.generate_random(num_nodes=8, edge_probability=0.2, seed=7)
        g2 = Graph.generate_random(num_nodes=8, edge_probability=0.2, seed=7)
        assert g1 == g2
        _assert_adjacency_consistent(g1)
        # spanning chain → every node has at least one edge
        assert all(g1.degree(nid) > 0 for nid in g1.nodes)

    def test_from_adjacency_list(self):
        g = Graph.from_adjacency_list("A: B(3) C\nB -> C(2)\n# comment\n")
        assert set(g.nodes) == {"A", "B", "C"}
        assert g.edge_between("A", "B").weight == 3.0
        assert g.edge_between("A", "C").weight == 1.0
        assert g.edge_between("C", "B").weight == 2.0
        _assert_adjacency_consistent(g)

    def test_from_adjacency_list_bad_weight(self):
        with pytest.raises(InvalidWeight):
            Graph.from_adjacency_list("A: B(-1)")

    def test_from_dict_keeps_idless_parallel_edges(self):
        data = {
            "nodes": [{"id": "A"}, {"id": "B"}],
            "edges": [
                {"source": "A", "target": "B", "weight": 4},
                {"source": "A", "target": "B", "weight": 1},
            ],
        }
        g = Graph.from_dict(data)
        assert set(g.edges) == {"A-B", "A-B#2"}
        _assert_adjacency_consistent(g)
