"""
main.py — Path Trace Flask API
================================
JSON API over the step-tracing engines.  Stateless: every request
carries the graph it wants to run on (or falls back to the sample
graph), and every run comes back fully materialised so the client can
scrub through it without calling the server again.

Routes:
  GET  /api/algorithms         – registry cards with pseudocode
  GET  /api/heuristics         – heuristic keys for A*
  GET  /api/graph/sample       – the six-node demo graph
  POST /api/graph/generate     – generate a random graph
  POST /api/graph/import       – import from adjacency-list text
  POST /api/run                – run one algorithm, return every step + metrics
  POST /api/compare            – run two algorithms on the same graph

Errors come back as {"error": message}: 404 for unknown nodes, 400 for
everything else the caller got wrong.
"""

import logging

from flask import Flask, jsonify, request

import config
from graph import Graph, GraphError, NodeNotFound
from algorithms import HEURISTICS, list_algorithms
from engine import Recorder, compare

logger = logging.getLogger(__name__)

app = Flask(__name__)


class ApiError(Exception):
    def __init__(self, message: str, status: int = 400):
        super().__init__(message)
        self.message = message
        self.status  = status


# ---------------------------------------------------------------------------
# Error handlers
# ---------------------------------------------------------------------------
@app.errorhandler(ApiError)
def handle_api_error(err: ApiError):
    return jsonify({"error": err.message}), err.status


@app.errorhandler(NodeNotFound)
def handle_node_not_found(err: NodeNotFound):
    return jsonify({"error": str(err)}), 404


@app.errorhandler(ValueError)
def handle_value_error(err: ValueError):
    # GraphError (InvalidWeight, TargetRequired) and unknown algorithm / heuristic keys
    return jsonify({"error": str(err)}), 400


# ---------------------------------------------------------------------------
# Request helpers
# ---------------------------------------------------------------------------
def _json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ApiError("Expected a JSON object body")
    return data


def _graph_from(data: dict) -> Graph:
    """Graph from the request body, or the sample graph. Enforces size limits."""
    raw = data.get("graph")
    if raw is None:
        return Graph.sample()
    if not isinstance(raw, dict):
        raise ApiError("'graph' must be an object")

    nodes, edges = raw.get("nodes", []), raw.get("edges", [])
    if not isinstance(nodes, list) or not isinstance(edges, list):
        raise ApiError("'graph.nodes' and 'graph.edges' must be lists")
    if len(nodes) > config.MAX_NODES or len(edges) > config.MAX_EDGES:
        logger.warning("rejected graph with %d nodes / %d edges", len(nodes), len(edges))
        raise ApiError(
            f"Graph too large: at most {config.MAX_NODES} nodes and {config.MAX_EDGES} edges"
        )
    try:
        return Graph.from_dict(raw)
    except GraphError:
        raise
    except (KeyError, TypeError, AttributeError) as e:
        raise ApiError(f"Malformed graph: {e!r}") from e


def _field(data: dict, key: str, types, default=None, required: bool = False):
    """Read `key` from the body and check its JSON type. Bools never count as numbers."""
    value = data.get(key, default)
    if value is None:
        if required:
            raise ApiError(f"'{key}' is required")
        return None
    if (isinstance(value, bool) and bool not in types) or not isinstance(value, types):
        raise ApiError(f"'{key}' has the wrong type")
    return value


def _node_id(data: dict, key: str, required: bool = False):
    return _field(data, key, (str, int), required=required)


def _check_size(g: Graph) -> None:
    if g.node_count() > config.MAX_NODES or g.edge_count() > config.MAX_EDGES:
        logger.warning("rejected graph with %d nodes / %d edges", g.node_count(), g.edge_count())
        raise ApiError(
            f"Graph too large: at most {config.MAX_NODES} nodes and {config.MAX_EDGES} edges"
        )


def _graph_response(g: Graph):
    return jsonify({"graph": g.to_dict(), "node_ids": g.node_ids()})


# ---------------------------------------------------------------------------
# API: Catalogue
# ---------------------------------------------------------------------------
@app.route("/api/algorithms")
def api_algorithms():
    return jsonify({"algorithms": [a.to_dict() for a in list_algorithms()]})


@app.route("/api/heuristics")
def api_heuristics():
    return jsonify({"heuristics": list(HEURISTICS), "default": config.DEFAULT_HEURISTIC})


# ---------------------------------------------------------------------------
# API: Graphs
# ---------------------------------------------------------------------------
@app.route("/api/graph/sample")
def api_graph_sample():
    return _graph_response(Graph.sample())


@app.route("/api/graph/generate", methods=["POST"])
def api_graph_generate():
    data = _json_body()
    num_nodes = _field(data, "nodes", (int,), default=10)
    if not 1 <= num_nodes <= config.MAX_NODES:
        raise ApiError(f"'nodes' must be between 1 and {config.MAX_NODES}")
    prob = _field(data, "prob", (int, float), default=0.3)
    if not 0.0 <= prob <= 1.0:
        raise ApiError("'prob' must be between 0 and 1")
    directed = bool(data.get("directed", False))

    # expected edge count, checked before any generating happens
    pairs = num_nodes * (num_nodes - 1) // (1 if directed else 2)
    if pairs * prob > config.MAX_EDGES:
        raise ApiError(f"Expected edge count exceeds {config.MAX_EDGES}; lower 'nodes' or 'prob'")

    g = Graph.generate_random(
        num_nodes=num_nodes,
        edge_probability=prob,
        directed=directed,
        seed=_field(data, "seed", (int, str)),
    )
    _check_size(g)
    return _graph_response(g)


@app.route("/api/graph/import", methods=["POST"])
def api_graph_import():
    data = _json_body()
    text = _field(data, "text", (str,), default="")

    g = Graph.from_adjacency_list(text, directed=bool(data.get("directed", False)))
    _check_size(g)
    return _graph_response(g)


# ---------------------------------------------------------------------------
# API: Runs
# ---------------------------------------------------------------------------
@app.route("/api/run", methods=["POST"])
def api_run():
    data = _json_body()
    source = _node_id(data, "source", required=True)

    rec = Recorder()
    rec.record(
        _field(data, "algorithm", (str,), default="dijkstra"),
        _graph_from(data),
        source,
        _node_id(data, "target"),
        heuristic=_field(data, "heuristic", (str,)),
    )
    return jsonify(rec.export())


@app.route("/api/compare", methods=["POST"])
def api_compare():
    data = _json_body()
    source, target = _node_id(data, "source", required=True), _node_id(data, "target")
    heuristic = _field(data, "heuristic", (str,))

    graph = _graph_from(data)
    left, right = Recorder(), Recorder()
    left.record(_field(data, "left", (str,), default="dijkstra"), graph, source, target, heuristic=heuristic)
    right.record(_field(data, "right", (str,), default="astar"), graph, source, target, heuristic=heuristic)
    return jsonify(compare(left, right).to_dict())


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
    logger.info("Path Trace API listening on http://%s:%d", config.HOST, config.PORT)
    app.run(debug=config.DEBUG, host=config.HOST, port=config.PORT)
