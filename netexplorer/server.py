"""
Flask JSON service exposing the traversal engines to the browser front end.

The graph is built once in ``create_app`` and shared read-only by every
request thread; each request runs its traversal on local state only.
"""

from __future__ import annotations

import datetime
from typing import TYPE_CHECKING

from flask import Flask, jsonify, request
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from netexplorer import __version__
from netexplorer.config import load_graph
from netexplorer.graph import UnknownNodeError
from netexplorer.logger import logger
from netexplorer.model import NetworkExplorerConfig, PathQuery
from netexplorer.stats import compute_stats, graph_view
from netexplorer.traversal import find_cycles, shortest_path

if TYPE_CHECKING:
    from flask import Response

AVAILABLE_ENDPOINTS = [
    "GET /users",
    "GET /graph",
    "GET /stats",
    "POST /shortest-path",
    "GET /cycles",
    "GET /health",
]


def create_app(config: NetworkExplorerConfig | None = None) -> Flask:
    """Build the Flask app. Raises ``GraphConfigError`` on a malformed network."""
    config = config or NetworkExplorerConfig()
    graph = load_graph(config)

    app = Flask(__name__)
    app.json.sort_keys = False

    @app.after_request
    def add_cors_headers(response: Response) -> Response:
        response.headers["Access-Control-Allow-Origin"] = "*"
        response.headers["Access-Control-Allow-Headers"] = "Content-Type"
        response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
        return response

    @app.route("/users")
    def users():
        return jsonify({"users": list(graph.all_nodes())})

    @app.route("/graph")
    def graph_structure():
        return jsonify(graph_view(graph).model_dump(mode="json"))

    @app.route("/stats")
    def stats():
        return jsonify(compute_stats(graph).model_dump(mode="json"))

    @app.route("/shortest-path", methods=["POST"])
    def shortest_path_route():
        body = request.get_json(silent=True)
        if not isinstance(body, dict) or not body.get("from") or not body.get("to"):
            return jsonify({"error": "Both 'from' and 'to' users are required"}), 400
        try:
            query = PathQuery.model_validate(body)
        except ValidationError:
            return jsonify({"error": "'from' and 'to' must be user names"}), 400

        try:
            result = shortest_path(graph, query.source, query.target)
        except UnknownNodeError as e:
            return jsonify({"error": str(e)}), 400
        return jsonify(result.model_dump(mode="json"))

    @app.route("/cycles")
    def cycles():
        raw = request.args.get("quota")
        if raw is None:
            quota = config.cycles.default_quota
        else:
            try:
                quota = int(raw)
            except ValueError:
                return jsonify({"error": f"Invalid quota '{raw}'"}), 400
            if quota < 1:
                return jsonify({"error": "quota must be a positive integer"}), 400
        result = find_cycles(graph, quota)
        return jsonify(result.model_dump(mode="json"))

    @app.route("/health")
    def health():
        return jsonify({
            "status": "healthy",
            "timestamp": (
                datetime.datetime.now(datetime.UTC).isoformat().replace("+00:00", "Z")
            ),
            "version": __version__,
            "network_size": len(graph),
        })

    @app.errorhandler(HTTPException)
    def http_error(error: HTTPException):
        if error.code == 404:
            return jsonify({
                "error": "Endpoint not found",
                "available_endpoints": AVAILABLE_ENDPOINTS,
            }), 404
        return jsonify({"error": error.description or error.name}), error.code

    @app.errorhandler(Exception)
    def internal_error(error):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify({"error": "Internal server error"}), 500

    logger.info("Network loaded with %d users", len(graph))
    return app
