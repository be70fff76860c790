#!/usr/bin/env python3
"""
Project Board Server
--------------------
JSON API over a single in-memory board. A browser UI renders the lanes,
runs the drag gesture locally and posts the drag payload on drop.

Usage:
    python -m projboard.server --port 3000 --config projboard.yaml

API:
    GET  /api/board                  → { lanes: {active, finished}, stats }
    GET  /api/projects[?status=]     → { projects, count }
    POST /api/projects               → JSON body: { title, description, people }
                                       Returns: 201 { project } | 400 { error }
    POST /api/lanes/<status>/drop    → JSON body: { type: "text/plain", data: <project id> }
                                       Returns: { moved, state }
    GET  /health
"""

import logging
import sys
from typing import Optional

from flask import Flask, jsonify, request

from .components import Board
from .config import Config
from .dragdrop import DragSession, DragState
from .schema import LaneStatus
from .validation import ValidationError


def create_app(config: Optional[Config] = None, board: Optional[Board] = None) -> Flask:
    """Build the Flask app around one board; the board's store is the only state."""
    config = config or Config()
    board = board or Board(config)

    app = Flask(__name__)
    app.config["BOARD"] = board

    def lane_or_none(status: str):
        try:
            return board.lane(LaneStatus.from_str(status))
        except ValueError:
            return None

    @app.route("/api/board")
    def api_board():
        lanes = {
            status.value: [p.to_dict() for p in lane.assigned_projects]
            for status, lane in board.lanes.items()
        }
        return jsonify({"lanes": lanes, "stats": board.store.get_stats()})

    @app.route("/api/projects", methods=["GET"])
    def api_projects():
        status = request.args.get("status")
        if status:
            try:
                projects = board.store.list_by_status(LaneStatus.from_str(status))
            except ValueError:
                return jsonify({"error": f"Invalid status: {status}"}), 400
        else:
            projects = board.store.projects
        return jsonify({"projects": [p.to_dict() for p in projects], "count": len(projects)})

    @app.route("/api/projects", methods=["POST"])
    def api_create_project():
        data = request.get_json(force=True, silent=True) or {}
        form = board.input
        form.title = data.get("title", "")
        form.description = data.get("description", "")
        form.people = data.get("people", "")
        try:
            title, description, people = form.gather_user_input()
        except ValidationError as e:
            app.logger.warning(f"Rejected project: {e}")
            return jsonify({"error": str(e)}), 400
        finally:
            form.clear_inputs()
        project = board.store.add_project(title, description, people)
        return jsonify({"project": project.to_dict()}), 201

    @app.route("/api/lanes/<status>/drop", methods=["POST"])
    def api_drop(status):
        lane = lane_or_none(status)
        if lane is None:
            return jsonify({"error": f"Unknown lane: {status}"}), 404
        data = request.get_json(force=True, silent=True) or {}
        fmt = str(data.get("type", ""))
        project_id = str(data.get("data", ""))

        session = DragSession.from_payload(fmt, project_id)
        before = board.store.get(project_id)
        session.over(lane)
        state = session.drop(lane)
        after = board.store.get(project_id)
        moved = state == DragState.DROPPED and before is not None and before.status != after.status
        return jsonify({"moved": moved, "state": state.value})

    @app.route("/health")
    def health():
        return jsonify({"status": "ok", "projects": len(board.store)})

    return app


# ── Main ─────────────────────────────────────────────────────────────────────

def main(argv=None) -> None:
    import argparse

    parser = argparse.ArgumentParser(description="Project Board Server")
    parser.add_argument("--config", help="Path to projboard.yaml (overrides PROJBOARD_CONFIG)")
    parser.add_argument("--host", help="Bind address (use 0.0.0.0 to expose on network)")
    parser.add_argument("--port", type=int)
    args = parser.parse_args(argv)

    config = Config.load(args.config)
    if args.host:
        config.host = args.host
    if args.port:
        config.port = args.port

    logging.basicConfig(
        level=getattr(logging, str(config.log_level).upper(), logging.INFO),
        format="%(asctime)s [projboard] %(levelname)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    app = create_app(config)
    logging.getLogger(__name__).info(f"Serving board on http://{config.host}:{config.port}")
    # One request thread: the store is single-threaded
    app.run(host=config.host, port=config.port, debug=False, threaded=False)


if __name__ == "__main__":
    main()
