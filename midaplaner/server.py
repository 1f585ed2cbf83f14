"""
MiDaPlaner JSON API
-------------------
Serves the planner over HTTP, backed by one in-memory PlannerAPI.

Usage:
    midaplaner serve --port 3000
    # or
    python -m midaplaner serve

API:
    POST /api/register                         { username, password, role? }
    POST /api/login                            { username, password } → { session }
    POST /api/logout
    GET  /api/boards                           → { boards: [{id, name}] }
    POST /api/boards                           { name }
    GET  /api/boards/<id>/columns
    POST /api/boards/<id>/columns              { name }
    GET  /api/columns/<id>/tasks
    POST /api/columns/<id>/tasks               { title }
    GET  /api/tasks/<id>
    POST /api/tasks/<id>/status                { status }
    POST /api/tasks/<id>/milestones            { name }
    POST /api/tasks/<id>/milestones/<n>/toggle
    GET  /health

Every /api route except register/login needs the session handle in the
X-Session header.
"""
import logging
from functools import wraps
from typing import Optional

from flask import Flask, g, jsonify, request

from .api import PlannerAPI
from .config import Config
from .errors import (
    AuthenticationFailure,
    DuplicateUsername,
    InvalidReference,
    InvalidSelection,
)

logger = logging.getLogger(__name__)

SESSION_HEADER = "X-Session"


def _body() -> dict:
    data = request.get_json(force=True, silent=True)
    return data if isinstance(data, dict) else {}


def _required(data: dict, key: str) -> str:
    """Fetch a required string field; a missing one is an empty selection."""
    value = data.get(key)
    if value is None:
        raise InvalidSelection(f"{key} is required")
    return str(value)


def create_app(api: Optional[PlannerAPI] = None, config: Optional[Config] = None) -> Flask:
    """Build the Flask app around an API instance (a fresh one by default)."""
    config = config or Config()
    if api is None:
        api = PlannerAPI()
        api.auth.seed(config.all_seed_users())

    app = Flask(__name__)
    app.config["PLANNER_API"] = api
    app.config["PLANNER_CONFIG"] = config

    # ── Error translation ────────────────────────────────────────────────

    @app.errorhandler(DuplicateUsername)
    def _duplicate(e):
        return jsonify({"error": str(e)}), 409

    @app.errorhandler(AuthenticationFailure)
    def _unauthorized(e):
        logger.warning(f"{request.method} {request.path}: {e}")
        return jsonify({"error": str(e)}), 401

    @app.errorhandler(InvalidReference)
    def _not_found(e):
        logger.warning(f"{request.method} {request.path}: {e}")
        return jsonify({"error": str(e)}), 404

    @app.errorhandler(InvalidSelection)
    def _bad_selection(e):
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(ValueError)
    def _bad_value(e):
        return jsonify({"error": str(e)}), 400

    # ── Auth ─────────────────────────────────────────────────────────────

    def require_session(f):
        """Decorator: resolve X-Session to a user, 401 if missing/unknown."""
        @wraps(f)
        def decorated(*args, **kwargs):
            session = request.headers.get(SESSION_HEADER, "").strip()
            g.session = session
            g.user = api.activate(session)
            return f(*args, **kwargs)
        return decorated

    @app.route("/api/register", methods=["POST"])
    def register():
        data = _body()
        username = _required(data, "username")
        password = _required(data, "password")
        role = data.get("role", "EMPLOYEE")
        api.register_or_raise(username, password, role)
        return jsonify({"registered": True, "username": username}), 201

    @app.route("/api/login", methods=["POST"])
    def login():
        data = _body()
        session = api.login(_required(data, "username"), _required(data, "password"))
        user = api.session_user(session)
        return jsonify({"session": session, **user.to_dict()})

    @app.route("/api/logout", methods=["POST"])
    @require_session
    def logout():
        api.logout(g.session)
        return jsonify({"logged_out": True})

    # ── Boards ───────────────────────────────────────────────────────────

    @app.route("/api/boards", methods=["GET"])
    @require_session
    def list_boards():
        boards = [{"id": bid, "name": name} for bid, name in api.list_boards(g.session)]
        return jsonify({"boards": boards, "count": len(boards)})

    @app.route("/api/boards", methods=["POST"])
    @require_session
    def create_board():
        name = _required(_body(), "name")
        board_id = api.create_board(g.session, name)
        return jsonify({"id": board_id, "name": name}), 201

    # ── Columns ──────────────────────────────────────────────────────────

    @app.route("/api/boards/<board_id>/columns", methods=["GET"])
    @require_session
    def list_columns(board_id):
        columns = [{"id": cid, "name": name} for cid, name in api.list_columns(board_id)]
        return jsonify({"columns": columns, "count": len(columns)})

    @app.route("/api/boards/<board_id>/columns", methods=["POST"])
    @require_session
    def create_column(board_id):
        name = _required(_body(), "name")
        column_id = api.create_column(board_id, name)
        return jsonify({"id": column_id, "name": name}), 201

    # ── Tasks ────────────────────────────────────────────────────────────

    @app.route("/api/columns/<column_id>/tasks", methods=["GET"])
    @require_session
    def list_tasks(column_id):
        tasks = [
            {"id": tid, "title": title, "status": status.name, "progress": progress}
            for tid, title, status, progress in api.list_tasks(column_id)
        ]
        return jsonify({"tasks": tasks, "count": len(tasks)})

    @app.route("/api/columns/<column_id>/tasks", methods=["POST"])
    @require_session
    def create_task(column_id):
        title = _required(_body(), "title")
        task_id = api.create_task(column_id, title)
        return jsonify(api.get_task(task_id)), 201

    @app.route("/api/tasks/<task_id>", methods=["GET"])
    @require_session
    def get_task(task_id):
        return jsonify(api.get_task(task_id))

    @app.route("/api/tasks/<task_id>/status", methods=["POST"])
    @require_session
    def set_task_status(task_id):
        status = _required(_body(), "status")
        api.set_task_status(task_id, status)
        return jsonify(api.get_task(task_id))

    @app.route("/api/tasks/<task_id>/milestones", methods=["POST"])
    @require_session
    def add_milestone(task_id):
        name = _required(_body(), "name")
        index = api.add_milestone(task_id, name)
        return jsonify({"index": index, "task": api.get_task(task_id)}), 201

    @app.route("/api/tasks/<task_id>/milestones/<int:index>/toggle", methods=["POST"])
    @require_session
    def toggle_milestone(task_id, index):
        completed = api.toggle_milestone(task_id, index)
        return jsonify({"completed": completed, "task": api.get_task(task_id)})

    @app.route("/health")
    def health():
        return jsonify({"status": "ok", **api.stats()})

    return app
