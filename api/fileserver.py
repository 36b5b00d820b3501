"""
Static files under /app. Every request counts towards /admin/metrics,
including requests for files that do not exist.
"""
import os

from flask import Blueprint, current_app, send_from_directory

from api.state import get_state

bp = Blueprint("fileserver", __name__)


@bp.before_request
def count_hit():
    get_state().record_hit()


@bp.get("/", defaults={"path": "index.html"})
@bp.get("/<path:path>")
def serve(path: str):
    root = os.path.abspath(current_app.config.get("FILESERVER_ROOT", "."))
    return send_from_directory(root, path)
