from __future__ import annotations

import logging

from flask import Blueprint, abort, current_app

from api.state import get_state

logger = logging.getLogger(__name__)

bp = Blueprint("admin", __name__)

METRICS_TEMPLATE = """<html>
  <body>
    <h1>Welcome, Chirpy Admin</h1>
    <p>Chirpy has been visited {hits} times!</p>
  </body>
</html>
"""


@bp.get("/metrics")
def metrics():
    """
    File-server hit counter
    ---
    tags:
      - Admin
    produces:
      - text/html
    responses:
      200: { description: HTML page with the hit count }
    """
    hits = get_state().fileserver_hits
    return METRICS_TEMPLATE.format(hits=hits), 200, {"Content-Type": "text/html; charset=utf-8"}


@bp.post("/reset")
def reset():
    """
    Reset the hit counter and delete all users (dev platform only)
    ---
    tags:
      - Admin
    responses:
      200: { description: Reset done }
      403: { description: Not allowed outside the dev platform }
    """
    if current_app.config.get("PLATFORM") != "dev":
        abort(403, description="Reset is only allowed in dev")

    state = get_state()
    state.reset_hits()
    deleted = state.storage.delete_all_users()
    logger.warning("admin reset: hit counter cleared, %d users deleted", deleted)
    return {"hits": 0, "users_deleted": deleted}, 200
