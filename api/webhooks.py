"""
Polka payment webhook: upgrades a user to Chirpy Red.
"""
from __future__ import annotations

import logging
import uuid

from flask import Blueprint, request, abort

from api.state import get_storage
from models.user import User
from models.schemas.webhook import USER_UPGRADED, WebhookEventSchema
from utils.decorators import api_key_required

logger = logging.getLogger(__name__)

bp = Blueprint("webhooks", __name__)

event_schema = WebhookEventSchema()


@bp.post("/polka/webhooks")
@api_key_required("POLKA_KEY")
def polka_webhook():
    """
    Receive a Polka event
    ---
    tags:
      - Webhooks
    security:
      - ApiKey: []
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          properties:
            event: { type: string, example: user.upgraded }
            data:
              type: object
              properties:
                user_id: { type: string }
    responses:
      204: { description: Accepted (or ignored event) }
      401: { description: Bad API key }
      404: { description: Unknown user }
    """
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        abort(400, description="Invalid request body")
    # Polka only needs a 2xx for events we do not handle
    if payload.get("event") != USER_UPGRADED:
        return ("", 204)

    data = event_schema.load(payload)
    user_id = data["data"].get("user_id")
    if user_id is None:
        abort(400, description="data.user_id is required")

    try:
        user_id = uuid.UUID(user_id)
    except ValueError:
        abort(404, description="User not found")

    storage = get_storage()
    user = storage.get(User, str(user_id))
    if not user:
        abort(404, description="User not found")

    user.is_chirpy_red = True
    storage.new(user)
    storage.save()
    logger.info("user %s upgraded to chirpy red", user.id)
    return ("", 204)
