from __future__ import annotations

import uuid
from typing import Tuple

from flask import Blueprint, request, jsonify, abort, g

from api.state import get_storage
from models.chirp import Chirp
from models.user import User
from models.schemas.chirp import ChirpBodySchema, ChirpCreateSchema, ChirpOutSchema
from utils.decorators import jwt_required
from utils.permissions import Decision, authorize_owner_action
from utils.profanity import clean_body

bp = Blueprint("chirps", __name__)

chirp_body_schema = ChirpBodySchema()
chirp_create_schema = ChirpCreateSchema()
chirp_out_schema = ChirpOutSchema()
chirps_out_schema = ChirpOutSchema(many=True)

MAX_LIMIT = 100


def parse_pagination() -> Tuple[int, int]:
    try:
        page = int(request.args.get("page", "1"))
        limit = int(request.args.get("limit", "20"))
        page = max(page, 1)
        limit = max(1, min(limit, MAX_LIMIT))
        return page, limit
    except ValueError:
        abort(400, description="page and limit must be integers")


def parse_sort():
    sort = request.args.get("sort", "asc").lower()
    if sort not in ("asc", "desc"):
        abort(400, description="Unsupported sort order. Allowed: asc, desc")
    if sort == "desc":
        return (Chirp.created_at.desc(), Chirp.id.desc())
    return (Chirp.created_at.asc(), Chirp.id.asc())


def parse_uuid(value: str, what: str) -> str:
    try:
        return str(uuid.UUID(value))
    except (ValueError, TypeError):
        abort(400, description=f"Invalid {what}")


@bp.post("/chirps")
@jwt_required()
def create_chirp():
    """
    Create a chirp for the authenticated user
    ---
    tags:
      - Chirps
    security:
      - Bearer: []
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          properties:
            body: { type: string, maxLength: 140 }
    responses:
      201:
        description: Created
      400:
        description: Empty or too long
      401:
        description: Unauthorized
    """
    data = chirp_create_schema.load(request.get_json(silent=True) or {})
    storage = get_storage()
    if not storage.get(User, str(g.current_user_id)):
        abort(401, description="User not found")
    chirp = Chirp(body=data["body"], user_id=str(g.current_user_id))
    storage.new(chirp)
    storage.save()
    return jsonify({"data": chirp_out_schema.dump(chirp)}), 201


@bp.get("/chirps")
def list_chirps():
    """
    List chirps, oldest first by default
    ---
    tags:
      - Chirps
    parameters:
      - in: query
        name: author_id
        type: string
      - in: query
        name: sort
        type: string
        enum: [asc, desc]
        default: asc
      - in: query
        name: page
        type: integer
        default: 1
      - in: query
        name: limit
        type: integer
        default: 20
    responses:
      200: { description: OK }
      400: { description: Bad author_id or sort }
    """
    session = get_storage().get_session()
    page, limit = parse_pagination()
    order_by = parse_sort()

    query = session.query(Chirp)
    author_id = request.args.get("author_id")
    if author_id:
        query = query.filter(Chirp.user_id == parse_uuid(author_id, "author ID"))

    total = query.count()
    rows = query.order_by(*order_by).offset((page - 1) * limit).limit(limit).all()
    return jsonify(
        {
            "data": chirps_out_schema.dump(rows),
            "meta": {"page": page, "limit": limit, "total": total},
        }
    ), 200


@bp.get("/chirps/<chirp_id>")
def get_chirp(chirp_id: str):
    """
    Get one chirp
    ---
    tags:
      - Chirps
    parameters:
      - in: path
        name: chirp_id
        type: string
        required: true
    responses:
      200: { description: OK }
      404: { description: Not found }
    """
    chirp = get_storage().get(Chirp, parse_uuid(chirp_id, "chirp ID"))
    if not chirp:
        abort(404, description="Chirp not found")
    return jsonify({"data": chirp_out_schema.dump(chirp)}), 200


@bp.delete("/chirps/<chirp_id>")
@jwt_required()
def delete_chirp(chirp_id: str):
    """
    Delete a chirp (owner only)
    ---
    tags:
      - Chirps
    security:
      - Bearer: []
    parameters:
      - in: path
        name: chirp_id
        type: string
        required: true
    responses:
      204: { description: Deleted }
      401: { description: Unauthorized }
      403: { description: Not the owner }
      404: { description: Not found }
    """
    storage = get_storage()
    chirp = storage.get(Chirp, parse_uuid(chirp_id, "chirp ID"))
    if not chirp:
        abort(404, description="Chirp not found")
    if authorize_owner_action(g.current_user_id, chirp.user_id) is Decision.DENY:
        abort(403, description="You can only delete your own chirps")

    storage.delete(chirp)
    storage.save()
    return ("", 204)


@bp.post("/validate_chirp")
def validate_chirp():
    """
    Check a chirp body without saving it
    ---
    tags:
      - Chirps
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          properties:
            body: { type: string }
    responses:
      200: { description: Returns cleaned_body }
      400: { description: Empty or too long }
    """
    data = chirp_body_schema.load(request.get_json(silent=True) or {})
    cleaned, _ = clean_body(data["body"])
    return jsonify({"cleaned_body": cleaned}), 200
