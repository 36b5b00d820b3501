from __future__ import annotations

from flask import Blueprint, request, jsonify, g, abort

from api.state import get_storage
from models.user import User
from models.schemas.user import UserCreateSchema, UserUpdateSchema, UserOutSchema
from utils.decorators import jwt_required
from utils.security import hash_password

bp = Blueprint("users", __name__)

user_create_schema = UserCreateSchema()
user_update_schema = UserUpdateSchema()
user_out_schema = UserOutSchema()


@bp.post("/users")
def register():
    """
    Register a new user.
    ---
    tags:
      - Users
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        schema:
          type: object
          required: [email, password]
          properties:
            email: { type: string }
            password: { type: string }
    responses:
      201:
        description: Created
      400:
        description: Validation error
      409:
        description: Email already registered
    """
    payload = request.get_json(silent=True) or {}
    data = user_create_schema.load(payload)

    storage = get_storage()
    if storage.find_user_by_email(data["email"]):
        abort(409, description="Email already registered")

    user = User(
        email=data["email"],
        hashed_password=hash_password(data["password"]),
        is_chirpy_red=False,
    )
    storage.new(user)
    storage.save()

    return jsonify({"data": user_out_schema.dump(user)}), 201


@bp.put("/users")
@jwt_required()
def update_me():
    """
    Change the email and password of the authenticated user.
    ---
    tags:
      - Users
    security:
      - Bearer: []
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        schema:
          type: object
          required: [email, password]
          properties:
            email: { type: string }
            password: { type: string }
    responses:
      200:
        description: OK
      401:
        description: Unauthorized
      409:
        description: Email already registered
    """
    payload = request.get_json(silent=True) or {}
    data = user_update_schema.load(payload)

    storage = get_storage()
    user = storage.get(User, str(g.current_user_id))
    if not user:
        abort(401, description="User not found")

    other = storage.find_user_by_email(data["email"])
    if other and other.id != user.id:
        abort(409, description="Email already registered")

    user.email = data["email"]
    user.hashed_password = hash_password(data["password"])
    storage.new(user)
    storage.save()

    return jsonify({"data": user_out_schema.dump(user)}), 200
