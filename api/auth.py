"""
Authentication blueprint:
- POST /login   -> access token (JWT) + refresh token
- POST /refresh -> new access token for "Authorization: Bearer <refresh token>"
- POST /revoke  -> revoke the refresh token in the Authorization header

Access tokens are short-lived HS256 JWTs and are never stored. Refresh tokens
are opaque random strings stored in the refresh_tokens table; they are not
rotated on use and stay valid until they expire or are revoked.
"""
from __future__ import annotations

import logging
from datetime import timedelta

from flask import Blueprint, request, jsonify, abort, current_app

from api.state import get_storage
from models.schemas.user import UserLoginSchema, UserOutSchema
from utils.exceptions import AuthHeaderError, HashingError, RefreshTokenError, RefreshTokenNotFound
from utils.refresh_tokens import issue_refresh_token, redeem_refresh_token, revoke_refresh_token
from utils.security import DUMMY_HASH, get_bearer_token, make_access_token, verify_password

logger = logging.getLogger(__name__)

bp = Blueprint("auth", __name__)

user_login_schema = UserLoginSchema()
user_out_schema = UserOutSchema()


def _access_token_ttl(requested: int | None) -> timedelta:
    """A client may ask for a shorter-lived access token, never a longer one."""
    default = current_app.config["ACCESS_TOKEN_EXPIRES"]
    if requested and 0 < requested <= default.total_seconds():
        return timedelta(seconds=requested)
    return default


def _issue_access_token(user_id, ttl: timedelta) -> str:
    config = current_app.config
    return make_access_token(
        user_id,
        config["JWT_SECRET"],
        ttl,
        issuer=config["JWT_ISSUER"],
        algorithm=config["JWT_ALGORITHM"],
    )


def _bearer_or_401() -> str:
    try:
        return get_bearer_token(request.headers)
    except AuthHeaderError as e:
        abort(401, description=str(e))


@bp.post("/login")
def login():
    """
    Login: return access_token and refresh_token
    ---
    tags:
      - Auth
    consumes:
      - application/json
    parameters:
      -  in: body
         name: body
         schema:
           type: object
           required: [email, password]
           properties:
             email: { type: string }
             password: { type: string }
             expires_in_seconds: { type: integer }
    responses:
      200:
        description: OK (returns tokens)
      401:
        description: Unauthorized
    """
    payload = request.get_json(silent=True) or {}
    data = user_login_schema.load(payload)

    storage = get_storage()
    user = storage.find_user_by_email(data["email"])
    try:
        # Unknown emails still pay for one argon2 verification
        matched = verify_password(data["password"], user.hashed_password if user else DUMMY_HASH)
        valid = user is not None and matched
    except HashingError:
        logger.error("stored password hash for user %s is invalid", user.id)
        raise
    if not valid:
        if user:
            logger.info("failed login for user %s", user.id)
        abort(401, description="Incorrect email or password")

    ttl = _access_token_ttl(data.get("expires_in_seconds"))
    access_token = _issue_access_token(user.id, ttl)
    refresh_token = issue_refresh_token(storage, user.id, current_app.config["REFRESH_TOKEN_EXPIRES"])

    return jsonify(
        {
            "data": user_out_schema.dump(user),
            "access_token": access_token,
            "refresh_token": refresh_token,
            "token_type": "bearer",
            "expires_in": int(ttl.total_seconds()),
        }
    ), 200


@bp.post("/refresh")
def refresh():
    """
    Use a refresh token to obtain a new access token (no rotation)
    ---
    tags:
      - Auth
    security:
      - Bearer: []
    responses:
      200:
        description: OK (returns a new access token)
      401:
        description: Missing, unknown, expired or revoked refresh token
    """
    token = _bearer_or_401()
    try:
        user_id = redeem_refresh_token(get_storage(), token)
    except RefreshTokenError as e:
        abort(401, description=str(e))

    ttl = current_app.config["ACCESS_TOKEN_EXPIRES"]
    return jsonify(
        {
            "access_token": _issue_access_token(user_id, ttl),
            "token_type": "bearer",
            "expires_in": int(ttl.total_seconds()),
        }
    ), 200


@bp.post("/revoke")
def revoke():
    """
    Revoke a refresh token
    ---
    tags:
      - Auth
    security:
      - Bearer: []
    responses:
      204:
        description: Revoked
      401:
        description: Missing or malformed Authorization header
      404:
        description: Unknown refresh token
    """
    token = _bearer_or_401()
    try:
        revoke_refresh_token(get_storage(), token)
    except RefreshTokenNotFound as e:
        abort(404, description=str(e))
    return ("", 204)
