from __future__ import annotations
import hmac
import logging
from functools import wraps
from flask import request, g, abort, current_app
from utils.exceptions import AuthHeaderError, TokenError
from utils.security import get_api_key, get_bearer_token, validate_access_token

logger = logging.getLogger(__name__)


def jwt_required():
    """
    Require a valid access token in "Authorization: Bearer <token>".
    Sets g.current_user_id (uuid.UUID). Whether the user still exists is left
    to the handler.
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            try:
                token = get_bearer_token(request.headers)
            except AuthHeaderError as e:
                abort(401, description=str(e))
            try:
                user_id = validate_access_token(
                    token,
                    current_app.config["JWT_SECRET"],
                    algorithm=current_app.config["JWT_ALGORITHM"],
                )
            except TokenError as e:
                logger.info("rejected access token: %s", e.__class__.__name__)
                abort(401, description=str(e))

            g.current_user_id = user_id
            return fn(*args, **kwargs)

        return wrapper

    return decorator


def api_key_required(config_key: str = "POLKA_KEY"):
    """
    Require "Authorization: ApiKey <key>" matching current_app.config[config_key].
    An empty configured key rejects every request.
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            try:
                key = get_api_key(request.headers)
            except AuthHeaderError as e:
                abort(401, description=str(e))
            expected = current_app.config.get(config_key) or ""
            if not expected or not hmac.compare_digest(key.encode(), expected.encode()):
                logger.warning("rejected api key on %s", request.path)
                abort(401, description="Invalid API key")
            return fn(*args, **kwargs)

        return wrapper

    return decorator
