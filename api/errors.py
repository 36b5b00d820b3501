from flask import jsonify, current_app
from werkzeug.exceptions import HTTPException
from marshmallow import ValidationError
from sqlalchemy.exc import IntegrityError
import logging

logger = logging.getLogger(__name__)


def error_response(error: str, message: str, status: int, details: dict | None = None):
    payload = {"error": error, "message": message, "status": status}
    if details:
        payload["details"] = details
    return jsonify(payload), status


def _debug() -> bool:
    return bool(current_app and current_app.debug)


def register_error_handlers(app):
    # 400 Bad Request (generic)
    @app.errorhandler(400)
    def bad_request(e):
        message = getattr(e, "description", "Bad request")
        return error_response("BAD_REQUEST", message, 400)

    # 401 Unauthorized (missing/invalid/expired credentials)
    @app.errorhandler(401)
    def unauthorized(e):
        message = getattr(e, "description", "Unauthorized")
        return error_response("UNAUTHORIZED", message, 401)

    # 403 Forbidden (authenticated but not allowed)
    @app.errorhandler(403)
    def forbidden(e):
        message = getattr(e, "description", "Forbidden")
        return error_response("FORBIDDEN", message, 403)

    # 404 Not Found
    @app.errorhandler(404)
    def not_found(e):
        message = getattr(e, "description", None) or "Resource not found"
        if message.startswith("The requested URL was not found"):
            message = "Resource not found"
        return error_response("NOT_FOUND", message, 404)

    # 409 Conflict
    @app.errorhandler(409)
    def conflict(e):
        message = getattr(e, "description", "Conflict")
        return error_response("CONFLICT", message, 409)

    # Marshmallow validation errors map to 400
    @app.errorhandler(ValidationError)
    def handle_validation_error(err: ValidationError):
        # err.messages contains field-level details
        return error_response("VALIDATION_ERROR", "Invalid input", 400, details=err.messages)

    # Integrity errors (unique constraints, FK violations, check constraints)
    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        message = str(getattr(err, "orig", err))
        lower_msg = message.lower()
        if _debug():
            logger.exception("Integrity error", exc_info=err)
        details = {"db_error": message} if _debug() else None
        # Heuristics: tailor the status
        if "unique constraint" in lower_msg or "unique violation" in lower_msg:
            return error_response("CONFLICT", "Unique constraint violated.", 409, details=details)
        if "foreign key constraint" in lower_msg or "foreign key mismatch" in lower_msg:
            return error_response("BAD_REQUEST", "Foreign key constraint failed.", 400, details=details)
        return error_response("BAD_REQUEST", "Integrity error.", 400, details=details)

    # Remaining Werkzeug HTTPExceptions map to their status codes
    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        code = (err.name or "Bad Request").upper().replace(" ", "_")
        return error_response(code, err.description, err.code or 400)

    # 500 Internal Error (catch-all)
    @app.errorhandler(Exception)
    def internal_error(err: Exception):
        logger.exception("Unhandled exception", exc_info=err)
        # Exception details only reach the client in debug mode
        details = None
        if _debug():
            details = {"type": err.__class__.__name__, "message": str(err)}
        return error_response("INTERNAL_ERROR", "An unexpected error occurred", 500, details=details)
