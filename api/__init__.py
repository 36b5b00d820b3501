from flask import Flask
from flasgger import Swagger
from flask_cors import CORS

from .config import get_config
from .errors import register_error_handlers
from .state import AppState, EXTENSION_KEY
from models.db_storage import DBStorage

# Minimal Swagger config: exposes /swagger.json and UI at /apidocs
SWAGGER_TEMPLATE = {
    "swagger": "2.0.0",
    "info": {
        "title": "Chirpy API",
        "version": "1.0.0",
        "description": "REST API for users, JWT login/refresh and short text posts (chirps).",
    },
    "basePath": "/",
    "schemes": ["http"],
    "securityDefinitions": {
        "Bearer": {
            "type": "apiKey",
            "name": "Authorization",
            "in": "header",
            "description": "Enter the token with the `Bearer ` prefix, e.g. \"Bearer abcde12345\"."
        },
        "ApiKey": {
            "type": "apiKey",
            "name": "Authorization",
            "in": "header",
            "description": "Webhook key with the `ApiKey ` prefix."
        }
    }
}

SWAGGER_CONFIG = {
    "headers": [],
    "specs": [
        {
            "endpoint": "apispec_1",
            "route": "/swagger.json",
            "rule_filter": lambda rule: True,   # include all endpoints
            "model_filter": lambda tag: True,   # include all models
        }
    ],
    "static_url_path": "/flasgger_static",
    "swagger_ui": True,
    "specs_route": "/apidocs/",
}


def create_app(config_name: str | None = None, overrides: dict | None = None) -> Flask:
    """
    Application factory: creates and configures the Flask app.
    Storage and the file-server hit counter are created here and live in
    app.extensions, so each app (and each test) gets its own.
    """
    app = Flask(__name__)

    # Load configuration (reads .env via get_config)
    app.config.from_object(get_config(config_name))
    if overrides:
        app.config.update(overrides)

    # Cross-Origin Resource Sharing: enable for dev, configurable for prod
    CORS(app, resources={r"/*": {"origins": app.config.get("CORS_ORIGINS", "*")}})

    # Swagger UI and JSON
    Swagger(app, template=SWAGGER_TEMPLATE, config=SWAGGER_CONFIG)

    # Register global error handlers that return the uniform error envelope
    register_error_handlers(app)

    storage = DBStorage(app.config["DATABASE_URL"], echo=app.config.get("SQL_ECHO", False))
    storage.reload()
    app.extensions[EXTENSION_KEY] = AppState(storage)

    from .health import bp as health_bp
    from .users import bp as users_bp
    from .auth import bp as auth_bp
    from .chirps import bp as chirps_bp
    from .webhooks import bp as webhooks_bp
    from .admin import bp as admin_bp
    from .fileserver import bp as fileserver_bp

    app.register_blueprint(health_bp, url_prefix="/api")
    app.register_blueprint(users_bp, url_prefix="/api")
    app.register_blueprint(auth_bp, url_prefix="/api")
    app.register_blueprint(chirps_bp, url_prefix="/api")
    app.register_blueprint(webhooks_bp, url_prefix="/api")
    app.register_blueprint(admin_bp, url_prefix="/admin")
    app.register_blueprint(fileserver_bp, url_prefix="/app")

    # Ensure the DB session is removed at the end of each request/app context
    @app.teardown_appcontext
    def remove_session(exception=None):
        # This calls scoped_session.remove(), preventing connection leaks
        storage.close()

    @app.route("/")
    def root():
        return {
            "message": "Welcome to Chirpy",
            "docs": "/apidocs/",
            "health": "/api/healthz",
        }, 200

    return app
