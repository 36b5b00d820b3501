"""
Environment-aware configuration.
Values are read from the environment (and .env via python-dotenv) when this
module is imported; create_app() may override any key.
"""
import os
from dotenv import load_dotenv
from datetime import timedelta

load_dotenv()  # Read .env if present


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")  # Set a strong key in production
    DEBUG = False
    TESTING = False
    # CORS: in dev we usually allow '*', in prod supply a comma-separated list in env
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
    APP_ENV = os.getenv("APP_ENV", "dev")
    # "dev" enables POST /admin/reset
    PLATFORM = os.getenv("PLATFORM", "prod")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///chirpy.db")
    SQL_ECHO = False

    # jwt configurations
    JWT_SECRET = os.getenv("JWT_SECRET", "dev-secret-change-me")
    JWT_ALGORITHM = "HS256"
    JWT_ISSUER = "chirpy-access"
    ACCESS_TOKEN_EXPIRES = timedelta(seconds=int(os.getenv("ACCESS_TOKEN_EXPIRES_SECONDS", "3600")))
    REFRESH_TOKEN_EXPIRES = timedelta(days=int(os.getenv("REFRESH_TOKEN_EXPIRES_DAYS", "60")))

    # Shared key for the Polka payment webhook
    POLKA_KEY = os.getenv("POLKA_KEY", "")

    # Directory served under /app
    FILESERVER_ROOT = os.getenv("FILESERVER_ROOT", ".")


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    # In dev, propagate exceptions so our error handler has full context
    PROPAGATE_EXCEPTIONS = True


class ProductionConfig(BaseConfig):
    DEBUG = False


class TestingConfig(BaseConfig):
    TESTING = True
    PLATFORM = "dev"
    DATABASE_URL = "sqlite://"
    JWT_SECRET = "testing-secret-with-enough-bytes-for-hs256"
    POLKA_KEY = "f271c81ff7084ee5b99a5091b42d486e"
    ACCESS_TOKEN_EXPIRES = timedelta(hours=1)
    REFRESH_TOKEN_EXPIRES = timedelta(days=60)


def get_config(name: str | None):
    """
    Select config class.
    - If name is provided, choose by name.
    - Else choose based on APP_ENV (dev/prod/test).
    """
    if name:
        name = name.lower()
    env = (name or os.getenv("APP_ENV", "dev")).lower()
    if env in ["prod", "production"]:
        return ProductionConfig
    if env in ["test", "testing"]:
        return TestingConfig
    return DevelopmentConfig
