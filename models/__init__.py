"""
SQLAlchemy models and the DBStorage wrapper.

There is no module-level storage instance: the Flask app creates one in
create_app() and keeps it in app.extensions (see api.state).
"""
from models.base_model import Base
from models.user import User
from models.chirp import Chirp
from models.refresh_token import RefreshToken
from models.db_storage import DBStorage

__all__ = ["Base", "User", "Chirp", "RefreshToken", "DBStorage"]
