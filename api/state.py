"""
Per-application state.

create_app() builds one AppState and stores it in app.extensions["chirpy"];
handlers reach it through current_app, so nothing lives at module level.
"""
from __future__ import annotations

import threading

from flask import current_app

from models.db_storage import DBStorage

EXTENSION_KEY = "chirpy"


class AppState:
    def __init__(self, storage: DBStorage):
        self.storage = storage
        self._hits = 0
        self._lock = threading.Lock()

    @property
    def fileserver_hits(self) -> int:
        with self._lock:
            return self._hits

    def record_hit(self) -> int:
        with self._lock:
            self._hits += 1
            return self._hits

    def reset_hits(self) -> None:
        with self._lock:
            self._hits = 0


def get_state() -> AppState:
    return current_app.extensions[EXTENSION_KEY]


def get_storage() -> DBStorage:
    return get_state().storage
