#!/usr/bin/env python3
"""
Shared SQLAlchemy base and mixin for the Chirpy models.

- UUID primary key (String(36)) with defaults
- created_at / updated_at timestamps

Notes:
- Timestamps are set from Python in UTC so rows created within the same
  second still order correctly (SQLite's CURRENT_TIMESTAMP has second precision).
- SQLite hands back naive datetimes even for DateTime(timezone=True); use
  as_utc() before comparing them with aware values.
"""

from __future__ import annotations

from datetime import datetime, timezone
import uuid

from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import declarative_base

# Declarative base for all models
Base = declarative_base()


def _uuid_str() -> str:
    """Return a canonical UUIDv4 string (36 chars, with hyphens)."""
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes read back from the database."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class BaseModel:
    """
    Base mixin for all persistent models: id, created_at, updated_at.
    """

    id = Column(String(36), primary_key=True, default=_uuid_str, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    def __init__(self, *args, **kwargs):
        """
        Allow attribute initialization via kwargs without requiring a session here.
        If you pass created_at/updated_at explicitly (e.g., in tests), they will be set.
        """
        for key, value in kwargs.items():
            if key != "__class__":
                setattr(self, key, value)
        # Ensure an id exists if user passed none
        if getattr(self, "id", None) is None:
            self.id = _uuid_str()

    def __str__(self) -> str:
        return f"[{self.__class__.__name__}] ({self.id})"

