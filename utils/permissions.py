"""
Ownership checks for mutating a resource.
"""
from __future__ import annotations

import uuid
from enum import Enum


class Decision(str, Enum):
    ALLOW = "allow"
    DENY = "deny"


def _as_uuid(value: uuid.UUID | str) -> uuid.UUID:
    return value if isinstance(value, uuid.UUID) else uuid.UUID(str(value))


def authorize_owner_action(acting_id: uuid.UUID | str, owner_id: uuid.UUID | str) -> Decision:
    """
    Allow the action only when the acting user owns the resource.
    Callers must surface DENY as 403, never as 404.
    """
    if _as_uuid(acting_id) == _as_uuid(owner_id):
        return Decision.ALLOW
    return Decision.DENY
