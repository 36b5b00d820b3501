"""
Refresh token lifecycle against DBStorage.

A refresh token is Active until it expires or is revoked; both end states are
terminal. Redeeming does not rotate or consume the token.
"""
from __future__ import annotations

import uuid
from datetime import timedelta

from models.refresh_token import RefreshToken
from models.base_model import as_utc
from utils.exceptions import RefreshTokenExpired, RefreshTokenNotFound, RefreshTokenRevoked
from utils.security import make_refresh_token, utcnow


def issue_refresh_token(storage, user_id: uuid.UUID | str, expires_in: timedelta) -> str:
    """Persist a new refresh token for user_id and return its opaque value."""
    token = make_refresh_token()
    rt = RefreshToken(
        token=token,
        user_id=str(user_id),
        expires_at=utcnow() + expires_in,
        revoked_at=None,
    )
    storage.new(rt)
    storage.save()
    return token


def redeem_refresh_token(storage, token: str) -> uuid.UUID:
    """Return the user id behind an active refresh token."""
    rt = storage.find_refresh_token(token)
    if rt is None:
        raise RefreshTokenNotFound("refresh token not found")
    if rt.revoked_at is not None:
        raise RefreshTokenRevoked("refresh token has been revoked")
    if utcnow() > as_utc(rt.expires_at):
        raise RefreshTokenExpired("refresh token has expired")
    return uuid.UUID(rt.user_id)


def revoke_refresh_token(storage, token: str) -> None:
    """Mark the token revoked. Revoking an already revoked token keeps the first instant."""
    rt = storage.find_refresh_token(token)
    if rt is None:
        raise RefreshTokenNotFound("refresh token not found")
    if rt.revoked_at is None:
        rt.revoked_at = utcnow()
        storage.new(rt)
        storage.save()
