"""
security helpers:
- Argon2 password hashing via argon2-cffi
- JWT access token creation/verification via PyJWT
- opaque refresh token generation
- Authorization header parsing ("Bearer <token>" / "ApiKey <key>")
"""
from __future__ import annotations

import secrets
import uuid
from datetime import datetime, timedelta, timezone
from typing import Mapping

import jwt
from argon2 import PasswordHasher
from argon2 import exceptions as argon2_exc

from utils.exceptions import (
    HashingError,
    InvalidSignature,
    MalformedHeader,
    MalformedToken,
    MissingHeader,
    TokenExpired,
)

ph = PasswordHasher()

TOKEN_ISSUER = "chirpy-access"
JWT_ALGORITHM = "HS256"


def hash_password(password: str) -> str:
    """Hash a plaintext password using Argon2
    """
    try:
        return ph.hash(password)
    except argon2_exc.HashingError as exc:
        raise HashingError("could not hash password") from exc


def verify_password(password: str, password_hash: str) -> bool:
    """ Verify a plaintext password against an Argon2 hash.
    Mismatch returns False; an unparseable hash raises HashingError.
    """
    try:
        return ph.verify(password_hash, password)
    except argon2_exc.VerifyMismatchError:
        return False
    except (argon2_exc.InvalidHashError, argon2_exc.VerificationError) as exc:
        raise HashingError("stored password hash is invalid") from exc


# Verified against when an email is unknown so login time does not reveal
# which emails are registered
DUMMY_HASH = ph.hash(secrets.token_hex(16))


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def make_access_token(
    user_id: uuid.UUID | str,
    secret: str,
    expires_in: timedelta,
    issuer: str = TOKEN_ISSUER,
    algorithm: str = JWT_ALGORITHM,
) -> str:
    """
    Create a signed access token for user_id that expires after expires_in.
    """
    now = utcnow()
    payload = {
        "iss": issuer,
        "iat": now,
        "exp": now + expires_in,
        "sub": str(user_id),
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def validate_access_token(token: str, secret: str, algorithm: str = JWT_ALGORITHM) -> uuid.UUID:
    """
    Decode and validate an access token and return the user id it carries.
    Raises InvalidSignature, TokenExpired or MalformedToken. No leeway is applied
    to the expiry check.
    """
    try:
        decoded = jwt.decode(
            token,
            secret,
            algorithms=[algorithm],
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        raise TokenExpired("Token expired")
    except jwt.InvalidSignatureError:
        raise InvalidSignature("Token signature is invalid")
    except jwt.InvalidTokenError as exc:
        raise MalformedToken(f"Invalid token: {exc}")

    try:
        return uuid.UUID(decoded["sub"])
    except (ValueError, TypeError, AttributeError):
        raise MalformedToken("Token subject is not a valid user id")


def make_refresh_token() -> str:
    """256 bits of randomness, hex encoded."""
    return secrets.token_hex(32)


def extract_authorization(header_value: str | None, scheme: str) -> str:
    """
    Parse "<scheme> <credential>" and return the credential.
    The header must split into exactly two parts on a single space and the
    first part must equal scheme exactly. The credential may not be empty.
    """
    if not header_value:
        raise MissingHeader("no authorization header provided")
    parts = header_value.split(" ")
    if len(parts) != 2:
        raise MalformedHeader(f"invalid auth header format: got {len(parts)} parts, expected 2")
    if parts[0] != scheme:
        raise MalformedHeader(f"invalid auth header format: expected {scheme} scheme")
    if not parts[1]:
        raise MalformedHeader("invalid auth header format: empty credential")
    return parts[1]


def get_bearer_token(headers: Mapping[str, str]) -> str:
    return extract_authorization(headers.get("Authorization"), "Bearer")


def get_api_key(headers: Mapping[str, str]) -> str:
    return extract_authorization(headers.get("Authorization"), "ApiKey")
