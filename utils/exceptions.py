"""
Domain exceptions raised by the security helpers.

Route handlers translate these into HTTP errors with abort(); nothing here
knows about Flask.
"""


class ChirpyError(Exception):
    """Base class for all Chirpy domain errors."""


class HashingError(ChirpyError):
    """Password hashing failed, or a stored hash is not a valid argon2 hash."""


# Access tokens
class TokenError(ChirpyError):
    pass


class InvalidSignature(TokenError):
    pass


class TokenExpired(TokenError):
    pass


class MalformedToken(TokenError):
    pass


# Authorization header parsing
class AuthHeaderError(ChirpyError):
    pass


class MissingHeader(AuthHeaderError):
    pass


class MalformedHeader(AuthHeaderError):
    pass


# Refresh tokens
class RefreshTokenError(ChirpyError):
    pass


class RefreshTokenNotFound(RefreshTokenError):
    pass


class RefreshTokenExpired(RefreshTokenError):
    pass


class RefreshTokenRevoked(RefreshTokenError):
    pass
