"""Password hashing, access tokens and Authorization header parsing."""

import uuid
from datetime import timedelta

import jwt
import pytest

from utils.exceptions import (
    HashingError,
    InvalidSignature,
    MalformedHeader,
    MalformedToken,
    MissingHeader,
    TokenExpired,
)
from utils.security import (
    TOKEN_ISSUER,
    extract_authorization,
    get_api_key,
    get_bearer_token,
    hash_password,
    make_access_token,
    make_refresh_token,
    validate_access_token,
    verify_password,
)

SECRET = "unit-test-secret-that-is-long-enough-32b"


# ═══════════════════════════════════════════════════════════
# Password hashing
# ═══════════════════════════════════════════════════════════


def test_hash_then_verify():
    h = hash_password("correct horse")
    assert h != "correct horse"
    assert verify_password("correct horse", h) is True


def test_verify_wrong_password_is_false():
    h = hash_password("correct horse")
    assert verify_password("battery staple", h) is False


def test_same_password_hashes_differently():
    """Random salt per call."""
    assert hash_password("same") != hash_password("same")


def test_verify_garbage_hash_raises():
    with pytest.raises(HashingError):
        verify_password("whatever", "not-an-argon2-hash")


# ═══════════════════════════════════════════════════════════
# Access tokens
# ═══════════════════════════════════════════════════════════


def test_access_token_round_trip():
    user_id = uuid.uuid4()
    token = make_access_token(user_id, SECRET, timedelta(minutes=5))
    assert validate_access_token(token, SECRET) == user_id


def test_access_token_claims():
    user_id = uuid.uuid4()
    token = make_access_token(user_id, SECRET, timedelta(minutes=5))
    claims = jwt.decode(token, SECRET, algorithms=["HS256"])
    assert claims["iss"] == TOKEN_ISSUER
    assert claims["sub"] == str(user_id)
    assert claims["exp"] - claims["iat"] == 300


def test_expired_access_token():
    token = make_access_token(uuid.uuid4(), SECRET, timedelta(seconds=-1))
    with pytest.raises(TokenExpired):
        validate_access_token(token, SECRET)


def test_wrong_secret_is_invalid_signature():
    token = make_access_token(uuid.uuid4(), SECRET, timedelta(minutes=5))
    with pytest.raises(InvalidSignature):
        validate_access_token(token, "another-secret-that-is-also-32-bytes!")


def test_garbage_token_is_malformed():
    with pytest.raises(MalformedToken):
        validate_access_token("not.a.jwt", SECRET)


def test_non_uuid_subject_is_malformed():
    token = jwt.encode({"sub": "alice", "exp": 9999999999}, SECRET, algorithm="HS256")
    with pytest.raises(MalformedToken):
        validate_access_token(token, SECRET)


def test_refresh_token_is_random_hex():
    a, b = make_refresh_token(), make_refresh_token()
    assert len(a) == 64
    int(a, 16)
    assert a != b


# ═══════════════════════════════════════════════════════════
# Authorization header
# ═══════════════════════════════════════════════════════════


def test_bearer_token_extracted():
    assert get_bearer_token({"Authorization": "Bearer abc123"}) == "abc123"


def test_wrong_scheme_is_malformed():
    with pytest.raises(MalformedHeader):
        get_bearer_token({"Authorization": "Token abc123"})


def test_empty_header_is_missing():
    with pytest.raises(MissingHeader):
        extract_authorization("", "Bearer")


def test_absent_header_is_missing():
    with pytest.raises(MissingHeader):
        get_bearer_token({})


@pytest.mark.parametrize("value", ["Bearer", "Bearer ", "Bearer  abc", "Bearer abc def", "bearer abc", " Bearer abc"])
def test_header_must_be_exact_two_parts(value):
    with pytest.raises(MalformedHeader):
        get_bearer_token({"Authorization": value})


def test_api_key_extracted():
    assert get_api_key({"Authorization": "ApiKey s3cr3t"}) == "s3cr3t"
    with pytest.raises(MalformedHeader):
        get_api_key({"Authorization": "Bearer s3cr3t"})


def test_empty_credential_is_malformed():
    with pytest.raises(MalformedHeader):
        extract_authorization("Bearer ", "Bearer")
    with pytest.raises(MalformedHeader):
        extract_authorization("ApiKey ", "ApiKey")
