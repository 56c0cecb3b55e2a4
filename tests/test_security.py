import time
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from accounts.core.config import settings
from accounts.core.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    pwd_context,
    verify_password,
)

def test_password_hashing():
    """Test that password hashing works correctly"""
    password = "mysecretpassword"
    hashed = get_password_hash(password)

    # Verify the hash is not the plain password
    assert hashed != password

    # Verify the hash starts with $argon2 indicating Argon2 was used
    assert hashed.startswith("$argon2")

    # Verify the same password hashes to different values (due to salt)
    assert get_password_hash(password) != get_password_hash(password)

def test_password_verification():
    """Test that password verification works correctly"""
    password = "mysecretpassword"
    hashed = get_password_hash(password)

    assert verify_password(password, hashed) is True
    assert verify_password("wrongpassword", hashed) is False

def test_hashing_a_hash_does_not_verify_original():
    """Double hashing produces a value the original password no longer matches"""
    password = "mysecretpassword"
    double_hashed = get_password_hash(get_password_hash(password))

    assert verify_password(password, double_hashed) is False

def test_invalid_password_scenarios():
    """Test various invalid password scenarios"""
    with pytest.raises(TypeError):
        get_password_hash(None)

    assert not verify_password("", get_password_hash("test"))
    assert not verify_password("password", "")
    assert not verify_password("password", "invalid_hash_format")

def test_argon2_is_default_scheme():
    assert pwd_context.default_scheme() == "argon2"

def test_token_subject_is_user_id():
    token = create_access_token(42)
    payload = decode_access_token(token)

    assert payload["sub"] == "42"
    assert payload["exp"] > payload["iat"]

def test_token_expiry_uses_settings():
    token = create_access_token(1)
    payload = decode_access_token(token)

    lifetime = payload["exp"] - payload["iat"]
    assert abs(lifetime - settings.JWT_EXPIRE_MINUTES * 60) <= 1

@pytest.mark.parametrize("expires_minutes", [0, -1])
def test_zero_or_negative_lifetime_is_not_replaced_by_default(expires_minutes):
    token = create_access_token(1, expires_minutes=expires_minutes)

    with pytest.raises(jwt.ExpiredSignatureError):
        decode_access_token(token)

def test_expired_token_is_rejected():
    payload = {
        "sub": "1",
        "iat": datetime.now(timezone.utc) - timedelta(minutes=10),
        "exp": datetime.now(timezone.utc) - timedelta(minutes=5),
    }
    token = jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)

    with pytest.raises(jwt.ExpiredSignatureError):
        decode_access_token(token)

def test_token_with_wrong_signature_is_rejected():
    token = jwt.encode(
        {"sub": "1", "exp": int(time.time()) + 60},
        "another-secret-key-that-is-long-enough!",
        algorithm="HS256",
    )

    with pytest.raises(jwt.InvalidSignatureError):
        decode_access_token(token)

def test_token_without_subject_is_rejected():
    token = jwt.encode(
        {"exp": int(time.time()) + 60},
        settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
    )

    with pytest.raises(jwt.MissingRequiredClaimError):
        decode_access_token(token)

def test_malformed_token_is_rejected():
    with pytest.raises(jwt.InvalidTokenError):
        decode_access_token("not-a-jwt")
