from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from passlib.context import CryptContext

from .config import settings

# PUBLIC_INTERFACE
pwd_context = CryptContext(
    schemes=["argon2"],
    argon2__rounds=4,  # Number of iterations
    argon2__memory_cost=65536,  # Memory usage in kibibytes (64MB)
    argon2__parallelism=4,  # Number of parallel threads
    argon2__salt_size=16,  # Salt size in bytes
    argon2__hash_len=32,  # Hash length in bytes
)

# PUBLIC_INTERFACE
def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against its hash.

    Args:
        plain_password: The plaintext password to verify
        hashed_password: The hashed password to verify against

    Returns:
        bool: True if the password matches, False otherwise
    """
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        # Unrecognised hash format or non-string input
        return False

# PUBLIC_INTERFACE
def get_password_hash(password: str) -> str:
    """
    Generate a secure password hash using Argon2.

    Args:
        password: The plaintext password to hash

    Returns:
        str: The hashed password
    """
    return pwd_context.hash(password)

# PUBLIC_INTERFACE
def create_access_token(user_id: int, expires_minutes: Optional[int] = None) -> str:
    """
    Issue a signed bearer token whose subject is the user id.

    Args:
        user_id: Identifier embedded as the ``sub`` claim
        expires_minutes: Lifetime override, defaults to JWT_EXPIRE_MINUTES

    Returns:
        str: Encoded JWT
    """
    now = datetime.now(timezone.utc)
    if expires_minutes is None:
        expires_minutes = settings.JWT_EXPIRE_MINUTES
    expire = now + timedelta(minutes=expires_minutes)
    payload = {"sub": str(user_id), "iat": now, "exp": expire}
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)

# PUBLIC_INTERFACE
def decode_access_token(token: str) -> dict:
    """
    Verify signature and expiry of a token and return its claims.

    Raises:
        jwt.InvalidTokenError: On a bad signature, expiry or malformed token
    """
    return jwt.decode(
        token,
        settings.JWT_SECRET_KEY,
        algorithms=[settings.JWT_ALGORITHM],
        options={"require": ["sub", "exp"]},
    )
