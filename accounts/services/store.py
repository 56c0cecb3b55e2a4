"""
Credential store: persistence of User rows with a Redis read-through cache
for the public (password-free) user list. Single-user reads, including the
access guard's, always go to the database.

Hashing happens here and only here, at the two places a cleartext password
can enter the table: ``create`` and ``save(password=...)``.
"""

import logging
from typing import Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from redis import RedisError

from accounts.core.cache import cache_get, cache_set, cache_delete
from accounts.core.config import settings
from accounts.core.database import transaction
from accounts.core.errors import DuplicateEmailError, InvalidUserDataError
from accounts.core.security import get_password_hash
from accounts.models.user import User

logger = logging.getLogger(__name__)

# Cache key patterns
USERS_LIST_KEY = "users:list"

# Cache expiration time (in seconds)
USERS_LIST_CACHE_EXPIRE = 300

CACHE_VERSION = "1"

PUBLIC_FIELDS = ("id", "name", "email", "is_admin")

# Largest value a signed 64-bit INTEGER column can hold
MAX_USER_ID = 2**63 - 1


def normalize_email(email: str) -> str:
    return email.strip().lower()


def to_public(user: User) -> Dict:
    """Public projection of a user row; the password hash is never included."""
    return {field: getattr(user, field) for field in PUBLIC_FIELDS}


def _validate_cache_data(data) -> bool:
    """
    Check that a cached entry has the current version and every public field.

    Args:
        data: Cached user data dictionary

    Returns:
        bool: True if data is valid, False otherwise
    """
    if not isinstance(data, dict):
        return False
    if data.get("_cache_version") != CACHE_VERSION:
        return False
    if not all(field in data for field in PUBLIC_FIELDS):
        return False
    if "hashed_password" in data:
        return False
    return isinstance(data["id"], int) and isinstance(data["email"], str)


def _strip_version(data: Dict) -> Dict:
    return {k: v for k, v in data.items() if k != "_cache_version"}


def _invalidate() -> None:
    if not settings.CACHE_ENABLED:
        return
    if not cache_delete(USERS_LIST_KEY):
        logger.warning("Failed to invalidate users list cache - list may be stale")


# PUBLIC_INTERFACE
def find_by_email(db: Session, email: str) -> Optional[User]:
    """
    Load a user row by email (case-insensitive), including the password hash.
    Used for authentication and uniqueness checks, never cached.
    """
    return db.query(User).filter(func.lower(User.email) == normalize_email(email)).first()


# PUBLIC_INTERFACE
def find_by_id(db: Session, user_id: int) -> Optional[User]:
    """
    Load a user row by id. Ids outside the INTEGER column range cannot
    exist and are reported as not found.
    """
    if not 1 <= user_id <= MAX_USER_ID:
        return None
    return db.query(User).filter(User.id == user_id).first()


# PUBLIC_INTERFACE
def create(db: Session, name: str, email: str, password: str) -> User:
    """
    Insert a new user, hashing the cleartext password exactly once.
    Callers check for an existing email first; the unique index catches races.

    Raises:
        DuplicateEmailError: If the email is already registered
        InvalidUserDataError: If the row violates any other constraint
    """
    db_user = User(
        name=name,
        email=normalize_email(email),
        hashed_password=get_password_hash(password),
        is_admin=False,
    )
    try:
        with transaction(db):
            db.add(db_user)
    except IntegrityError as e:
        # A concurrent registration may win the race past the pre-check
        if "email" in str(e.orig).lower():
            raise DuplicateEmailError() from e
        raise InvalidUserDataError() from e

    logger.info(f"Created user {db_user.id}")
    _invalidate()
    return db_user


# PUBLIC_INTERFACE
def save(db: Session, user: User, password: Optional[str] = None) -> User:
    """
    Persist pending changes on a loaded user.

    Args:
        db: Database session
        user: User row with modified attributes
        password: New cleartext password, if it was changed. The stored hash
            is replaced only when this is given.

    Raises:
        DuplicateEmailError: If the new email collides with another user
    """
    if password:
        user.hashed_password = get_password_hash(password)
    user.email = normalize_email(user.email)

    try:
        with transaction(db):
            db.add(user)
    except IntegrityError as e:
        if "email" in str(e.orig).lower():
            raise DuplicateEmailError() from e
        raise InvalidUserDataError() from e

    _invalidate()
    return user


# PUBLIC_INTERFACE
def delete_by_id(db: Session, user_id: int) -> bool:
    """
    Permanently delete a user.

    Returns:
        bool: True if a user was deleted, False if none had that id
    """
    db_user = find_by_id(db, user_id)
    if not db_user:
        return False

    with transaction(db):
        db.delete(db_user)

    logger.info(f"Deleted user {user_id}")
    _invalidate()
    return True


# PUBLIC_INTERFACE
def list_all(db: Session) -> List[Dict]:
    """
    Public projections of every user, ordered by id.

    Returns:
        List[Dict]: ``{id, name, email, is_admin}`` per user
    """
    if settings.CACHE_ENABLED:
        try:
            cached_users = cache_get(USERS_LIST_KEY)
        except (RedisError, ValueError) as e:
            logger.error(f"Cache error while getting users list: {e}")
            cached_users = None
        if isinstance(cached_users, list) and all(
            _validate_cache_data(entry) for entry in cached_users
        ):
            return [_strip_version(entry) for entry in cached_users]
        if cached_users is not None:
            logger.warning("Invalid cache data for users list")
            cache_delete(USERS_LIST_KEY)

    users = [to_public(user) for user in db.query(User).order_by(User.id).all()]

    if settings.CACHE_ENABLED:
        versioned = [{**user, "_cache_version": CACHE_VERSION} for user in users]
        if not cache_set(USERS_LIST_KEY, versioned, USERS_LIST_CACHE_EXPIRE):
            logger.warning("Failed to cache users list")
    return users
