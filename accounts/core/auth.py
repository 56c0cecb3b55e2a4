"""
Access guard dependencies.

``get_current_user`` authenticates the bearer token and resolves its subject
through the credential store; ``require_admin`` runs after it and checks the
admin flag. Both raise service errors, so no route body runs on failure.
"""

import logging
from typing import Optional

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from accounts.core.database import get_db
from accounts.core.errors import ForbiddenError, UnauthorizedError
from accounts.core.security import decode_access_token
from accounts.schemas.user import UserResponse
from accounts.services import store

logger = logging.getLogger(__name__)

# auto_error=False so a missing header is reported as 401 by us, not 403
bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> UserResponse:
    """
    Dependency: verify the bearer token and load the caller.

    Raises:
        UnauthorizedError: No token, invalid or expired token, or the
            subject no longer exists
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Not authorized, no token")

    try:
        payload = decode_access_token(credentials.credentials)
        user_id = int(payload["sub"])
    except jwt.ExpiredSignatureError as exc:
        raise UnauthorizedError("Not authorized, token expired") from exc
    except (jwt.InvalidTokenError, KeyError, ValueError) as exc:
        raise UnauthorizedError("Not authorized, token failed") from exc

    # Always the database row, so deletes and demotions apply immediately
    user = store.find_by_id(db, user_id)
    if user is None:
        logger.info(f"Token subject {user_id} no longer exists")
        raise UnauthorizedError("Not authorized, user not found")
    return UserResponse(**store.to_public(user))


def require_admin(current_user: UserResponse = Depends(get_current_user)) -> UserResponse:
    """
    Dependency: wraps :func:`get_current_user` and additionally requires the
    admin flag.

    Raises:
        ForbiddenError: If the caller is not an admin
    """
    if not current_user.is_admin:
        raise ForbiddenError()
    return current_user
