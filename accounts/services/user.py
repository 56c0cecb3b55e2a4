"""
User service: the eight account operations behind the /users routes.

Every function takes the request's database session, performs one linear
sequence of credential-store calls and either returns a response schema or
raises a ``ServiceError`` subclass.
"""

import logging
from typing import List

from sqlalchemy.orm import Session

from accounts.core.errors import DuplicateEmailError, NotFoundError, UnauthorizedError
from accounts.core.security import create_access_token, verify_password
from accounts.models.user import User
from accounts.schemas.user import (
    AdminUserUpdate,
    LoginRequest,
    MessageResponse,
    ProfileUpdate,
    UserCreate,
    UserResponse,
    UserTokenResponse,
)
from accounts.services import store

logger = logging.getLogger(__name__)

# Same message for unknown email and wrong password
LOGIN_FAILED = "Invalid email or password"


def _with_token(user: User) -> UserTokenResponse:
    return UserTokenResponse(**store.to_public(user), token=create_access_token(user.id))


def _ensure_email_available(db: Session, email: str, user_id: int) -> None:
    other = store.find_by_email(db, email)
    if other is not None and other.id != user_id:
        raise DuplicateEmailError()


# PUBLIC_INTERFACE
def login(db: Session, credentials: LoginRequest) -> UserTokenResponse:
    """
    Authenticate by email and password.

    Raises:
        UnauthorizedError: If the email is unknown or the password is wrong
    """
    user = store.find_by_email(db, credentials.email)
    if user is None or not verify_password(credentials.password, user.hashed_password):
        logger.info("Failed login attempt")
        raise UnauthorizedError(LOGIN_FAILED)
    return _with_token(user)


# PUBLIC_INTERFACE
def register(db: Session, user_data: UserCreate) -> UserTokenResponse:
    """
    Create a non-admin account and log it in.

    Raises:
        DuplicateEmailError: If the email is already registered
        InvalidUserDataError: If the store rejects the new row
    """
    if store.find_by_email(db, user_data.email):
        raise DuplicateEmailError()
    user = store.create(db, user_data.name, user_data.email, user_data.password)
    return _with_token(user)


# PUBLIC_INTERFACE
def get_own_profile(db: Session, user_id: int) -> UserResponse:
    """
    Raises:
        NotFoundError: If the caller was deleted mid-session
    """
    user = store.find_by_id(db, user_id)
    if user is None:
        raise NotFoundError()
    return UserResponse(**store.to_public(user))


# PUBLIC_INTERFACE
def update_own_profile(db: Session, user_id: int, update: ProfileUpdate) -> UserTokenResponse:
    """
    Update the caller's name, email and/or password.

    Fields that are missing or empty keep their current value. The password
    hash is only replaced when a new password is supplied. A fresh token is
    issued with the response.
    """
    user = store.find_by_id(db, user_id)
    if user is None:
        raise NotFoundError()

    if update.email:
        _ensure_email_available(db, update.email, user.id)
    user.name = update.name or user.name
    user.email = update.email or user.email

    store.save(db, user, password=update.password)
    return _with_token(user)


# PUBLIC_INTERFACE
def list_users(db: Session) -> List[UserResponse]:
    return [UserResponse(**public) for public in store.list_all(db)]


# PUBLIC_INTERFACE
def get_user_by_id(db: Session, user_id: int) -> UserResponse:
    user = store.find_by_id(db, user_id)
    if user is None:
        raise NotFoundError()
    return UserResponse(**store.to_public(user))


# PUBLIC_INTERFACE
def update_user_by_id(db: Session, user_id: int, update: AdminUserUpdate) -> UserResponse:
    """
    Admin update of name, email and admin flag.

    Name and email follow the same keep-if-empty rule as the profile update.
    The admin flag is changed only when ``isAdmin`` is present in the request,
    so an omitted field never demotes an admin.
    """
    user = store.find_by_id(db, user_id)
    if user is None:
        raise NotFoundError()

    if update.email:
        _ensure_email_available(db, update.email, user.id)
    user.name = update.name or user.name
    user.email = update.email or user.email
    if "is_admin" in update.model_fields_set and update.is_admin is not None:
        user.is_admin = update.is_admin

    store.save(db, user)
    return UserResponse(**store.to_public(user))


# PUBLIC_INTERFACE
def delete_user_by_id(db: Session, user_id: int) -> MessageResponse:
    if not store.delete_by_id(db, user_id):
        raise NotFoundError()
    return MessageResponse(message="User removed")
