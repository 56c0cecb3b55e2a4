"""
User API endpoints.
"""

from typing import List
from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from accounts.core.auth import get_current_user, require_admin
from accounts.core.database import get_db
from accounts.services import user as user_service
from accounts.services.store import MAX_USER_ID
from accounts.schemas.user import (
    AdminUserUpdate,
    LoginRequest,
    MessageResponse,
    ProfileUpdate,
    UserCreate,
    UserResponse,
    UserTokenResponse,
)


router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserTokenResponse, status_code=201)
def register_user(
    user_data: UserCreate,
    db: Session = Depends(get_db)
) -> UserTokenResponse:
    """Register a new user."""
    return user_service.register(db, user_data)


@router.post("/login", response_model=UserTokenResponse)
def login(
    credentials: LoginRequest,
    db: Session = Depends(get_db)
) -> UserTokenResponse:
    """Authenticate and return a bearer token."""
    return user_service.login(db, credentials)


@router.get("/profile", response_model=UserResponse)
def get_profile(
    current_user: UserResponse = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> UserResponse:
    """Get the caller's own profile."""
    return user_service.get_own_profile(db, current_user.id)


@router.put("/profile", response_model=UserTokenResponse)
def update_profile(
    update: ProfileUpdate,
    current_user: UserResponse = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> UserTokenResponse:
    """Update the caller's own profile."""
    return user_service.update_own_profile(db, current_user.id, update)


@router.get("", response_model=List[UserResponse], dependencies=[Depends(require_admin)])
def get_users(db: Session = Depends(get_db)) -> List[UserResponse]:
    """List all users."""
    return user_service.list_users(db)


@router.get("/{user_id}", response_model=UserResponse, dependencies=[Depends(require_admin)])
def get_user(
    user_id: int = Path(..., ge=1, le=MAX_USER_ID),
    db: Session = Depends(get_db)
) -> UserResponse:
    """Get user by ID."""
    return user_service.get_user_by_id(db, user_id)


@router.put("/{user_id}", response_model=UserResponse, dependencies=[Depends(require_admin)])
def update_user(
    update: AdminUserUpdate,
    user_id: int = Path(..., ge=1, le=MAX_USER_ID),
    db: Session = Depends(get_db)
) -> UserResponse:
    """Update user information."""
    return user_service.update_user_by_id(db, user_id, update)


@router.delete("/{user_id}", response_model=MessageResponse, dependencies=[Depends(require_admin)])
def delete_user(
    user_id: int = Path(..., ge=1, le=MAX_USER_ID),
    db: Session = Depends(get_db)
) -> MessageResponse:
    """Delete user."""
    return user_service.delete_user_by_id(db, user_id)
