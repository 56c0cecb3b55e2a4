"""
User model definition.
"""

from sqlalchemy import Column, String, Boolean
from sqlalchemy.sql.sqltypes import Integer

from accounts.models.base import BaseModel


class User(BaseModel):
    """User model for storing credentials and profile information."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    is_admin = Column(Boolean, default=False, nullable=False)
