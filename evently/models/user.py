"""User model definition."""

from enum import Enum
from typing import Dict, Any

from sqlalchemy import Column, Integer, String, Text, DateTime

from .base import Base
from ..utils.timezone import now_utc

class UserRole(str, Enum):
    """Roles a user account can hold."""
    USER = 'user'
    ADMIN = 'admin'

class User(Base):
    """
    Registered account.

    Fields:
        user_id: Unique identifier (auto-generated)
        username: Unique login name
        email: Unique email address
        password_hash: Hashed password, never serialized
        role: 'user' or 'admin'
        bio: Free-text profile description (optional)
        profile_picture: Reference to the profile image (optional)
        created_at: When the account was registered
    """
    __tablename__ = 'users'

    user_id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(100), nullable=False, unique=True)
    email = Column(String(255), nullable=False, unique=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default=UserRole.USER.value)
    bio = Column(Text)
    profile_picture = Column(String(500))
    created_at = Column(DateTime, nullable=False, default=now_utc)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, leaving out the password hash."""
        return {
            'user_id': self.user_id,
            'username': self.username,
            'email': self.email,
            'role': self.role,
            'bio': self.bio,
            'profile_picture': self.profile_picture,
            'created_at': self.created_at,
        }

    def __str__(self) -> str:
        return f"User(user_id={self.user_id}, username={self.username}, role={self.role})"
