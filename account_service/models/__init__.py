"""
Database models for the account service.
"""
from .base import Base
from .user import User, Profile, UserRelation

__all__ = [
    "Base",
    "User",
    "Profile",
    "UserRelation"
]
