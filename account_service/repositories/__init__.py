"""
Repository implementations following the Repository pattern.
"""

from .user_repository import UserRepository

__all__ = [
    "UserRepository"
]
