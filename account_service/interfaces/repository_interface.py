"""
Repository interfaces for dependency abstraction.
Defines contracts for data access operations to enable dependency injection
and improve testability.
"""

from typing import Iterable, List, Optional, Protocol, runtime_checkable

from ..models.user import User, UserRelation


@runtime_checkable
class IUserRepository(Protocol):
    """Protocol for user repository operations."""

    async def get_by_id(
        self,
        user_id: int,
        include_deleted: bool = False,
        relations: Iterable[UserRelation] = ()
    ) -> Optional[User]:
        """
        Get user by ID.

        Args:
            user_id: User ID
            include_deleted: Whether soft-deleted users are returned
            relations: Relations to load with the user

        Returns:
            User instance or None if not found
        """
        ...

    async def get_by_email(
        self,
        email: str,
        include_deleted: bool = False,
        relations: Iterable[UserRelation] = ()
    ) -> Optional[User]:
        """
        Get user by normalized email.

        Args:
            email: User email
            include_deleted: Whether soft-deleted users are returned
            relations: Relations to load with the user

        Returns:
            User instance or None if not found
        """
        ...

    async def save(self, user: User) -> User:
        """
        Insert or update a user and its loaded relations.

        Args:
            user: User to persist

        Returns:
            The persisted user instance
        """
        ...

    async def soft_delete(self, user_id: int) -> bool:
        """
        Tombstone a user by stamping its deletion time.

        Args:
            user_id: User ID to delete

        Returns:
            True if a record was marked
        """
        ...

    async def get_all(
        self,
        skip: int = 0,
        limit: int = 100,
        relations: Iterable[UserRelation] = ()
    ) -> List[User]:
        """
        Get all non-deleted users with pagination.

        Args:
            skip: Number of records to skip
            limit: Maximum number of records to return
            relations: Relations to load with each user

        Returns:
            List of user instances
        """
        ...
