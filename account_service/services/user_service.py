"""
Read-only user lookups exposed to authenticated callers.
"""

from typing import Any, Dict, List
import structlog

from ..core.exceptions import NotFoundError
from ..interfaces.repository_interface import IUserRepository
from ..models.user import UserRelation

logger = structlog.get_logger()


class UserService:
    """Service returning public projections of users."""

    def __init__(self, user_repository: IUserRepository):
        self.user_repository = user_repository

    async def get_user(self, user_id: int) -> Dict[str, Any]:
        user = await self.user_repository.get_by_id(user_id, relations=(UserRelation.PROFILE,))
        if not user:
            raise NotFoundError("User not found.")
        return user.to_public_dict()

    async def list_users(self, skip: int = 0, limit: int = 100) -> List[Dict[str, Any]]:
        """List non-deleted users ordered by id."""
        users = await self.user_repository.get_all(
            skip=skip,
            limit=limit,
            relations=(UserRelation.PROFILE,)
        )
        logger.debug("Users listed", count=len(users), skip=skip, limit=limit)
        return [user.to_public_dict() for user in users]
