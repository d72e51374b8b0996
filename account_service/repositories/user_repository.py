"""
User repository implementation following the Repository pattern.
Persists and retrieves users; it never changes business fields itself.
"""

from typing import Iterable, List, Optional
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import async_sessionmaker
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload
import structlog

from ..core.exceptions import AccountError, ConflictError, InternalError
from ..core.security import utcnow
from ..interfaces.repository_interface import IUserRepository
from ..models.user import User, UserRelation

logger = structlog.get_logger()


class UserRepository(IUserRepository):
    """Repository for user data access operations."""

    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    @staticmethod
    def _with_relations(query, relations: Iterable[UserRelation]):
        for relation in relations:
            if UserRelation(relation) is UserRelation.PROFILE:
                query = query.options(selectinload(User.profile))
        return query

    async def _fetch_one(self, query, **log_context) -> Optional[User]:
        try:
            async with self.session_factory() as session:
                result = await session.execute(query)
                return result.scalar_one_or_none()
        except Exception as e:
            logger.error("User lookup failed", error=str(e), **log_context)
            raise InternalError("Failed to load user.") from e

    async def get_by_id(
        self,
        user_id: int,
        include_deleted: bool = False,
        relations: Iterable[UserRelation] = ()
    ) -> Optional[User]:
        query = select(User).where(User.id == user_id)
        if not include_deleted:
            query = query.where(User.is_deleted.is_(False))
        query = self._with_relations(query, relations)
        return await self._fetch_one(query, user_id=user_id)

    async def get_by_email(
        self,
        email: str,
        include_deleted: bool = False,
        relations: Iterable[UserRelation] = ()
    ) -> Optional[User]:
        query = select(User).where(User.email == User.normalize_email(email))
        if not include_deleted:
            query = query.where(User.is_deleted.is_(False))
        query = self._with_relations(query, relations)
        return await self._fetch_one(query, email="***MASKED***")

    async def save(self, user: User) -> User:
        """
        Insert or update a user.

        The email unique constraint is the last guard against concurrent
        sign-ups with the same address; a violation surfaces as a conflict.
        """
        try:
            async with self.session_factory() as session:
                if user.id is not None:
                    # Relations must be loaded before merge replaces them
                    await session.get(User, user.id, options=[selectinload(User.profile)])
                merged = await session.merge(user)
                try:
                    await session.commit()
                except IntegrityError as e:
                    await session.rollback()
                    logger.warning("User save violated a uniqueness constraint", user_id=user.id)
                    raise ConflictError() from e

                logger.debug("User saved", user_id=merged.id)
                return merged

        except AccountError:
            raise
        except Exception as e:
            logger.error("User save failed", user_id=user.id, error=str(e))
            raise InternalError("Failed to save user.") from e

    async def soft_delete(self, user_id: int) -> bool:
        """Stamp the deletion tombstone on a user record."""
        try:
            async with self.session_factory() as session:
                result = await session.execute(
                    update(User)
                    .where(User.id == user_id, User.deleted_at.is_(None))
                    .values(deleted_at=utcnow())
                )
                marked = result.rowcount > 0
                await session.commit()

            logger.info("User tombstoned", user_id=user_id, marked=marked)
            return marked

        except Exception as e:
            logger.error("User soft delete failed", user_id=user_id, error=str(e))
            raise InternalError("Failed to delete user.") from e

    async def get_all(
        self,
        skip: int = 0,
        limit: int = 100,
        relations: Iterable[UserRelation] = ()
    ) -> List[User]:
        try:
            query = (
                select(User)
                .where(User.is_deleted.is_(False))
                .order_by(User.id)
                .offset(skip)
                .limit(limit)
            )
            query = self._with_relations(query, relations)

            async with self.session_factory() as session:
                result = await session.execute(query)
                return list(result.scalars().all())

        except Exception as e:
            logger.error("Failed to list users", error=str(e))
            raise InternalError("Failed to list users.") from e
