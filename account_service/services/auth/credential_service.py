"""
Credential service focused on password changes and account removal.
"""

from typing import Optional
import structlog

from ...core.exceptions import (
    AccountError,
    BadRequestError,
    InternalError,
    NotFoundError,
)
from ...core.security import PasswordHasher
from ...events.account_events import PasswordChangedEvent, UserDeletedEvent
from ...interfaces.event_interface import IEventBus
from ...interfaces.repository_interface import IUserRepository
from .results import Acknowledgement

logger = structlog.get_logger()


class CredentialService:
    """Service responsible for password updates and soft deletion."""

    def __init__(
        self,
        user_repository: IUserRepository,
        password_hasher: PasswordHasher,
        event_bus: IEventBus
    ):
        self.user_repository = user_repository
        self.password_hasher = password_hasher
        self.event_bus = event_bus

    async def update_password(
        self,
        user_id: int,
        current_password: Optional[str],
        new_password: Optional[str]
    ) -> Acknowledgement:
        """
        Change password for an authenticated user.

        Tokens issued before the change stay valid until they expire.

        Args:
            user_id: Id taken from the caller's access token
            current_password: Current password
            new_password: Replacement password

        Returns:
            Acknowledgement carrying the success message
        """
        if current_password is None or new_password is None or not current_password:
            raise BadRequestError("Current password and new password must be provided.")

        try:
            user = await self.user_repository.get_by_id(user_id)
            if not user:
                raise NotFoundError("User not found.")

            if not self.password_hasher.verify(current_password, user.password_hash):
                logger.info("Password change rejected", user_id=user_id, reason="current_password_mismatch")
                raise BadRequestError("Current password is incorrect.")

            if not new_password.strip():
                raise BadRequestError("New password cannot be empty.")

            user.password_hash = self.password_hasher.hash(new_password)
            await self.user_repository.save(user)

        except AccountError:
            raise
        except Exception as e:
            logger.error("Password change failed", user_id=user_id, error=str(e))
            raise InternalError("Password change failed.") from e

        await self.event_bus.publish(PasswordChangedEvent(user_id=user_id))
        logger.info("Password changed successfully", user_id=user_id)
        return Acknowledgement(message="Password updated successfully.")

    async def soft_delete_user(self, user_id: int) -> Acknowledgement:
        """
        Soft delete a user. Deleting an already deleted user succeeds
        without touching the record.
        """
        try:
            user = await self.user_repository.get_by_id(user_id, include_deleted=True)
            if not user:
                raise NotFoundError("User not found.")

            if user.is_deleted:
                logger.info("User already deleted", user_id=user_id)
                return Acknowledgement(message="User deleted successfully.")

            user.is_deleted = True
            await self.user_repository.save(user)
            await self.user_repository.soft_delete(user.id)

        except AccountError:
            raise
        except Exception as e:
            logger.error("User deletion failed", user_id=user_id, error=str(e))
            raise InternalError("Failed to delete user.") from e

        await self.event_bus.publish(UserDeletedEvent(user_id=user_id))
        logger.info("User soft deleted", user_id=user_id)
        return Acknowledgement(message="User deleted successfully.")
