"""
Tests for CredentialService with mocked collaborators.
"""
from unittest.mock import AsyncMock
import pytest

from account_service.core.exceptions import BadRequestError, NotFoundError
from account_service.core.security import PasswordHasher, utcnow
from account_service.events.account_events import PasswordChangedEvent, UserDeletedEvent
from account_service.models.user import User
from account_service.services.auth.credential_service import CredentialService


@pytest.mark.unit
class TestCredentialService:
    """Test cases for CredentialService."""

    @pytest.fixture
    def password_hasher(self):
        return PasswordHasher(rounds=4)

    @pytest.fixture
    def mock_dependencies(self, password_hasher):
        return {
            'user_repository': AsyncMock(),
            'password_hasher': password_hasher,
            'event_bus': AsyncMock()
        }

    @pytest.fixture
    def credential_service(self, mock_dependencies):
        return CredentialService(**mock_dependencies)

    @pytest.fixture
    def user(self, password_hasher):
        return User(
            id=1,
            email="test@example.com",
            password_hash=password_hasher.hash("old-password"),
            is_verified=True,
            is_deleted=False
        )

    @pytest.mark.asyncio
    async def test_update_password_success(self, credential_service, mock_dependencies, user, password_hasher):
        mock_dependencies['user_repository'].get_by_id.return_value = user

        result = await credential_service.update_password(1, "old-password", "new-password")

        assert result.to_dict() == {
            "status": "success",
            "status_code": 200,
            "message": "Password updated successfully."
        }
        assert password_hasher.verify("new-password", user.password_hash)
        assert not password_hasher.verify("old-password", user.password_hash)
        mock_dependencies['user_repository'].save.assert_called_once_with(user)
        published_event = mock_dependencies['event_bus'].publish.call_args[0][0]
        assert isinstance(published_event, PasswordChangedEvent)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("current,new", [
        (None, "new-password"),
        ("old-password", None),
        ("", "new-password"),
    ])
    async def test_update_password_missing_fields(self, credential_service, mock_dependencies, current, new):
        with pytest.raises(BadRequestError) as exc_info:
            await credential_service.update_password(1, current, new)

        assert exc_info.value.message == "Current password and new password must be provided."
        mock_dependencies['user_repository'].get_by_id.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_password_wrong_current(self, credential_service, mock_dependencies, user):
        original_hash = user.password_hash
        mock_dependencies['user_repository'].get_by_id.return_value = user

        with pytest.raises(BadRequestError) as exc_info:
            await credential_service.update_password(1, "not-it", "new-password")

        assert exc_info.value.message == "Current password is incorrect."
        assert user.password_hash == original_hash
        mock_dependencies['user_repository'].save.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("new", ["", "   "])
    async def test_update_password_blank_new(self, credential_service, mock_dependencies, user, new):
        mock_dependencies['user_repository'].get_by_id.return_value = user

        with pytest.raises(BadRequestError) as exc_info:
            await credential_service.update_password(1, "old-password", new)

        assert exc_info.value.message == "New password cannot be empty."
        mock_dependencies['user_repository'].save.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_password_unknown_user(self, credential_service, mock_dependencies):
        mock_dependencies['user_repository'].get_by_id.return_value = None

        with pytest.raises(NotFoundError) as exc_info:
            await credential_service.update_password(5, "old-password", "new-password")

        assert exc_info.value.message == "User not found."

    @pytest.mark.asyncio
    async def test_soft_delete_user(self, credential_service, mock_dependencies, user):
        repo = mock_dependencies['user_repository']
        repo.get_by_id.return_value = user
        repo.soft_delete.return_value = True

        result = await credential_service.soft_delete_user(1)

        assert result.message == "User deleted successfully."
        assert user.is_deleted is True
        repo.get_by_id.assert_called_once_with(1, include_deleted=True)
        repo.save.assert_called_once_with(user)
        repo.soft_delete.assert_called_once_with(1)
        published_event = mock_dependencies['event_bus'].publish.call_args[0][0]
        assert isinstance(published_event, UserDeletedEvent)

    @pytest.mark.asyncio
    async def test_soft_delete_already_deleted_is_noop(self, credential_service, mock_dependencies, user):
        user.is_deleted = True
        user.deleted_at = utcnow()
        repo = mock_dependencies['user_repository']
        repo.get_by_id.return_value = user

        result = await credential_service.soft_delete_user(1)

        assert result.message == "User deleted successfully."
        repo.save.assert_not_called()
        repo.soft_delete.assert_not_called()
        mock_dependencies['event_bus'].publish.assert_not_called()

    @pytest.mark.asyncio
    async def test_soft_delete_unknown_user(self, credential_service, mock_dependencies):
        mock_dependencies['user_repository'].get_by_id.return_value = None

        with pytest.raises(NotFoundError):
            await credential_service.soft_delete_user(5)
