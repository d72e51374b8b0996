"""
Dependency injection for FastAPI endpoints.
Resolves services from the application container and the caller's identity
from the bearer token.
"""
from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
import structlog

from ..container.container import Container
from ..core.exceptions import InvalidTokenError
from ..services.auth.authentication_service import AuthService
from ..services.auth.credential_service import CredentialService
from ..services.auth.token_service import TokenService
from ..services.user_service import UserService

logger = structlog.get_logger()
# Missing credentials are reported through the error envelope, not FastAPI's 403
security = HTTPBearer(auto_error=False)


def get_container(request: Request) -> Container:
    return request.app.state.container


def get_auth_service(container: Container = Depends(get_container)) -> AuthService:
    return container.get(AuthService)


def get_credential_service(container: Container = Depends(get_container)) -> CredentialService:
    return container.get(CredentialService)


def get_user_service(container: Container = Depends(get_container)) -> UserService:
    return container.get(UserService)


async def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> str:
    """
    Raw bearer token from the Authorization header.

    Raises:
        InvalidTokenError: header missing or not a bearer credential
    """
    if credentials is None or not credentials.credentials:
        logger.info("Token rejected", reason="missing")
        raise InvalidTokenError()
    return credentials.credentials


async def get_current_user_id(
    token: str = Depends(get_bearer_token),
    container: Container = Depends(get_container)
) -> int:
    """Id of the authenticated caller."""
    return container.get(TokenService).verify(token)
