"""
Service layer for the account service.
"""
from .auth import AuthService, CredentialService, TokenService
from .user_service import UserService
from .notification_service import EmailNotifier, LoggingNotifier

__all__ = [
    "AuthService",
    "CredentialService",
    "TokenService",
    "UserService",
    "EmailNotifier",
    "LoggingNotifier"
]
