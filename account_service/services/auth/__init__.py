"""
Account services split by concern: sign-up and login, credentials, tokens.
"""

from .authentication_service import AuthService
from .credential_service import CredentialService
from .token_service import TokenService
from .results import Acknowledgement, SignUpResult, LoginResult

__all__ = [
    "AuthService",
    "CredentialService",
    "TokenService",
    "Acknowledgement",
    "SignUpResult",
    "LoginResult"
]
