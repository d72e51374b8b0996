"""
Pydantic schemas for request/response validation.
"""
from .auth_schemas import (
    RegistrationRequest,
    RegistrationResponse,
    VerifyEmailRequest,
    LoginRequest,
    LoginResponse,
    PasswordChangeRequest,
    MessageResponse,
    ResendOTPResponse,
    UserResponse,
    ProfileResponse,
    UserList,
    ErrorResponse
)

__all__ = [
    "RegistrationRequest",
    "RegistrationResponse",
    "VerifyEmailRequest",
    "LoginRequest",
    "LoginResponse",
    "PasswordChangeRequest",
    "MessageResponse",
    "ResendOTPResponse",
    "UserResponse",
    "ProfileResponse",
    "UserList",
    "ErrorResponse"
]
