"""
Account-related Pydantic schemas for request/response validation.
"""
from typing import Optional, List, Union
from pydantic import BaseModel, ConfigDict, EmailStr, Field


class RegistrationRequest(BaseModel):
    """Sign-up request schema."""

    first_name: Optional[str] = Field(None, max_length=100, description="First name")
    last_name: Optional[str] = Field(None, max_length=100, description="Last name")
    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., description="User's password")
    phone: Optional[str] = Field(None, max_length=20, description="Phone number")

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "first_name": "Ada",
            "last_name": "Lovelace",
            "email": "ada@example.com",
            "password": "correct horse battery staple",
            "phone": "+15550100"
        }
    })


class VerifyEmailRequest(BaseModel):
    """Email verification request; the code may be sent as a string or a number."""

    otp: Union[str, int] = Field(..., description="Verification code from the email")

    model_config = ConfigDict(json_schema_extra={"example": {"otp": "482913"}})


class LoginRequest(BaseModel):
    """Login request schema. A malformed email fails like any unknown one."""

    email: str = Field(..., description="User's email address")
    password: str = Field(..., description="User's password")

    model_config = ConfigDict(json_schema_extra={
        "example": {"email": "ada@example.com", "password": "correct horse battery staple"}
    })


class PasswordChangeRequest(BaseModel):
    """Password change request schema."""

    current_password: Optional[str] = Field(None, description="Current password")
    new_password: Optional[str] = Field(None, description="New password")


class ProfileResponse(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    avatar_url: str = ""


class UserResponse(BaseModel):
    """Public user projection."""

    id: int
    email: str
    is_verified: bool
    profile: Optional[ProfileResponse] = None


class MailDispatchResponse(BaseModel):
    sent: bool
    message_id: Optional[str] = None
    error: Optional[str] = None


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    status: str = Field("success", description="Outcome")
    status_code: int = Field(200, description="HTTP status code")
    message: str = Field(..., description="Human readable message")


class RegistrationResponse(MessageResponse):
    user: UserResponse
    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field("bearer", description="Token type")
    mail_dispatch: MailDispatchResponse


class ResendOTPResponse(MessageResponse):
    mail_dispatch: MailDispatchResponse


class LoginResponse(BaseModel):
    """Login response schema."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field("bearer", description="Token type")
    user: UserResponse


class UserList(BaseModel):
    users: List[UserResponse]
    skip: int
    limit: int


class ErrorResponse(BaseModel):
    """Failure envelope shared by every endpoint."""

    status: str = Field("unsuccessful", description="Outcome")
    status_code: int = Field(..., description="HTTP status code")
    message: str = Field(..., description="Human readable message")
    error_code: str = Field(..., description="Error kind")
