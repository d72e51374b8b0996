"""
Account lifecycle events for audit logging and system integration.
None of them carry passwords, hashes, tokens or codes.
"""

from typing import Optional
from dataclasses import dataclass

from .base_event import BaseEvent


@dataclass
class UserRegisteredEvent(BaseEvent):
    """Event published when a new account is created."""

    user_id: int
    verification_sent: bool


@dataclass
class VerificationCodeIssuedEvent(BaseEvent):
    """Event published when a verification code is re-issued."""

    user_id: int
    sent: bool


@dataclass
class EmailVerifiedEvent(BaseEvent):
    """Event published when email is verified."""

    user_id: int


@dataclass
class EmailVerificationFailedEvent(BaseEvent):
    """Event published when a submitted verification code is rejected."""

    user_id: int
    reason: str


@dataclass
class UserLoggedInEvent(BaseEvent):
    """Event published when a user successfully authenticates."""

    user_id: int


@dataclass
class LoginFailedEvent(BaseEvent):
    """Event published when login attempt fails."""

    reason: str
    user_id: Optional[int] = None


@dataclass
class PasswordChangedEvent(BaseEvent):
    """Event published when password is changed."""

    user_id: int


@dataclass
class UserDeletedEvent(BaseEvent):
    """Event published when an account is soft-deleted."""

    user_id: int
