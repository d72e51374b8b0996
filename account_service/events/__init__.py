"""
Event system for decoupled audit logging and business logic.
"""

from .event_bus import InMemoryEventBus, ALL_EVENTS
from .base_event import BaseEvent
from .account_events import (
    UserRegisteredEvent,
    VerificationCodeIssuedEvent,
    EmailVerifiedEvent,
    EmailVerificationFailedEvent,
    UserLoggedInEvent,
    LoginFailedEvent,
    PasswordChangedEvent,
    UserDeletedEvent
)
from .audit_handlers import AuditEventHandler

__all__ = [
    "InMemoryEventBus",
    "ALL_EVENTS",
    "BaseEvent",
    "UserRegisteredEvent",
    "VerificationCodeIssuedEvent",
    "EmailVerifiedEvent",
    "EmailVerificationFailedEvent",
    "UserLoggedInEvent",
    "LoginFailedEvent",
    "PasswordChangedEvent",
    "UserDeletedEvent",
    "AuditEventHandler"
]
