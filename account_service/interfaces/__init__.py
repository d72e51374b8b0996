"""
Interface definitions for dependency abstractions.
These Protocol classes define contracts for services to enable dependency injection
and improve testability.
"""

from .event_interface import IEventBus, IEvent
from .notifier_interface import INotifier, DispatchResult
from .repository_interface import IUserRepository

__all__ = [
    "IEventBus",
    "IEvent",
    "INotifier",
    "DispatchResult",
    "IUserRepository"
]
