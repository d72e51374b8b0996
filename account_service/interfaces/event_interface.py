"""
Event system interfaces for dependency abstraction.
"""

from typing import Any, Dict, Protocol, runtime_checkable, Callable, Awaitable
from datetime import datetime
from abc import ABC, abstractmethod


class IEvent(ABC):
    """Base interface for all events."""

    @property
    @abstractmethod
    def event_type(self) -> str:
        """Event type identifier."""
        ...

    @property
    @abstractmethod
    def data(self) -> Dict[str, Any]:
        """Event data payload."""
        ...

    correlation_id: str
    timestamp: datetime


@runtime_checkable
class IEventBus(Protocol):
    """Protocol for event bus operations."""

    async def publish(self, event: IEvent) -> bool:
        """
        Publish an event to the event bus.

        Returns:
            True if published successfully, False otherwise
        """
        ...

    async def subscribe(
        self,
        event_type: str,
        handler: Callable[[IEvent], Awaitable[None]]
    ) -> bool:
        """Subscribe to events of a specific type ("*" for all)."""
        ...

    async def unsubscribe(
        self,
        event_type: str,
        handler: Callable[[IEvent], Awaitable[None]]
    ) -> bool:
        """Unsubscribe from events of a specific type."""
        ...
