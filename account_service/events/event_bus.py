"""
Event bus implementation for publishing and subscribing to events.
"""

import asyncio
from typing import Callable, Dict, List, Set, Awaitable
from collections import defaultdict
import structlog

from ..interfaces.event_interface import IEvent, IEventBus

logger = structlog.get_logger()

ALL_EVENTS = "*"


class InMemoryEventBus(IEventBus):
    """In-memory event bus implementation for single-instance deployments."""

    def __init__(self):
        self._handlers: Dict[str, Set[Callable[[IEvent], Awaitable[None]]]] = defaultdict(set)
        self._lock = asyncio.Lock()

    async def publish(self, event: IEvent) -> bool:
        """
        Publish an event to all registered handlers.

        Handler failures are logged and never reach the publisher.
        """
        try:
            event_type = event.event_type
            handlers: List[Callable[[IEvent], Awaitable[None]]] = list(
                self._handlers.get(event_type, set()) | self._handlers.get(ALL_EVENTS, set())
            )

            if not handlers:
                logger.debug("No handlers registered for event", event_type=event_type)
                return True

            results = await asyncio.gather(
                *(handler(event) for handler in handlers),
                return_exceptions=True
            )

            for handler, result in zip(handlers, results):
                if isinstance(result, Exception):
                    logger.error(
                        "Event handler failed",
                        event_type=event_type,
                        handler=getattr(handler, "__name__", repr(handler)),
                        error=str(result)
                    )

            logger.debug(
                "Event published successfully",
                event_type=event_type,
                handler_count=len(handlers),
                correlation_id=event.correlation_id
            )
            return True

        except Exception as e:
            logger.error("Failed to publish event", event_type=event.event_type, error=str(e))
            return False

    async def subscribe(
        self,
        event_type: str,
        handler: Callable[[IEvent], Awaitable[None]]
    ) -> bool:
        async with self._lock:
            self._handlers[event_type].add(handler)

        logger.debug(
            "Handler subscribed to event type",
            event_type=event_type,
            handler=getattr(handler, "__name__", repr(handler))
        )
        return True

    async def unsubscribe(
        self,
        event_type: str,
        handler: Callable[[IEvent], Awaitable[None]]
    ) -> bool:
        async with self._lock:
            handlers = self._handlers.get(event_type)
            if not handlers or handler not in handlers:
                return False
            handlers.discard(handler)
        return True
