"""
Event handlers for audit logging.
Decouples audit logging from business logic through event-driven architecture.
"""

import structlog

from ..interfaces.event_interface import IEvent
from .account_events import (
    LoginFailedEvent,
    EmailVerificationFailedEvent,
)

logger = structlog.get_logger("account_service.audit")

# Events that indicate a rejected credential or code
WARNING_EVENTS = (LoginFailedEvent, EmailVerificationFailedEvent)


class AuditEventHandler:
    """Writes one structured audit line per account event."""

    async def handle_event(self, event: IEvent) -> None:
        log = logger.bind(
            audit_event=event.event_type,
            correlation_id=event.correlation_id,
            occurred_at=event.timestamp.isoformat(),
            **event.data
        )
        if isinstance(event, WARNING_EVENTS):
            log.warning("Account audit event")
        else:
            log.info("Account audit event")
