"""
Notifier interface for outbound verification messages.
"""

from dataclasses import dataclass
from typing import Optional, Protocol, runtime_checkable


@dataclass
class DispatchResult:
    """Outcome of a notification attempt."""

    sent: bool
    destination: str
    message_id: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "sent": self.sent,
            "message_id": self.message_id,
            "error": self.error,
        }


@runtime_checkable
class INotifier(Protocol):
    """Protocol for delivering one-time verification codes."""

    async def send(self, destination_email: str, otp: str) -> DispatchResult:
        """
        Send a verification code.

        Args:
            destination_email: Recipient address
            otp: One-time code to deliver

        Returns:
            DispatchResult describing the attempt
        """
        ...
