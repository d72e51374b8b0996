"""Test data factories for account service testing."""

from .user_factory import UserFactory, ProfileFactory, DEFAULT_PASSWORD
from .notifiers import RecordingNotifier

__all__ = [
    "UserFactory",
    "ProfileFactory",
    "DEFAULT_PASSWORD",
    "RecordingNotifier"
]
