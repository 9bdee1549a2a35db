"""
Notification event and dispatch result types.

DispatchResult is a small tagged union; callers branch with isinstance()
instead of catching exceptions.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class NotificationKind(str, Enum):
    CONNECTION_REQUEST = "connection_request"
    CONNECTION_ACCEPTED = "connection_accepted"
    NEW_MESSAGE = "new_message"
    IDEA_INTEREST = "idea_interest"

    @classmethod
    def values(cls) -> list[str]:
        return [k.value for k in cls]


@dataclass(frozen=True)
class NotificationEvent:
    """A single connection event to route to the target user."""

    user_id: str
    kind: str
    sender_name: str
    thread_id: Optional[str] = None
    idea_id: Optional[str] = None
    idea_title: Optional[str] = None


@dataclass(frozen=True)
class Sent:
    chat_id: int


@dataclass(frozen=True)
class SkippedNoHandle:
    reason: str = "User does not have a Telegram account linked"


@dataclass(frozen=True)
class ValidationFailed:
    reason: str


@dataclass(frozen=True)
class ProfileNotFound(ValidationFailed):
    reason: str = "User profile not found"


@dataclass(frozen=True)
class DeliveryFailed:
    reason: str


DispatchResult = Union[Sent, SkippedNoHandle, ValidationFailed, DeliveryFailed]
