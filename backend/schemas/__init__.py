"""
Pydantic schemas for the CoFound Backend API.
"""

from .notifications import TelegramNotificationRequest
from .auth import TelegramAuthPayload
from .connections import ConnectionRespondRequest

__all__ = [
    # Notifications
    "TelegramNotificationRequest",
    # Auth
    "TelegramAuthPayload",
    # Connections
    "ConnectionRespondRequest",
]
