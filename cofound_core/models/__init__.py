from .profile import Profile
from .notifications import (
    NotificationKind,
    NotificationEvent,
    DispatchResult,
    Sent,
    SkippedNoHandle,
    ValidationFailed,
    ProfileNotFound,
    DeliveryFailed,
)

__all__ = [
    "Profile",
    "NotificationKind",
    "NotificationEvent",
    "DispatchResult",
    "Sent",
    "SkippedNoHandle",
    "ValidationFailed",
    "ProfileNotFound",
    "DeliveryFailed",
]
