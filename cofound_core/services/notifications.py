"""
Notification dispatcher.

Routes a connection event to the target user's linked Telegram chat:

1. Validate the event (kind + kind-specific context)
2. Look up the target profile
3. Skip quietly when no Telegram account is linked
4. Render the kind-specific template
5. Deliver once, without retrying
"""

import logging
from typing import Optional

from ..config import Settings
from ..models import (
    DeliveryFailed,
    DispatchResult,
    NotificationEvent,
    NotificationKind,
    ProfileNotFound,
    Sent,
    SkippedNoHandle,
    ValidationFailed,
)
from ..ports import MessageSender, NotificationRepository, ProfileRepository
from .telegram import (
    TelegramDeliveryError,
    build_connection_accepted_message,
    build_connection_request_message,
    build_idea_interest_message,
    build_new_message_message,
)

logger = logging.getLogger(__name__)


def validate_event(event: NotificationEvent) -> Optional[ValidationFailed]:
    """Return a ValidationFailed for a malformed event, or None if it can be dispatched."""
    if not event.user_id or not event.kind or not event.sender_name:
        return ValidationFailed("Missing required fields: userId, type, fromName")

    if event.kind not in NotificationKind.values():
        return ValidationFailed(
            f"Invalid notification type. Must be one of: {', '.join(NotificationKind.values())}"
        )

    if event.kind == NotificationKind.NEW_MESSAGE and not event.thread_id:
        return ValidationFailed("threadId is required for new_message notifications")

    if event.kind == NotificationKind.IDEA_INTEREST and not (event.idea_id and event.idea_title):
        return ValidationFailed("ideaId and ideaTitle are required for idea_interest notifications")

    return None


def render_message(event: NotificationEvent, app_url: str) -> str:
    """Render the Telegram text for an already validated event."""
    kind = NotificationKind(event.kind)
    if kind == NotificationKind.CONNECTION_REQUEST:
        return build_connection_request_message(event.sender_name, app_url)
    if kind == NotificationKind.CONNECTION_ACCEPTED:
        return build_connection_accepted_message(event.sender_name, app_url)
    if kind == NotificationKind.NEW_MESSAGE:
        return build_new_message_message(event.sender_name, app_url, event.thread_id)
    return build_idea_interest_message(event.sender_name, event.idea_title, app_url, event.idea_id)


class NotificationDispatcher:
    """Resolves, renders and delivers notification events."""

    def __init__(
        self,
        settings: Settings,
        profiles: ProfileRepository,
        sender: MessageSender,
        notifications: NotificationRepository = None,
    ):
        self.app_url = settings.app_url
        self.profiles = profiles
        self.sender = sender
        self.notifications = notifications

    def dispatch(self, event: NotificationEvent) -> DispatchResult:
        """Dispatch one event. Never raises for expected outcomes."""
        invalid = validate_event(event)
        if invalid:
            logger.warning(f"Rejected {event.kind or '?'} notification: {invalid.reason}")
            return invalid

        profile = self.profiles.get_profile(event.user_id)
        if profile is None:
            logger.warning(f"No profile for notification target {event.user_id}")
            return ProfileNotFound()

        if not profile.has_linked_chat:
            logger.info(f"User {event.user_id} has no Telegram account linked, skipping {event.kind}")
            return SkippedNoHandle()

        text = render_message(event, self.app_url)

        try:
            self.sender.send_message(profile.telegram_id, text, parse_mode="HTML")
        except TelegramDeliveryError as e:
            logger.warning(f"Failed to send {event.kind} to user {event.user_id}: {e}")
            return DeliveryFailed(str(e))
        except Exception as e:
            logger.error(f"Unexpected sender error for {event.kind} to user {event.user_id}: {e}")
            return DeliveryFailed(f"{type(e).__name__}: {e}")

        logger.info(f"Sent {event.kind} notification to user {event.user_id}")
        return Sent(chat_id=profile.telegram_id)

    def notify(
        self,
        event: NotificationEvent,
        title: str,
        body: Optional[str] = None,
        link: Optional[str] = None,
    ) -> DispatchResult:
        """
        Record the in-app notification, then dispatch it to Telegram.

        Best effort: failures are logged and returned, never raised, so the
        action that triggered the notification still succeeds.
        """
        if self.notifications is not None:
            try:
                self.notifications.insert_notification(event.user_id, event.kind, title, body, link)
            except Exception as e:
                logger.error(f"Failed to record in-app notification for {event.user_id}: {e}")

        try:
            return self.dispatch(event)
        except Exception as e:
            logger.error(f"Notification dispatch error for {event.user_id}: {e}")
            return DeliveryFailed(str(e))
