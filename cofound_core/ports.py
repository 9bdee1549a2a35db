"""
Ports (interfaces) used by the core services.

The dispatcher, login flow and ranking depend on these contracts only, so
the Supabase adapters can be swapped for any other storage or transport.
"""

from typing import Optional, Protocol

from .models import Profile


class ProfileRepository(Protocol):
    """Profile reads and writes needed by the core."""

    def get_profile(self, user_id: str) -> Optional[Profile]:
        ...

    def get_profile_by_telegram_id(self, telegram_id: int) -> Optional[Profile]:
        ...

    def insert_profile(self, row: dict) -> None:
        ...

    def touch_last_active(self, user_id: str) -> None:
        ...


class ConnectionRepository(Protocol):
    """Connection and thread operations behind the connection routes."""

    def get_incoming_connection(self, connection_id: str, recipient_id: str) -> Optional[dict]:
        ...

    def update_connection_status(self, status: str, *, connection_id: str = None,
                                 requester_id: str = None, recipient_id: str = None) -> None:
        ...

    def delete_connection(self, connection_id: str, recipient_id: str) -> None:
        ...

    def create_thread(self, participant_a: str, participant_b: str) -> None:
        ...


class NotificationRepository(Protocol):
    """In-app notification storage."""

    def insert_notification(self, user_id: str, kind: str, title: str,
                            body: Optional[str] = None, link: Optional[str] = None) -> None:
        ...


class MessageSender(Protocol):
    """Outbound chat delivery. Raises on failure; any exception counts as a failed delivery."""

    def send_message(self, chat_id: int, text: str, parse_mode: str = "HTML") -> None:
        ...


class SessionIssuer(Protocol):
    """Auth backend operations used to hand a verified identity to the session layer."""

    def get_user_email(self, user_id: str) -> Optional[str]:
        ...

    def create_user(self, email: str, metadata: dict) -> str:
        ...

    def delete_user(self, user_id: str) -> None:
        ...

    def generate_sign_in_token(self, email: str) -> str:
        ...
