from __future__ import annotations

from typing import Optional

import pytest

from cofound_core.config import Settings
from cofound_core.models import Profile
from cofound_core.services import TelegramDeliveryError

BOT_TOKEN = "123456:TEST-bot-token"


class FakeProfiles:
    """In-memory ProfileRepository / NotificationRepository."""

    def __init__(self, *profiles: Profile) -> None:
        self.by_id = {p.id: p for p in profiles}
        self.lookups: list[str] = []
        self.inserted: list[dict] = []
        self.touched: list[str] = []
        self.notifications: list[dict] = []
        self.fail_insert = False

    def get_profile(self, user_id: str) -> Optional[Profile]:
        self.lookups.append(user_id)
        return self.by_id.get(user_id)

    def get_profile_by_telegram_id(self, telegram_id: int) -> Optional[Profile]:
        for profile in self.by_id.values():
            if profile.telegram_id == telegram_id:
                return profile
        return None

    def insert_profile(self, row: dict) -> None:
        if self.fail_insert:
            raise RuntimeError("insert failed")
        self.inserted.append(row)

    def touch_last_active(self, user_id: str) -> None:
        self.touched.append(user_id)

    def insert_notification(self, user_id, kind, title, body=None, link=None) -> None:
        self.notifications.append(
            {"user_id": user_id, "type": kind, "title": title, "body": body, "link": link}
        )


class FakeSender:
    """MessageSender that records calls and can be told to fail."""

    def __init__(self, error: Optional[str] = None) -> None:
        self.calls: list[dict] = []
        self.error = error

    def send_message(self, chat_id: int, text: str, parse_mode: str = "HTML") -> None:
        self.calls.append({"chat_id": chat_id, "text": text, "parse_mode": parse_mode})
        if self.error:
            raise TelegramDeliveryError(self.error)


class FakeSessions:
    """SessionIssuer backed by a dict of user id -> email."""

    def __init__(self, users: Optional[dict[str, str]] = None) -> None:
        self.users = dict(users or {})
        self.created: list[dict] = []
        self.deleted: list[str] = []
        self.tokens: list[str] = []

    def get_user_email(self, user_id: str) -> Optional[str]:
        return self.users.get(user_id)

    def create_user(self, email: str, metadata: dict) -> str:
        user_id = f"new-user-{len(self.created) + 1}"
        self.created.append({"id": user_id, "email": email, "metadata": metadata})
        self.users[user_id] = email
        return user_id

    def delete_user(self, user_id: str) -> None:
        self.deleted.append(user_id)
        self.users.pop(user_id, None)

    def generate_sign_in_token(self, email: str) -> str:
        self.tokens.append(email)
        return f"hashed-{email}"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        telegram_bot_token=BOT_TOKEN,
        telegram_bot_username="cofound_test_bot",
        app_url="https://app.test/",
        supabase_url="https://db.test",
        supabase_service_role_key="service-key",
    )
