"""
Telegram Bot API delivery and message templates.

Messages are rendered as Telegram HTML; user-supplied values are escaped
before they are interpolated.
"""

import html
import logging
import urllib.parse

import requests

from ..config import Settings

logger = logging.getLogger(__name__)


class TelegramDeliveryError(Exception):
    """The Bot API call did not deliver the message."""
    pass


def _link(url: str, label: str) -> str:
    return f'<a href="{html.escape(url)}">{label}</a>'


def build_connection_request_message(from_name: str, app_url: str) -> str:
    return (
        "<b>New Connection Request</b>\n\n"
        f"<b>{html.escape(from_name)}</b> wants to connect with you on CoFound Central Asia!\n\n"
        + _link(f"{app_url}/notifications", "View Request")
    )


def build_connection_accepted_message(from_name: str, app_url: str) -> str:
    return (
        "<b>Connection Accepted</b>\n\n"
        f"<b>{html.escape(from_name)}</b> accepted your connection request!\n\n"
        + _link(f"{app_url}/messages", "Start Chatting")
    )


def build_new_message_message(from_name: str, app_url: str, thread_id: str) -> str:
    return (
        "<b>New Message</b>\n\n"
        f"You have a new message from <b>{html.escape(from_name)}</b>\n\n"
        + _link(f"{app_url}/messages/{urllib.parse.quote(str(thread_id), safe='')}", "Open Chat")
    )


def build_idea_interest_message(from_name: str, idea_title: str, app_url: str, idea_id: str) -> str:
    return (
        "<b>Someone is interested in your idea!</b>\n\n"
        f"<b>{html.escape(from_name)}</b> expressed interest in "
        f"\"<b>{html.escape(idea_title)}</b>\"\n\n"
        + _link(f"{app_url}/ideas/{urllib.parse.quote(str(idea_id), safe='')}", "View Idea")
    )


class TelegramBotClient:
    """Sends chat messages through the Telegram Bot API."""

    def __init__(self, settings: Settings, session: requests.Session = None):
        self.token = settings.telegram_bot_token
        self.api_base = settings.telegram_api_base
        self.timeout = settings.telegram_timeout
        self.session = session or requests.Session()

    def close(self) -> None:
        self.session.close()

    def _endpoint(self, method: str) -> str:
        return f"{self.api_base}/bot{self.token}/{method}"

    def send_message(self, chat_id: int, text: str, parse_mode: str = "HTML") -> None:
        """
        Send one message. Raises TelegramDeliveryError on any failure.

        No retries here; callers decide whether a failed delivery is retried.
        """
        if not self.token:
            raise TelegramDeliveryError("TELEGRAM_BOT_TOKEN not set")

        payload = {
            "chat_id": chat_id,
            "text": text,
            "parse_mode": parse_mode,
        }

        try:
            response = self.session.post(
                self._endpoint("sendMessage"),
                json=payload,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            # Exception text may contain the request URL, which embeds the token
            raise TelegramDeliveryError(f"Bot API request failed: {type(e).__name__}") from e

        if not response.ok:
            raise TelegramDeliveryError(
                f"Bot API error {response.status_code}: {response.text[:200]}"
            )

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            raise TelegramDeliveryError("Bot API returned an unexpected response")
        if body.get("ok") is False:
            raise TelegramDeliveryError(f"Bot API rejected message: {body.get('description', 'unknown error')}")
