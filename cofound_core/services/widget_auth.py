"""
Telegram Login Widget verification.

The widget signs its payload with HMAC-SHA256. The check string is every
field except `hash`, sorted by key and joined as `key=value` lines; the key
is SHA256(bot_token).
"""

import base64
import binascii
import hashlib
import hmac
import json
import logging
import time
from dataclasses import dataclass
from typing import Mapping, Optional, Union

from ..config import Settings

logger = logging.getLogger(__name__)

WIDGET_FIELDS = ("id", "first_name", "last_name", "username", "photo_url", "auth_date", "hash")
REQUIRED_FIELDS = ("id", "auth_date", "hash")


@dataclass(frozen=True)
class VerifiedIdentity:
    telegram_id: int
    auth_date: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    username: Optional[str] = None
    photo_url: Optional[str] = None

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)


@dataclass(frozen=True)
class AuthRejected:
    reason: str
    # "invalid" or "expired"
    code: str = "invalid"


AuthResult = Union[VerifiedIdentity, AuthRejected]


def build_check_string(payload: Mapping[str, str]) -> str:
    return "\n".join(f"{key}={payload[key]}" for key in sorted(payload) if key != "hash")


def sign_payload(payload: Mapping[str, str], bot_token: str) -> str:
    """Compute the hex HMAC the widget would attach to this payload."""
    secret_key = hashlib.sha256(bot_token.encode("utf-8")).digest()
    check_string = build_check_string(payload)
    return hmac.new(secret_key, check_string.encode("utf-8"), hashlib.sha256).hexdigest()


def verify(payload: Mapping[str, str], bot_token: str) -> bool:
    """Return True when the payload's hash matches its fields. Pure, no freshness check."""
    supplied = payload.get("hash")
    if not supplied:
        return False
    expected = sign_payload(payload, bot_token)
    return hmac.compare_digest(expected.encode("ascii"), str(supplied).lower().encode("utf-8"))


def normalize_widget_payload(raw: Mapping) -> dict[str, str]:
    """Keep only the fields the widget signs, as non-empty strings."""
    normalized = {}
    for key in WIDGET_FIELDS:
        value = raw.get(key)
        if value is None or value == "":
            continue
        normalized[key] = str(value)
    return normalized


def decode_auth_fragment(value: str) -> dict:
    """
    Decode a `tgAuthResult` fragment (URL-safe base64 JSON) into a raw payload.

    Accepts either the bare value or the whole `tgAuthResult=...` fragment.
    Returns an empty dict for anything that doesn't decode to a JSON object.
    """
    if not value:
        return {}
    value = value.lstrip("#")
    if value.startswith("tgAuthResult="):
        value = value[len("tgAuthResult="):]
    value += "=" * (-len(value) % 4)
    try:
        decoded = json.loads(base64.urlsafe_b64decode(value.encode("ascii")))
    except (binascii.Error, UnicodeError, ValueError):
        return {}
    return decoded if isinstance(decoded, dict) else {}


class WidgetAuthVerifier:
    """Verifies widget payloads and enforces auth_date freshness."""

    def __init__(self, settings: Settings):
        self.bot_token = settings.telegram_bot_token
        self.max_age = settings.auth_max_age

    def authenticate(self, payload: Mapping[str, str], now: Optional[float] = None) -> AuthResult:
        if not payload.get("hash"):
            logger.warning("Telegram auth rejected: missing hash")
            return AuthRejected("Missing Telegram auth hash")

        if not verify(payload, self.bot_token):
            logger.warning(f"Telegram auth rejected: hash mismatch for id={payload.get('id')}")
            return AuthRejected("Invalid Telegram authentication")

        try:
            auth_date = int(payload.get("auth_date", ""))
            telegram_id = int(payload.get("id", ""))
        except ValueError:
            logger.warning("Telegram auth rejected: non-numeric id or auth_date")
            return AuthRejected("Invalid Telegram authentication")

        now = time.time() if now is None else now
        if now - auth_date > self.max_age:
            logger.warning(f"Telegram auth rejected: expired auth_date for id={telegram_id}")
            return AuthRejected("Telegram authentication expired", code="expired")

        return VerifiedIdentity(
            telegram_id=telegram_id,
            auth_date=auth_date,
            first_name=payload.get("first_name"),
            last_name=payload.get("last_name"),
            username=payload.get("username"),
            photo_url=payload.get("photo_url"),
        )
