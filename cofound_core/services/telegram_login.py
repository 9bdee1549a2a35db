"""
Sign-in for verified Telegram widget logins.

Finds the profile linked to the Telegram id (or creates a new account and a
blank profile) and returns a one-time token the client exchanges for a
session.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from ..ports import ProfileRepository, SessionIssuer
from .supabase_auth import SessionIssueError
from .widget_auth import VerifiedIdentity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
    user_id: str
    is_new_user: bool
    redirect_url: str
    token_hash: str
    verification_type: str = "magiclink"

    def to_response(self) -> dict:
        return {
            "success": True,
            "isNewUser": self.is_new_user,
            "redirectUrl": self.redirect_url,
            "token_hash": self.token_hash,
            "verification_type": self.verification_type,
        }


def placeholder_email(telegram_id: int) -> str:
    return f"telegram_{telegram_id}@cofound.local"


def new_profile_row(user_id: str, identity: VerifiedIdentity) -> dict:
    return {
        "id": user_id,
        "full_name": identity.full_name or None,
        "avatar_url": identity.photo_url,
        "telegram_id": identity.telegram_id,
        "telegram_handle": f"@{identity.username}" if identity.username else None,
        "role": [],
        "skills": [],
        "industries": [],
        "languages": [],
        "looking_for_roles": [],
        "ecosystem_tags": [],
        "education": [],
        "experience": [],
        "is_actively_looking": True,
        "is_admin": False,
        "profile_completeness": 10,
        "last_active": datetime.now(timezone.utc).isoformat(),
    }


class TelegramLoginService:
    """Hands a verified widget identity to the session layer."""

    def __init__(self, profiles: ProfileRepository, sessions: SessionIssuer):
        self.profiles = profiles
        self.sessions = sessions

    def login(self, identity: VerifiedIdentity) -> LoginResult:
        """Sign in an existing user or register a new one. Raises SessionIssueError."""
        existing = self.profiles.get_profile_by_telegram_id(identity.telegram_id)
        if existing:
            return self._sign_in(existing.id, identity)
        return self._register(identity)

    def _sign_in(self, user_id: str, identity: VerifiedIdentity) -> LoginResult:
        email = self.sessions.get_user_email(user_id)
        if email is None:
            raise SessionIssueError("Auth user not found for existing profile")

        token = self.sessions.generate_sign_in_token(email or placeholder_email(identity.telegram_id))

        try:
            self.profiles.touch_last_active(user_id)
        except Exception as e:
            logger.warning(f"Could not update last_active for {user_id}: {e}")

        logger.info(f"Telegram sign-in for existing user {user_id}")
        return LoginResult(user_id=user_id, is_new_user=False, redirect_url="/discover", token_hash=token)

    def _register(self, identity: VerifiedIdentity) -> LoginResult:
        email = placeholder_email(identity.telegram_id)
        user_id = self.sessions.create_user(email, {
            "full_name": identity.full_name,
            "avatar_url": identity.photo_url,
            "telegram_id": identity.telegram_id,
            "telegram_username": identity.username,
        })

        try:
            self.profiles.insert_profile(new_profile_row(user_id, identity))
        except Exception as e:
            logger.error(f"Profile insert failed for new Telegram user {identity.telegram_id}: {e}")
            self.sessions.delete_user(user_id)
            raise SessionIssueError("Failed to create user profile") from e

        token = self.sessions.generate_sign_in_token(email)
        logger.info(f"Registered new Telegram user {user_id}")
        return LoginResult(user_id=user_id, is_new_user=True, redirect_url="/onboarding", token_hash=token)
