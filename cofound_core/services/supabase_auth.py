"""
Supabase Auth admin client.

Used to hand a verified Telegram identity over to the session layer: the
browser exchanges the returned one-time magic-link token for a session.
"""

import json
import urllib.error
import urllib.request
from typing import Optional

from ..config import Settings


class SessionIssueError(Exception):
    """Supabase Auth admin API call failed."""
    pass


class SupabaseAuthAdmin:
    """Client for the Supabase Auth admin endpoints (service role only)."""

    def __init__(self, settings: Settings):
        self.url = settings.supabase_url
        self.service_key = settings.supabase_service_role_key

    def _request(self, path: str, method: str = "GET", body: dict = None) -> dict | None:
        url = f"{self.url}/auth/v1/admin/{path}"
        headers = {
            "apikey": self.service_key,
            "Authorization": f"Bearer {self.service_key}",
            "Content-Type": "application/json",
        }

        data = None
        if body is not None:
            data = json.dumps(body).encode("utf-8")

        req = urllib.request.Request(url, data=data, headers=headers, method=method)

        try:
            with urllib.request.urlopen(req) as response:
                text = response.read().decode("utf-8")
                return json.loads(text) if text else None
        except urllib.error.HTTPError as e:
            error_body = e.read().decode("utf-8")
            raise SessionIssueError(f"Supabase auth error ({e.code}): {error_body}") from e
        except (urllib.error.URLError, OSError) as e:
            raise SessionIssueError(f"Supabase auth unreachable: {getattr(e, 'reason', e)}") from e

    def get_user_email(self, user_id: str) -> Optional[str]:
        try:
            user = self._request(f"users/{user_id}")
        except SessionIssueError:
            return None
        return (user or {}).get("email")

    def create_user(self, email: str, metadata: dict) -> str:
        user = self._request("users", "POST", {
            "email": email,
            "email_confirm": True,
            "user_metadata": metadata,
        })
        if not user or not user.get("id"):
            raise SessionIssueError("Failed to create user")
        return user["id"]

    def delete_user(self, user_id: str) -> None:
        self._request(f"users/{user_id}", "DELETE")

    def generate_sign_in_token(self, email: str) -> str:
        """Generate a magic link and return its hashed token for verifyOtp."""
        link = self._request("generate_link", "POST", {"type": "magiclink", "email": email}) or {}
        token = link.get("hashed_token") or (link.get("properties") or {}).get("hashed_token")
        if not token:
            raise SessionIssueError("Failed to generate sign-in link")
        return token
