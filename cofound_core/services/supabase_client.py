"""
Supabase client for the CoFound core services.
Provides access to profiles, connections, threads and notifications.
"""

import json
import logging
import urllib.error
import urllib.parse
import urllib.request
from datetime import datetime, timezone
from typing import Optional

from ..config import Settings
from ..models import Profile

logger = logging.getLogger(__name__)


class SupabaseError(Exception):
    """Supabase REST API returned an error response."""

    def __init__(self, status: int, body: str):
        super().__init__(f"Supabase error ({status}): {body}")
        self.status = status
        self.body = body


def _eq(value) -> str:
    return urllib.parse.quote(str(value), safe="")


class SupabaseClient:
    """Client for Supabase REST API operations (service role)."""

    def __init__(self, settings: Settings):
        self.url = settings.supabase_url
        self.service_key = settings.supabase_service_role_key

    def request(
        self, endpoint: str, method: str = "GET", body: dict = None
    ) -> dict | list | None:
        """Make a request to Supabase REST API. Raises SupabaseError on non-2xx."""
        url = f"{self.url}/rest/v1/{endpoint}"

        headers = {
            "apikey": self.service_key,
            "Authorization": f"Bearer {self.service_key}",
            "Content-Type": "application/json",
            "Prefer": "return=representation",
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
            raise SupabaseError(e.code, error_body) from e
        except (urllib.error.URLError, OSError) as e:
            # Unreachable host or timeout; status 0 marks a transport failure
            raise SupabaseError(0, str(getattr(e, "reason", e))) from e

    def _select(self, endpoint: str) -> list[dict]:
        """GET that logs and returns [] on an error response."""
        try:
            return self.request(endpoint) or []
        except SupabaseError as e:
            logger.error(str(e))
            return []

    # Profiles

    def get_profile(self, user_id: str) -> Optional[Profile]:
        rows = self._select(f"profiles?id=eq.{_eq(user_id)}&select=*")
        return Profile.from_row(rows[0]) if rows else None

    def get_profile_by_telegram_id(self, telegram_id: int) -> Optional[Profile]:
        rows = self._select(f"profiles?telegram_id=eq.{int(telegram_id)}&select=*")
        return Profile.from_row(rows[0]) if rows else None

    def insert_profile(self, row: dict) -> None:
        self.request("profiles", "POST", row)

    def touch_last_active(self, user_id: str) -> None:
        self.request(
            f"profiles?id=eq.{_eq(user_id)}",
            "PATCH",
            {"last_active": datetime.now(timezone.utc).isoformat()},
        )

    # Connections and threads

    def get_incoming_connection(self, connection_id: str, recipient_id: str) -> Optional[dict]:
        rows = self._select(
            f"connections?id=eq.{_eq(connection_id)}&recipient_id=eq.{_eq(recipient_id)}"
            "&select=id,requester_id,recipient_id,status"
        )
        return rows[0] if rows else None

    def update_connection_status(self, status: str, *, connection_id: str = None,
                                 requester_id: str = None, recipient_id: str = None) -> None:
        if connection_id:
            endpoint = f"connections?id=eq.{_eq(connection_id)}"
        else:
            endpoint = (
                f"connections?requester_id=eq.{_eq(requester_id)}"
                f"&recipient_id=eq.{_eq(recipient_id)}&status=eq.pending"
            )
        self.request(endpoint, "PATCH", {"status": status})

    def delete_connection(self, connection_id: str, recipient_id: str) -> None:
        self.request(
            f"connections?id=eq.{_eq(connection_id)}&recipient_id=eq.{_eq(recipient_id)}",
            "DELETE",
        )

    def create_thread(self, participant_a: str, participant_b: str) -> None:
        """Create a message thread between two users. An existing thread is not an error."""
        try:
            self.request("threads", "POST", {
                "participant_a": participant_a,
                "participant_b": participant_b,
            })
        except SupabaseError as e:
            if e.status == 409 or "duplicate" in e.body:
                return
            raise

    # Notifications

    def insert_notification(self, user_id: str, kind: str, title: str,
                            body: Optional[str] = None, link: Optional[str] = None) -> None:
        self.request("notifications", "POST", {
            "user_id": user_id,
            "type": kind,
            "title": title,
            "body": body,
            "link": link,
        })

    def ping(self) -> None:
        """Cheap query used by the health check."""
        self.request("profiles?select=id&limit=1")
