from __future__ import annotations

import io
import json
import urllib.error

import pytest

from cofound_core.models import NotificationEvent, ProfileNotFound
from cofound_core.services import NotificationDispatcher, supabase_client
from cofound_core.services.supabase_client import SupabaseClient, SupabaseError

from conftest import FakeSender


class _Urlopen:
    """Stands in for urllib.request.urlopen, replying from a queue."""

    def __init__(self, *replies) -> None:
        self.replies = list(replies)
        self.requests = []

    def __call__(self, req):
        self.requests.append(req)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return io.BytesIO(json.dumps(reply).encode("utf-8"))


def _http_error(code: int, body: str) -> urllib.error.HTTPError:
    return urllib.error.HTTPError("https://db.test", code, "error", {}, io.BytesIO(body.encode("utf-8")))


@pytest.fixture
def urlopen(monkeypatch):
    def install(*replies) -> _Urlopen:
        fake = _Urlopen(*replies)
        monkeypatch.setattr(supabase_client.urllib.request, "urlopen", fake)
        return fake
    return install


def test_get_profile_builds_filter_and_maps_row(settings, urlopen) -> None:
    fake = urlopen([{"id": "u1", "full_name": "Dana", "role": ["technical"], "telegram_id": 555}])

    profile = SupabaseClient(settings).get_profile("u1")

    req = fake.requests[0]
    assert req.full_url == "https://db.test/rest/v1/profiles?id=eq.u1&select=*"
    assert req.get_header("Authorization") == "Bearer service-key"
    assert profile.telegram_id == 555
    assert profile.roles == ("technical",)


def test_get_profile_missing_or_error_is_none(settings, urlopen) -> None:
    urlopen([], _http_error(400, "invalid input syntax for type uuid"))
    client = SupabaseClient(settings)
    assert client.get_profile("u1") is None
    assert client.get_profile("not-a-uuid") is None


def test_insert_notification_posts_row(settings, urlopen) -> None:
    fake = urlopen([{}])
    SupabaseClient(settings).insert_notification("u2", "connection_request", "New request", link="/notifications")
    req = fake.requests[0]
    assert req.get_method() == "POST"
    assert json.loads(req.data) == {
        "user_id": "u2",
        "type": "connection_request",
        "title": "New request",
        "body": None,
        "link": "/notifications",
    }


def test_create_thread_ignores_duplicates(settings, urlopen) -> None:
    urlopen(_http_error(409, 'duplicate key value violates unique constraint "threads_pair"'))
    SupabaseClient(settings).create_thread("u1", "u2")


def test_write_errors_raise(settings, urlopen) -> None:
    urlopen(_http_error(500, "boom"))
    with pytest.raises(SupabaseError) as exc_info:
        SupabaseClient(settings).update_connection_status("accepted", connection_id="c1")
    assert exc_info.value.status == 500


def test_unreachable_host_reads_as_missing(settings, urlopen) -> None:
    urlopen(urllib.error.URLError("connection refused"), TimeoutError("timed out"))
    client = SupabaseClient(settings)
    assert client.get_profile("u1") is None
    assert client.get_profile_by_telegram_id(555) is None


def test_unreachable_host_on_write_raises_supabase_error(settings, urlopen) -> None:
    urlopen(urllib.error.URLError("connection refused"))
    with pytest.raises(SupabaseError) as exc_info:
        SupabaseClient(settings).update_connection_status("accepted", connection_id="c1")
    assert exc_info.value.status == 0
    assert "connection refused" in exc_info.value.body


def test_dispatch_over_unreachable_database_is_not_found(settings, urlopen) -> None:
    urlopen(urllib.error.URLError("connection refused"))
    client = SupabaseClient(settings)
    dispatcher = NotificationDispatcher(settings, client, FakeSender(), notifications=client)

    result = dispatcher.dispatch(NotificationEvent(user_id="u1", kind="connection_request", sender_name="Aziz"))

    assert isinstance(result, ProfileNotFound)
