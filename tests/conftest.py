"""
Pytest configuration and shared fixtures.
"""

import sys
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import AsyncMock

import httpx
import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core.config import Settings  # noqa: E402

NOW = datetime(2025, 3, 4, 8, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    """Fixed clock: Tuesday 2025-03-04 08:00 UTC."""
    return NOW


@pytest.fixture
def settings():
    """Complete settings with dummy credentials."""
    return Settings(
        google_client_id="client-id",
        google_client_secret="client-secret",
        google_refresh_token="refresh-token",
        slack_user_token="xoxp-user",
        slack_bot_token="xoxb-bot",
        slack_user_id="U123",
    )


@pytest.fixture
def office_event():
    return {
        "summary": "Office",
        "start": {"date": "2025-03-04"},
        "workingLocationProperties": {"type": "officeLocation", "officeLocation": {"label": "HQ"}},
    }


@pytest.fixture
def home_event():
    return {
        "summary": "Home",
        "start": {"date": "2025-03-04"},
        "workingLocationProperties": {"type": "homeOffice", "homeOffice": {}},
    }


@pytest.fixture
def meeting_event():
    return {
        "summary": "Standup",
        "location": "Room 4",
        "start": {"dateTime": "2025-03-04T09:30:00Z", "timeZone": "UTC"},
        "end": {"dateTime": "2025-03-04T09:45:00Z", "timeZone": "UTC"},
    }


class GoogleStub:
    """Records requests and answers the token and events endpoints."""

    def __init__(self, token_payload=None, pages=None, events_status=200):
        self.token_payload = {"access_token": "ya29.token"} if token_payload is None else token_payload
        self.pages = pages if pages is not None else [{"items": []}]
        self.events_status = events_status
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == "/token":
            return httpx.Response(200, json=self.token_payload)
        page_token = request.url.params.get("pageToken")
        index = int(page_token) if page_token else 0
        return httpx.Response(self.events_status, json=self.pages[index])

    @property
    def token_requests(self):
        return [r for r in self.requests if r.url.path == "/token"]

    @property
    def event_requests(self):
        return [r for r in self.requests if r.url.path.endswith("/events")]

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def google():
    """Factory for Google API stubs."""
    return GoogleStub


@pytest.fixture
def bot_client():
    """Slack bot client whose posts succeed."""
    client = AsyncMock()
    client.chat_postMessage.return_value = {"ok": True, "ts": "1.0", "channel": "D1"}
    return client


@pytest.fixture
def user_client():
    """Slack user client with an empty status."""
    client = AsyncMock()
    client.users_profile_get.return_value = {
        "ok": True,
        "profile": {"status_text": "", "status_emoji": "", "status_expiration": 0},
    }
    client.users_profile_set.return_value = {"ok": True}
    return client
