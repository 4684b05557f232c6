"""End-to-end tests for one status check with stubbed Google and Slack."""

import pytest

from core.config import AUTH_FAILURE_TEXT, REMINDER_TEXT
from core.errors import AuthError, UpstreamApiError
from models.events import StatusAction, WorkLocation
from services.status_check import run_status_check


async def run(settings, now, stub, user_client, bot_client):
    async with stub.client() as client:
        return await run_status_check(
            settings, now, http_client=client, user_client=user_client, bot_client=bot_client
        )


@pytest.mark.asyncio
async def test_office_day_does_nothing(settings, now, google, office_event, user_client, bot_client):
    stub = google(pages=[{"items": [office_event]}])

    result = await run(settings, now, stub, user_client, bot_client)

    assert result.location == WorkLocation.OFFICE
    assert result.action == StatusAction.NONE
    user_client.users_profile_get.assert_not_called()
    user_client.users_profile_set.assert_not_called()
    bot_client.chat_postMessage.assert_not_called()


@pytest.mark.asyncio
async def test_home_day_sets_status_once(settings, now, google, meeting_event, home_event, user_client, bot_client):
    stub = google(pages=[{"items": [meeting_event, home_event]}])

    result = await run(settings, now, stub, user_client, bot_client)

    assert result.location == WorkLocation.HOME
    assert result.status_updated is True
    user_client.users_profile_set.assert_awaited_once()
    profile = user_client.users_profile_set.await_args.kwargs["profile"]
    assert profile["status_text"] == "Working remotely"
    assert profile["status_emoji"] == ":house:"
    bot_client.chat_postMessage.assert_not_called()


@pytest.mark.asyncio
async def test_home_day_keeps_existing_status(settings, now, google, home_event, user_client, bot_client):
    user_client.users_profile_get.return_value = {
        "ok": True,
        "profile": {"status_text": "In a meeting", "status_emoji": ""},
    }
    stub = google(pages=[{"items": [home_event]}])

    result = await run(settings, now, stub, user_client, bot_client)

    assert result.status_updated is False
    user_client.users_profile_set.assert_not_called()


@pytest.mark.asyncio
async def test_undeclared_day_sends_one_reminder(settings, now, google, meeting_event, user_client, bot_client):
    stub = google(pages=[{"items": [meeting_event]}])

    result = await run(settings, now, stub, user_client, bot_client)

    assert result.location == WorkLocation.UNSET
    assert result.reminder_sent is True
    bot_client.chat_postMessage.assert_awaited_once_with(channel="U123", text=REMINDER_TEXT)
    user_client.users_profile_set.assert_not_called()


@pytest.mark.asyncio
async def test_empty_day_with_event_gate(settings, now, google, user_client, bot_client):
    gated = settings.model_copy(update={"require_events_for_reminder": True})
    stub = google(pages=[{"items": []}])

    result = await run(gated, now, stub, user_client, bot_client)

    assert result.action == StatusAction.NONE
    bot_client.chat_postMessage.assert_not_called()


@pytest.mark.asyncio
async def test_auth_failure_stops_before_calendar_and_status(settings, now, google, user_client, bot_client):
    stub = google(token_payload={"error": "invalid_grant", "error_description": "Token has been expired"})

    with pytest.raises(AuthError):
        await run(settings, now, stub, user_client, bot_client)

    assert stub.event_requests == []
    bot_client.chat_postMessage.assert_awaited_once_with(channel="U123", text=AUTH_FAILURE_TEXT)
    user_client.users_profile_get.assert_not_called()
    user_client.users_profile_set.assert_not_called()


@pytest.mark.asyncio
async def test_status_write_failure_propagates(settings, now, google, home_event, user_client, bot_client):
    user_client.users_profile_set.return_value = {"ok": False, "error": "ratelimited"}
    stub = google(pages=[{"items": [home_event]}])

    with pytest.raises(UpstreamApiError):
        await run(settings, now, stub, user_client, bot_client)

    assert user_client.users_profile_set.await_count == 1
