"""
Slack status decision and update.
"""

import logging
from datetime import datetime, time, timezone
from zoneinfo import ZoneInfo

from slack_sdk.errors import SlackApiError
from slack_sdk.web.async_client import AsyncWebClient

from core.errors import UpstreamApiError
from models.events import StatusAction, StatusProfile, WorkLocation

logger = logging.getLogger(__name__)


def decide_action(
    location: WorkLocation, has_events: bool = True, require_events: bool = False
) -> StatusAction:
    """
    Map a working location to the action to take.

    With require_events, a day without any events never triggers a reminder.
    """
    if location == WorkLocation.HOME:
        return StatusAction.SET_STATUS
    if location == WorkLocation.UNSET:
        if require_events and not has_events:
            return StatusAction.NONE
        return StatusAction.SEND_REMINDER
    return StatusAction.NONE


def status_expiration(tz_name: str = "UTC", now: datetime | None = None) -> int:
    """Epoch seconds of 23:59:59 today in the given time zone."""
    tz = ZoneInfo(tz_name)
    now = now or datetime.now(timezone.utc)
    today = now.astimezone(tz).date()
    return int(datetime.combine(today, time(23, 59, 59), tzinfo=tz).timestamp())


def _raise_for_slack(response, method: str) -> None:
    if not response.get("ok"):
        error = response.get("error") or f"{method} failed"
        logger.error("Slack %s failed: %s", method, error)
        raise UpstreamApiError("Slack", error)


async def get_current_status(client: AsyncWebClient) -> StatusProfile:
    """Read the user's current Slack status."""
    try:
        response = await client.users_profile_get()
    except SlackApiError as e:
        raise UpstreamApiError("Slack", e.response.get("error") or str(e)) from e

    _raise_for_slack(response, "users.profile.get")
    return StatusProfile.model_validate(response.get("profile") or {})


async def update_status(
    client: AsyncWebClient,
    status_text: str,
    status_emoji: str,
    tz_name: str = "UTC",
    now: datetime | None = None,
) -> bool:
    """
    Set the Slack status unless one is already set.

    Returns True if the status was written.
    """
    current = await get_current_status(client)
    if current.is_set:
        logger.info("Status already set (%s %s), skipping update", current.status_emoji, current.status_text)
        return False

    profile = {
        "status_text": status_text,
        "status_emoji": status_emoji,
        "status_expiration": status_expiration(tz_name, now),
    }
    try:
        response = await client.users_profile_set(profile=profile)
    except SlackApiError as e:
        raise UpstreamApiError("Slack", e.response.get("error") or str(e)) from e

    _raise_for_slack(response, "users.profile.set")
    logger.info("Slack status set to %s %s", status_emoji, status_text)
    return True
