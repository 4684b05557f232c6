"""
One pass of the daily check: calendar lookup, decision, then status update
or reminder.
"""

import logging
from datetime import datetime

import httpx
from slack_sdk.web.async_client import AsyncWebClient

from core.config import Settings
from core.slack_client import get_bot_client, get_user_client
from models.events import CheckResult, StatusAction
from services.calendar import get_work_location
from services.notifications import send_reminder
from services.status import decide_action, update_status

logger = logging.getLogger(__name__)


async def run_status_check(
    settings: Settings,
    now: datetime | None = None,
    http_client: httpx.AsyncClient | None = None,
    user_client: AsyncWebClient | None = None,
    bot_client: AsyncWebClient | None = None,
) -> CheckResult:
    """
    Run the check once. Errors propagate to the caller.
    """
    bot_client = bot_client or get_bot_client(settings)

    location, events = await get_work_location(settings, now, http_client, bot_client)
    action = decide_action(
        location,
        has_events=bool(events),
        require_events=settings.require_events_for_reminder,
    )
    result = CheckResult(location=location, action=action, event_count=len(events))
    logger.info("Work location: %s, action: %s", location.value, action.value)

    if action == StatusAction.SET_STATUS:
        result.status_updated = await update_status(
            user_client or get_user_client(settings),
            settings.status_text,
            settings.status_emoji,
            settings.status_timezone,
            now,
        )
    elif action == StatusAction.SEND_REMINDER:
        await send_reminder(bot_client, settings.slack_user_id)
        result.reminder_sent = True

    return result
