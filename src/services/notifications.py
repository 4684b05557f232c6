"""
Slack direct messages: the daily reminder and the auth-failure diagnostic.
"""

import logging

from slack_sdk.errors import SlackApiError
from slack_sdk.web.async_client import AsyncWebClient

from core.config import AUTH_FAILURE_TEXT, REMINDER_TEXT
from core.errors import UpstreamApiError

logger = logging.getLogger(__name__)


async def post_message(client: AsyncWebClient, channel: str, text: str) -> None:
    """
    Post a message to a channel or user ID.

    Raises:
        UpstreamApiError: if Slack answers with ok=false
    """
    try:
        response = await client.chat_postMessage(channel=channel, text=text)
    except SlackApiError as e:
        raise UpstreamApiError("Slack", e.response.get("error") or str(e)) from e

    if not response.get("ok"):
        raise UpstreamApiError("Slack", response.get("error") or "chat.postMessage failed")


async def send_reminder(client: AsyncWebClient, channel: str) -> None:
    """Ask the user to declare today's working location."""
    await post_message(client, channel, REMINDER_TEXT)
    logger.info("Sent working location reminder")


async def send_auth_failure_notification(client: AsyncWebClient, channel: str) -> None:
    """Tell the user the Google refresh token needs replacing. Never raises."""
    try:
        await post_message(client, channel, AUTH_FAILURE_TEXT)
        logger.info("Auth failure notification sent")
    except Exception as e:
        logger.error("Failed to send auth failure notification: %s", e)
