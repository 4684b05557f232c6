"""
Slack Web API clients.

Status reads and writes need the user-scoped token; messages go out with the
bot token.
"""

from slack_sdk.web.async_client import AsyncWebClient

from core.config import Settings


def _timeout(settings: Settings) -> int:
    # slack_sdk takes whole seconds and treats 0 as no timeout
    return max(1, round(settings.http_timeout_seconds))


def get_user_client(settings: Settings) -> AsyncWebClient:
    """Client authorised to read and write the user's profile status."""
    return AsyncWebClient(token=settings.slack_user_token, timeout=_timeout(settings))


def get_bot_client(settings: Settings) -> AsyncWebClient:
    """Client authorised to post messages as the bot."""
    return AsyncWebClient(token=settings.slack_bot_token, timeout=_timeout(settings))
