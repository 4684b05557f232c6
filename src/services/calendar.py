"""
Working location lookup from Google Calendar.
"""

import logging
from datetime import datetime, time, timezone

import httpx
from slack_sdk.web.async_client import AsyncWebClient

from core.config import GOOGLE_EVENTS_URL, GOOGLE_TOKEN_URL, Settings
from core.errors import AuthError, UpstreamApiError
from core.slack_client import get_bot_client
from models.events import CalendarEvent, WorkLocation
from services.notifications import send_auth_failure_notification

logger = logging.getLogger(__name__)


def _error_message(payload: object, response: httpx.Response | None = None) -> str:
    """Pull a readable message out of a Google error body."""
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict):
            return str(error.get("message") or error.get("status") or error)
        if error:
            description = payload.get("error_description")
            return f"{error}: {description}" if description else str(error)
    if response is not None:
        return f"HTTP {response.status_code}"
    return "unknown error"


def utc_day_bounds(now: datetime | None = None) -> tuple[datetime, datetime]:
    """Return the first and last instant of the current UTC day."""
    now = now or datetime.now(timezone.utc)
    today = now.astimezone(timezone.utc).date()
    start = datetime.combine(today, time.min, tzinfo=timezone.utc)
    end = datetime.combine(today, time(23, 59, 59, 999000), tzinfo=timezone.utc)
    return start, end


def to_rfc3339(value: datetime) -> str:
    """Format like 2025-01-06T00:00:00.000Z."""
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


async def get_google_access_token(
    settings: Settings,
    http_client: httpx.AsyncClient,
    slack_client: AsyncWebClient | None = None,
) -> str:
    """
    Exchange the refresh token for a short-lived access token.

    On failure the user is notified on Slack before AuthError is raised.
    """
    payload: object = {}
    try:
        response = await http_client.post(
            GOOGLE_TOKEN_URL,
            data={
                "client_id": settings.google_client_id,
                "client_secret": settings.google_client_secret,
                "refresh_token": settings.google_refresh_token,
                "grant_type": "refresh_token",
            },
            headers={"Accept": "application/json"},
        )
        payload = response.json()
    except httpx.HTTPError as e:
        logger.error("Token refresh request failed: %s", e)
    except ValueError:
        logger.error("Token endpoint returned invalid JSON")

    access_token = payload.get("access_token") if isinstance(payload, dict) else None
    if not access_token:
        logger.error("Failed to get access token: %s", _error_message(payload))
        await send_auth_failure_notification(
            slack_client or get_bot_client(settings), settings.slack_user_id
        )
        raise AuthError("Failed to get access token - refresh token may need updating")

    return access_token


async def fetch_today_events(
    access_token: str,
    http_client: httpx.AsyncClient,
    now: datetime | None = None,
) -> list[CalendarEvent]:
    """
    Fetch all events intersecting the current UTC day, ordered by start time.

    Follows nextPageToken until every page has been read.
    """
    start, end = utc_day_bounds(now)
    logger.info("Fetching calendar events from %s to %s", to_rfc3339(start), to_rfc3339(end))

    params = {
        "timeMin": to_rfc3339(start),
        "timeMax": to_rfc3339(end),
        "orderBy": "startTime",
        "singleEvents": "true",
        "timeZone": "UTC",
    }
    headers = {"Authorization": f"Bearer {access_token}"}
    events: list[CalendarEvent] = []

    while True:
        try:
            response = await http_client.get(GOOGLE_EVENTS_URL, params=params, headers=headers)
        except httpx.HTTPError as e:
            raise UpstreamApiError("Calendar", str(e)) from e

        try:
            payload = response.json()
        except ValueError as e:
            logger.error("Calendar API returned invalid JSON (HTTP %d)", response.status_code)
            raise UpstreamApiError(
                "Calendar", f"invalid JSON response (HTTP {response.status_code})"
            ) from e

        if not isinstance(payload, dict) or payload.get("error") or response.is_error:
            message = _error_message(payload, response)
            logger.error("Calendar API error: %s", message)
            raise UpstreamApiError("Calendar", message)

        items = payload.get("items") or []
        if not isinstance(items, list):
            logger.error("Calendar API returned non-list items: %r", type(items).__name__)
            raise UpstreamApiError("Calendar", "malformed events response")

        events.extend(CalendarEvent.model_validate(item) for item in items)

        page_token = payload.get("nextPageToken")
        if not page_token:
            break
        params = {**params, "pageToken": page_token}

    logger.info("Found %d events for today", len(events))
    return events


def _structured_location(event: CalendarEvent) -> WorkLocation | None:
    props = event.working_location_properties
    if props is None:
        return None

    location_type = props.type or ""
    if location_type == "officeLocation":
        return WorkLocation.OFFICE
    if "home" in location_type.lower():
        return WorkLocation.HOME
    if location_type == "customLocation" and props.custom_location:
        label = props.custom_location.label or ""
        if "home" in label.lower():
            return WorkLocation.HOME
    return None


def _free_text_location(event: CalendarEvent) -> WorkLocation | None:
    fields = [(event.location or "").lower(), (event.summary or "").lower()]
    if any("home" in field for field in fields):
        return WorkLocation.HOME
    if any("office" in field for field in fields):
        return WorkLocation.OFFICE
    return None


def detect_work_location(
    events: list[CalendarEvent], match_free_text: bool = False
) -> WorkLocation:
    """
    Return the first declared working location among today's events.

    Only workingLocationProperties count unless match_free_text is set, in
    which case an event's location and summary are checked as a fallback.
    """
    for event in events:
        location = _structured_location(event)
        if location is None and match_free_text:
            location = _free_text_location(event)

        if location is not None:
            logger.info("Found %s location in event %r", location.value, event.summary)
            return location

    logger.info("No working location found in any events")
    return WorkLocation.UNSET


async def get_work_location(
    settings: Settings,
    now: datetime | None = None,
    http_client: httpx.AsyncClient | None = None,
    slack_client: AsyncWebClient | None = None,
) -> tuple[WorkLocation, list[CalendarEvent]]:
    """Look up today's working location. Returns the location and the events read."""
    if http_client is None:
        async with httpx.AsyncClient(timeout=settings.http_timeout_seconds) as client:
            return await get_work_location(settings, now, client, slack_client)

    access_token = await get_google_access_token(settings, http_client, slack_client)
    events = await fetch_today_events(access_token, http_client, now)
    location = detect_work_location(events, match_free_text=settings.match_free_text_location)
    return location, events
