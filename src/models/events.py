"""
Data models for calendar events and Slack status.

Google and Slack payloads are parsed with Pydantic models that ignore
fields we don't use.
"""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class WorkLocation(str, Enum):
    """Where the calendar says the user works today."""

    OFFICE = "Office"
    HOME = "Home"
    UNSET = "Unset"


class StatusAction(str, Enum):
    """What the check should do for a given location."""

    SET_STATUS = "set_status"
    SEND_REMINDER = "send_reminder"
    NONE = "none"


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class LocationLabel(_Payload):
    label: str | None = None


class WorkingLocationProperties(_Payload):
    type: str = ""
    office_location: LocationLabel | None = Field(default=None, alias="officeLocation")
    custom_location: LocationLabel | None = Field(default=None, alias="customLocation")


class EventTime(_Payload):
    date_time: str | None = Field(default=None, alias="dateTime")
    date: str | None = None
    time_zone: str | None = Field(default=None, alias="timeZone")


class CalendarEvent(_Payload):
    """A single Google Calendar event for today."""

    summary: str | None = None
    location: str | None = None
    start: EventTime | None = None
    end: EventTime | None = None
    working_location_properties: WorkingLocationProperties | None = Field(
        default=None, alias="workingLocationProperties"
    )


class StatusProfile(_Payload):
    """The status part of a Slack user profile."""

    status_text: str | None = ""
    status_emoji: str | None = ""
    status_expiration: int | None = 0

    @property
    def is_set(self) -> bool:
        return bool(self.status_text or self.status_emoji)


@dataclass
class CheckResult:
    """Outcome of one status check."""

    location: WorkLocation
    action: StatusAction
    event_count: int = 0
    status_updated: bool = False
    reminder_sent: bool = False
