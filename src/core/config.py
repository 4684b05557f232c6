"""
Configuration constants and environment setup.
"""

import os
from collections.abc import Mapping
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from core.errors import ConfigError

load_dotenv()

# =============================================================================
# GOOGLE CALENDAR
# =============================================================================

GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_EVENTS_URL = "https://www.googleapis.com/calendar/v3/calendars/primary/events"
GOOGLE_CALENDAR_SCOPE = "https://www.googleapis.com/auth/calendar.readonly"

# =============================================================================
# SLACK MESSAGES
# =============================================================================

REMINDER_TEXT = "Please set your working location in Google Calendar for today."
AUTH_FAILURE_TEXT = (
    "\U0001f6a8 *Google Authentication Failed* \U0001f6a8\n"
    "The Google refresh token appears to have expired. Please generate a new "
    "refresh token by running `python src/scripts/get_refresh_token.py` and "
    "update your environment variables."
)

# =============================================================================
# API CONFIGURATION
# =============================================================================

API_HOST = os.environ.get("API_HOST", "127.0.0.1")
API_PORT = int(os.environ.get("API_PORT", "8787"))
API_DEBUG = os.environ.get("API_DEBUG", "false").lower() == "true"
API_VERSION = "1.0.0"
LOOPBACK_HOSTS = {"localhost", "127.0.0.1", "::1"}

# =============================================================================
# LOGGING
# =============================================================================

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

# =============================================================================
# CREDENTIALS AND BEHAVIOUR (from environment)
# =============================================================================

REQUIRED_ENV_VARS = (
    "GOOGLE_CLIENT_ID",
    "GOOGLE_CLIENT_SECRET",
    "GOOGLE_REFRESH_TOKEN",
    "SLACK_USER_TOKEN",
    "SLACK_BOT_TOKEN",
    "SLACK_USER_ID",
)


class Settings(BaseModel):
    """Per-invocation settings. Secrets have no defaults."""

    model_config = ConfigDict(frozen=True)

    google_client_id: str
    google_client_secret: str
    google_refresh_token: str
    slack_user_token: str
    slack_bot_token: str
    slack_user_id: str

    status_text: str = "Working remotely"
    status_emoji: str = ":house:"
    status_timezone: str = "UTC"
    match_free_text_location: bool = False
    require_events_for_reminder: bool = False
    http_timeout_seconds: float = Field(default=30.0, ge=1)

    @field_validator("status_timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError, OSError) as e:
            raise ValueError(f"unknown time zone {value!r}") from e
        return value


def _flag(value: str | None) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes", "on"}


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """
    Build Settings from the environment.

    Raises:
        ConfigError: if any required variable is missing or blank, or a
            value fails validation
    """
    env = os.environ if environ is None else environ

    missing = [name for name in REQUIRED_ENV_VARS if not env.get(name, "").strip()]
    if missing:
        raise ConfigError(f"Missing required environment variable(s): {', '.join(missing)}")

    optional = {}
    for name in ("STATUS_TEXT", "STATUS_EMOJI", "STATUS_TIMEZONE", "HTTP_TIMEOUT_SECONDS"):
        if env.get(name):
            optional[name.lower()] = env[name]

    try:
        return Settings(
            **{name.lower(): env[name].strip() for name in REQUIRED_ENV_VARS},
            **optional,
            match_free_text_location=_flag(env.get("MATCH_FREE_TEXT_LOCATION")),
            require_events_for_reminder=_flag(env.get("REQUIRE_EVENTS_FOR_REMINDER")),
        )
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']).upper()}: {error['msg']}"
            for error in e.errors()
        )
        raise ConfigError(f"Invalid configuration: {problems}") from e
