"""Exception hierarchy for the status check."""


class WorkLocationError(Exception):
    """Base class for all status-check failures."""


class ConfigError(WorkLocationError):
    """Raised when required settings are missing."""


class AuthError(WorkLocationError):
    """Raised when the Google refresh-token exchange fails."""


class UpstreamApiError(WorkLocationError):
    """Raised when Google Calendar or Slack returns a non-ok response."""

    def __init__(self, service: str, message: str) -> None:
        self.service = service
        self.message = message
        super().__init__(f"{service} API error: {message}")
