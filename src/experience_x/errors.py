class ExperienceError(Exception):
    """Base error for experience generation."""


class RequestValidationError(ExperienceError):
    """Request rejected before reaching the resilience policy."""


class ConfigurationError(ExperienceError):
    """No remote credential configured."""


class UpstreamError(ExperienceError):
    """Remote chat-completion call did not produce usable text."""

    def __init__(self, message: str, status_code: int | None = None, body: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body


class UpstreamQuotaError(UpstreamError):
    """Account balance or quota exhausted on the remote side."""


class UpstreamTransportOrFormatError(UpstreamError):
    """Non-success status, transport failure or unreadable payload."""
