from typing import Optional

from .base import APIError, ValidationError


class CalendarError(APIError):
    """Base exception for Calendar feed errors."""
    pass


class HTTPRequestFailed(CalendarError):
    """Raised when a feed request fails at the transport or HTTP level."""

    def __init__(self, message: str, status_code: Optional[int] = None, url: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class CalendarPermissionError(HTTPRequestFailed):
    """Raised when the service denies access to a feed (401/403)."""
    pass


class CalendarNotFoundError(HTTPRequestFailed):
    """Raised when a calendar or feed is not found (404)."""
    pass


class CalendarSaveFailed(CalendarError):
    """Raised when a newly created calendar cannot be loaded back from the service response."""
    pass


class InvalidEntryError(ValidationError):
    """Raised when an entry or feed document is not well-formed XML."""
    pass
