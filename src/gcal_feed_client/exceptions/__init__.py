from .base import GCalFeedClientError, AuthenticationError, APIError, ValidationError
from .calendar import (
    CalendarError,
    HTTPRequestFailed,
    CalendarPermissionError,
    CalendarNotFoundError,
    CalendarSaveFailed,
    InvalidEntryError,
)
from .auth import InvalidCredentialsError

__all__ = [
    "GCalFeedClientError",
    "AuthenticationError",
    "APIError",
    "ValidationError",
    "CalendarError",
    "HTTPRequestFailed",
    "CalendarPermissionError",
    "CalendarNotFoundError",
    "CalendarSaveFailed",
    "InvalidEntryError",
    "InvalidCredentialsError",
]
