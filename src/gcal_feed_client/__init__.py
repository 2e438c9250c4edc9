"""Client for the Google Calendar XML feed protocol."""

from .service import Service
from .clients.calendar import Calendar, Event, EventFeedResult
from .exceptions import (
    GCalFeedClientError,
    CalendarError,
    HTTPRequestFailed,
    CalendarPermissionError,
    CalendarNotFoundError,
    CalendarSaveFailed,
    InvalidEntryError,
)

__all__ = [
    "Service",
    "Calendar",
    "Event",
    "EventFeedResult",
    "GCalFeedClientError",
    "CalendarError",
    "HTTPRequestFailed",
    "CalendarPermissionError",
    "CalendarNotFoundError",
    "CalendarSaveFailed",
    "InvalidEntryError",
]
