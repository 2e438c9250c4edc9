"""Feed clients for Google Calendar."""

from . import calendar

__all__ = [
    "calendar",
]
