"""Calendar feed client module."""

from .client import Calendar, EventFeedResult
from .event import Event
from .feeds import FeedClient
from .embed import to_iframe

__all__ = [
    "Calendar",
    "EventFeedResult",
    "Event",
    "FeedClient",
    "to_iframe",
]
