from datetime import datetime
from typing import Any, Mapping, Optional, TYPE_CHECKING
import logging

from ...exceptions.calendar import InvalidEntryError
from . import codec
from .codec import FieldBinding
from .constants import EVENT_XML

if TYPE_CHECKING:
    from .client import Calendar

logger = logging.getLogger(__name__)

EVENT_FIELDS = {
    "title": FieldBinding("title"),
    "content": FieldBinding("content"),
    "where": FieldBinding("where", "valueString"),
    "start": FieldBinding("when", "startTime", kind="datetime"),
    "end": FieldBinding("when", "endTime", kind="datetime"),
    "status": FieldBinding("eventStatus", "value"),
}


class Event:
    """
    An event read from a calendar's event feed.
    Args:
        calendar: The Calendar this event belongs to.
        attributes: Optional initial values for title, content, where, start, end or status.
    """

    def __init__(self, calendar: "Calendar", attributes: Optional[Mapping[str, Any]] = None):
        self.calendar = calendar
        self.id: Optional[str] = None
        self.edit_feed: Optional[str] = None
        self.title: Optional[str] = None
        self.content: Optional[str] = None
        self.where: Optional[str] = None
        self.start: Optional[datetime] = None
        self.end: Optional[datetime] = None
        self.status: Optional[str] = None
        self._exists = False
        self._xml: Optional[str] = None
        for key, value in (attributes or {}).items():
            if key not in EVENT_FIELDS:
                raise ValueError(f"Unknown event attribute: {key}")
            setattr(self, key, value)

    def exists(self) -> bool:
        return self._exists

    def load(self, xml: str) -> bool:
        """
        Loads the event from a standalone entry document.
        Returns:
            True if the entry was parsed, False if it is malformed or has no id.
        """
        try:
            root = codec.parse_entry(xml)
        except InvalidEntryError as e:
            logger.warning("Skipping malformed event entry: %s", e)
            return False

        entry_id = codec.child_text(root, "id")
        if not entry_id:
            logger.warning("Skipping event entry without an id")
            return False

        self.id = entry_id.rstrip("/").rsplit("/", 1)[-1]
        self.edit_feed = codec.find_link(root, "edit")
        for key, value in codec.decode_fields(root, EVENT_FIELDS).items():
            setattr(self, key, value)
        self._xml = xml
        self._exists = True
        return True

    def to_xml(self) -> str:
        root = codec.parse_entry(self._xml or EVENT_XML)
        codec.encode_fields(root, EVENT_FIELDS, {key: getattr(self, key) for key in EVENT_FIELDS})
        return codec.to_string(root)

    def __repr__(self):
        return f"Event(id={self.id!r}, title={self.title!r}, start={self.start!r}, end={self.end!r})"
