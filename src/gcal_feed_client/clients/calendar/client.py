from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Tuple, Union, TYPE_CHECKING
import logging

from ...exceptions.calendar import (
    CalendarNotFoundError, CalendarSaveFailed, HTTPRequestFailed, InvalidEntryError
)
from ...utils.log_sanitizer import sanitize_calendar_id, sanitize_for_logging, sanitize_query
from . import codec, embed
from .codec import FieldBinding
from .constants import (
    ACL_XML, CALENDAR_ID_MARKER, CALENDAR_XML, DEFAULT_BASE_URL, DEFAULT_COLOR,
    DEFAULT_TIMEZONE, PRIVATE_ROLE, PUBLIC_READ_ROLE, READ_ROLE_MARKER
)
from .event import Event
from .feeds import FeedClient

if TYPE_CHECKING:
    from ...service import Service

logger = logging.getLogger(__name__)

CALENDAR_FIELDS = {
    "title": FieldBinding("title"),
    "summary": FieldBinding("summary"),
    "timezone": FieldBinding("timezone", "value"),
    "hidden": FieldBinding("hidden", "value", kind="bool"),
    "color": FieldBinding("color", "value"),
    "selected": FieldBinding("selected", "value", kind="bool"),
    "where": FieldBinding("where", "valueString"),
}

ACL_FIELDS = {
    "role": FieldBinding("role", "value"),
}

# Attributes that may be seeded through the constructor
SETTABLE_ATTRIBUTES = tuple(CALENDAR_FIELDS)

FIND_SCOPES = ("all", "first")


@dataclass
class EventFeedResult:
    """
    Outcome of reading a calendar's event feed.
    Args:
        events: Events whose entries loaded successfully, in feed order.
        skipped: Serialized entries that could not be loaded as events.
    """
    events: List[Event] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)


class Calendar:
    """
    One calendar owned by (or shared with) the authenticated account.

    A calendar is created in memory and saved, or loaded from the service:
        cal = Calendar(service, {"title": "Soccer Team", "timezone": "Europe/Paris"})
        cal.save()

        cal = Calendar.find(service, "Soccer Team", scope="first")
        cal.summary = "Fall season"
        cal.save()

    Attribute changes are local until save(); set_public() is the only
    operation that writes to the service immediately.
    """

    def __init__(self, service: "Service", attributes: Optional[Mapping[str, Any]] = None):
        """
        Args:
            service: The authenticated Service used for every request.
            attributes: Initial values for any of SETTABLE_ATTRIBUTES. timezone and
                color default to DEFAULT_TIMEZONE and DEFAULT_COLOR.
        Raises:
            ValueError: If attributes contains a key that is not settable.
        """
        self.service = service
        self._feeds = FeedClient(service)
        self._reset()
        self.timezone = DEFAULT_TIMEZONE
        self.color = DEFAULT_COLOR
        for key, value in (attributes or {}).items():
            if key not in SETTABLE_ATTRIBUTES:
                raise ValueError(f"Unknown calendar attribute: {key}. Must be one of: {', '.join(SETTABLE_ATTRIBUTES)}")
            setattr(self, key, value)

    def _reset(self) -> None:
        self._id: Optional[str] = None
        self._event_feed: Optional[str] = None
        self._edit_feed: Optional[str] = None
        self._exists = False
        self._public = False
        self._editable = False
        self._xml: Optional[Union[str, bytes]] = None
        self.title: Optional[str] = None
        self.summary: Optional[str] = None
        self.timezone: Optional[str] = None
        self.color: Optional[str] = None
        self.where: Optional[str] = None
        self.hidden = False
        self.selected = False

    @property
    def id(self) -> Optional[str]:
        return self._id

    @property
    def event_feed(self) -> Optional[str]:
        return self._event_feed

    @property
    def edit_feed(self) -> Optional[str]:
        return self._edit_feed

    @property
    def editable(self) -> bool:
        return self._editable

    @property
    def hidden(self) -> bool:
        return self._hidden

    @hidden.setter
    def hidden(self, value: bool) -> None:
        if not isinstance(value, bool):
            raise ValueError(f"hidden must be a bool, got {type(value).__name__}")
        self._hidden = value

    @property
    def selected(self) -> bool:
        return self._selected

    @selected.setter
    def selected(self, value: bool) -> None:
        if not isinstance(value, bool):
            raise ValueError(f"selected must be a bool, got {type(value).__name__}")
        self._selected = value

    def exists(self) -> bool:
        """True if the calendar was loaded from, or saved to, the service."""
        return self._exists

    def is_public(self) -> bool:
        """True if anyone can read the calendar without logging in."""
        return self._public

    def load(self, xml: Union[str, bytes]) -> bool:
        """
        Loads the calendar from an entry returned by the service.

        When the service checks public status, the calendar's ACL feed is read
        as well. An ACL feed the account may not read (a calendar shared with
        it, for instance) or cannot parse marks the calendar private and
        read-only; the load still succeeds.
        Args:
            xml: A standalone calendar entry document, as text or as raw response bytes.
        Returns:
            True if loaded, False if the entry carries no id.
        Raises:
            InvalidEntryError: If the entry is not well-formed XML.
        """
        root = codec.parse_entry(xml)
        entry_id = codec.child_text(root, "id")
        if not entry_id:
            logger.warning("Calendar entry has no id, not loading it")
            return False

        calendar_id = entry_id.split(CALENDAR_ID_MARKER, 1)[-1]
        fields = codec.decode_fields(root, CALENDAR_FIELDS)
        public, editable = self._read_acl(calendar_id)

        self._id = calendar_id
        self._edit_feed = codec.find_link(root, "edit") or self._feeds.calendar_url(calendar_id)
        for key, value in fields.items():
            setattr(self, key, value)
        self._event_feed = self._feeds.event_feed_url(calendar_id)
        self._exists = True
        self._xml = xml
        self._editable = editable
        if public is not None:
            self._public = public
        return True

    def _read_acl(self, calendar_id: str) -> Tuple[Optional[bool], bool]:
        """
        Returns (public, editable) for a calendar. public is None when the ACL
        feed has no rule for the default scope.
        """
        if not self.service.check_public:
            return False, True

        logger.debug("Getting ACL feed for %s", sanitize_calendar_id(calendar_id))
        try:
            response = self._feeds.get_acl(calendar_id)
            role = codec.default_scope_role(codec.parse_entry(response.content))
        except (HTTPRequestFailed, InvalidEntryError) as e:
            logger.warning("ACL feed unavailable for %s, treating it as private and read-only: %s",
                           sanitize_calendar_id(calendar_id), e)
            return False, False

        if role is None:
            return None, True
        return READ_ROLE_MARKER in role, True

    def to_xml(self) -> str:
        """Returns the entry document for this calendar, based on the last loaded entry."""
        root = codec.parse_entry(self._xml or CALENDAR_XML)
        codec.encode_fields(root, CALENDAR_FIELDS, {key: getattr(self, key) for key in CALENDAR_FIELDS})
        return codec.to_string(root)

    def load_events(self) -> EventFeedResult:
        """
        Reads the calendar's event feed.
        Returns:
            An EventFeedResult holding the loaded events and the entries that were skipped.
        Raises:
            ValueError: If the calendar has not been saved or loaded.
            HTTPRequestFailed: If the event feed cannot be fetched.
        """
        if not self._event_feed:
            raise ValueError("The calendar must exist before its events can be read")

        response = self._feeds.get_events(self._event_feed)
        result = EventFeedResult()
        for entry in codec.feed_entries(response.content):
            entry_xml = codec.to_string(entry)
            event = Event(self)
            if event.load(entry_xml):
                result.events.append(event)
            else:
                result.skipped.append(entry_xml)

        logger.info("Fetched %d events for %s", len(result.events), sanitize_calendar_id(self._id))
        if result.skipped:
            logger.warning("Skipped %d unreadable event entries", len(result.skipped))
        return result

    def events(self) -> List[Event]:
        """Returns every event of the calendar. Each call reads the feed again."""
        return self.load_events().events

    def set_public(self, flag: bool) -> bool:
        """
        Makes the calendar public (readable by anyone) or private.
        The ACL is written even when the calendar is already in the requested state.
        Args:
            flag: True for public, False for private.
        Returns:
            True if the service accepted the change, otherwise False.
        Raises:
            ValueError: If the calendar has no id yet.
        """
        if not self._id:
            raise ValueError("The calendar must be saved before its sharing can change")

        permissions = PUBLIC_READ_ROLE if flag else PRIVATE_ROLE
        request = codec.parse_entry(ACL_XML)
        codec.encode_fields(request, ACL_FIELDS, {"role": permissions})

        logger.info("Setting %s public=%s", sanitize_calendar_id(self._id), bool(flag))
        try:
            self._feeds.put_default_acl(self._id, codec.to_string(request))
        except HTTPRequestFailed as e:
            logger.warning("Failed to update ACL for %s: %s", sanitize_calendar_id(self._id), e)
            return False
        self._public = bool(flag)
        return True

    def delete(self) -> bool:
        """
        Deletes the calendar from the service and clears this object.
        Returns:
            True if deleted, False if the calendar does not exist or the request failed.
        """
        if not self._exists:
            return False

        logger.info("Deleting calendar %s", sanitize_calendar_id(self._id))
        try:
            self._feeds.delete_calendar(self._id)
        except HTTPRequestFailed as e:
            logger.warning("Failed to delete calendar %s: %s", sanitize_calendar_id(self._id), e)
            return False
        self._reset()
        return True

    def save(self) -> bool:
        """
        Creates the calendar if it does not exist, otherwise updates it.
        Returns:
            True on success, False if an update was rejected.
        Raises:
            CalendarSaveFailed: If a created calendar cannot be loaded from the response.
            HTTPRequestFailed: If the create request fails.
        """
        if self._exists:
            logger.info("Updating calendar %s", sanitize_calendar_id(self._id))
            try:
                self._feeds.update_calendar(self._edit_feed, self.to_xml())
            except HTTPRequestFailed as e:
                logger.warning("Failed to update calendar %s: %s", sanitize_calendar_id(self._id), e)
                return False
            return True

        logger.info("Creating calendar")
        response = self._feeds.create_calendar(self.to_xml())
        try:
            loaded = self.load(response.content)
        except InvalidEntryError as e:
            raise CalendarSaveFailed(f"Created calendar could not be loaded: {e}") from e
        if not loaded:
            raise CalendarSaveFailed("Created calendar could not be loaded: response entry has no id")
        logger.info("Calendar created with ID: %s", sanitize_calendar_id(self._id))
        return True

    def reload(self) -> bool:
        """
        Reloads the calendar from the service, discarding unsaved changes.
        Returns:
            True if reloaded, False if the calendar does not exist or was not found.
        """
        if not self._exists:
            return False

        stored = self.find_by_id(self.service, self._id)
        if stored is None:
            logger.warning("Calendar %s not found on reload", sanitize_calendar_id(self._id))
            return False
        return self.load(stored.to_xml())

    def to_iframe(self, options: Optional[Mapping[str, Any]] = None) -> str:
        """
        Returns an iframe snippet embedding this calendar. See embed.IFRAME_DEFAULTS for options.
        Raises:
            ValueError: If the calendar has not been saved.
        """
        if not self._id:
            raise ValueError("The calendar must exist and be saved before you can use this method.")
        return embed.to_iframe(self._id, options, base_url=self.service.base_url)

    @classmethod
    def iframe_for(cls, calendar_id: str, options: Optional[Mapping[str, Any]] = None,
                   base_url: str = DEFAULT_BASE_URL) -> str:
        """Returns an iframe snippet embedding the calendar with the given id."""
        return embed.to_iframe(calendar_id, options, base_url=base_url)

    @classmethod
    def from_feed(cls, service: "Service", xml: Union[str, bytes]) -> List["Calendar"]:
        """
        Loads every entry of a calendar feed document.
        Entries that carry no id are skipped.
        """
        calendars = []
        for entry in codec.feed_entries(xml):
            calendar = cls(service)
            if calendar.load(codec.to_string(entry)):
                calendars.append(calendar)
            else:
                logger.warning("Skipping calendar entry without an id")
        return calendars

    @classmethod
    def find(
        cls,
        service: "Service",
        query: Optional[str] = None,
        scope: str = "all",
    ) -> Union["Calendar", List["Calendar"], None]:
        """
        Searches the account's own calendars.
        Args:
            service: The authenticated Service.
            query: A calendar id, or a term matched case-insensitively against title and summary.
                None matches every calendar.
            scope: "first" to return the first match, "all" to return a list of matches.
        Returns:
            The calendar whose id equals query, whatever the scope. Otherwise the first
            match (or None) for scope "first", or a possibly empty list for scope "all".
        Raises:
            ValueError: If scope is not "all" or "first".
        """
        if scope not in FIND_SCOPES:
            raise ValueError(f"Invalid scope: {scope}. Must be one of: {', '.join(FIND_SCOPES)}")

        logger.info("Finding calendars: %s", sanitize_for_logging(query=query, scope=scope))
        term = query.lower() if query else ""
        matches = []
        for calendar in service.calendars():
            if query is not None and calendar.id == query:
                return calendar
            title = (calendar.title or "").lower()
            summary = (calendar.summary or "").lower()
            if term in title or term in summary:
                if scope == "first":
                    return calendar
                matches.append(calendar)

        if scope == "first":
            return None
        logger.info("Found %d calendars", len(matches))
        return matches

    @classmethod
    def find_by_id(cls, service: "Service", calendar_id: str) -> Optional["Calendar"]:
        """Returns the account's calendar with exactly this id, or None."""
        for calendar in service.calendars():
            if calendar.id == calendar_id:
                return calendar
        return None

    @classmethod
    def get(cls, service: "Service", calendar_id: str) -> Optional["Calendar"]:
        """
        Reads one calendar, owned or subscribed, directly by id.
        Returns:
            The loaded Calendar, or None if the service does not know the id.
        """
        try:
            response = FeedClient(service).get_calendar(calendar_id)
        except CalendarNotFoundError:
            logger.info("Calendar %s not found", sanitize_calendar_id(calendar_id))
            return None
        calendar = cls(service)
        return calendar if calendar.load(response.content) else None

    @classmethod
    def query(cls, service: "Service", term: str) -> List["Calendar"]:
        """Searches all of the account's calendars, owned and subscribed, on the service side."""
        logger.info("Querying calendars with term=%s", sanitize_query(term))
        response = FeedClient(service).search_calendars(term)
        return cls.from_feed(service, response.content)

    def __repr__(self):
        return (
            f"Calendar(id={self._id!r}, title={self.title!r}, timezone={self.timezone!r}, "
            f"public={self._public!r}, exists={self._exists!r})"
        )
