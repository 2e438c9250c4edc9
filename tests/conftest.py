import pytest
import sys
from pathlib import Path
from unittest.mock import Mock

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.gcal_feed_client.exceptions.calendar import CalendarNotFoundError

BASE_URL = "http://www.google.com/calendar"
CALENDAR_ID = "abc123%40group.calendar.google.com"

ATOM_NS = "http://www.w3.org/2005/Atom"
GCAL_NS = "http://schemas.google.com/gCal/2005"
GD_NS = "http://schemas.google.com/g/2005"
ACL_NS = "http://schemas.google.com/acl/2007"


def calendar_entry_body(calendar_id=CALENDAR_ID, title="Soccer Team", summary="Fall season games",
                        timezone="America/New_York", color="#0D7813", hidden="false", selected="true",
                        where="Central Park"):
    return f"""
  <id>http://www.google.com/calendar/feeds/default/calendars/{calendar_id}</id>
  <title type='text'>{title}</title>
  <summary type='text'>{summary}</summary>
  <link rel='alternate' type='application/atom+xml' href='{BASE_URL}/feeds/{calendar_id}/private/full'/>
  <link rel='edit' type='application/atom+xml' href='{BASE_URL}/feeds/default/owncalendars/full/{calendar_id}'/>
  <gCal:timezone value='{timezone}'/>
  <gCal:hidden value='{hidden}'/>
  <gCal:color value='{color}'/>
  <gCal:selected value='{selected}'/>
  <gd:where valueString='{where}'/>
"""


def calendar_entry(**fields):
    """A standalone calendar entry, as returned when a calendar is created."""
    return (f"<entry xmlns='{ATOM_NS}' xmlns:gCal='{GCAL_NS}' xmlns:gd='{GD_NS}'>"
            f"{calendar_entry_body(**fields)}</entry>")


def calendar_feed(*entry_bodies):
    """A calendar feed whose entries rely on the namespaces declared on the feed."""
    entries = "".join(f"<entry>{body}</entry>" for body in entry_bodies)
    return (f"<?xml version='1.0' encoding='UTF-8'?>"
            f"<feed xmlns='{ATOM_NS}' xmlns:gCal='{GCAL_NS}' xmlns:gd='{GD_NS}'>"
            f"<title>Own calendars</title>{entries}</feed>")


def acl_feed(default_role=None):
    """An ACL feed with an owner rule and, optionally, a rule for the default scope."""
    default_entry = ""
    if default_role is not None:
        default_entry = (f"<entry><id>{BASE_URL}/feeds/{CALENDAR_ID}/acl/full/default</id>"
                         f"<gAcl:scope type='default'/><gAcl:role value='{default_role}'/></entry>")
    return (f"<feed xmlns='{ATOM_NS}' xmlns:gAcl='{ACL_NS}'>"
            f"<entry><id>{BASE_URL}/feeds/{CALENDAR_ID}/acl/full/user%3Aowner%40example.com</id>"
            f"<gAcl:scope type='user' value='owner@example.com'/>"
            f"<gAcl:role value='http://schemas.google.com/gCal/2005#owner'/></entry>"
            f"{default_entry}</feed>")


def event_feed():
    """An event feed with two readable events and one entry without an id."""
    return f"""<feed xmlns='{ATOM_NS}' xmlns:gd='{GD_NS}' xmlns:gCal='{GCAL_NS}'>
  <title>Soccer Team</title>
  <entry>
    <id>{BASE_URL}/feeds/{CALENDAR_ID}/private/full/evt001</id>
    <title type='text'>Home game</title>
    <content type='text'>Bring the blue jerseys</content>
    <link rel='edit' type='application/atom+xml' href='{BASE_URL}/feeds/{CALENDAR_ID}/private/full/evt001/63'/>
    <gd:eventStatus value='http://schemas.google.com/g/2005#event.confirmed'/>
    <gd:where valueString='Central Park'/>
    <gd:when startTime='2025-01-15T09:00:00.000-05:00' endTime='2025-01-15T10:30:00.000-05:00'/>
  </entry>
  <entry>
    <title type='text'>Broken entry</title>
  </entry>
  <entry>
    <id>{BASE_URL}/feeds/{CALENDAR_ID}/private/full/evt002</id>
    <title type='text'>Tournament</title>
    <gd:when startTime='2025-01-18' endTime='2025-01-19'/>
  </entry>
</feed>"""


def response(text="", status_code=200, content=None):
    """A requests-style response; content defaults to the UTF-8 encoding of text."""
    if content is None:
        content = text.encode("utf-8")
    return Mock(text=text, content=content, status_code=status_code, ok=200 <= status_code < 300)


@pytest.fixture
def mock_service():
    """
    Mock Service. GET requests are answered from mock_service.responses, keyed by URL;
    a registered exception is raised instead. Unknown URLs raise CalendarNotFoundError.
    """
    service = Mock()
    service.base_url = BASE_URL
    service.check_public = True
    service.debug = False
    service.responses = {}

    def send_get(url):
        if url not in service.responses:
            raise CalendarNotFoundError(f"GET {url} failed with HTTP 404", status_code=404, url=url)
        result = service.responses[url]
        if isinstance(result, Exception):
            raise result
        return response(result)

    service.send_get.side_effect = send_get
    service.send_post.return_value = response(calendar_entry())
    service.send_put.return_value = response()
    service.send_delete.return_value = response()
    return service


@pytest.fixture
def acl_url():
    return f"{BASE_URL}/feeds/{CALENDAR_ID}/acl/full"


@pytest.fixture
def sample_calendar_entry():
    return calendar_entry()


@pytest.fixture
def loaded_calendar(mock_service, acl_url, sample_calendar_entry):
    """A calendar loaded from the sample entry, with a private ACL."""
    from src.gcal_feed_client.clients.calendar.client import Calendar
    mock_service.responses[acl_url] = acl_feed()
    calendar = Calendar(mock_service)
    assert calendar.load(sample_calendar_entry)
    mock_service.send_get.reset_mock()
    return calendar
