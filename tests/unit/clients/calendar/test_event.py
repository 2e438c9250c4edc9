import pytest
from datetime import datetime, timedelta, timezone

from src.gcal_feed_client.clients.calendar.event import Event
from conftest import BASE_URL, CALENDAR_ID

EVENT_ENTRY = f"""<entry xmlns='http://www.w3.org/2005/Atom' xmlns:gd='http://schemas.google.com/g/2005'>
  <id>{BASE_URL}/feeds/{CALENDAR_ID}/private/full/evt001</id>
  <title type='text'>Home game</title>
  <content type='text'>Bring the blue jerseys</content>
  <link rel='edit' type='application/atom+xml' href='{BASE_URL}/feeds/{CALENDAR_ID}/private/full/evt001/63'/>
  <gd:eventStatus value='http://schemas.google.com/g/2005#event.confirmed'/>
  <gd:where valueString='Central Park'/>
  <gd:when startTime='2025-01-15T09:00:00.000-05:00' endTime='2025-01-15T10:30:00.000-05:00'/>
</entry>"""

EST = timezone(timedelta(hours=-5))


class TestEvent:
    """Test cases for the Event class."""

    def test_load(self, loaded_calendar):
        event = Event(loaded_calendar)
        assert event.load(EVENT_ENTRY) is True
        assert event.exists() is True
        assert event.id == "evt001"
        assert event.title == "Home game"
        assert event.content == "Bring the blue jerseys"
        assert event.where == "Central Park"
        assert event.start == datetime(2025, 1, 15, 9, 0, tzinfo=EST)
        assert event.end == datetime(2025, 1, 15, 10, 30, tzinfo=EST)
        assert event.status.endswith("#event.confirmed")
        assert event.edit_feed.endswith("/evt001/63")
        assert event.calendar is loaded_calendar

    def test_malformed_entry_returns_false(self, loaded_calendar):
        event = Event(loaded_calendar)
        assert event.load("<entry><title>unclosed</entry>") is False
        assert event.exists() is False

    def test_entry_without_id_returns_false(self, loaded_calendar):
        assert Event(loaded_calendar).load("<entry><title>No id</title></entry>") is False

    def test_attributes(self, loaded_calendar):
        event = Event(loaded_calendar, {"title": "Practice", "where": "Gym"})
        assert event.title == "Practice"
        assert event.where == "Gym"
        with pytest.raises(ValueError, match="Unknown event attribute"):
            Event(loaded_calendar, {"id": "evt"})

    def test_to_xml_round_trip(self, loaded_calendar):
        event = Event(loaded_calendar)
        event.load(EVENT_ENTRY)
        event.title = "Away game"
        event.end = datetime(2025, 1, 15, 11, 0, tzinfo=EST)
        again = Event(loaded_calendar)
        assert again.load(event.to_xml()) is True
        assert again.title == "Away game"
        assert again.end == datetime(2025, 1, 15, 11, 0, tzinfo=EST)
        assert again.start == event.start

    def test_new_event_uses_template(self, loaded_calendar):
        start = datetime(2025, 2, 1, 10, 0, tzinfo=EST)
        event = Event(loaded_calendar, {"title": "Practice", "start": start})
        xml = event.to_xml()
        assert ">Practice</title>" in xml
        assert start.isoformat() in xml
