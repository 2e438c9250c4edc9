"""
Unit tests for log sanitization utilities.

Tests the helpers that keep calendar owners' addresses out of log records.
"""

import pytest
from src.gcal_feed_client.utils.log_sanitizer import (
    sanitize_email,
    sanitize_calendar_id,
    sanitize_query,
    sanitize_url,
    sanitize_for_logging
)


class TestEmailSanitization:
    """Test email address sanitization."""

    def test_basic_email_sanitization(self):
        """Test basic email sanitization."""
        result = sanitize_email("user@example.com")
        assert result == "***@example.com (16 chars)"

    def test_invalid_email_sanitization(self):
        """Test invalid email handling."""
        assert sanitize_email("invalid-email") == "[invalid-email]"
        assert sanitize_email("") == "[invalid-email]"


class TestCalendarIdSanitization:
    """Test calendar id sanitization."""

    def test_encoded_address_id(self):
        """Test %40-encoded ids are masked like addresses."""
        assert sanitize_calendar_id("user%40example.com") == "[calendar: ***@example.com (16 chars)]"

    def test_plain_address_id(self):
        result = sanitize_calendar_id("team@group.calendar.google.com")
        assert "team" not in result
        assert "group.calendar.google.com" in result

    def test_short_opaque_id(self):
        assert sanitize_calendar_id("abc123") == "[calendar: abc123]"

    def test_long_opaque_id(self):
        assert sanitize_calendar_id("0123456789abcdefXYZ") == "[calendar: 01234567...fXYZ]"

    def test_missing_id(self):
        assert sanitize_calendar_id(None) == "[no-calendar-id]"
        assert sanitize_calendar_id("") == "[no-calendar-id]"


class TestQuerySanitization:
    """Test search query sanitization."""

    def test_query_with_email(self):
        """Test query containing email addresses."""
        result = sanitize_query("owner@example.com soccer")
        assert "[EMAIL]" in result
        assert "owner" not in result

    def test_query_with_phone(self):
        assert "[PHONE]" in sanitize_query("call 555-123-4567")

    def test_long_query_truncation(self):
        result = sanitize_query("x" * 50, max_length=10)
        assert result == "'xxxxxxxxxx...' (50 chars)"

    def test_empty_query(self):
        assert sanitize_query("") == "[empty-query]"
        assert sanitize_query(None) == "[empty-query]"


class TestUrlSanitization:
    """Test feed URL sanitization."""

    def test_encoded_address_in_path(self):
        result = sanitize_url("http://www.google.com/calendar/feeds/user%40example.com/private/full")
        assert result == "http://www.google.com/calendar/feeds/[EMAIL]/private/full"

    def test_url_without_address(self):
        url = "http://www.google.com/calendar/feeds/default/owncalendars/full"
        assert sanitize_url(url) == url

    def test_empty_url(self):
        assert sanitize_url("") == "[no-url]"


class TestBulkSanitization:
    """Test sanitize_for_logging."""

    def test_mixed_fields(self):
        result = sanitize_for_logging(
            calendar_id="user%40example.com",
            query="soccer",
            url="http://host/feeds/user%40example.com/acl/full",
            scope="first",
        )
        assert result["calendar_id"] == "[calendar: ***@example.com (16 chars)]"
        assert result["query"] == "'soccer' (6 chars)"
        assert result["url"] == "http://host/feeds/[EMAIL]/acl/full"
        assert result["scope"] == "first"

    def test_other_fields_pass_through(self):
        assert sanitize_for_logging(scope="all", count=3) == {"scope": "all", "count": 3}

    def test_empty_values(self):
        result = sanitize_for_logging(query=None, url="")
        assert result == {"query": None, "url": None}
