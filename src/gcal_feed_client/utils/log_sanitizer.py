"""
Log sanitization utilities to prevent PII and sensitive data leakage.

Calendar ids are usually the owner's e-mail address (or an opaque group
address), and they appear in every feed URL. These helpers mask them before
they reach a log record.
"""

import re
from typing import Optional
from urllib.parse import unquote

EMAIL_PATTERN = r'\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Z|a-z]{2,}\b'


def sanitize_email(email: str) -> str:
    """
    Sanitize email address for logging by showing only domain and length.

    Args:
        email: Email address to sanitize

    Returns:
        Sanitized email representation

    Example:
        "user@example.com" -> "***@example.com (16 chars)"
    """
    if not email or '@' not in email:
        return "[invalid-email]"

    local_part, domain = email.split('@', 1)
    return f"***@{domain} ({len(email)} chars)"


def sanitize_calendar_id(calendar_id: Optional[str]) -> str:
    """
    Sanitize a calendar id for logging.

    Args:
        calendar_id: Calendar id, possibly URL-encoded

    Returns:
        The masked e-mail form for address-like ids, otherwise a short preview

    Example:
        "user%40example.com" -> "[calendar: ***@example.com (16 chars)]"
    """
    if not calendar_id:
        return "[no-calendar-id]"

    decoded = unquote(calendar_id)
    if '@' in decoded:
        return f"[calendar: {sanitize_email(decoded)}]"
    if len(decoded) <= 12:
        return f"[calendar: {decoded}]"
    return f"[calendar: {decoded[:8]}...{decoded[-4:]}]"


def sanitize_query(query: str, max_length: int = 30) -> str:
    """
    Sanitize search query for logging by removing potential PII.

    Args:
        query: Search query to sanitize
        max_length: Maximum length to show

    Returns:
        Sanitized query representation
    """
    if not query:
        return "[empty-query]"

    sanitized = re.sub(EMAIL_PATTERN, '[EMAIL]', query)

    # Replace phone numbers (basic patterns)
    sanitized = re.sub(r'\b\d{3}[-.]?\d{3}[-.]?\d{4}\b', '[PHONE]', sanitized)

    if len(sanitized) > max_length:
        sanitized = sanitized[:max_length] + "..."

    return f"'{sanitized}' ({len(query)} chars)"


def sanitize_url(url: str) -> str:
    """
    Sanitize a feed URL for logging by masking e-mail addresses in its path.

    Args:
        url: Feed URL

    Returns:
        The URL with plain and %40-encoded addresses replaced by [EMAIL]
    """
    if not url:
        return "[no-url]"

    return re.sub(EMAIL_PATTERN, '[EMAIL]', unquote(url))


def sanitize_for_logging(**kwargs) -> dict:
    """
    Sanitize multiple fields for logging in one call.

    Args:
        **kwargs: Fields to sanitize (calendar_id, query, url, scope)

    Returns:
        Dictionary with sanitized values
    """
    sanitized = {}

    for key, value in kwargs.items():
        if key == 'calendar_id':
            sanitized[key] = sanitize_calendar_id(value)
        elif key == 'query':
            sanitized[key] = sanitize_query(value) if value else None
        elif key == 'url':
            sanitized[key] = sanitize_url(value) if value else None
        else:
            # For other fields, just include as-is (non-PII data)
            sanitized[key] = value

    return sanitized
