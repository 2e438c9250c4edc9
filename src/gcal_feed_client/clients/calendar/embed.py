from typing import Any, List, Mapping, Optional

from .constants import DEFAULT_BASE_URL, EMBED_PATH

EMBED_PARAM_NAMES = {
    "mode": "mode",
    "height": "height",
    "width": "width",
    "bg_color": "bgcolor",
    "color": "color",
    "show_title": "showTitle",
    "show_nav": "showNav",
    "show_date": "showDate",
    "show_print": "showPrint",
    "show_tabs": "showTabs",
    "show_calendars": "showCalendars",
    "show_timezone": "showTimezone",
}

IFRAME_DEFAULTS = {
    "mode": "WEEK",
    "height": "600",
    "width": "600",
    "bg_color": "#FFFFFF",
    "color": "#2852A3",
    "show_title": False,
    "show_nav": True,
    "show_date": True,
    "show_print": True,
    "show_tabs": True,
    "show_calendars": True,
    "show_timezone": True,
}


def raw_value_to_param_value(value: Any) -> str:
    if value is True:
        return "1"
    if value is False:
        return "0"
    return str(value)


def merge_options(options: Optional[Mapping[str, Any]] = None) -> dict:
    """Merges caller options over the defaults, dropping unrecognized keys."""
    merged = dict(IFRAME_DEFAULTS)
    for key, value in (options or {}).items():
        if key in IFRAME_DEFAULTS:
            merged[key] = value
    return merged


def build_options_set(options: Optional[Mapping[str, Any]] = None) -> List[str]:
    """
    Builds the embed query parameters as "name=value" pairs.
    Args:
        options: Display options keyed by their python names (e.g. "show_nav").
    Returns:
        A list of pairs in the default option order.
    """
    merged = merge_options(options)
    return [f"{EMBED_PARAM_NAMES[key]}={raw_value_to_param_value(value)}" for key, value in merged.items()]


def to_iframe(calendar_id: Optional[str], options: Optional[Mapping[str, Any]] = None,
              base_url: str = DEFAULT_BASE_URL) -> str:
    """
    Formats an iframe snippet embedding a public calendar.
    Args:
        calendar_id: Id of the calendar to embed.
        options: Display options merged over IFRAME_DEFAULTS.
        base_url: Calendar service base URL.
    Returns:
        The iframe HTML.
    Raises:
        ValueError: If no calendar id is given.
    """
    if not calendar_id:
        raise ValueError("Calendar ID is required")
    merged = merge_options(options)
    url_options = "&amp;".join(build_options_set(merged))
    return (
        f"<iframe src='{base_url}{EMBED_PATH}?src={calendar_id}&amp;{url_options}' "
        f"width='{merged['width']}' height='{merged['height']}' frameborder='0' scrolling='no'></iframe>"
    )
