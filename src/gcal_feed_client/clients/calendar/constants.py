"""Feed URLs, XML namespaces and entry templates for the Calendar feed protocol."""

DEFAULT_BASE_URL = "http://www.google.com/calendar"

# Feed paths, relative to the base URL
OWN_CALENDARS_PATH = "/feeds/default/owncalendars/full"
ALL_CALENDARS_PATH = "/feeds/default/allcalendars/full"
EVENT_FEED_PATH = "/feeds/{calendar_id}/private/full"
ACL_FEED_PATH = "/feeds/{calendar_id}/acl/full"
DEFAULT_ACL_PATH = "/feeds/{calendar_id}/acl/full/default"
EMBED_PATH = "/embed"

# Calendar entry ids look like <base>/feeds/default/calendars/<id>
CALENDAR_ID_MARKER = "/feeds/default/calendars/"

ATOM_CONTENT_TYPE = "application/atom+xml"

PUBLIC_READ_ROLE = "http://schemas.google.com/gCal/2005#read"
PRIVATE_ROLE = "none"
READ_ROLE_MARKER = "#read"

# Applied to calendars created in memory
DEFAULT_TIMEZONE = "America/Los_Angeles"
DEFAULT_COLOR = "#2952A3"

ATOM_NS = "http://www.w3.org/2005/Atom"

# Declared on every entry that is cut out of a feed and parsed on its own
ENTRY_NAMESPACES = {
    None: ATOM_NS,
    "gCal": "http://schemas.google.com/gCal/2005",
    "gd": "http://schemas.google.com/g/2005",
    "app": "http://www.w3.org/2007/app",
    "georss": "http://www.georss.org/georss",
    "gml": "http://www.opengis.net/gml",
}

CALENDAR_XML = """<entry xmlns='http://www.w3.org/2005/Atom' xmlns:gd='http://schemas.google.com/g/2005' xmlns:gCal='http://schemas.google.com/gCal/2005'>
  <title type='text'></title>
  <summary type='text'></summary>
  <gCal:timezone value='America/Los_Angeles'></gCal:timezone>
  <gCal:hidden value='false'></gCal:hidden>
  <gCal:color value='#2952A3'></gCal:color>
  <gd:where rel='' label='' valueString=''></gd:where>
</entry>"""

ACL_XML = """<entry xmlns='http://www.w3.org/2005/Atom' xmlns:gAcl='http://schemas.google.com/acl/2007'>
  <category scheme='http://schemas.google.com/g/2005#kind' term='http://schemas.google.com/acl/2007#accessRule'/>
  <gAcl:scope type='default'></gAcl:scope>
  <gAcl:role value=''></gAcl:role>
</entry>"""

EVENT_XML = """<entry xmlns='http://www.w3.org/2005/Atom' xmlns:gd='http://schemas.google.com/g/2005'>
  <category scheme='http://schemas.google.com/g/2005#kind' term='http://schemas.google.com/g/2005#event'></category>
  <title type='text'></title>
  <content type='text'></content>
  <gd:transparency value='http://schemas.google.com/g/2005#event.opaque'></gd:transparency>
  <gd:eventStatus value='http://schemas.google.com/g/2005#event.confirmed'></gd:eventStatus>
  <gd:where valueString=''></gd:where>
  <gd:when startTime='' endTime=''></gd:when>
</entry>"""
