from typing import TYPE_CHECKING, Dict
from urllib.parse import quote
import logging

from ...utils.log_sanitizer import sanitize_calendar_id, sanitize_url
from .constants import (
    ACL_FEED_PATH, ALL_CALENDARS_PATH, ATOM_CONTENT_TYPE, DEFAULT_ACL_PATH,
    EVENT_FEED_PATH, OWN_CALENDARS_PATH
)

if TYPE_CHECKING:
    import requests
    from ...service import Service

logger = logging.getLogger(__name__)


class FeedClient:
    """
    Issues the Calendar feed requests against their fixed URL templates.
    Every method delegates to the service transport and returns its response;
    transport failures propagate as HTTPRequestFailed.
    """

    def __init__(self, service: "Service"):
        self._service = service

    @property
    def base_url(self) -> str:
        return self._service.base_url

    def own_calendars_url(self) -> str:
        return self.base_url + OWN_CALENDARS_PATH

    def calendar_url(self, calendar_id: str) -> str:
        return f"{self.own_calendars_url()}/{calendar_id}"

    def event_feed_url(self, calendar_id: str) -> str:
        return self.base_url + EVENT_FEED_PATH.format(calendar_id=calendar_id)

    def acl_feed_url(self, calendar_id: str) -> str:
        return self.base_url + ACL_FEED_PATH.format(calendar_id=calendar_id)

    def default_acl_url(self, calendar_id: str) -> str:
        return self.base_url + DEFAULT_ACL_PATH.format(calendar_id=calendar_id)

    @staticmethod
    def write_headers(body: str, with_length: bool = False) -> Dict[str, str]:
        headers = {"Content-Type": ATOM_CONTENT_TYPE}
        if with_length:
            headers["Content-Length"] = str(len(body.encode("utf-8")))
        return headers

    def list_calendars(self) -> "requests.Response":
        logger.debug("Listing own calendars")
        return self._service.send_get(self.own_calendars_url())

    def get_calendar(self, calendar_id: str) -> "requests.Response":
        logger.debug("Fetching calendar %s", sanitize_calendar_id(calendar_id))
        return self._service.send_get(f"{self.base_url}{ALL_CALENDARS_PATH}/{calendar_id}")

    def search_calendars(self, term: str) -> "requests.Response":
        url = f"{self.base_url}{ALL_CALENDARS_PATH}?q={quote(term, safe='')}"
        return self._service.send_get(url)

    def create_calendar(self, xml: str) -> "requests.Response":
        logger.debug("Creating calendar")
        return self._service.send_post(self.own_calendars_url(), xml, self.write_headers(xml))

    def update_calendar(self, edit_feed: str, xml: str) -> "requests.Response":
        logger.debug("Updating calendar at %s", sanitize_url(edit_feed))
        return self._service.send_put(edit_feed, xml, self.write_headers(xml, with_length=True))

    def delete_calendar(self, calendar_id: str) -> "requests.Response":
        logger.debug("Deleting calendar %s", sanitize_calendar_id(calendar_id))
        return self._service.send_delete(self.calendar_url(calendar_id))

    def get_acl(self, calendar_id: str) -> "requests.Response":
        logger.debug("Fetching ACL feed for %s", sanitize_calendar_id(calendar_id))
        return self._service.send_get(self.acl_feed_url(calendar_id))

    def put_default_acl(self, calendar_id: str, xml: str) -> "requests.Response":
        return self._service.send_put(self.default_acl_url(calendar_id), xml, self.write_headers(xml, with_length=True))

    def get_events(self, event_feed: str) -> "requests.Response":
        return self._service.send_get(event_feed)
