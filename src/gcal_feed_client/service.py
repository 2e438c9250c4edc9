"""
Authenticated transport for the Calendar feed protocol.

Each Service wraps one user's authorized HTTP session, so several users can be
served side by side:

    service = Service.from_file()
    calendars = service.calendars()

    service_1 = Service.from_credentials_info(app_creds, user1_token)
    service_2 = Service.from_credentials_info(app_creds, user2_token, check_public=False)
"""

from typing import Dict, List, Optional, TYPE_CHECKING
import logging

import requests
from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import AuthorizedSession
from google.oauth2.credentials import Credentials

from .auth.auth import get_credentials_from_file, get_credentials_from_info
from .clients.calendar.constants import DEFAULT_BASE_URL
from .clients.calendar.feeds import FeedClient
from .exceptions.calendar import CalendarNotFoundError, CalendarPermissionError, HTTPRequestFailed
from .utils.log_sanitizer import sanitize_url

if TYPE_CHECKING:
    from .clients.calendar.client import Calendar

logger = logging.getLogger(__name__)


class Service:
    """
    Sends feed requests for one authenticated user.
    Args:
        session: A requests-compatible session that authorizes its requests,
            normally google.auth.transport.requests.AuthorizedSession.
        base_url: Base URL of the calendar service.
        check_public: Read each calendar's ACL feed on load to find out whether it is public.
        debug: Log every request and response status at INFO level.
    """

    def __init__(
        self,
        session: requests.Session,
        base_url: str = DEFAULT_BASE_URL,
        check_public: bool = True,
        debug: bool = False,
    ):
        self._session = session
        self.base_url = base_url.rstrip("/")
        self.check_public = check_public
        self.debug = debug

    @classmethod
    def from_credentials(cls, credentials: Credentials, **config) -> "Service":
        return cls(AuthorizedSession(credentials), **config)

    @classmethod
    def from_file(cls, credentials_path: str = None, token_path: str = None, scopes: list = None, **config) -> "Service":
        """
        Create a Service from credential files (single user scenario).

        Args:
            credentials_path: Path to credentials.json file
            token_path: Path to token.json file
            scopes: List of OAuth scopes to request
            **config: base_url, check_public or debug
        """
        credentials = get_credentials_from_file(credentials_path, token_path, scopes)
        return cls.from_credentials(credentials, **config)

    @classmethod
    def from_credentials_info(cls, app_credentials: dict, user_token_data: dict = None, scopes: list = None, **config) -> "Service":
        """
        Create a Service from credential data (multi-user scenario).

        Args:
            app_credentials: OAuth client configuration dict
            user_token_data: Previously stored user token data dict
            scopes: List of OAuth scopes to request
            **config: base_url, check_public or debug
        """
        credentials, _ = get_credentials_from_info(app_credentials, user_token_data, scopes)
        return cls.from_credentials(credentials, **config)

    @property
    def feeds(self) -> FeedClient:
        return FeedClient(self)

    def send_get(self, url: str) -> requests.Response:
        return self._request("GET", url)

    def send_post(self, url: str, body: str, headers: Optional[Dict[str, str]] = None) -> requests.Response:
        return self._request("POST", url, body, headers)

    def send_put(self, url: str, body: str, headers: Optional[Dict[str, str]] = None) -> requests.Response:
        return self._request("PUT", url, body, headers)

    def send_delete(self, url: str) -> requests.Response:
        return self._request("DELETE", url)

    def calendars(self) -> List["Calendar"]:
        """Returns every calendar the account owns, loaded."""
        from .clients.calendar.client import Calendar
        response = self.feeds.list_calendars()
        calendars = Calendar.from_feed(self, response.content)
        logger.info("Fetched %d calendars", len(calendars))
        return calendars

    def _request(self, method: str, url: str, body: Optional[str] = None,
                 headers: Optional[Dict[str, str]] = None) -> requests.Response:
        data = body.encode("utf-8") if body is not None else None
        try:
            response = self._session.request(method, url, data=data, headers=headers)
        except (requests.RequestException, GoogleAuthError) as e:
            raise HTTPRequestFailed(f"{method} {sanitize_url(url)} failed: {e}", url=url) from e

        if self.debug:
            logger.info("%s %s -> %s", method, sanitize_url(url), response.status_code)
        if not response.ok:
            self._raise_for_status(method, url, response)
        return response

    @staticmethod
    def _raise_for_status(method: str, url: str, response: requests.Response) -> None:
        status = response.status_code
        message = f"{method} {sanitize_url(url)} failed with HTTP {status}: {response.reason}"
        if status in (401, 403):
            raise CalendarPermissionError(message, status_code=status, url=url)
        elif status == 404:
            raise CalendarNotFoundError(message, status_code=status, url=url)
        else:
            raise HTTPRequestFailed(message, status_code=status, url=url)
