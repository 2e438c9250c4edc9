import os
import logging

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow

from ..exceptions.auth import InvalidCredentialsError

logger = logging.getLogger(__name__)

SCOPES = [
    'https://www.google.com/calendar/feeds/',
]
TOKEN_PATH = 'token.json'
CREDENTIALS_PATH = 'credentials.json'


def get_credentials_from_info(app_credentials: dict, user_token_data: dict=None, scopes: list=None):
    """
    Handle OAuth flow without file storage.

    Args:
        app_credentials (dict): OAuth client configuration (contents of credentials.json)
        user_token_data (dict, optional): Previously stored token data.
        scopes (list[str]): List of scopes to request

    Returns:
        tuple: (credentials, updated_token_data_to_store)
    """
    scopes = scopes or SCOPES
    creds = None

    if user_token_data:
        creds = Credentials.from_authorized_user_info(user_token_data, scopes)

    if not creds or not creds.valid:
        if creds and creds.expired and creds.refresh_token:
            logger.info("Refreshing expired credentials")
            creds.refresh(Request())
        else:
            flow = InstalledAppFlow.from_client_config(app_credentials, scopes)
            creds = flow.run_local_server(port=8080)

    token_data_to_store = {
        'token': creds.token,
        'refresh_token': creds.refresh_token,
        'token_uri': creds.token_uri,
        'client_id': creds.client_id,
        'client_secret': creds.client_secret,
        'scopes': creds.scopes
    }

    return creds, token_data_to_store


def get_credentials_from_file(credentials_path: str=None, token_path: str=None, scopes: list=None):
    """
    Load stored user credentials, refreshing them or running the local OAuth flow as needed.
    The resulting token is written back to token_path.

    Raises:
        InvalidCredentialsError: If a new flow is needed and the client secrets file is missing.
    """
    token_path = token_path or TOKEN_PATH
    credentials_path = credentials_path or CREDENTIALS_PATH
    scopes = scopes or SCOPES

    creds = None

    if os.path.exists(token_path):
        creds = Credentials.from_authorized_user_file(token_path, scopes)

    if not creds or not creds.valid:
        if creds and creds.expired and creds.refresh_token:
            logger.info("Refreshing expired credentials")
            creds.refresh(Request())
        else:
            if not os.path.exists(credentials_path):
                raise InvalidCredentialsError(f"Client secrets file not found: {credentials_path}")
            flow = InstalledAppFlow.from_client_secrets_file(
                credentials_path, scopes
            )
            creds = flow.run_local_server(port=8080)

        with open(token_path, "w") as token:
            token.write(creds.to_json())

    return creds
