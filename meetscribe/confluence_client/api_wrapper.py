"""API wrapper for the Confluence Cloud REST API (v1 and v2).

This module wraps the atlassian-python-api Confluence client and provides
error translation from HTTP responses and transport exceptions to our typed
exception hierarchy. Requests are issued in the client's advanced mode so the
raw status code and body are available; there are no retries.
"""

import logging
import re
from typing import Any, Dict, Optional

from atlassian import Confluence
from requests.exceptions import ConnectionError, Timeout

from ..config import ConfluenceSettings
from ..errors import PublishError, RemoteListingError, UpstreamUnavailable

logger = logging.getLogger(__name__)

# Longest response body kept in error messages
MAX_ERROR_BODY = 500


def sanitize_credentials(text: str) -> str:
    """Mask credentials in error messages before they are logged or returned.

    Example:
        >>> sanitize_credentials("Authorization: Basic dXNlcjpwYXNz")
        'Authorization: ***REDACTED***'
    """
    if not text:
        return text

    sanitized = re.sub(r'://([\w.-]+):([\w.-]+)@', r'://***:***@', text)
    sanitized = re.sub(
        r'Authorization:\s*[^\n\r]+',
        'Authorization: ***REDACTED***',
        sanitized,
        flags=re.IGNORECASE
    )
    sanitized = re.sub(
        r'(Basic|Bearer)\s+[^\s\n\r"]+',
        r'\1 ***REDACTED***',
        sanitized,
        flags=re.IGNORECASE
    )
    sanitized = re.sub(
        r'(api_?token|token|password)["\']?\s*[:=]\s*["\']?([^"\'\s&]+)',
        r'\1=***REDACTED***',
        sanitized,
        flags=re.IGNORECASE
    )
    return sanitized


def _is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


class APIWrapper:
    """Wrapper around atlassian-python-api Confluence client with error translation.

    This class provides a thin wrapper over the Confluence API client that:
    1. Builds the client lazily from explicit ConfluenceSettings
    2. Translates non-2xx responses to RemoteListingError / PublishError
    3. Translates connection failures and timeouts to UpstreamUnavailable

    Example:
        >>> api = APIWrapper(settings.confluence)
        >>> payload = api.get_json("api/v2/spaces", params={"limit": 250})
    """

    def __init__(self, settings: ConfluenceSettings, timeout: int = 30):
        """Initialize the API wrapper.

        Args:
            settings: Confluence connection settings
            timeout: Per-request timeout in seconds
        """
        self._settings = settings
        self._timeout = timeout
        self._client: Optional[Confluence] = None

    @property
    def settings(self) -> ConfluenceSettings:
        return self._settings

    def _get_client(self) -> Confluence:
        """Get or create the Confluence API client.

        Raises:
            ConfigurationError: If Confluence settings are incomplete
        """
        if self._client is None:
            settings = self._settings.require()
            self._client = Confluence(
                url=settings.wiki_url,
                username=settings.email,
                password=settings.api_token,
                cloud=True,
                timeout=self._timeout,
            )
        return self._client

    def _error_body(self, response: Any) -> str:
        body = sanitize_credentials(getattr(response, 'text', '') or '')
        if len(body) > MAX_ERROR_BODY:
            body = body[:MAX_ERROR_BODY] + '...'
        return body

    def get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Issue an authenticated GET and return the decoded JSON body.

        Args:
            path: Path relative to <base_url>/wiki (e.g., "api/v2/spaces")
            params: Query parameters

        Returns:
            Decoded JSON object

        Raises:
            RemoteListingError: On a non-2xx status or a non-JSON body
            UpstreamUnavailable: If Confluence cannot be reached
            ConfigurationError: If Confluence settings are incomplete
        """
        client = self._get_client()
        logger.debug(f"Confluence API: GET /{path} {params or ''}")

        try:
            response = client.get(path, params=params, advanced_mode=True)
        except (Timeout, ConnectionError) as e:
            logger.error(f"Confluence unreachable during GET /{path}: {sanitize_credentials(str(e))}")
            raise UpstreamUnavailable('Confluence', self._settings.base_url) from e

        if not _is_success(response.status_code):
            body = self._error_body(response)
            logger.error(f"Confluence API error: GET /{path} -> {response.status_code} {body}")
            raise RemoteListingError(path, response.status_code, body)

        try:
            payload = response.json()
        except ValueError as e:
            raise RemoteListingError(path, response.status_code, "response is not valid JSON") from e

        if not isinstance(payload, dict):
            raise RemoteListingError(path, response.status_code, "response is not a JSON object")
        return payload

    def create_page(
        self,
        space_key: str,
        title: str,
        body: str,
        parent_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """Create a new page in storage format.

        Args:
            space_key: The space key where the page will be created
            title: The page title
            body: The page content in storage format (XHTML)
            parent_id: Optional parent page ID

        Returns:
            Dict containing the created page data (id, title, _links, ...)

        Raises:
            PublishError: On a non-2xx status
            UpstreamUnavailable: If Confluence cannot be reached
            ConfigurationError: If Confluence settings are incomplete
        """
        client = self._get_client()

        page_data: Dict[str, Any] = {
            'type': 'page',
            'title': title,
            'space': {'key': space_key},
            'body': {
                'storage': {
                    'value': body,
                    'representation': 'storage',
                },
            },
        }
        if parent_id:
            page_data['ancestors'] = [{'id': parent_id}]

        logger.info(f"Confluence API: POST /rest/api/content (title='{title}', space={space_key}, parent={parent_id})")

        try:
            response = client.post('rest/api/content', data=page_data, advanced_mode=True)
        except (Timeout, ConnectionError) as e:
            logger.error(f"Confluence unreachable during page creation: {sanitize_credentials(str(e))}")
            raise UpstreamUnavailable('Confluence', self._settings.base_url) from e

        if not _is_success(response.status_code):
            error_body = self._error_body(response)
            logger.error(f"Confluence API error: POST /rest/api/content -> {response.status_code} {error_body}")
            raise PublishError(title, response.status_code, error_body)

        try:
            return response.json()
        except ValueError as e:
            raise PublishError(title, response.status_code, "response is not valid JSON") from e
