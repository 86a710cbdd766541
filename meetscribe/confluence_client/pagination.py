"""Pagination over Confluence listing endpoints.

Confluence exposes two listing protocols: the v2 API hands out an opaque
cursor inside ``_links.next``, the legacy v1 API pages with ``start`` and
``limit``. Both paginators here concatenate every batch into one list in the
order received, stop when the server reports no further page, and stop early
(with a warning) when a request or item cap is reached.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from urllib.parse import parse_qs, urlparse

from .api_wrapper import APIWrapper

logger = logging.getLogger(__name__)

# Upper bound on requests per listing, guards against servers that never stop
MAX_REQUESTS = 100


def extract_cursor(next_link: Optional[str]) -> Optional[str]:
    """Return the cursor query parameter of a v2 ``_links.next`` value.

    Example:
        >>> extract_cursor("/wiki/api/v2/spaces?cursor=abc&limit=250")
        'abc'
    """
    if not next_link:
        return None
    values = parse_qs(urlparse(next_link).query).get('cursor')
    return values[0] if values else None


class _Paginator(ABC):
    """Shared state and caps for both pagination protocols."""

    def __init__(
        self,
        api: APIWrapper,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        limit: int = 250,
        max_items: Optional[int] = None,
        max_requests: int = MAX_REQUESTS
    ):
        """Initialize the paginator.

        Args:
            api: API wrapper used to issue requests
            path: Listing path relative to /wiki
            params: Extra query parameters sent with every request
            limit: Page size requested from the server
            max_items: Optional cap on items collected
            max_requests: Cap on requests issued
        """
        if limit <= 0:
            raise ValueError("limit must be positive")
        self._api = api
        self._path = path
        self._params = dict(params or {})
        self._limit = limit
        self._max_items = max_items
        self._max_requests = max_requests
        self.requests_made = 0

    def _fetch(self, extra: Dict[str, Any]) -> Dict[str, Any]:
        params = dict(self._params)
        params['limit'] = self._limit
        params.update(extra)
        self.requests_made += 1
        return self._api.get_json(self._path, params=params)

    def _capped(self, items: List[Dict[str, Any]]) -> bool:
        if self._max_items is not None and len(items) >= self._max_items:
            logger.warning(
                f"Stopped listing /{self._path} after {len(items)} items "
                f"(cap {self._max_items})"
            )
            return True
        if self.requests_made >= self._max_requests:
            logger.warning(
                f"Stopped listing /{self._path} after {self.requests_made} requests "
                f"(cap {self._max_requests})"
            )
            return True
        return False

    @abstractmethod
    def collect(self) -> List[Dict[str, Any]]:
        """Fetch every batch and return all results in received order."""


class CursorPaginator(_Paginator):
    """Follows v2 cursors until ``_links.next`` is absent.

    Example:
        >>> pages = CursorPaginator(api, "api/v2/spaces/42/pages").collect()
    """

    def collect(self) -> List[Dict[str, Any]]:
        """Fetch every batch and return all results in received order.

        Raises:
            RemoteListingError: If any request returns a non-2xx status
            UpstreamUnavailable: If Confluence cannot be reached
        """
        items: List[Dict[str, Any]] = []
        cursor: Optional[str] = None

        while True:
            payload = self._fetch({'cursor': cursor} if cursor else {})
            batch = payload.get('results') or []
            items.extend(batch)
            logger.debug(f"/{self._path}: batch of {len(batch)}, {len(items)} total")

            cursor = extract_cursor((payload.get('_links') or {}).get('next'))
            if not cursor or not batch:
                break
            if self._capped(items):
                break

        return items


class OffsetPaginator(_Paginator):
    """Advances ``start`` by ``limit`` until a short batch or no next link.

    Example:
        >>> spaces = OffsetPaginator(api, "rest/api/space", limit=50).collect()
    """

    def collect(self) -> List[Dict[str, Any]]:
        """Fetch every batch and return all results in received order.

        Raises:
            RemoteListingError: If any request returns a non-2xx status
            UpstreamUnavailable: If Confluence cannot be reached
        """
        items: List[Dict[str, Any]] = []
        start = 0

        while True:
            payload = self._fetch({'start': start})
            batch = payload.get('results') or []
            items.extend(batch)
            logger.debug(f"/{self._path}: batch of {len(batch)} at start={start}, {len(items)} total")

            has_next = bool((payload.get('_links') or {}).get('next'))
            if len(batch) < self._limit or not has_next:
                break
            if self._capped(items):
                break
            start += self._limit

        return items
