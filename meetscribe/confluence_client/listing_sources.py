"""Listing sources for Confluence spaces and content.

A listing source knows how to enumerate spaces and the pages/folders of a
space through one generation of the Confluence REST API. Two implementations
exist: the current v2 API (cursor pagination, page positions, folders) and
the legacy v1 API (offset pagination, ancestors). FallbackListing tries the
sources in order and returns the first result that does not fail.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import quote

from ..errors import ConfluenceError, RemoteListingError, UpstreamUnavailable
from ..models import PageItem, Space
from .api_wrapper import APIWrapper
from .pagination import CursorPaginator, OffsetPaginator

logger = logging.getLogger(__name__)

# Errors after which the next listing source is tried
FALLBACK_ERRORS = (ConfluenceError, UpstreamUnavailable)


def _optional_str(value: Any) -> Optional[str]:
    if value is None or value == '':
        return None
    return str(value)


def _optional_int(value: Any) -> Optional[int]:
    try:
        return int(value) if value is not None else None
    except (TypeError, ValueError):
        return None


def _space_from_raw(raw: Dict[str, Any]) -> Space:
    return Space(
        key=str(raw.get('key', '')),
        name=str(raw.get('name') or raw.get('key', '')),
        id=str(raw.get('id', '')),
    )


class ListingSource(ABC):
    """One way of listing Confluence spaces and content."""

    name = 'abstract'

    def __init__(self, api: APIWrapper):
        self._api = api

    @abstractmethod
    def list_spaces(self) -> List[Space]:
        """Return every space visible to the configured account."""

    @abstractmethod
    def list_content(self, space_key: str) -> List[PageItem]:
        """Return the pages (and folders, where supported) of a space.

        Items carry parent references but no computed level/has_children.
        """


class CurrentApiSource(ListingSource):
    """Listing through the Confluence REST API v2."""

    name = 'v2'

    SPACE_PAGE_SIZE = 250
    CONTENT_PAGE_SIZE = 250
    FOLDER_SCAN_PAGE_SIZE = 100
    FOLDER_SCAN_MAX_ITEMS = 1000

    def list_spaces(self) -> List[Space]:
        """List spaces via GET /api/v2/spaces.

        Raises:
            RemoteListingError: If any request fails
        """
        raw_spaces = CursorPaginator(self._api, 'api/v2/spaces', limit=self.SPACE_PAGE_SIZE).collect()
        logger.info(f"Listed {len(raw_spaces)} spaces through REST API v2")
        return [_space_from_raw(raw) for raw in raw_spaces]

    def list_content(self, space_key: str) -> List[PageItem]:
        """List pages and folders of a space.

        Pages come from GET /api/v2/spaces/{id}/pages. Folders are discovered
        on a best-effort basis; failing folder lookups are logged and skipped.

        Raises:
            RemoteListingError: If the space lookup or page listing fails
        """
        space_id = self._get_space_id(space_key)
        logger.debug(f"Space {space_key} has id {space_id}")

        pages = CursorPaginator(
            self._api,
            f'api/v2/spaces/{quote(space_id, safe="")}/pages',
            limit=self.CONTENT_PAGE_SIZE
        ).collect()
        folders = self._find_folders(space_id)
        logger.info(f"Space {space_key}: {len(pages)} pages, {len(folders)} folders")

        return [self._to_item(raw) for raw in pages + folders]

    def _get_space_id(self, space_key: str) -> str:
        # v2 endpoints are keyed by space id, which only v1 resolves from a key
        path = f'rest/api/space/{quote(space_key, safe="")}'
        space = self._api.get_json(path)
        space_id = space.get('id')
        if space_id is None or space_id == '':
            raise RemoteListingError(path, 200, "response did not contain a space id")
        return str(space_id)

    def _find_folders(self, space_id: str) -> List[Dict[str, Any]]:
        folders: List[Dict[str, Any]] = []
        seen = set()

        def add(candidates: List[Dict[str, Any]]) -> None:
            for raw in candidates:
                if raw.get('type') == 'folder' and raw.get('id') not in seen:
                    seen.add(raw.get('id'))
                    folders.append(raw)

        try:
            scanned = CursorPaginator(
                self._api,
                'api/v2/pages',
                params={'space-id': space_id},
                limit=self.FOLDER_SCAN_PAGE_SIZE,
                max_items=self.FOLDER_SCAN_MAX_ITEMS,
            ).collect()
            add(scanned)
        except FALLBACK_ERRORS as e:
            logger.warning(f"Folder scan over /api/v2/pages failed: {e}")

        try:
            listed = CursorPaginator(
                self._api,
                'api/v2/folders',
                params={'space-id': space_id},
                limit=self.FOLDER_SCAN_PAGE_SIZE,
                max_items=self.FOLDER_SCAN_MAX_ITEMS,
            ).collect()
            for raw in listed:
                raw.setdefault('type', 'folder')
            add(listed)
        except FALLBACK_ERRORS as e:
            logger.warning(f"Folder listing over /api/v2/folders failed: {e}")

        return folders

    @staticmethod
    def _to_item(raw: Dict[str, Any]) -> PageItem:
        return PageItem(
            id=str(raw['id']),
            title=raw.get('title') or 'Untitled',
            type=raw.get('type') or 'page',
            parent_id=_optional_str(raw.get('parentId')),
            parent_type=_optional_str(raw.get('parentType')),
            position=_optional_int(raw.get('position')),
        )


class LegacyApiSource(ListingSource):
    """Listing through the Confluence REST API v1."""

    name = 'v1'

    SPACE_PAGE_SIZE = 50
    CONTENT_PAGE_SIZE = 100

    def list_spaces(self) -> List[Space]:
        """List spaces via GET /rest/api/space.

        Raises:
            RemoteListingError: If any request fails
        """
        raw_spaces = OffsetPaginator(self._api, 'rest/api/space', limit=self.SPACE_PAGE_SIZE).collect()
        logger.info(f"Listed {len(raw_spaces)} spaces through REST API v1")
        return [_space_from_raw(raw) for raw in raw_spaces]

    def list_content(self, space_key: str) -> List[PageItem]:
        """List pages of a space via GET /rest/api/content with ancestors.

        The legacy API has no folders; the parent of a page is the last
        entry of its ancestors list.

        Raises:
            RemoteListingError: If any request fails
        """
        raw_pages = OffsetPaginator(
            self._api,
            'rest/api/content',
            params={'spaceKey': space_key, 'type': 'page', 'expand': 'ancestors'},
            limit=self.CONTENT_PAGE_SIZE,
        ).collect()
        logger.info(f"Space {space_key}: {len(raw_pages)} pages through REST API v1")
        return [self._to_item(raw) for raw in raw_pages]

    @staticmethod
    def _to_item(raw: Dict[str, Any]) -> PageItem:
        ancestors = raw.get('ancestors') or []
        parent_id = _optional_str(ancestors[-1].get('id')) if ancestors else None
        return PageItem(
            id=str(raw['id']),
            title=raw.get('title') or 'Untitled',
            type=raw.get('type') or 'page',
            parent_id=parent_id,
            parent_type='page' if parent_id else None,
        )


class FallbackListing:
    """Tries listing sources in order until one succeeds.

    Example:
        >>> listing = FallbackListing([CurrentApiSource(api), LegacyApiSource(api)])
        >>> spaces = listing.list_spaces()
    """

    def __init__(self, sources: Sequence[ListingSource]):
        if not sources:
            raise ValueError("at least one listing source is required")
        self._sources = list(sources)

    @property
    def sources(self) -> List[ListingSource]:
        return list(self._sources)

    def list_spaces(self) -> List[Space]:
        """List spaces with the first source that does not fail.

        Raises:
            RemoteListingError / UpstreamUnavailable: The last source's error
                when every source fails
        """
        return self._first_success('list_spaces')

    def list_content(self, space_key: str) -> List[PageItem]:
        """List content of a space with the first source that does not fail."""
        return self._first_success('list_content', space_key)

    def _first_success(self, operation: str, *args):
        last_error: Optional[Exception] = None
        for source in self._sources:
            try:
                return getattr(source, operation)(*args)
            except FALLBACK_ERRORS as e:
                logger.warning(f"{operation} through REST API {source.name} failed ({e}), trying next source")
                last_error = e
        assert last_error is not None
        raise last_error
