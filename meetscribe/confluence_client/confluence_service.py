"""Confluence operations used by the web layer.

ConfluenceService ties together the listing sources, the hierarchy builder
and the page publisher behind the three operations the frontend needs: list
spaces, list the content tree of a space, and publish a transcript.
"""

import logging
from typing import List, Optional

from ..config import ConfluenceSettings
from ..models import PageItem, PublishedPage, Space, Transcript
from ..page_tree import HierarchyBuilder, children_of, destination_candidates, title_key
from ..publishing import PagePublisher
from .api_wrapper import APIWrapper
from .listing_sources import CurrentApiSource, FallbackListing, LegacyApiSource

logger = logging.getLogger(__name__)


class ConfluenceService:
    """Lists spaces and content and publishes transcripts.

    Example:
        >>> service = ConfluenceService(settings.confluence)
        >>> [space.key for space in service.list_spaces()]
        ['DEV', 'TEAM']
    """

    def __init__(
        self,
        settings: ConfluenceSettings,
        api: Optional[APIWrapper] = None,
        listing: Optional[FallbackListing] = None,
        builder: Optional[HierarchyBuilder] = None,
        publisher: Optional[PagePublisher] = None
    ):
        """Initialize the service.

        Args:
            settings: Confluence connection settings
            api: API wrapper (default: built from settings)
            listing: Listing chain (default: REST API v2, then v1)
            builder: Hierarchy builder
            publisher: Page publisher
        """
        self._settings = settings
        self._api = api or APIWrapper(settings)
        self._listing = listing or FallbackListing([
            CurrentApiSource(self._api),
            LegacyApiSource(self._api),
        ])
        self._builder = builder or HierarchyBuilder()
        self._publisher = publisher or PagePublisher(self._api)

    @property
    def settings(self) -> ConfluenceSettings:
        return self._settings

    def list_spaces(self) -> List[Space]:
        """Return all visible spaces sorted by name.

        Raises:
            RemoteListingError: If every listing source fails
            UpstreamUnavailable: If Confluence cannot be reached
            ConfigurationError: If Confluence settings are incomplete
        """
        spaces = self._listing.list_spaces()
        return sorted(spaces, key=lambda space: title_key(space.name))

    def list_pages(
        self,
        space_key: str,
        parent_id: Optional[str] = None,
        folders_only: bool = False
    ) -> List[PageItem]:
        """Return the content tree of a space in display order.

        Args:
            space_key: Space to list
            parent_id: If given, only the direct children of this item
            folders_only: Keep only folder-like items (see destination_candidates)

        Returns:
            Items annotated with level and has_children

        Raises:
            RemoteListingError: If every listing source fails
            UpstreamUnavailable: If Confluence cannot be reached
            ConfigurationError: If Confluence settings are incomplete
        """
        logger.info(f"Listing content of space {space_key}" + (f" under {parent_id}" if parent_id else ""))
        result = self._builder.build(self._listing.list_content(space_key))

        items = children_of(result, parent_id) if parent_id else result.items
        if folders_only:
            items = destination_candidates(items)

        logger.info(f"Returning {len(items)} of {len(result.items)} items for space {space_key}")
        return items

    def publish(
        self,
        transcript: Transcript,
        space_key: Optional[str] = None,
        parent_id: Optional[str] = None
    ) -> PublishedPage:
        """Publish a transcript as a new page (see PagePublisher.publish)."""
        return self._publisher.publish(transcript, space_key=space_key, parent_id=parent_id)
