"""Publishing transcripts as Confluence pages."""

import logging
from typing import Optional

from ..confluence_client.api_wrapper import APIWrapper
from ..errors import PublishError
from ..models import PublishedPage, Transcript
from .storage_formatter import StorageFormatter

logger = logging.getLogger(__name__)


class PagePublisher:
    """Creates one Confluence page per transcript.

    A single create request is issued per call; failures are not retried.

    Example:
        >>> publisher = PagePublisher(APIWrapper(settings.confluence))
        >>> page = publisher.publish(transcript, space_key="DEV")
        >>> page.url
        'https://example.atlassian.net/wiki/spaces/DEV/pages/123'
    """

    def __init__(self, api: APIWrapper, formatter: Optional[StorageFormatter] = None):
        self._api = api
        self._formatter = formatter or StorageFormatter()

    def publish(
        self,
        transcript: Transcript,
        space_key: Optional[str] = None,
        parent_id: Optional[str] = None
    ) -> PublishedPage:
        """Format a transcript and create it as a page.

        Args:
            transcript: Transcript to publish
            space_key: Target space (default: the configured space)
            parent_id: Optional parent page or folder ID

        Returns:
            PublishedPage with the new page's id, title and browsable URL

        Raises:
            PublishError: If Confluence rejects the page or the reply lacks an id
            UpstreamUnavailable: If Confluence cannot be reached
            ConfigurationError: If Confluence settings are incomplete
        """
        settings = self._api.settings
        target_space = space_key or settings.space_key
        body = self._formatter.format(transcript)

        result = self._api.create_page(
            space_key=target_space,
            title=transcript.title,
            body=body,
            parent_id=parent_id or None,
        )

        page_id = result.get('id')
        if not page_id:
            raise PublishError(transcript.title, 200, "response did not contain a page id")

        webui = (result.get('_links') or {}).get('webui', '')
        page = PublishedPage(
            page_id=str(page_id),
            title=result.get('title') or transcript.title,
            url=f"{settings.wiki_url}{webui}",
        )
        logger.info(f"Published transcript {transcript.id or '(no id)'} as page {page.page_id}")
        return page
