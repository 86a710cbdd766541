"""Transcript to Confluence storage format conversion.

Confluence stores page bodies as XHTML ("storage format"). The markup is
built with BeautifulSoup so every text value is escaped.
"""

from typing import List, Optional

from bs4 import BeautifulSoup, Tag

from ..models import Transcript

SECTION_TITLES = {
    'summary': 'Summary',
    'participants': 'Participants',
    'key_points': 'Key Points',
    'action_items': 'Action Items',
    'details': 'Details',
}

EMPTY_SECTION_TEXT = 'None recorded'


class StorageFormatter:
    """Renders a Transcript as Confluence storage-format XHTML.

    The output is deterministic for a given transcript.

    Example:
        >>> xhtml = StorageFormatter().format(transcript)
        >>> xhtml.startswith('<h1>')
        True
    """

    def __init__(self, timestamp_format: str = '%Y-%m-%d %H:%M:%S %Z'):
        self._timestamp_format = timestamp_format

    def format(self, transcript: Transcript) -> str:
        soup = BeautifulSoup('', 'html.parser')

        self._append(soup, soup, 'h1', transcript.title)

        self._append(soup, soup, 'h2', SECTION_TITLES['summary'])
        self._append(soup, soup, 'p', transcript.summary or EMPTY_SECTION_TEXT)

        self._append_list(soup, SECTION_TITLES['participants'], transcript.participants)
        self._append_list(soup, SECTION_TITLES['key_points'], transcript.key_points)
        self._append_list(soup, SECTION_TITLES['action_items'], transcript.action_items)

        self._append(soup, soup, 'h2', SECTION_TITLES['details'])
        details = self._append(soup, soup, 'div')
        # One paragraph per line; blank lines become empty paragraphs
        for line in transcript.content.splitlines():
            self._append(soup, details, 'p', line)

        self._append(soup, soup, 'hr')
        created = transcript.created_at.strftime(self._timestamp_format).strip()
        footer = self._append(soup, soup, 'p')
        self._append(soup, footer, 'em', f"Created: {created}")
        if transcript.id:
            footer = self._append(soup, soup, 'p')
            self._append(soup, footer, 'em', f"Transcript ID: {transcript.id}")

        return str(soup)

    def _append_list(self, soup: BeautifulSoup, heading: str, entries: List[str]) -> None:
        self._append(soup, soup, 'h2', heading)
        if not entries:
            self._append(soup, soup, 'p', EMPTY_SECTION_TEXT)
            return
        bullet_list = self._append(soup, soup, 'ul')
        for entry in entries:
            self._append(soup, bullet_list, 'li', entry)

    @staticmethod
    def _append(soup: BeautifulSoup, parent: Tag, name: str, text: Optional[str] = None) -> Tag:
        tag = soup.new_tag(name)
        if text is not None:
            tag.string = text
        parent.append(tag)
        return tag


def format_transcript(transcript: Transcript) -> str:
    """Render a transcript with the default formatter."""
    return StorageFormatter().format(transcript)
