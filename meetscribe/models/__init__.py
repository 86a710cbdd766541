"""Data models for Confluence content and meeting transcripts."""

from meetscribe.models.confluence_content import PageItem, PublishedPage, Space
from meetscribe.models.transcript import Transcript

__all__ = ['PageItem', 'PublishedPage', 'Space', 'Transcript']
