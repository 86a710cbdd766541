"""Rendering transcripts to Confluence storage format and publishing them."""

from .page_publisher import PagePublisher
from .storage_formatter import StorageFormatter, format_transcript

__all__ = ['PagePublisher', 'StorageFormatter', 'format_transcript']
