"""Confluence client library for meetscribe.

This package provides Python abstractions over the Confluence Cloud REST API
(v2 with a v1 fallback): listing spaces and content with pagination, and
creating pages.
"""

from .api_wrapper import APIWrapper
from .listing_sources import (
    CurrentApiSource,
    FallbackListing,
    LegacyApiSource,
    ListingSource,
)
from .pagination import CursorPaginator, OffsetPaginator

__all__ = [
    'APIWrapper',
    'CurrentApiSource',
    'FallbackListing',
    'LegacyApiSource',
    'ListingSource',
    'CursorPaginator',
    'OffsetPaginator',
]
