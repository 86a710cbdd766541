"""Test fixtures for meetscribe tests.

This module provides:
- Raw Confluence REST API payloads (v1 and v2 listings, page creation)
- Sample transcripts in their JSON (camelCase) form
"""

from .confluence_payloads import (
    CREATED_PAGE,
    make_response,
    v1_content,
    v2_batch,
    v2_page,
)
from .sample_transcripts import SAMPLE_TRANSCRIPT, sample_transcript_dict

__all__ = [
    'CREATED_PAGE',
    'make_response',
    'v1_content',
    'v2_batch',
    'v2_page',
    'SAMPLE_TRANSCRIPT',
    'sample_transcript_dict',
]
