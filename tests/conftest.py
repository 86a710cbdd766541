"""Root pytest configuration for all tests.

This conftest applies to all test types (unit, integration).
"""

import logging

import pytest

from meetscribe.config import ConfluenceSettings, OpenAISettings, ServerSettings, Settings

# atlassian-python-api logs every non-2xx response at ERROR level, which is
# expected noise in tests that exercise error translation.
logging.getLogger("atlassian").setLevel(logging.WARNING)


@pytest.fixture
def confluence_settings():
    """Fully configured Confluence settings."""
    return ConfluenceSettings(
        base_url='https://test.atlassian.net',
        email='test@example.com',
        api_token='token123',
        space_key='TEAM',
    )


@pytest.fixture
def settings(confluence_settings, tmp_path):
    """Complete application settings with uploads under a temporary directory."""
    return Settings(
        confluence=confluence_settings,
        openai=OpenAISettings(api_key='sk-test'),
        server=ServerSettings(upload_dir=str(tmp_path / 'uploads')),
    )
