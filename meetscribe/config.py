"""Settings loading from environment variables.

This module loads the Confluence, OpenAI and server settings from environment
variables using python-dotenv. Settings are returned as immutable named tuples
that callers pass explicitly to each client; nothing here is cached at module
level. Missing values are reported rather than raised so the health endpoint
can list them; clients call ``require()`` before they talk to a provider.
"""

import os
from typing import List, Mapping, NamedTuple, Optional

from dotenv import load_dotenv

from .errors import ConfigurationError


class ConfluenceSettings(NamedTuple):
    """Confluence connection settings."""
    base_url: str
    email: str
    api_token: str
    space_key: str

    # Environment variable backing each field, in declaration order
    ENV_VARS = (
        ('base_url', 'CONFLUENCE_BASE_URL'),
        ('email', 'CONFLUENCE_EMAIL'),
        ('api_token', 'CONFLUENCE_API_TOKEN'),
        ('space_key', 'CONFLUENCE_SPACE_KEY'),
    )

    @property
    def wiki_url(self) -> str:
        """Site URL including the /wiki context path."""
        return f"{self.base_url.rstrip('/')}/wiki"

    def missing_variables(self) -> List[str]:
        """Return the names of the environment variables that are unset."""
        return [env for field, env in self.ENV_VARS if not getattr(self, field)]

    def require(self) -> 'ConfluenceSettings':
        """Return self, or raise ConfigurationError when anything is missing."""
        missing = self.missing_variables()
        if missing:
            raise ConfigurationError('Confluence', missing)
        return self


class OpenAISettings(NamedTuple):
    """Speech-to-text and chat completion settings."""
    api_key: str
    transcription_model: str = 'whisper-1'
    chat_model: str = 'gpt-4o-mini'
    language: str = 'ko'
    max_tokens: int = 4000
    temperature: float = 0.3

    def require(self) -> 'OpenAISettings':
        if not self.api_key:
            raise ConfigurationError('OpenAI', ['OPENAI_API_KEY'])
        return self


class ServerSettings(NamedTuple):
    """HTTP server settings."""
    port: int = 3001
    frontend_url: str = 'http://localhost:5173'
    upload_dir: str = 'uploads'
    api_prefix: str = '/api'


class Settings(NamedTuple):
    """All application settings."""
    confluence: ConfluenceSettings
    openai: OpenAISettings
    server: ServerSettings


class SettingsLoader:
    """Loads settings from environment variables.

    Variables are read from the process environment after loading a .env file
    with python-dotenv. An explicit mapping can be passed instead, which is
    how tests build settings without touching os.environ.

    Example:
        >>> settings = SettingsLoader().load()
        >>> settings.confluence.missing_variables()
        []
    """

    def __init__(self, environ: Optional[Mapping[str, str]] = None, dotenv_path: Optional[str] = None):
        """Initialize the loader.

        Args:
            environ: Mapping to read variables from (default: os.environ)
            dotenv_path: Optional explicit .env path; ignored when environ is given
        """
        if environ is None:
            load_dotenv(dotenv_path)
            environ = os.environ
        self._environ = environ

    def _get(self, name: str, default: str = '') -> str:
        return (self._environ.get(name) or default).strip()

    def load(self) -> Settings:
        """Build a Settings object from the environment.

        Returns:
            Settings with Confluence, OpenAI and server sections

        Raises:
            ConfigurationError: If PORT is set but not a valid integer
        """
        confluence = ConfluenceSettings(
            base_url=self._get('CONFLUENCE_BASE_URL').rstrip('/'),
            email=self._get('CONFLUENCE_EMAIL'),
            api_token=self._get('CONFLUENCE_API_TOKEN'),
            space_key=self._get('CONFLUENCE_SPACE_KEY'),
        )

        openai = OpenAISettings(
            api_key=self._get('OPENAI_API_KEY'),
            transcription_model=self._get('OPENAI_TRANSCRIPTION_MODEL', 'whisper-1'),
            chat_model=self._get('OPENAI_CHAT_MODEL', 'gpt-4o-mini'),
            language=self._get('TRANSCRIPTION_LANGUAGE', 'ko'),
        )

        port_value = self._get('PORT', '3001')
        try:
            port = int(port_value)
        except ValueError:
            raise ConfigurationError('Server', [f'PORT (invalid value {port_value!r})'])

        server = ServerSettings(
            port=port,
            frontend_url=self._get('FRONTEND_URL', 'http://localhost:5173'),
            upload_dir=self._get('UPLOAD_DIR', 'uploads'),
            api_prefix='/' + self._get('API_PREFIX', '/api').strip('/'),
        )

        return Settings(confluence=confluence, openai=openai, server=server)
