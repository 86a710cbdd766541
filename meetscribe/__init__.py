"""meetscribe: meeting transcription backend with Confluence publishing."""

__version__ = '1.0.0'
