"""Flask HTTP API for transcription and Confluence publishing."""

from .app import create_app

__all__ = ['create_app']
