"""Command-line interface for meetscribe.

Provides the `meetscribe` command, which loads settings, configures logging
and serves the Flask backend.
"""

from .models import ExitCode
from .output import OutputHandler

__all__ = ['ExitCode', 'OutputHandler']
