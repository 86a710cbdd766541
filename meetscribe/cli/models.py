"""Data models for the CLI."""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for the meetscribe command.

    - SUCCESS (0): Server stopped normally
    - GENERAL_ERROR (1): Configuration or startup failure
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
