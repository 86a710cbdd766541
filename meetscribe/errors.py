"""Typed exception hierarchy for meetscribe.

This module defines all custom exceptions raised by the Confluence client,
the transcription pipeline and the request handlers. Every exception inherits
from MeetscribeError and carries the HTTP status the web layer answers with,
so handlers can convert any of them into a uniform error response.
"""

from typing import List, Optional


class MeetscribeError(Exception):
    """Base exception for all meetscribe errors.

    Use this to catch any application-level error.
    """

    http_status = 500


class ValidationError(MeetscribeError):
    """Raised when a request is missing required fields or carries bad input."""

    http_status = 400

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class ConfigurationError(MeetscribeError):
    """Raised when required environment variables are not set."""

    def __init__(self, service: str, missing_variables: List[str]):
        super().__init__(
            f"{service} is not configured, missing environment variables: "
            f"{', '.join(missing_variables)}"
        )
        self.service = service
        self.missing_variables = list(missing_variables)


class UpstreamAuthError(MeetscribeError):
    """Raised when an external provider rejects our credentials."""

    http_status = 401

    def __init__(self, service: str, message: Optional[str] = None):
        super().__init__(
            message or f"{service} rejected the API credentials, check the API key"
        )
        self.service = service


class UpstreamQuotaError(MeetscribeError):
    """Raised when an external provider reports a rate limit or exhausted quota."""

    http_status = 429

    def __init__(self, service: str, message: Optional[str] = None):
        super().__init__(
            message or f"{service} quota exceeded, check the account's billing and usage"
        )
        self.service = service


class UpstreamUnavailable(MeetscribeError):
    """Raised when an external provider cannot be reached (DNS, connection, timeout)."""

    http_status = 503

    def __init__(self, service: str, endpoint: Optional[str] = None):
        if endpoint:
            message = f"Cannot connect to {service} at {endpoint}, check the network connection"
        else:
            message = f"Cannot connect to {service}, check the network connection"
        super().__init__(message)
        self.service = service
        self.endpoint = endpoint


class ConfluenceError(MeetscribeError):
    """Base exception for non-success responses from Confluence."""

    http_status = 502

    def __init__(self, message: str, status: int, body: str = ""):
        super().__init__(message)
        self.status = status
        self.body = body


class RemoteListingError(ConfluenceError):
    """Raised when a Confluence listing endpoint answers with a non-2xx status."""

    def __init__(self, path: str, status: int, body: str = ""):
        message = f"Confluence listing {path} failed: {status}"
        if body:
            message += f" {body}"
        super().__init__(message, status, body)
        self.path = path


class PublishError(ConfluenceError):
    """Raised when Confluence refuses to create a page."""

    def __init__(self, title: str, status: int, body: str = ""):
        message = f"Confluence page creation failed for '{title}': {status}"
        if body:
            message += f" {body}"
        super().__init__(message, status, body)
        self.title = title


class UnknownError(MeetscribeError):
    """Catch-all for failures that have no more specific type."""

    def __init__(self, message: str = "An unknown error occurred"):
        super().__init__(message)


class TranscriptionError(UnknownError):
    """Raised when speech recognition or minutes generation fails unexpectedly."""

    def __init__(self, stage: str, reason: str):
        super().__init__(f"{stage} failed: {reason}")
        self.stage = stage
        self.reason = reason
