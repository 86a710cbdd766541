"""Meeting transcription pipeline.

Stores uploaded audio, runs speech-to-text and minutes generation through
the OpenAI API, and returns a structured Transcript.
"""

from .transcription_service import TranscriptionService, parse_minutes, translate_provider_error
from .upload_handler import ALLOWED_MIME_TYPES, MAX_UPLOAD_BYTES, UploadHandler

__all__ = [
    'TranscriptionService',
    'parse_minutes',
    'translate_provider_error',
    'ALLOWED_MIME_TYPES',
    'MAX_UPLOAD_BYTES',
    'UploadHandler',
]
