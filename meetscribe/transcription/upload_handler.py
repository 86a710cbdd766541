"""Storage of uploaded audio files.

Uploads are written to the configured upload directory under a
timestamp-prefixed, sanitized name and are deleted by the transcription
pipeline once processed.
"""

import logging
import os
import time

from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from ..errors import ValidationError

logger = logging.getLogger(__name__)

ALLOWED_MIME_TYPES = frozenset({
    'audio/webm',
    'audio/wav',
    'audio/mp3',
    'audio/mpeg',
    'audio/mp4',
    'audio/m4a',
    'audio/ogg',
})

MAX_UPLOAD_BYTES = 50 * 1024 * 1024


class UploadHandler:
    """Validates and stores uploaded audio files.

    Example:
        >>> handler = UploadHandler("uploads")
        >>> path = handler.save(request.files.get("audio"))
    """

    def __init__(self, upload_dir: str):
        self._upload_dir = upload_dir

    @property
    def upload_dir(self) -> str:
        return self._upload_dir

    def save(self, upload: FileStorage) -> str:
        """Validate an upload and write it to disk.

        Args:
            upload: The multipart file from the request (may be None)

        Returns:
            Path of the stored file

        Raises:
            ValidationError: If no file was sent or its type is not audio
        """
        if upload is None or not upload.filename:
            raise ValidationError("An audio file is required", field='audio')

        mimetype = (upload.mimetype or '').lower()
        if mimetype not in ALLOWED_MIME_TYPES:
            raise ValidationError(f"Unsupported audio file type: {mimetype or 'unknown'}", field='audio')

        os.makedirs(self._upload_dir, exist_ok=True)

        name, ext = os.path.splitext(upload.filename)
        safe_name = secure_filename(name) or 'audio'
        safe_ext = secure_filename(ext.lstrip('.'))
        filename = f"{int(time.time() * 1000)}_{safe_name}" + (f".{safe_ext}" if safe_ext else '')
        path = os.path.join(self._upload_dir, filename)

        upload.save(path)
        logger.info(f"Stored upload {upload.filename!r} ({mimetype}, {os.path.getsize(path)} bytes) as {path}")
        return path
