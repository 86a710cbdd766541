"""Transcription endpoints: audio upload and health."""

import logging
from datetime import datetime, timezone

from flask import Blueprint, current_app, request

from .responses import success_response

logger = logging.getLogger(__name__)

transcription_bp = Blueprint('transcription', __name__)


@transcription_bp.post('/upload')
def upload_audio():
    extensions = current_app.extensions['meetscribe']
    path = extensions['uploads'].save(request.files.get('audio'))

    transcript = extensions['transcription'].process_audio_to_transcript(path)
    logger.info(
        f"Created transcript {transcript.id}: {len(transcript.participants)} participants, "
        f"{len(transcript.key_points)} key points, {len(transcript.action_items)} action items"
    )
    return success_response(transcript=transcript.to_dict())


@transcription_bp.get('/health')
def health():
    return success_response(
        message="Transcription service is running",
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
