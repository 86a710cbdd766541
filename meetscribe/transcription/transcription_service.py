"""Audio to meeting-minutes pipeline on top of the OpenAI API.

The pipeline is two sequential provider calls: speech-to-text on the
uploaded audio, then a chat completion that turns the text into structured
minutes. Provider exceptions are translated to our typed errors, and the
uploaded audio file is removed on every exit path.
"""

import json
import logging
import os
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from openai import (
    APIConnectionError,
    APIStatusError,
    AuthenticationError,
    OpenAI,
    RateLimitError,
)

from ..config import OpenAISettings
from ..errors import (
    MeetscribeError,
    TranscriptionError,
    UpstreamAuthError,
    UpstreamQuotaError,
    UpstreamUnavailable,
)
from ..models import Transcript
from .prompts import SYSTEM_PROMPT, build_minutes_prompt

logger = logging.getLogger(__name__)

DEFAULT_TITLE = 'Meeting notes'
DEFAULT_SUMMARY = 'No summary could be generated for this meeting.'


def translate_provider_error(error: Exception, stage: str) -> MeetscribeError:
    """Map an OpenAI SDK exception to a typed error.

    Args:
        error: Exception raised by the OpenAI client
        stage: Human-readable pipeline stage used in the fallback message

    Returns:
        MeetscribeError subclass to raise in place of ``error``
    """
    if isinstance(error, MeetscribeError):
        return error

    code = getattr(error, 'code', None)
    status = getattr(error, 'status_code', None)

    if isinstance(error, RateLimitError) or status == 429 or code == 'insufficient_quota':
        return UpstreamQuotaError('OpenAI')
    if isinstance(error, AuthenticationError) or status == 401:
        return UpstreamAuthError('OpenAI')
    if isinstance(error, APIConnectionError):
        return UpstreamUnavailable('OpenAI')
    if isinstance(error, APIStatusError):
        return TranscriptionError(stage, f"OpenAI returned {error.status_code}: {error.message}")
    return TranscriptionError(stage, str(error) or type(error).__name__)


def _strip_code_fence(raw: str) -> str:
    text = raw.strip()
    if text.startswith('```'):
        lines = text.splitlines()
        if lines[-1].strip() == '```':
            text = '\n'.join(lines[1:-1])
        else:
            text = '\n'.join(lines[1:])
    return text.strip()


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value if item is not None and str(item).strip()]


def parse_minutes(raw: str, transcription: str) -> Dict[str, Any]:
    """Parse the model's JSON reply, falling back to defaults per field.

    Args:
        raw: Model reply, optionally wrapped in a markdown code fence
        transcription: Speech-to-text output, used when content is missing

    Returns:
        Dict with title, content, summary, participants, keyPoints, actionItems

    Raises:
        TranscriptionError: If the reply is not a JSON object
    """
    try:
        data = json.loads(_strip_code_fence(raw))
    except json.JSONDecodeError as e:
        raise TranscriptionError('Meeting minutes generation', f"model reply is not valid JSON ({e.msg})") from e
    if not isinstance(data, dict):
        raise TranscriptionError('Meeting minutes generation', "model reply is not a JSON object")

    return {
        'title': str(data.get('title') or DEFAULT_TITLE),
        'content': str(data.get('content') or transcription),
        'summary': str(data.get('summary') or DEFAULT_SUMMARY),
        'participants': _string_list(data.get('participants')),
        'keyPoints': _string_list(data.get('keyPoints')),
        'actionItems': _string_list(data.get('actionItems')),
    }


class TranscriptionService:
    """Turns an audio file into a Transcript.

    Example:
        >>> service = TranscriptionService(settings.openai)
        >>> transcript = service.process_audio_to_transcript("uploads/1700000000000_meeting.webm")
        >>> transcript.title
        'Weekly planning'
    """

    def __init__(self, settings: OpenAISettings, client: Optional[OpenAI] = None):
        """Initialize the service.

        Args:
            settings: OpenAI settings (models, language, API key)
            client: Preconfigured OpenAI client; built lazily from settings if None
        """
        self._settings = settings
        self._client = client

    def _get_client(self) -> OpenAI:
        """Get or create the OpenAI client.

        Raises:
            ConfigurationError: If OPENAI_API_KEY is not set
        """
        if self._client is None:
            self._client = OpenAI(api_key=self._settings.require().api_key)
        return self._client

    def transcribe_audio(self, audio_path: str) -> str:
        """Convert an audio file to text.

        Raises:
            UpstreamAuthError / UpstreamQuotaError / UpstreamUnavailable:
                On the corresponding provider failures
            TranscriptionError: On any other failure
        """
        client = self._get_client()
        logger.info(f"Transcribing {os.path.basename(audio_path)} with {self._settings.transcription_model}")

        try:
            with open(audio_path, 'rb') as audio_file:
                result = client.audio.transcriptions.create(
                    file=audio_file,
                    model=self._settings.transcription_model,
                    language=self._settings.language,
                    response_format='text',
                )
        except Exception as e:
            logger.error(f"Audio transcription failed: {e}")
            raise translate_provider_error(e, 'Speech recognition') from e

        text = result if isinstance(result, str) else getattr(result, 'text', '')
        logger.debug(f"Transcription produced {len(text)} characters")
        return text

    def generate_minutes(self, transcription: str) -> Dict[str, Any]:
        """Turn transcribed text into structured minutes fields.

        Raises:
            UpstreamAuthError / UpstreamQuotaError / UpstreamUnavailable:
                On the corresponding provider failures
            TranscriptionError: On an empty or unparseable reply, or any other failure
        """
        client = self._get_client()
        logger.info(f"Generating meeting minutes with {self._settings.chat_model}")

        try:
            completion = client.chat.completions.create(
                model=self._settings.chat_model,
                messages=[
                    {'role': 'system', 'content': SYSTEM_PROMPT},
                    {'role': 'user', 'content': build_minutes_prompt(transcription, self._settings.language)},
                ],
                max_tokens=self._settings.max_tokens,
                temperature=self._settings.temperature,
                response_format={'type': 'json_object'},
            )
        except Exception as e:
            logger.error(f"Meeting minutes generation failed: {e}")
            raise translate_provider_error(e, 'Meeting minutes generation') from e

        reply = completion.choices[0].message.content if completion.choices else None
        if not reply:
            raise TranscriptionError('Meeting minutes generation', "the model returned an empty reply")

        return parse_minutes(reply, transcription)

    def process_audio_to_transcript(self, audio_path: str) -> Transcript:
        """Run the full pipeline and delete the audio file afterwards.

        Args:
            audio_path: Path of the uploaded audio file; removed on every exit path

        Returns:
            The generated Transcript
        """
        try:
            transcription = self.transcribe_audio(audio_path)
            minutes = self.generate_minutes(transcription)
            return Transcript(
                id=f"transcript-{int(time.time() * 1000)}",
                title=minutes['title'],
                content=minutes['content'],
                summary=minutes['summary'],
                participants=minutes['participants'],
                key_points=minutes['keyPoints'],
                action_items=minutes['actionItems'],
                created_at=datetime.now(timezone.utc),
            )
        finally:
            self._cleanup(audio_path)

    @staticmethod
    def _cleanup(audio_path: str) -> None:
        try:
            os.remove(audio_path)
            logger.debug(f"Removed uploaded file {audio_path}")
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.error(f"Failed to remove uploaded file {audio_path}: {e}")
