"""Meeting transcript data model."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..errors import ValidationError


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value if item is not None]


def _parse_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value:
        try:
            # JavaScript's toISOString() ends with "Z"
            return datetime.fromisoformat(value.replace('Z', '+00:00'))
        except ValueError:
            pass
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Transcript:
    """Structured meeting record.

    Produced once by the transcription pipeline and treated as an immutable
    value by the publishing path.

    Attributes:
        id: Transcript identifier (e.g., "transcript-1700000000000")
        title: Meeting title
        content: Detailed meeting content, one paragraph per line
        summary: Short summary
        participants: Participant names in the order they were mentioned
        key_points: Main discussion points
        action_items: Follow-up tasks
        created_at: Creation timestamp
    """
    id: str
    title: str
    content: str
    summary: str = ''
    participants: List[str] = field(default_factory=list)
    key_points: List[str] = field(default_factory=list)
    action_items: List[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'Transcript':
        """Build a Transcript from its JSON (camelCase) representation.

        Raises:
            ValidationError: If data is missing, or title/content are empty
        """
        if not isinstance(data, dict):
            raise ValidationError("Transcript data is required", field='transcript')
        if not data.get('title') or not data.get('content'):
            raise ValidationError("Transcript title and content are required", field='transcript')

        return cls(
            id=str(data.get('id') or ''),
            title=str(data['title']),
            content=str(data['content']),
            summary=str(data.get('summary') or ''),
            participants=_string_list(data.get('participants')),
            key_points=_string_list(data.get('keyPoints')),
            action_items=_string_list(data.get('actionItems')),
            created_at=_parse_timestamp(data.get('createdAt')),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'title': self.title,
            'content': self.content,
            'summary': self.summary,
            'participants': list(self.participants),
            'keyPoints': list(self.key_points),
            'actionItems': list(self.action_items),
            'createdAt': self.created_at.isoformat(),
        }
