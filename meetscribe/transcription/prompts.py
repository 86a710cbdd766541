"""Prompt templates for meeting minutes generation."""

SYSTEM_PROMPT = (
    "You are an expert meeting secretary. You turn raw meeting transcriptions "
    "into structured meeting minutes."
)

MINUTES_PROMPT = """The following text is a speech-to-text transcription of a meeting. Produce structured meeting minutes from it.

Meeting transcription:
{transcription}

Reply with a JSON object in exactly this shape:
{{
  "title": "a meeting title derived from the content",
  "content": "the detailed meeting content, organised, one topic per line",
  "summary": "a 2-3 sentence summary",
  "participants": ["names mentioned in the meeting"],
  "keyPoints": ["main discussion points"],
  "actionItems": ["follow-up tasks with owner and due date"]
}}

Rules:
- Write every text value in the language identified by "{language}".
- If participant names are unclear, use "Participant 1", "Participant 2" and so on.
- Write action items as "Owner: task (due: date)".
- Reply with the JSON object only.
"""


def build_minutes_prompt(transcription: str, language: str) -> str:
    return MINUTES_PROMPT.format(transcription=transcription, language=language)
