"""Speech-only transcription request."""

from vidscribe.builders import media_message
from vidscribe.media import language_name

DEFAULT_MODEL = "google/gemini-2.5-flash"
DEFAULT_MAX_TOKENS = 8000

SYSTEM_PROMPT = """You are an expert audio transcriber. Your task is to transcribe speech from audio/video files with high accuracy.
{language_instruction}
Transcribe all spoken words exactly as they are said. Include natural speech patterns, but clean up filler words like "um" and "uh" unless they are significant.
Format the transcription as natural sentences and paragraphs.
If there are multiple speakers, try to indicate speaker changes.
Do not add any commentary, just provide the transcription."""

USER_PROMPT = (
    "Please transcribe all the speech in this audio/video file. "
    "Provide a clean, accurate transcription."
)


def language_instruction(language_hint: str | None) -> str:
    if not language_hint or language_hint == "auto":
        return ""
    return f"The audio is in {language_name(language_hint)}. "


def build_system_prompt(language_hint: str | None = None) -> str:
    return SYSTEM_PROMPT.format(language_instruction=language_instruction(language_hint))


def build_standard_request(
    media_bytes: bytes,
    mime_type: str,
    language_hint: str | None = None,
    model: str = DEFAULT_MODEL,
    max_tokens: int = DEFAULT_MAX_TOKENS,
) -> dict:
    """Chat-completion body asking for a plain-text transcript."""
    return {
        "model": model,
        "messages": [
            {"role": "system", "content": build_system_prompt(language_hint)},
            media_message(USER_PROMPT, media_bytes, mime_type),
        ],
        "max_tokens": max_tokens,
    }
