"""File-extension to MIME type lookup and language code names."""

from pathlib import PurePosixPath

DEFAULT_MIME_TYPE = "video/mp4"

MIME_TYPES: dict[str, str] = {
    "mp4": "video/mp4",
    "mov": "video/quicktime",
    "avi": "video/x-msvideo",
    "mkv": "video/x-matroska",
    "webm": "video/webm",
    "m4v": "video/x-m4v",
    # audio-only uploads on the standard transcription path
    "mp3": "audio/mpeg",
    "wav": "audio/wav",
    "m4a": "audio/mp4",
}

VIDEO_EXTENSIONS = ("mp4", "webm", "mov", "avi", "mkv", "m4v")

LANGUAGE_NAMES: dict[str, str] = {
    "en": "English",
    "hi": "Hindi",
    "es": "Spanish",
    "fr": "French",
    "de": "German",
    "ja": "Japanese",
    "ko": "Korean",
    "zh": "Chinese",
    "pt": "Portuguese",
    "ru": "Russian",
    "ar": "Arabic",
}


def resolve_mime_type(extension: str | None) -> str:
    """Map an extension (with or without the dot) to a MIME type.

    Unknown or missing extensions fall back to video/mp4.
    """
    if not extension:
        return DEFAULT_MIME_TYPE
    return MIME_TYPES.get(extension.lower().lstrip("."), DEFAULT_MIME_TYPE)


def extension_of(file_name: str | None) -> str:
    """Return the lower-cased extension of ``file_name``, defaulting to mp4."""
    suffix = PurePosixPath(file_name or "").suffix
    return suffix[1:].lower() if suffix else "mp4"


def mime_type_for(file_name: str | None) -> str:
    return resolve_mime_type(extension_of(file_name))


def language_name(code: str) -> str:
    """Human-readable name for a language code; unknown codes pass through."""
    return LANGUAGE_NAMES.get(code, code)
