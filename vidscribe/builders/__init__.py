"""Provider request builders for the two transcription modes."""

from vidscribe.codec import to_data_url


def media_message(prompt: str, media_bytes: bytes, mime_type: str) -> dict:
    """User message carrying a text part and the media as an inline data URL."""
    return {
        "role": "user",
        "content": [
            {"type": "text", "text": prompt},
            {"type": "image_url", "image_url": {"url": to_data_url(media_bytes, mime_type)}},
        ],
    }
