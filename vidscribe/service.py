"""Transcription request handlers.

Each handler validates its payload, decodes the media, builds the provider
request, calls the gateway and shapes the result. Both reject bad input before
touching the network.
"""

import logging

from vidscribe.builders.standard import build_standard_request
from vidscribe.builders.visual import build_visual_request
from vidscribe.codec import decode_chunked, strip_data_url
from vidscribe.errors import InvalidInput
from vidscribe.gateway import GatewayClient
from vidscribe.media import mime_type_for
from vidscribe.models import TranscriptionRequest, VisualSegment
from vidscribe.parsers.visual import parse_visual_response

logger = logging.getLogger(__name__)


def request_from_payload(
    encoded: str | None,
    file_name: str | None,
    language: str | None = None,
    missing_message: str = "No audio data provided",
) -> TranscriptionRequest:
    """Decode a base64 upload into a TranscriptionRequest."""
    if not encoded:
        raise InvalidInput(missing_message)
    if not isinstance(encoded, str):
        raise InvalidInput("Media data must be a base64 string")

    media = decode_chunked(strip_data_url(encoded))
    logger.info("Decoded media payload for %s: %d bytes", file_name or "unknown", len(media))
    return TranscriptionRequest(
        media_bytes=media,
        mime_type=mime_type_for(file_name),
        language_hint=language or None,
        file_name=file_name or "unknown",
    )


def transcribe_standard(request: TranscriptionRequest, client: GatewayClient) -> str:
    """Return the plain transcript text for ``request``."""
    logger.info(
        "Processing transcription request for file: %s (language: %s)",
        request.file_name,
        request.language_hint or "auto-detect",
    )
    payload = build_standard_request(
        request.media_bytes,
        request.mime_type,
        request.language_hint,
        model=client.config.standard_model,
        max_tokens=client.config.max_tokens,
    )
    transcript = client.complete(payload)
    logger.info("Transcription complete. Length: %d characters", len(transcript))
    return transcript


def transcribe_visual(request: TranscriptionRequest, client: GatewayClient) -> list[VisualSegment]:
    """Return parsed visual segments for ``request``."""
    logger.info("Processing visual transcription for file: %s", request.file_name)
    payload = build_visual_request(
        request.media_bytes,
        request.mime_type,
        model=client.config.visual_model,
        max_tokens=client.config.max_tokens,
    )
    raw = client.complete(payload)
    segments = parse_visual_response(raw)
    logger.info("Visual transcription complete. %d segments generated.", len(segments))
    return segments


def handle_standard(body: dict, client_factory) -> dict:
    """Inbound ``{audio, language, fileName}`` -> ``{transcript, success, language}``."""
    language = body.get("language")
    request = request_from_payload(body.get("audio"), body.get("fileName"), language)
    transcript = transcribe_standard(request, client_factory())
    return {"transcript": transcript, "success": True, "language": language or "auto"}


def handle_visual(body: dict, client_factory) -> dict:
    """Inbound ``{video, fileName}`` -> ``{segments, success}``."""
    request = request_from_payload(
        body.get("video"), body.get("fileName"), missing_message="No video data provided"
    )
    segments = transcribe_visual(request, client_factory())
    return {"segments": [s.to_dict() for s in segments], "success": True}
