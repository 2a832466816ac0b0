"""Download a video from a direct file URL."""

import logging
from dataclasses import dataclass
from pathlib import PurePosixPath
from urllib.parse import unquote, urlparse

import requests

from vidscribe.errors import FetchError
from vidscribe.media import VIDEO_EXTENSIONS

logger = logging.getLogger(__name__)

MAX_VIDEO_BYTES = 500 * 1024 * 1024
_CHUNK = 1024 * 1024


@dataclass
class FetchedVideo:
    data: bytes
    file_name: str
    size: int


def validate_video_url(url: str | None) -> str:
    """Check ``url`` points straight at a video file and return its file name."""
    if not url or not url.strip():
        raise FetchError("Please enter a URL")

    try:
        parsed = urlparse(url.strip())
    except ValueError as e:
        raise FetchError("Invalid URL format") from e
    if not parsed.scheme or not parsed.netloc:
        raise FetchError("Invalid URL format")
    if parsed.scheme not in ("http", "https"):
        raise FetchError("URL must use HTTP or HTTPS")

    path = parsed.path.lower()
    if not any(path.endswith(f".{ext}") for ext in VIDEO_EXTENSIONS):
        raise FetchError("URL must link directly to a video file (.mp4, .webm, .mov, etc.)")

    return unquote(PurePosixPath(parsed.path).name) or "video.mp4"


def fetch_video(
    url: str,
    max_bytes: int = MAX_VIDEO_BYTES,
    session: requests.Session | None = None,
) -> FetchedVideo:
    """Stream the video at ``url`` into memory, enforcing ``max_bytes``."""
    file_name = validate_video_url(url)
    http = session or requests
    logger.info("Fetching video from %s", url)

    try:
        with http.get(url.strip(), stream=True, timeout=(10, 300)) as resp:
            if not 200 <= resp.status_code < 300:
                raise FetchError(f"Failed to fetch video: {resp.status_code} {resp.reason}")

            content_type = resp.headers.get("content-type", "")
            if "video" not in content_type and "octet-stream" not in content_type:
                raise FetchError("URL does not point to a video file")

            buf = bytearray()
            for chunk in resp.iter_content(chunk_size=_CHUNK):
                buf += chunk
                if len(buf) > max_bytes:
                    raise FetchError(f"Video file exceeds {max_bytes // (1024 * 1024)}MB limit")
    except requests.RequestException as e:
        raise FetchError(f"Failed to fetch video: {e}") from e

    logger.info("Fetched %s (%d bytes)", file_name, len(buf))
    return FetchedVideo(data=bytes(buf), file_name=file_name, size=len(buf))
