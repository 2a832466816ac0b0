"""Chunked base64 encode/decode for large media payloads."""

import base64
import binascii

from vidscribe.errors import InvalidInput

DEFAULT_CHUNK_SIZE = 32768


class DecodeError(InvalidInput):
    """Raised when a base64 payload is malformed."""
    pass


def encode_chunked(data: bytes, chunk_size: int = DEFAULT_CHUNK_SIZE) -> str:
    """Base64-encode ``data`` in slices of ``chunk_size`` characters of output."""
    if chunk_size <= 0 or chunk_size % 4:
        raise ValueError(f"chunk_size must be a positive multiple of 4, got {chunk_size}")

    # 3 input bytes -> 4 output characters, so every slice but the last is unpadded
    step = chunk_size // 4 * 3
    view = memoryview(data)
    parts = [
        base64.b64encode(view[pos:pos + step]).decode("ascii")
        for pos in range(0, len(view), step)
    ]
    return "".join(parts)


def decode_chunked(encoded: str, chunk_size: int = DEFAULT_CHUNK_SIZE) -> bytes:
    """Decode base64 text ``chunk_size`` characters at a time.

    Each chunk is decoded independently and appended to one buffer. The chunk
    size must be a multiple of 4 so chunk boundaries fall between base64
    quanta. Whitespace is ignored; anything else outside the alphabet, bad
    padding or a truncated final quantum raises DecodeError.
    """
    if chunk_size <= 0 or chunk_size % 4:
        raise ValueError(f"chunk_size must be a positive multiple of 4, got {chunk_size}")

    text = "".join(encoded.split())
    if len(text) % 4:
        raise DecodeError(f"Invalid base64 payload: length {len(text)} is not a multiple of 4")

    out = bytearray()
    for pos in range(0, len(text), chunk_size):
        chunk = text[pos:pos + chunk_size]
        if "=" in chunk and pos + chunk_size < len(text):
            raise DecodeError(f"Invalid base64 payload: padding before end of data at offset {pos}")
        try:
            out += base64.b64decode(chunk, validate=True)
        except (binascii.Error, ValueError) as e:
            raise DecodeError(f"Invalid base64 payload near offset {pos}: {e}") from e
    return bytes(out)


def strip_data_url(value: str) -> str:
    """Drop a leading ``data:<mime>;base64,`` prefix if present."""
    if value.startswith("data:") and "," in value:
        return value.split(",", 1)[1]
    return value


def to_data_url(data: bytes, mime_type: str) -> str:
    return f"data:{mime_type};base64,{encode_chunked(data)}"
